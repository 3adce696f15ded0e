"""Shared fixtures for voting engine tests."""

import pytest
from tests.conftest import D, H, M, S, T, make_state


@pytest.fixture
def three_queued():
    """Three candidates queued, no round opened yet: T, D, S."""
    return make_state({"entries": [T, D, S]})


@pytest.fixture
def decided_round():
    """T beat D 4-2 with S, M, H still queued."""
    return make_state({
        "vote": {"pair": [T, D], "tally": {T: 4, D: 2}},
        "entries": [S, M, H],
    })


@pytest.fixture
def tied_round():
    """T and D tied 3-3 with S, M, H still queued."""
    return make_state({
        "vote": {"pair": [T, D], "tally": {T: 3, D: 3}},
        "entries": [S, M, H],
    })


@pytest.fixture
def final_round():
    """T beat D 4-2 and nobody else is queued."""
    return make_state({
        "vote": {"pair": [T, D], "tally": {T: 4, D: 2}},
        "entries": [],
    })
