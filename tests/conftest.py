"""Shared test helpers."""

from bracket.engine import advance_round, cast_vote
from bracket.models import Ballot, BallotState, ballot_from_dict


T = "Trainspotting"
D = "28 Days Later"
S = "Sunshine"
M = "Millions"
H = "127 Hours"


def make_state(data: dict) -> BallotState:
    """Build a snapshot from the compact mapping form used in the tests.

    Args:
        data: {"entries": [...], "vote": {"pair": [...], "tally": {...}}}
            or {"winner": ...}
    """
    return ballot_from_dict(data)


def play_round(state: Ballot, votes: list[str]) -> BallotState:
    """Cast ``votes`` in the open round, then advance."""
    vote = state.vote
    for entry in votes:
        vote = cast_vote(vote, entry)
    return advance_round(Ballot(entries=state.entries, vote=vote))


def candidate_count(state: BallotState) -> int:
    """Candidates still in play: queued, paired, or declared winner."""
    if not isinstance(state, Ballot):
        return 1
    paired = len(state.vote.pair) if state.vote is not None else 0
    return len(state.queue) + paired
