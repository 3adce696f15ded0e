"""Pure transition functions for a pairwise bracket vote.

Each function takes a snapshot and returns a new one; inputs are never
mutated. The rules:

1. ``initialize_entries`` replaces the candidate queue.
2. ``advance_round`` closes the current round, requeues its leader(s) at the
   tail of the queue, then opens a round on the first two queued candidates.
   When a single candidate is left it is declared the winner.
3. ``cast_vote`` adds one vote for a candidate in the current pair.

Tiebreaker: when both candidates in a pair hold the same tally, both are
requeued (first pair member first) and meet again in a later round.
"""

import logging
from dataclasses import replace
from typing import Iterable

from bracket.models import Ballot, BallotState, Concluded, Round


logger = logging.getLogger(__name__)


def initialize_entries(state: BallotState, entries: Iterable[str]) -> Ballot:
    """Set the candidate queue, leaving any open round alone.

    Args:
        state: Current snapshot
        entries: Candidates in queue order; any iterable is accepted

    Returns:
        Snapshot whose ``entries`` is the tuple form of ``entries``.
        A concluded ballot has nowhere to keep entries, so a fresh
        ballot is started instead.
    """
    if isinstance(state, Concluded):
        return Ballot(entries=tuple(entries))
    return replace(state, entries=tuple(entries))


def cast_vote(vote: Round, entry: str) -> Round:
    """Return ``vote`` with one more vote for ``entry``.

    Raises:
        ValueError: If ``entry`` is not one of the two candidates in the pair
    """
    if entry not in vote.pair:
        raise ValueError(f"{entry!r} is not in the current pair {list(vote.pair)}")
    tally = dict(vote.tally)
    tally[entry] = tally.get(entry, 0) + 1
    return Round(pair=vote.pair, tally=tally)


def _finished_candidates(state: Ballot) -> list[str]:
    if state.vote is None:
        return []
    return state.vote.leaders()


def advance_round(state: BallotState) -> BallotState:
    """Close the current round (if any) and open the next one.

    The queue for the next round is the existing entries followed by the
    closing round's leader(s). Then:

    - one candidate queued: the ballot concludes with that winner;
    - two or more: the first two form the new pair with an empty tally
      and the rest stay queued, in order;
    - none: nothing to do, the state is returned unchanged.

    Concluded ballots are returned unchanged.
    """
    if isinstance(state, Concluded):
        return state

    queue = state.queue + tuple(_finished_candidates(state))

    if len(queue) == 1:
        logger.debug("Ballot concluded, winner %r", queue[0])
        return Concluded(winner=queue[0])

    if not queue:
        return state

    return Ballot(entries=queue[2:], vote=Round(pair=queue[:2]))
