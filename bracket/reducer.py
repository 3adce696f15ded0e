"""Action reducer: maps dispatched actions onto the voting engine."""

from enum import Enum
from functools import reduce as fold
from typing import Any, Callable, Iterable, Iterator, Mapping

from bracket.engine import advance_round, cast_vote, initialize_entries
from bracket.models import Ballot, BallotState, empty_state


Action = Mapping[str, Any]
ActionHandler = Callable[[BallotState, Action], BallotState]


class ActionType(str, Enum):
    """Action kinds the reducer understands. Anything else is ignored."""

    SET_ENTRIES = "SET_ENTRIES"
    NEXT = "NEXT"
    VOTE = "VOTE"


# Action handler registry - keyed by action type value
_handlers: dict[str, ActionHandler] = {}


def register_action(action_type: ActionType) -> Callable[[ActionHandler], ActionHandler]:
    """Decorator to register the handler for an action type."""
    def decorator(handler: ActionHandler) -> ActionHandler:
        _handlers[action_type.value] = handler
        return handler
    return decorator


def get_registered_actions() -> list[str]:
    """Return the action types that have a handler."""
    return list(_handlers)


@register_action(ActionType.SET_ENTRIES)
def _set_entries(state: BallotState, action: Action) -> BallotState:
    return initialize_entries(state, action["entries"])


@register_action(ActionType.NEXT)
def _next(state: BallotState, action: Action) -> BallotState:
    return advance_round(state)


@register_action(ActionType.VOTE)
def _vote(state: BallotState, action: Action) -> BallotState:
    # No open round to vote in (not started yet, or already decided)
    if not isinstance(state, Ballot) or state.vote is None:
        return state
    return Ballot(entries=state.entries, vote=cast_vote(state.vote, action["entry"]))


def reduce(state: BallotState | None, action: Action) -> BallotState:
    """Apply one action to a snapshot and return the next snapshot.

    Args:
        state: Current snapshot, or None for a fresh ballot
        action: Mapping with a ``"type"`` key plus that type's payload

    Returns:
        The new snapshot. Unrecognized action types return ``state`` as is.
    """
    if state is None:
        state = empty_state()
    kind = action.get("type")
    if not isinstance(kind, str):
        return state
    handler = _handlers.get(kind)
    if handler is None:
        return state
    return handler(state, action)


def replay_actions(actions: Iterable[Action], state: BallotState | None = None) -> BallotState:
    """Fold a sequence of actions, starting from ``state`` (empty by default)."""
    return fold(reduce, actions, state if state is not None else empty_state())


def iter_states(actions: Iterable[Action], state: BallotState | None = None) -> Iterator[BallotState]:
    """Yield the snapshot after each action in turn."""
    for action in actions:
        state = reduce(state, action)
        yield state
