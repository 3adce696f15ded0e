"""Orchestrator: parse an action log and replay it through a store."""

import json
from dataclasses import dataclass, field
from typing import Any

from bracket.models import BallotState, Concluded, empty_state
from bracket.reducer import Action, ActionType
from bracket.store import make_store


class ReplayError(Exception):
    """Error while reading or replaying an action log."""
    pass


@dataclass
class ReplayResult:
    """Outcome of replaying an action log.

    Attributes:
        source: Where the log came from (URL, filename or "inline")
        actions: The actions as parsed, in order
        states: Snapshot after each action (same length as ``actions``)
        final_state: Snapshot after the last action
    """
    source: str
    actions: list[Action]
    states: list[BallotState] = field(default_factory=list)
    final_state: BallotState | None = None

    @property
    def winner(self) -> str | None:
        if isinstance(self.final_state, Concluded):
            return self.final_state.winner
        return None

    @property
    def rounds_played(self) -> int:
        """Number of NEXT actions that opened or closed a round."""
        count = 0
        previous = empty_state()
        for action, state in zip(self.actions, self.states):
            if action.get("type") == ActionType.NEXT and state != previous:
                count += 1
            previous = state
        return count

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "source": self.source,
            "num_actions": len(self.actions),
            "rounds_played": self.rounds_played,
            "winner": self.winner,
            "final_state": self.final_state.to_dict() if self.final_state is not None else {},
            "states": [state.to_dict() for state in self.states],
        }


def parse_action_log(content: bytes) -> list[Action]:
    """Decode a JSON action log.

    Accepts either a bare list of actions or an object with an ``"actions"``
    list.

    Raises:
        ReplayError: If the content is not JSON or not shaped like a log
    """
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ReplayError(f"Action log is not valid JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get("actions")
    if not isinstance(data, list):
        raise ReplayError(
            "Action log must be a list of actions or an object with an 'actions' list"
        )

    for i, action in enumerate(data):
        if not isinstance(action, dict):
            raise ReplayError(f"Action {i} is not an object: {action!r}")
    return data


def replay_log(source: str, content: bytes) -> ReplayResult:
    """Parse an action log and replay it from an empty ballot.

    Args:
        source: URL or filename of the log (reported back in the result)
        content: Raw bytes of the JSON log

    Returns:
        ReplayResult with every intermediate snapshot

    Raises:
        ReplayError: If the log cannot be parsed or an action cannot be applied
    """
    actions = parse_action_log(content)
    return replay(source, actions)


def replay(source: str, actions: list[Action]) -> ReplayResult:
    """Replay already-decoded actions, recording each snapshot."""
    store = make_store()
    result = ReplayResult(source=source, actions=actions)
    store.subscribe(lambda: result.states.append(store.get_state()))

    for i, action in enumerate(actions):
        try:
            store.dispatch(action)
        except (KeyError, TypeError, ValueError) as e:
            raise ReplayError(f"Failed to replay action {i}: {e}") from e

    result.final_state = store.get_state()
    return result
