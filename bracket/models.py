"""Core data models for ballot state and voting rounds."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping


@dataclass(frozen=True)
class Round:
    """The pair currently under vote and its tally.

    Attributes:
        pair: Exactly two candidate identifiers, in pairing order
        tally: Mapping candidate -> vote count. Candidates missing from the
            mapping have 0 votes.

    Example:
        >>> r = Round(pair=("Trainspotting", "28 Days Later"))
        >>> r.votes_for("Trainspotting")
        0
    """
    pair: tuple[str, str]
    tally: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self):
        pair = tuple(self.pair)
        if len(pair) != 2:
            raise ValueError(f"A round needs exactly two candidates, got {len(pair)}")
        object.__setattr__(self, "pair", pair)
        object.__setattr__(self, "tally", MappingProxyType(dict(self.tally)))

    def __hash__(self):
        return hash((self.pair, frozenset(self.tally.items())))

    def votes_for(self, entry: str) -> int:
        return self.tally.get(entry, 0)

    def leaders(self) -> list[str]:
        """Candidates in the pair holding the highest tally, in pair order.

        One element means a clear winner; two means a tie.
        """
        top = max(self.votes_for(entry) for entry in self.pair)
        return [entry for entry in self.pair if self.votes_for(entry) == top]

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"pair": list(self.pair)}
        if self.tally:
            result["tally"] = dict(self.tally)
        return result


@dataclass(frozen=True)
class Ballot:
    """A ballot that has not produced a winner yet.

    Attributes:
        entries: Candidates waiting for a round, front of the queue first.
            None until entries have been set (distinct from an empty queue).
        vote: The round currently open, if any
    """
    entries: tuple[str, ...] | None = None
    vote: Round | None = None

    def __post_init__(self):
        if self.entries is not None:
            object.__setattr__(self, "entries", tuple(self.entries))

    @property
    def concluded(self) -> bool:
        return False

    @property
    def queue(self) -> tuple[str, ...]:
        """Entries as a tuple, empty when never set."""
        return self.entries or ()

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.vote is not None:
            result["vote"] = self.vote.to_dict()
        if self.entries is not None:
            result["entries"] = list(self.entries)
        return result


@dataclass(frozen=True)
class Concluded:
    """A ballot that has been decided. Holds the winner and nothing else."""
    winner: str

    @property
    def concluded(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {"winner": self.winner}


BallotState = Ballot | Concluded


def make_round(pair: Iterable[str], tally: Mapping[str, int] | None = None) -> Round:
    """Build a Round from any iterable pair (lists from JSON included)."""
    return Round(pair=tuple(pair), tally=tally or {})


def ballot_from_dict(data: Mapping[str, Any]) -> BallotState:
    """Rebuild a snapshot from its ``to_dict()`` shape.

    Raises:
        ValueError: If the mapping mixes ``winner`` with ``entries``/``vote``
    """
    if "winner" in data:
        extra = set(data) - {"winner"}
        if extra:
            raise ValueError(
                f"A concluded ballot cannot also have {', '.join(sorted(extra))}"
            )
        return Concluded(winner=data["winner"])

    vote = None
    if data.get("vote") is not None:
        vote = make_round(data["vote"]["pair"], data["vote"].get("tally"))

    entries = data.get("entries")
    return Ballot(
        entries=tuple(entries) if entries is not None else None,
        vote=vote,
    )


def empty_state() -> Ballot:
    """The state a store starts from: no entries, no round."""
    return Ballot()

