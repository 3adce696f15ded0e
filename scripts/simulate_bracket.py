"""Generate a simulated bracket action log.

Makes up candidate names using faker with a fixed seed, then drives a ballot
to completion: SET_ENTRIES, then NEXT followed by a random number of votes
for the current pair, repeated until a winner is declared. The resulting
action log is written as JSON and can be replayed with bracket.replay.

Usage:
    python scripts/simulate_bracket.py
    python scripts/simulate_bracket.py --candidates 8 --seed 42 -o bracket.json
"""

import argparse
import json
import random
import sys
from pathlib import Path

from faker import Faker

sys.path.insert(0, str(Path(__file__).parent.parent))

from bracket.models import Ballot, Concluded
from bracket.reducer import ActionType, reduce, replay_actions

FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"
DEFAULT_OUTPUT = FIXTURES_DIR / "simulated.json"

SEED = 20260201
DEFAULT_CANDIDATES = 6
DEFAULT_MAX_VOTES = 5
# Guards against a run of ties that never settles
MAX_ROUNDS = 1000


def generate_candidates(count: int, seed: int) -> list[str]:
    """Generate ``count`` distinct, title-cased candidate names."""
    fake = Faker("en_US")
    Faker.seed(seed)

    names: list[str] = []
    seen: set[str] = set()
    while len(names) < count:
        name = fake.catch_phrase().title()
        if name.lower() in seen:
            continue
        seen.add(name.lower())
        names.append(name)
    return names


def simulate(candidates: list[str], max_votes: int, seed: int) -> list[dict]:
    """Drive a ballot over ``candidates`` and return the actions dispatched."""
    rng = random.Random(seed)
    actions: list[dict] = []
    state = None

    def apply(action):
        nonlocal state
        actions.append(action)
        state = reduce(state, action)

    apply({"type": ActionType.SET_ENTRIES.value, "entries": candidates})

    for _ in range(MAX_ROUNDS):
        apply({"type": ActionType.NEXT.value})
        if isinstance(state, Concluded):
            break
        if not isinstance(state, Ballot) or state.vote is None:
            raise RuntimeError("NEXT did not open a round")
        for _ in range(rng.randint(1, max_votes)):
            apply({"type": ActionType.VOTE.value, "entry": rng.choice(state.vote.pair)})
    else:
        raise RuntimeError(f"No winner after {MAX_ROUNDS} rounds")

    return actions


def main():
    parser = argparse.ArgumentParser(
        description="Generate a simulated bracket action log")
    parser.add_argument("--candidates", type=int, default=DEFAULT_CANDIDATES,
                        help=f"Number of candidates (default: {DEFAULT_CANDIDATES})")
    parser.add_argument("--max-votes", type=int, default=DEFAULT_MAX_VOTES,
                        help=f"Most votes cast per round (default: {DEFAULT_MAX_VOTES})")
    parser.add_argument("--seed", type=int, default=SEED,
                        help=f"Random seed (default: {SEED})")
    parser.add_argument("-o", "--output", default=str(DEFAULT_OUTPUT),
                        help=f"Output path (default: {DEFAULT_OUTPUT})")
    args = parser.parse_args()

    if args.candidates < 1:
        parser.error("--candidates must be at least 1")

    candidates = generate_candidates(args.candidates, args.seed)
    print(f"Generated {len(candidates)} candidates")
    for name in candidates:
        print(f"  {name}")

    actions = simulate(candidates, args.max_votes, args.seed)
    final_state = replay_actions(actions)
    print(f"Replayed {len(actions)} actions, winner: {final_state.winner}")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps({"actions": actions}, indent=2) + "\n",
                           encoding="utf-8")
    print(f"Written to {output_path}")


if __name__ == "__main__":
    main()
