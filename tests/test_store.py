"""Tests for the ballot store."""

import threading

from tests.conftest import D, T

from bracket.models import Ballot, Concluded, Round
from bracket.store import Store, make_store


class TestStore:
    def test_configured_with_ballot_reducer(self):
        store = make_store()
        assert store.get_state() == Ballot()

        store.dispatch({"type": "SET_ENTRIES", "entries": [T, D]})
        assert store.get_state().to_dict() == {"entries": [T, D]}

    def test_dispatch_returns_action(self):
        store = make_store()
        action = {"type": "NEXT"}
        assert store.dispatch(action) is action

    def test_listeners_called_after_each_dispatch(self):
        store = make_store()
        seen = []
        store.subscribe(lambda: seen.append(store.get_state()))

        store.dispatch({"type": "SET_ENTRIES", "entries": [T, D]})
        store.dispatch({"type": "NEXT"})
        store.dispatch({"type": "VOTE", "entry": D})
        store.dispatch({"type": "NEXT"})

        assert len(seen) == 4
        assert seen[1].vote.pair == (T, D)
        assert seen[-1] == Concluded(winner=D)

    def test_listeners_called_in_subscription_order(self):
        store = make_store()
        calls = []
        store.subscribe(lambda: calls.append("first"))
        store.subscribe(lambda: calls.append("second"))
        store.dispatch({"type": "NEXT"})
        assert calls == ["first", "second"]

    def test_unsubscribe(self):
        store = make_store()
        calls = []
        unsubscribe = store.subscribe(lambda: calls.append(1))
        store.dispatch({"type": "NEXT"})
        unsubscribe()
        unsubscribe()
        store.dispatch({"type": "NEXT"})
        assert calls == [1]

    def test_custom_reducer_and_initial_state(self):
        store = Store(lambda state, action: Concluded(winner=action["type"]), Ballot())
        store.dispatch({"type": "X"})
        assert store.get_state() == Concluded(winner="X")

    def test_held_snapshots_are_not_changed_by_later_dispatches(self):
        store = make_store()
        store.dispatch({"type": "SET_ENTRIES", "entries": [T, D]})
        held = store.get_state()
        store.dispatch({"type": "NEXT"})
        assert held.to_dict() == {"entries": [T, D]}

    def test_concurrent_dispatches_are_serialized(self):
        """8 threads x 500 votes each: no vote is lost to a race."""
        store = make_store(Ballot(entries=(), vote=Round(pair=(T, D))))
        threads_count, votes_each = 8, 500
        start = threading.Barrier(threads_count)

        def voter():
            start.wait()
            for _ in range(votes_each):
                store.dispatch({"type": "VOTE", "entry": T})

        threads = [threading.Thread(target=voter) for _ in range(threads_count)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert store.get_state().vote.votes_for(T) == threads_count * votes_each
        assert store.get_state().vote.votes_for(D) == 0

    def test_listener_sees_snapshot_of_its_own_dispatch(self):
        """Each listener call observes exactly one more vote than the last."""
        store = make_store(Ballot(entries=(), vote=Round(pair=(T, D))))
        seen = []
        store.subscribe(lambda: seen.append(store.get_state().vote.votes_for(T)))

        threads = [
            threading.Thread(target=lambda: [
                store.dispatch({"type": "VOTE", "entry": T}) for _ in range(200)
            ])
            for _ in range(4)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert seen == list(range(1, 801))

    def test_listener_can_dispatch(self):
        store = make_store()

        def open_first_round():
            if store.get_state().to_dict() == {"entries": [T, D]}:
                store.dispatch({"type": "NEXT"})

        store.subscribe(open_first_round)
        store.dispatch({"type": "SET_ENTRIES", "entries": [T, D]})
        assert store.get_state().vote.pair == (T, D)
