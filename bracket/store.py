"""State holder that applies dispatched actions and notifies listeners."""

import logging
import threading
from typing import Callable

from bracket.models import BallotState, empty_state
from bracket.reducer import Action, reduce


logger = logging.getLogger(__name__)

Listener = Callable[[], None]
Reducer = Callable[[BallotState | None, Action], BallotState]


class Store:
    """Holds the current ballot snapshot.

    Actions are applied one at a time: ``dispatch`` computes and stores the
    next snapshot and runs the listeners before another dispatch can start.
    Listeners are called in subscription order, so ``get_state()`` inside a
    listener returns the snapshot produced by the action that triggered it.
    """

    def __init__(self, reducer: Reducer = reduce, state: BallotState | None = None):
        self._reducer = reducer
        self._state = state if state is not None else empty_state()
        self._listeners: list[Listener] = []
        # Reentrant so a listener may dispatch a follow-up action
        self._lock = threading.RLock()

    def get_state(self) -> BallotState:
        return self._state

    def dispatch(self, action: Action) -> Action:
        with self._lock:
            self._state = self._reducer(self._state, action)
            logger.debug("Dispatched %s", action.get("type"))

            for listener in list(self._listeners):
                listener()
        return action

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it again."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe


def make_store(state: BallotState | None = None) -> Store:
    """Build a store over the ballot reducer."""
    return Store(reduce, state)
