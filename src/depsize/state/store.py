"""
Store - serializes dispatches into the reducer.

Holds the current state, applies actions one at a time and notifies
subscribers after each transition. Listeners must not dispatch from
inside their callback; doing so raises ``DispatchError``.
"""

import threading
from typing import Any, Callable, List, Optional

from ..core.exceptions import DispatchError
from .models import INITIAL_STATE, State
from .reducer import reduce


Listener = Callable[[State], None]
Reducer = Callable[[Optional[State], Any], State]


class Store:
    """
    Single owner of the application state.

    Usage:
        store = Store()
        unsubscribe = store.subscribe(render)
        store.dispatch(OnSorted(field=SortableField.NAME))
    """

    def __init__(self, reducer: Reducer = reduce, state: Optional[State] = None):
        self._reducer = reducer
        self._state = state if state is not None else INITIAL_STATE
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()
        self._dispatching = False

    def get_state(self) -> State:
        return self._state

    def dispatch(self, action: Any) -> State:
        """Apply ``action``, notify listeners and return the resulting state."""
        with self._lock:
            if self._dispatching:
                raise DispatchError("Cannot dispatch while a dispatch is in progress")
            self._dispatching = True
            try:
                previous = self._state
                self._state = self._reducer(previous, action)
                if self._state is not previous:
                    for listener in list(self._listeners):
                        listener(self._state)
            finally:
                self._dispatching = False
            return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
