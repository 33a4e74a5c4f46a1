# core/content_view.py

"""
Session-scoped content view router.

Holds the active view id for one browsing session. Title and coming-soon
flag are derived at transition time and stored with the view id in a
single immutable snapshot, so readers never see a fresh view id paired
with a stale title.
"""

from typing import Callable, List

from pydantic import BaseModel, ConfigDict

from core import features
from core.errors import ContextNotInitializedError
from core.logging_config import logger


DEFAULT_VIEW = features.DASHBOARD_VIEW


class ActiveViewState(BaseModel):
    model_config = ConfigDict(frozen=True)

    active_view: str
    page_title: str
    is_coming_soon: bool

    @classmethod
    def for_view(cls, view_id: str) -> "ActiveViewState":
        return cls(
            active_view=view_id,
            page_title=features.resolve_title(view_id),
            is_coming_soon=features.is_coming_soon(view_id),
        )


ViewListener = Callable[[ActiveViewState], None]


class ContentViewRouter:
    """
    Single source of truth for the active content panel.

    ``set_active_view`` overwrites unconditionally and notifies listeners
    synchronously. There is no guard against transition loops; a listener
    that transitions again must do so at most once per navigation event.
    """

    def __init__(self, initial_view: str = DEFAULT_VIEW) -> None:
        self._state = ActiveViewState.for_view(initial_view)
        self._listeners: List[ViewListener] = []
        self._closed = False

    def _ensure_open(self) -> None:
        if self._closed:
            raise ContextNotInitializedError("Content view router used after its session ended")

    @property
    def state(self) -> ActiveViewState:
        self._ensure_open()
        return self._state

    @property
    def active_view(self) -> str:
        return self.state.active_view

    @property
    def page_title(self) -> str:
        return self.state.page_title

    @property
    def is_coming_soon(self) -> bool:
        return self.state.is_coming_soon

    def set_active_view(self, view_id: str) -> ActiveViewState:
        self._ensure_open()

        state = ActiveViewState.for_view(view_id)
        previous = self._state
        self._state = state
        logger.debug(f"Active view {previous.active_view!r} -> {view_id!r}")

        for listener in list(self._listeners):
            # A listener transitioned again; later listeners already saw the newer state.
            if self._state is not state:
                break
            listener(state)

        return state

    def subscribe(self, listener: ViewListener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unsubscribes it."""
        self._ensure_open()
        if listener not in self._listeners:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        self._listeners.clear()
        self._closed = True
