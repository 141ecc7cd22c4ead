"""Editor state and the commands that change it.

``EditorState`` is an immutable value. Every change goes through a command
applied by ``transition``; ``EditorStore`` owns the current state, is its
only writer, and notifies subscribers after each change. Only content edits
enter the undo history; settings changes just make the document dirty.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Tuple

from .constants import LayoutConstants
from .metrics import PageMetrics, metrics_for
from .paginator import paginate, replace_page
from .persistence import PersistedState
from .fonts import next_font_weight
from .settings import DEFAULT_SETTINGS, EditorSettings, WritingMode
from .undo import ContentHistory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditorState:
    content: str = ""
    settings: EditorSettings = DEFAULT_SETTINGS
    undo_stack: Tuple[str, ...] = ()
    redo_stack: Tuple[str, ...] = ()
    is_dirty: bool = False
    active_template: Optional[str] = None

    def history(self) -> ContentHistory:
        """Return a mutable history seeded from this state."""
        return ContentHistory(
            self.content,
            self.undo_stack,
            self.redo_stack,
            max_entries=LayoutConstants.MAX_UNDO,
        )

    def with_history(self, history: ContentHistory, **changes: Any) -> EditorState:
        return replace(
            self,
            content=history.content,
            undo_stack=history.undo_stack,
            redo_stack=history.redo_stack,
            is_dirty=True,
            **changes,
        )


class EditorCommand(ABC):
    """Base class for state transitions."""

    @abstractmethod
    def apply(self, state: EditorState) -> EditorState:
        """Return the state after this command.

        Returns:
            The new state, or ``state`` itself when the command is a no-op.
        """


@dataclass(frozen=True)
class SetContent(EditorCommand):
    """Replace the content as an undoable edit."""
    content: str

    def apply(self, state):
        history = state.history()
        history.commit(self.content)
        return state.with_history(history)


@dataclass(frozen=True)
class LoadTemplate(EditorCommand):
    """Replace the content with a template; undoable like any edit."""
    content: str
    template_key: str

    def apply(self, state):
        history = state.history()
        history.commit(self.content)
        return state.with_history(history, active_template=self.template_key)


@dataclass(frozen=True)
class UpdateSettings(EditorCommand):
    changes: Dict[str, Any] = field(default_factory=dict)

    def apply(self, state):
        return replace(state, settings=state.settings.updated(**self.changes), is_dirty=True)


@dataclass(frozen=True)
class Undo(EditorCommand):
    def apply(self, state):
        history = state.history()
        if not history.undo():
            return state
        return state.with_history(history)


@dataclass(frozen=True)
class Redo(EditorCommand):
    def apply(self, state):
        history = state.history()
        if not history.redo():
            return state
        return state.with_history(history)


@dataclass(frozen=True)
class LoadState(EditorCommand):
    """Adopt persisted content and settings; the only command that clears dirty."""
    content: str
    settings: EditorSettings

    def apply(self, state):
        return replace(state, content=self.content, settings=self.settings, is_dirty=False)


@dataclass(frozen=True)
class Reset(EditorCommand):
    """Replace the content and discard all history."""
    content: str = ""

    def apply(self, state):
        history = state.history()
        history.reset(self.content)
        return state.with_history(history, active_template=None)


def transition(state: EditorState, command: EditorCommand) -> EditorState:
    """Apply ``command`` to ``state``. Pure: ``state`` is never modified."""
    if not isinstance(command, EditorCommand):
        raise TypeError(f"Not an editor command: {command!r}")
    return command.apply(state)


Listener = Callable[[EditorState], None]


class EditorStore:
    """Owns the editor state and is the only writer of it.

    Pages are never cached: ``pages()`` recomputes them from the current
    content and settings on every call.
    """

    def __init__(self, state: Optional[EditorState] = None):
        self._state = state if state is not None else EditorState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def content(self) -> str:
        return self._state.content

    @property
    def settings(self) -> EditorSettings:
        return self._state.settings

    @property
    def can_undo(self) -> bool:
        return bool(self._state.undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._state.redo_stack)

    @property
    def is_dirty(self) -> bool:
        return self._state.is_dirty

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for state changes.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, command: EditorCommand) -> bool:
        """Apply a command.

        Returns:
            True if the state changed.
        """
        new_state = transition(self._state, command)
        if new_state is self._state:
            return False
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)
        return True

    def commit(self, content: str) -> bool:
        return self.dispatch(SetContent(content))

    def undo(self) -> bool:
        return self.dispatch(Undo())

    def redo(self) -> bool:
        return self.dispatch(Redo())

    def reset(self, content: str = "") -> bool:
        return self.dispatch(Reset(content))

    def update_settings(self, **changes: Any) -> bool:
        return self.dispatch(UpdateSettings(changes))

    def toggle_writing_mode(self) -> bool:
        mode = WritingMode.HORIZONTAL if self.settings.is_vertical else WritingMode.VERTICAL
        return self.update_settings(writing_mode=mode)

    def cycle_font_weight(self) -> bool:
        return self.update_settings(font_weight=next_font_weight(self.settings.font_weight))

    def load_template(self, content: str, template_key: str) -> bool:
        return self.dispatch(LoadTemplate(content, template_key))

    def load(self, persisted: PersistedState) -> bool:
        logger.debug(f"Loading persisted state ({len(persisted.content)} chars)")
        return self.dispatch(LoadState(persisted.content, persisted.settings))

    def metrics(self) -> PageMetrics:
        return metrics_for(self._state.settings)

    def pages(self) -> List[str]:
        return paginate(self._state.content, self._state.settings)

    def edit_page(self, index: int, text: str) -> bool:
        """Replace page ``index`` of the current pagination and commit the result.

        Raises:
            IndexError: If the page does not exist.
        """
        return self.commit(replace_page(self.pages(), index, text))

    def snapshot(self) -> Dict[str, Any]:
        """Return the serializable ``{content, settings}`` record to persist."""
        return {
            "content": self._state.content,
            "settings": self._state.settings.to_dict(),
        }
