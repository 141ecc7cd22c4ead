from typing import Iterable, List, Tuple

from .constants import LayoutConstants


class ContentHistory:
    """Current content plus bounded undo and redo stacks of prior content.

    Stacks are ordered oldest to newest; the last element is the top.
    """

    def __init__(
        self,
        content: str = "",
        undo_stack: Iterable[str] = (),
        redo_stack: Iterable[str] = (),
        max_entries: int = LayoutConstants.MAX_UNDO,
    ):
        self._content = content
        self._max_entries = max_entries
        self._undo_stack: List[str] = list(undo_stack)[-max_entries:]
        self._redo_stack: List[str] = list(redo_stack)[-max_entries:]

    @property
    def content(self) -> str:
        return self._content

    @property
    def undo_stack(self) -> Tuple[str, ...]:
        return tuple(self._undo_stack)

    @property
    def redo_stack(self) -> Tuple[str, ...]:
        return tuple(self._redo_stack)

    def _push(self, stack: List[str], content: str):
        stack.append(content)
        # Cap history
        if len(stack) > self._max_entries:
            stack.pop(0)

    def commit(self, content: str):
        self._push(self._undo_stack, self._content)
        self._content = content
        # Any new edit invalidates redo history
        self._redo_stack.clear()

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def undo(self) -> bool:
        if not self._undo_stack:
            return False
        previous = self._undo_stack.pop()
        self._push(self._redo_stack, self._content)
        self._content = previous
        return True

    def redo(self) -> bool:
        if not self._redo_stack:
            return False
        following = self._redo_stack.pop()
        # Return replaced content to undo stack
        self._push(self._undo_stack, self._content)
        self._content = following
        return True

    def reset(self, content: str = ""):
        self._content = content
        self._undo_stack.clear()
        self._redo_stack.clear()
