"""
List context stack

Tracks the lists currently open in a document, innermost last. The
transducer is the only code that pushes, pops or advances counters; the
emitter only reads the top frame and the depth.
"""

from typing import List, Optional

from ..models.events import ListFrame, ListKind


class ListDepthError(Exception):
    """Raised when more lists are opened than the stack can hold"""
    pass


class ListStack:
    """
    Bounded stack of open lists

    Attributes:
        maxDepth: Maximum number of simultaneously open lists
        frames: Open lists, outermost first
    """

    def __init__(self, maxDepth: Optional[int] = None) -> None:
        if maxDepth is None:
            from ..config import appsettings
            maxDepth = appsettings.max_list_depth
        self.maxDepth = maxDepth
        self.frames: List[ListFrame] = []

    def push(self, kind: ListKind, start: int = 1) -> ListFrame:
        """
        Open a new innermost list

        Args:
            kind: Ordered or unordered
            start: First item number (ordered lists)

        Returns:
            The new frame

        Raises:
            ListDepthError: If maxDepth lists are already open
        """
        if len(self.frames) >= self.maxDepth:
            raise ListDepthError(
                f"Cannot open more than {self.maxDepth} nested lists"
            )
        frame = ListFrame(kind=kind, counter=start)
        self.frames.append(frame)
        return frame

    def pop(self) -> ListFrame:
        """Close the innermost list; IndexError if none is open"""
        if not self.frames:
            raise IndexError("pop from empty list stack")
        return self.frames.pop()

    def peek(self) -> Optional[ListFrame]:
        """Innermost open list, or None"""
        return self.frames[-1] if self.frames else None

    def reset(self) -> None:
        self.frames.clear()

    @property
    def depth(self) -> int:
        return len(self.frames)

    @property
    def empty(self) -> bool:
        return not self.frames

    def __len__(self) -> int:
        return len(self.frames)
