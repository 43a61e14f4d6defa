"""
List context stack tests
"""

import pytest

from md2roff.lib.liststack import ListStack, ListDepthError
from md2roff.models import ListKind, ListFrame


class TestPushPop:
    """Test basic stack operations"""

    def test_new_stack_is_empty(self):
        """Fresh stack has no frames"""
        stack = ListStack()
        assert stack.empty
        assert stack.depth == 0
        assert stack.peek() is None

    def test_push_returns_frame(self):
        """Pushed frame carries kind and start counter"""
        stack = ListStack()
        frame = stack.push(ListKind.ORDERED, start=5)

        assert frame == ListFrame(kind=ListKind.ORDERED, counter=5)
        assert stack.peek() is frame
        assert not stack.empty
        assert len(stack) == 1

    def test_default_counter_is_one(self):
        """Counter starts at 1 unless given"""
        stack = ListStack()
        assert stack.push(ListKind.UNORDERED).counter == 1

    def test_pop_returns_innermost(self):
        """Frames come off in reverse order"""
        stack = ListStack()
        outer = stack.push(ListKind.UNORDERED)
        inner = stack.push(ListKind.ORDERED)

        assert stack.pop() is inner
        assert stack.pop() is outer
        assert stack.empty

    def test_pop_empty_raises(self):
        """Popping an empty stack is an error"""
        with pytest.raises(IndexError):
            ListStack().pop()

    def test_reset_clears_everything(self):
        """Reset drops all frames"""
        stack = ListStack()
        stack.push(ListKind.ORDERED)
        stack.push(ListKind.UNORDERED)
        stack.reset()
        assert stack.empty


class TestDepthLimit:
    """Test the maximum nesting depth"""

    def test_default_depth_from_settings(self):
        """Default limit is 32 open lists"""
        assert ListStack().maxDepth == 32

    def test_push_past_limit_raises(self):
        """Push beyond maxDepth fails and leaves the stack"""
        stack = ListStack(maxDepth=2)
        stack.push(ListKind.ORDERED)
        stack.push(ListKind.ORDERED)

        with pytest.raises(ListDepthError):
            stack.push(ListKind.ORDERED)
        assert stack.depth == 2

    def test_full_depth_is_usable(self):
        """All 32 levels can be opened"""
        stack = ListStack()
        for _ in range(32):
            stack.push(ListKind.UNORDERED)
        assert stack.depth == 32
