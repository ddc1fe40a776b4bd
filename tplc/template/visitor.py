"""
Template visitor: turns a template AST into a flat list of actions.

For example, the template

    foo{{bar}}<div>baz</div>

produces the actions

    startProgram  (program, 0)
    text          (text, 0, 3, False)
    mustache      (mustache, 1, 3)
    openElement   (element, 2, 3, False, 0)
    text          (text, 0, 1, False)
    closeElement  (element, 2, 3, False)
    endProgram    (program,)

The visitor walks the AST depth first and backwards. Every program is
flushed into the global list as soon as it is finished, so the bottom-most
nested program appears at the top of the list and the root program at the
bottom. For example,

    <div>{{#if}}foo{{else}}bar<b></b>{{/if}}</div>

produces the actions of the inverse program (bar<b></b>), then the actions
of the main program (foo), and only then the actions of the root program.

The state of the traversal is kept in a stack of frames. Whenever a node
with children (a program or an element) is entered, a frame is pushed.
The frame holds the index of the child being visited, the number of
mustaches and nested programs under the node, and the actions produced
for the node so far.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from .actions import Action, ActionKind
from .errors import TemplateVisitError, UnknownNodeTypeError
from .frame import FlushTarget, Frame
from .nodes import (
    AttrNode,
    BlockNode,
    ComponentNode,
    ElementNode,
    MustacheNode,
    NodeType,
    ProgramNode,
    TemplateNode,
    TextNode,
)

logger = logging.getLogger(__name__)


class TemplateVisitor:
    """
    Stack-based traversal engine.

    One instance owns one frame stack and one global action list. It may be
    reused sequentially after reset(), never concurrently.
    """

    def __init__(self) -> None:
        self.frame_stack: List[Frame] = []
        self.actions: List[Action] = []

        self._handlers: Dict[NodeType, Callable[[TemplateNode], None]] = {
            NodeType.PROGRAM: self.visit_program,
            NodeType.ELEMENT: self.visit_element,
            NodeType.ATTR: self.visit_attr,
            NodeType.BLOCK: self.visit_block,
            NodeType.COMPONENT: self.visit_block,
            NodeType.TEXT: self.visit_text,
            NodeType.MUSTACHE: self.visit_mustache,
        }

    # ---- Traversal ----

    def visit(self, node: TemplateNode) -> None:
        """
        Dispatches the node to its handler by node type.

        Raises:
            UnknownNodeTypeError: For objects that are not template nodes
                or whose node type has no handler
        """
        if not isinstance(node, TemplateNode):
            logger.error("Refusing to visit non-template object %r", node)
            raise UnknownNodeTypeError(node)

        handler = self._handlers.get(node.node_type)
        if handler is None:
            logger.error("No handler for node %r", node)
            raise UnknownNodeTypeError(node)

        handler(node)

    def visit_program(self, program: ProgramNode) -> None:
        parent_frame = self.current_frame
        frame = self._push_frame(program, FlushTarget.GLOBAL)

        try:
            statements = program.statements
            frame.child_count = len(statements)
            frame.actions.append(Action(ActionKind.END_PROGRAM, (program,)))

            for i in range(len(statements) - 1, -1, -1):
                frame.child_index = i
                self.visit(statements[i])

            frame.actions.append(
                Action(ActionKind.START_PROGRAM, (program, frame.child_template_count))
            )
        finally:
            self._pop_frame(frame)

        # A program counts as one nested template of whichever frame was
        # current when it was entered
        if parent_frame is not None:
            parent_frame.child_template_count += 1

        self._flush(frame, parent_frame)

    def visit_element(self, element: ElementNode) -> None:
        parent_frame = self._require_frame(element)
        frame = self._push_frame(element, FlushTarget.PARENT)

        try:
            children = element.children
            frame.child_count = len(children)
            frame.mustache_count += len(element.helpers)

            action_args = (
                element,
                parent_frame.child_index,
                parent_frame.child_count,
                parent_frame.is_single_root,
            )

            frame.actions.append(Action(ActionKind.CLOSE_ELEMENT, action_args))

            for i in range(len(element.attributes) - 1, -1, -1):
                self.visit(element.attributes[i])

            for i in range(len(children) - 1, -1, -1):
                frame.child_index = i
                self.visit(children[i])

            frame.actions.append(
                Action(ActionKind.OPEN_ELEMENT, action_args + (frame.mustache_count,))
            )
        finally:
            self._pop_frame(frame)

        # Propagate the element's frame state to the parent frame
        if frame.mustache_count > 0:
            parent_frame.mustache_count += 1
        parent_frame.child_template_count += frame.child_template_count

        self._flush(frame, parent_frame)

    def visit_attr(self, attr: AttrNode) -> None:
        frame = self._require_frame(attr)
        if attr.is_dynamic:
            frame.mustache_count += 1

    def visit_block(self, node: BlockNode | ComponentNode) -> None:
        frame = self._require_frame(node)

        frame.mustache_count += 1
        kind = ActionKind.COMPONENT if node.node_type is NodeType.COMPONENT else ActionKind.BLOCK
        frame.actions.append(Action(kind, (node, frame.child_index, frame.child_count)))

        if node.inverse is not None:
            self.visit(node.inverse)
        if node.program is not None:
            self.visit(node.program)

    def visit_text(self, text: TextNode) -> None:
        frame = self._require_frame(text)
        frame.actions.append(
            Action(
                ActionKind.TEXT,
                (text, frame.child_index, frame.child_count, frame.is_single_root),
            )
        )

    def visit_mustache(self, mustache: MustacheNode) -> None:
        frame = self._require_frame(mustache)
        frame.mustache_count += 1
        frame.actions.append(
            Action(ActionKind.MUSTACHE, (mustache, frame.child_index, frame.child_count))
        )

    # ---- Frame helpers ----

    @property
    def current_frame(self) -> Optional[Frame]:
        """Frame on top of the stack, or None outside of any program."""
        return self.frame_stack[-1] if self.frame_stack else None

    def _push_frame(self, owner: TemplateNode, flush_target: FlushTarget) -> Frame:
        frame = Frame(owner_node=owner, flush_target=flush_target)
        self.frame_stack.append(frame)
        return frame

    def _pop_frame(self, expected: Frame) -> Frame:
        frame = self.frame_stack.pop()
        if frame is not expected:
            raise TemplateVisitError("Frame stack corrupted: popped frame does not match the node being left")
        return frame

    def _require_frame(self, node: TemplateNode) -> Frame:
        frame = self.current_frame
        if frame is None:
            raise TemplateVisitError(
                f"Node '{node.node_type.value}' must be visited inside a program"
            )
        return frame

    def _flush(self, frame: Frame, parent_frame: Optional[Frame]) -> None:
        if frame.flush_target is FlushTarget.GLOBAL:
            # [endProgram, ..., startProgram] becomes [startProgram, ..., endProgram]
            self.actions.extend(reversed(frame.actions))
            logger.debug(
                "Flushed program with %d statement(s): %d action(s), %d total",
                frame.child_count, len(frame.actions), len(self.actions),
            )
        else:
            if parent_frame is None:
                raise TemplateVisitError("Frame stack corrupted: nested frame has no parent to flush into")
            parent_frame.actions.extend(frame.actions)

    def reset(self) -> None:
        """Drops all state so the instance can visit another tree."""
        self.frame_stack.clear()
        self.actions.clear()


def compile_actions(root: ProgramNode) -> List[Action]:
    """
    Runs a fresh visitor over the tree and returns its action list.

    Either the complete list is returned or an exception propagates; actions
    of programs flushed before a failure are discarded with the visitor.
    """
    visitor = TemplateVisitor()
    visitor.visit(root)
    logger.debug("Compiled %d action(s)", len(visitor.actions))
    return visitor.actions


__all__ = ["TemplateVisitor", "compile_actions"]
