"""
DOM - Document Object Model for tablemark

A tree of named markup elements. Each Node holds either nothing, an ordered
list of child Nodes, or a single text value, never children and text at once.

Key invariant: the first successful attach decides the content kind for the
lifetime of the node. Attaching the other kind afterwards is a silent no-op.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

INDENT = "    "


@dataclass
class Children:
    """Content kind: ordered child elements."""
    nodes: list[Node] = field(default_factory=list)


@dataclass
class Text:
    """Content kind: a single raw text value."""
    value: str


@dataclass(init=False, repr=False)
class Node:
    """A markup element in the document tree."""
    _name: str
    _content: Children | Text | None

    def __init__(self, name: str):
        self._name = name
        self._content = None

    # Getters

    @property
    def name(self) -> str:
        """Name the node was created with."""
        return self._name

    @property
    def text(self) -> str | None:
        """Text payload, or None if the node holds children or nothing."""
        if isinstance(self._content, Text):
            return self._content.value
        return None

    @property
    def children(self) -> Iterator[Node] | None:
        """Fresh iterator over the children, or None if the node has none."""
        if isinstance(self._content, Children):
            return iter(tuple(self._content.nodes))
        return None

    @property
    def is_empty(self) -> bool:
        return self._content is None

    def _subtree_contains(self, target: Node) -> bool:
        """True if target is this node or any of its descendants."""
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            if node is target:
                return True
            if isinstance(node._content, Children):
                stack.extend(node._content.nodes)
        return False

    def depth_first(self) -> Iterator[Node]:
        """Traverse tree depth-first, yielding self then children."""
        yield self
        if isinstance(self._content, Children):
            for child in self._content.nodes:
                yield from child.depth_first()

    # Setters

    def add_child(self, child: Node) -> None:
        """
        Append a child element.
        If the node already holds text, the child is dropped. A child that
        is this node or one of its ancestors is dropped too, so the tree
        stays acyclic.
        """
        if child._subtree_contains(self):
            return
        if self._content is None:
            self._content = Children([child])
        elif isinstance(self._content, Children):
            self._content.nodes.append(child)

    def set_text(self, text: str) -> None:
        """
        Set the text of the node, replacing any previous text.
        If the node already holds children, nothing changes.
        """
        if self._content is None or isinstance(self._content, Text):
            self._content = Text(text)

    # Builders

    def with_child(self, child: Node) -> Node:
        """add_child, returning the node for chaining."""
        self.add_child(child)
        return self

    def with_text(self, text: str) -> Node:
        """set_text, returning the node for chaining."""
        self.set_text(text)
        return self

    # Serialization

    def to_string_pretty(self) -> str:
        """
        Render the node and its subtree as indented markup.

        Empty nodes self-close (<name/>). Otherwise the opening tag, the
        content one level deeper, and the closing tag each take their own
        line. Names and text are written as stored, without escaping.
        """
        buf: list[str] = []
        # Entries are either (node, depth) to render or a closing tag to emit
        stack: list[tuple[Node, int] | str] = [(self, 0)]

        while stack:
            item = stack.pop()
            if isinstance(item, str):
                buf.append(item)
                continue

            node, depth = item
            left = INDENT * depth
            content = node._content

            if content is None:
                buf.append(f"{left}<{node._name}/>\n")
                continue

            buf.append(f"{left}<{node._name}>\n")
            stack.append(f"{left}</{node._name}>\n")

            if isinstance(content, Children):
                # Reversed so the first child is popped first
                stack.extend((child, depth + 1) for child in reversed(content.nodes))
            else:
                buf.append(f"{left}{INDENT}{content.value}\n")

        return "".join(buf)

    def __str__(self) -> str:
        return self.to_string_pretty()

    def __repr__(self) -> str:
        if isinstance(self._content, Text):
            return f"Node({self._name!r}, text={self._content.value!r})"
        if isinstance(self._content, Children):
            return f"Node({self._name!r}, children={len(self._content.nodes)})"
        return f"Node({self._name!r})"
