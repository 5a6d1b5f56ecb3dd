"""
Binary space-partitioning rectangle packer.

One packer covers one fixed-size canvas. Each insertion walks the tree
depth-first (first child before second) looking for a free leaf that can
hold the image, then splits that leaf so the image ends up in its own
exactly-sized leaf:

    dw > dh (vertical split)       dw <= dh (horizontal split)
    +-------+---------+            +-----------------+
    |       |         |            |      first      |  <- image height
    | first | second  |            +-----------------+
    |       |         |            |     second      |
    +-------+---------+            +-----------------+
      image width

Nodes live in a flat list and refer to their children by index, so the tree
only ever grows by appending. Traversal uses an explicit stack; a long chain
of thin images can make the tree far deeper than the interpreter's
recursion limit.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .rect import Rect

logger = logging.getLogger(__name__)

NO_CHILD = -1
ROOT = 0


@dataclass
class PackerNode:
    """A node in the packer tree: either a leaf (free or occupied) or a split."""
    rect: Rect
    first: int = NO_CHILD
    second: int = NO_CHILD
    occupant: Optional[str] = None

    @property
    def is_leaf(self) -> bool:
        return self.first == NO_CHILD and self.second == NO_CHILD

    @property
    def is_free(self) -> bool:
        return self.is_leaf and self.occupant is None


class RectanglePacker:
    """
    Space-partitioning tree over a single width x height canvas.

    Example:
        >>> packer = RectanglePacker(128, 128)
        >>> packer.insert(64, 32, "button")
        Rect(x=0, y=0, width=64, height=32)
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.nodes: List[PackerNode] = [PackerNode(Rect(0, 0, width, height))]

    @property
    def root(self) -> PackerNode:
        return self.nodes[ROOT]

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    def node(self, handle: int) -> PackerNode:
        return self.nodes[handle]

    def children(self, handle: int) -> Optional[Tuple[PackerNode, PackerNode]]:
        """Return the (first, second) children of a node, or None for a leaf."""
        node = self.nodes[handle]
        if node.is_leaf:
            return None
        return self.nodes[node.first], self.nodes[node.second]

    def insert(self, width: int, height: int, occupant: str) -> Optional[Rect]:
        """
        Find room for a width x height image and claim it for `occupant`.

        Args:
            width: Image width in pixels
            height: Image height in pixels
            occupant: Name recorded on the leaf that receives the image

        Returns:
            The placed rectangle, or None if no free leaf can hold the image.
            A failed insert leaves the tree untouched.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image size must be positive, got {width}x{height}")

        stack = [ROOT]
        while stack:
            handle = stack.pop()
            node = self.nodes[handle]

            if not node.is_leaf:
                # Second is pushed first so the first child is searched first
                stack.append(node.second)
                stack.append(node.first)
                continue

            if node.occupant is not None:
                continue

            rect = node.rect
            if width > rect.width or height > rect.height:
                continue

            if width == rect.width and height == rect.height:
                node.occupant = occupant
                return rect

            # Image fits with slack: split, then continue into the first child,
            # which always fits the image in at least one dimension exactly.
            stack.append(self._split(handle, width, height))

        return None

    def _split(self, handle: int, width: int, height: int) -> int:
        """Split a free leaf around a width x height image. Returns the first child handle."""
        node = self.nodes[handle]
        rect = node.rect
        dw = rect.width - width
        dh = rect.height - height

        if dw > dh:
            first = Rect(rect.x, rect.y, width, rect.height)
            second = Rect(rect.x + width, rect.y, rect.width - width, rect.height)
        else:
            first = Rect(rect.x, rect.y, rect.width, height)
            second = Rect(rect.x, rect.y + height, rect.width, rect.height - height)

        node.first = len(self.nodes)
        self.nodes.append(PackerNode(first))
        node.second = len(self.nodes)
        self.nodes.append(PackerNode(second))

        logger.debug(f"Split {rect} into {first} and {second}")
        return node.first

    def leaves(self) -> Iterator[PackerNode]:
        """Yield every leaf in depth-first (first child before second) order."""
        stack = [ROOT]
        while stack:
            node = self.nodes[stack.pop()]
            if node.is_leaf:
                yield node
            else:
                stack.append(node.second)
                stack.append(node.first)

    def free_leaves(self) -> List[PackerNode]:
        return [leaf for leaf in self.leaves() if leaf.occupant is None]

    def occupied_leaves(self) -> List[PackerNode]:
        return [leaf for leaf in self.leaves() if leaf.occupant is not None]
