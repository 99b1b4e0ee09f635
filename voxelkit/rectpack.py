"""Skyline bottom-left / best-fit rectangle packing for texture atlases."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, NamedTuple

MAX_VALUE = 0x7FFFFFFF
"""Largest supported coordinate; unpacked rectangles are placed here."""

_INFINITY = 1 << 30


class Heuristic(IntEnum):
    """Placement heuristic used by the skyline packer."""

    SKYLINE_DEFAULT = 0
    SKYLINE_BL_SORT_HEIGHT = 0
    SKYLINE_BF_SORT_HEIGHT = 1


@dataclass
class Rect:
    """A rectangle to pack; ``x``, ``y`` and ``was_packed`` are outputs."""

    w: int
    h: int
    id: int = 0
    x: int = 0
    y: int = 0
    was_packed: bool = False


@dataclass
class _Node:
    x: int
    y: int


class _Placement(NamedTuple):
    index: int
    x: int
    y: int


class Packer:
    """Packs rectangles into a fixed-size target using a skyline."""

    def __init__(self, width: int, height: int, num_nodes: int) -> None:
        if num_nodes < 1:
            raise ValueError("num_nodes must be at least 1")
        self.width = width
        self.height = height
        self.num_nodes = num_nodes
        self.heuristic = Heuristic.SKYLINE_DEFAULT
        self._free = num_nodes
        # First node spans the full width; the last is a sentinel marking the edge.
        self._skyline = [_Node(0, 0), _Node(width, _INFINITY)]
        self.align = 1
        self.allow_out_of_mem(False)

    def allow_out_of_mem(self, allow: bool) -> None:
        """Choose between exact widths (may run out of nodes) and quantized widths."""
        if allow:
            self.align = 1
        else:
            self.align = (self.width + self.num_nodes - 1) // self.num_nodes

    def set_heuristic(self, heuristic: int) -> None:
        """Select the packing heuristic."""
        try:
            self.heuristic = Heuristic(heuristic)
        except ValueError:
            raise ValueError(f"unknown packing heuristic: {heuristic!r}") from None

    def _find_min_y(self, first: int, x0: int, width: int) -> tuple[int, int]:
        nodes = self._skyline
        x1 = x0 + width
        min_y = 0
        waste = 0
        visited = 0
        i = first
        while nodes[i].x < x1:
            node, nxt = nodes[i], nodes[i + 1]
            if node.y > min_y:
                waste += visited * (node.y - min_y)
                min_y = node.y
                if node.x < x0:
                    visited += nxt.x - x0
                else:
                    visited += nxt.x - node.x
            else:
                under = nxt.x - node.x
                if under + visited > width:
                    under = width - visited
                waste += under * (min_y - node.y)
                visited += under
            i += 1
        return min_y, waste

    def _find_best_pos(self, width: int, height: int) -> _Placement | None:
        width += self.align - 1
        width -= width % self.align
        if width > self.width or height > self.height:
            return None

        nodes = self._skyline
        best_waste = _INFINITY
        best_y = _INFINITY
        best: int | None = None

        i = 0
        while nodes[i].x + width <= self.width:
            y, waste = self._find_min_y(i, nodes[i].x, width)
            if self.heuristic == Heuristic.SKYLINE_BL_SORT_HEIGHT:
                if y < best_y:
                    best_y = y
                    best = i
            elif y + height <= self.height:
                if y < best_y or (y == best_y and waste < best_waste):
                    best_y = y
                    best_waste = waste
                    best = i
            i += 1

        best_x = 0 if best is None else nodes[best].x

        if self.heuristic == Heuristic.SKYLINE_BF_SORT_HEIGHT:
            tail = 0
            node = 0
            while nodes[tail].x < width:
                tail += 1
            while tail < len(nodes):
                xpos = nodes[tail].x - width
                while nodes[node + 1].x <= xpos:
                    node += 1
                y, waste = self._find_min_y(node, xpos, width)
                if y + height <= self.height and y <= best_y:
                    if (
                        y < best_y
                        or waste < best_waste
                        or (waste == best_waste and xpos < best_x)
                    ):
                        best_x = xpos
                        best_y = y
                        best_waste = waste
                        best = node
                tail += 1

        if best is None:
            return None
        return _Placement(best, best_x, best_y)

    def _pack_rectangle(self, width: int, height: int) -> tuple[int, int] | None:
        found = self._find_best_pos(width, height)
        if found is None or found.y + height > self.height or self._free == 0:
            return None

        nodes = self._skyline
        new_node = _Node(found.x, found.y + height)
        self._free -= 1
        right = found.x + width

        start = found.index + 1 if nodes[found.index].x < found.x else found.index
        end = start
        while end + 1 < len(nodes) and nodes[end + 1].x <= right:
            end += 1
        self._free += end - start
        nodes[start:end] = [new_node]

        following = nodes[start + 1]
        if following.x < right:
            following.x = right
        return found.x, found.y

    def pack_rects(self, rects: Iterable[Rect]) -> bool:
        """Place rectangles in the target; return True if every one fitted.

        Each rectangle gets ``x``, ``y`` and ``was_packed`` set. Rectangles are
        tried tallest first, then widest; the input order is left untouched.
        """
        rects = list(rects)
        for rect in sorted(rects, key=lambda r: (-r.h, -r.w)):
            if rect.w == 0 or rect.h == 0:
                rect.x = rect.y = 0
                continue
            placed = self._pack_rectangle(rect.w, rect.h)
            if placed is None:
                rect.x = rect.y = MAX_VALUE
            else:
                rect.x, rect.y = placed

        all_packed = True
        for rect in rects:
            rect.was_packed = not (rect.x == MAX_VALUE and rect.y == MAX_VALUE)
            all_packed = all_packed and rect.was_packed
        return all_packed