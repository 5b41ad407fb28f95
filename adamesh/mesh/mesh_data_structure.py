from typing import NamedTuple, Optional, Tuple, List

import numpy as np

from ..typing import MarkerName, EdgeKey
from ..geometry import Curve


def edge_key(a: int, b: int) -> EdgeKey:
    return (a, b) if a < b else (b, a)


class Element:
    """
    One node of the refinement forest.

    Elements live in the mesh's arena and refer to each other by id only:
    `parent` is -1 for roots, `children` is empty for leaves. Vertices are
    listed counter-clockwise; local edge i runs from `nodes[i]` to
    `nodes[(i+1) % nv]`.
    """
    __slots__ = ('id', 'nodes', 'marker', 'active', 'used', 'parent',
                 'children', 'level')

    def __init__(self, id: int, nodes: Tuple[int, ...], marker: int,
                 parent: int=-1, level: int=0):
        self.id = id
        self.nodes = tuple(nodes)
        self.marker = marker
        self.active = True
        self.used = True
        self.parent = parent
        self.children: List[int] = []
        self.level = level

    @property
    def nv(self) -> int:
        return len(self.nodes)

    @property
    def is_triangle(self) -> bool:
        return len(self.nodes) == 3

    @property
    def is_quad(self) -> bool:
        return len(self.nodes) == 4

    def edge_nodes(self, i: int) -> Tuple[int, int]:
        return self.nodes[i], self.nodes[(i + 1) % len(self.nodes)]

    def edges(self):
        nv = len(self.nodes)
        return [(self.nodes[i], self.nodes[(i + 1) % nv]) for i in range(nv)]

    def clone(self) -> 'Element':
        e = Element(self.id, self.nodes, self.marker, self.parent, self.level)
        e.active = self.active
        e.used = self.used
        e.children = list(self.children)
        return e

    def __repr__(self):
        state = 'active' if self.active else ('inactive' if self.used else 'removed')
        return f"Element(id={self.id}, nodes={self.nodes}, marker={self.marker}, {state})"


class Edge(NamedTuple):
    """A directed view of an edge as seen from one of its elements."""
    nodes: Tuple[int, int]
    marker: Optional[MarkerName]
    curve: Optional[Curve]
    elements: Tuple[int, ...]

    @property
    def is_boundary(self) -> bool:
        return self.marker is not None

    @property
    def is_curved(self) -> bool:
        return self.curve is not None

    @property
    def is_shared(self) -> bool:
        return len(self.elements) > 1


class ElementInfo(NamedTuple):
    """Read-only snapshot of an active element handed to refinement criteria."""
    id: int
    nodes: Tuple[int, ...]
    points: np.ndarray
    marker: MarkerName
    level: int
    area: float
    curved: bool

    @property
    def is_triangle(self) -> bool:
        return len(self.nodes) == 3

    @property
    def is_quad(self) -> bool:
        return len(self.nodes) == 4

    @property
    def center(self) -> np.ndarray:
        return np.mean(self.points, axis=0)
