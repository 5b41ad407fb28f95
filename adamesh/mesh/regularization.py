from typing import List

import numpy as np

from .. import logger
from ..errors import CurvedRegularizationUnsupported
from .mesh_data_structure import Element


class Regularizable:
    """Bounds the number of hanging nodes per edge of the active elements."""

    def regularize(self, n: int) -> np.ndarray:
        """
        Refine until no active element has more than `n` hanging nodes on
        any of its edges.

        With `n = 0` the remaining hanging nodes are removed by conforming
        splits and the forest is flattened: every element of the result is
        an active root. Curved meshes cannot be fully regularized.

        Parameters:
            n (int): Maximum number of hanging nodes per edge.

        Returns:
            parents (np.ndarray): One entry per element slot after the pass;
                for an active element, the id of the element active before
                the pass that it descends from, -1 otherwise.

        The number of refinement sweeps the pass needed is kept in
        `regularize_sweeps`.

        Raises:
            CurvedRegularizationUnsupported: `n = 0` and some active element
                has a curved edge.
        """
        if n < 0:
            raise ValueError(f"the irregularity bound must be non-negative, got {n}")
        total = (n == 0)
        if total:
            curved = [e.id for e in self.active_elements() if self.is_curved(e.id)]
            if curved:
                raise CurvedRegularizationUnsupported(
                    f"full regularization of curved elements {curved} is not supported")
            n = 1

        before = set(e.id for e in self.active_elements())

        sweep = 0
        while True:
            active = self.active_node_set()
            marked = [e.id for e in self.active_elements()
                      if max(self.hanging_nodes(e.id, active)) > n]
            if len(marked) == 0:
                break
            sweep += 1
            for eid in marked:
                self.refine_element(eid, 0)
        self.regularize_sweeps = sweep
        logger.info(f"Regularization to {n} hanging nodes finished after {sweep} sweeps.")

        if total:
            active = self.active_node_set()
            for e in list(self.active_elements()):
                self._make_conforming(e, active)

        ancestor = {}
        for e in self.active_elements():
            a = e
            while a.id not in before:
                a = self.elements[a.parent]
            ancestor[e.id] = a.id

        if total:
            order = [e.id for e in self.active_elements()]
            self._flatten()
            parents = np.array([ancestor[i] for i in order], dtype=self.itype)
        else:
            parents = -np.ones(len(self.elements), dtype=self.itype)
            for i, a in ancestor.items():
                parents[i] = a
        return parents

    def _make_conforming(self, e: Element, active):
        """
        Split an active element so that its hanging nodes become corners of
        its children, without creating any vertex on its edges.
        """
        points = [self.hanging_points(a, b, active) for a, b in e.edges()]
        count = [len(p) for p in points]
        if sum(count) == 0:
            return

        if e.is_quad and count in ([1, 0, 1, 0], [0, 1, 0, 1]):
            self.refine_element(e.id, 2 if count[0] else 1)
            return

        if e.is_triangle and sum(count) == 1:
            i = int(np.argmax(count))
            v = e.nodes
            m = points[i][0]
            cells = [(v[i], m, v[(i+2) % 3]), (m, v[(i+1) % 3], v[(i+2) % 3])]
        else:
            boundary = []
            for i, (a, b) in enumerate(e.edges()):
                boundary.append(a)
                boundary.extend(points[i])
            p = np.mean(self.node[list(e.nodes)], axis=0)
            c = self._center_node(e.nodes, p)
            nb = len(boundary)
            cells = [(c, boundary[i], boundary[(i+1) % nb]) for i in range(nb)]

        e.active = False
        for nodes in cells:
            child = self._add_element(nodes, e.marker, parent=e.id)
            e.children.append(child.id)
