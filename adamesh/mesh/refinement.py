from typing import List, Optional, Tuple

import networkx as nx
import numpy as np

from .. import logger
from ..errors import (
    InvalidRefinementMode, AlreadyRefined, NotAParent, UnpairableTriangle
)
from ..typing import MarkerName, RefinementMode
from ..geometry import curve_midpoint, split_curve
from .mesh_data_structure import Element, edge_key
from .mesh_base import EPS


class Refinable:
    """
    Refinement engine mixed into the mesh class.

    Children are added to the element arena and the parent is switched off,
    so every step can be undone by `unrefine_element`. Unrefinement hands the
    slots of the discarded elements back to the arena, and edge midpoints and
    element centres are made once and reused, so refine/unrefine cycles do
    not grow the mesh.

    Refinement modes:
        0 : uniform, triangles and quadrilaterals into 4
        1 : quadrilateral into 2 by splitting edges 1 and 3 (horizontal cut)
        2 : quadrilateral into 2 by splitting edges 0 and 2 (vertical cut)
    """
    def _split_edge(self, a: int, b: int) -> int:
        """
        Return the midpoint vertex of edge (a, b), creating it on first use.
        The curve and the boundary marker of the edge are handed down to the
        two halves.
        """
        key = edge_key(a, b)
        m = self.midpoint.get(key)
        if m is not None:
            return m

        lo, hi = key
        plo = self.node[lo].copy()
        phi = self.node[hi].copy()
        curve = self.curve.get(key)
        if curve is None:
            p = 0.5*(plo + phi)
        else:
            p = curve_midpoint(curve, plo, phi)
        m = self.add_node(p[0], p[1])
        self.midpoint[key] = m

        if curve is not None:
            c0, c1 = split_curve(curve, plo, phi)
            self.set_curve(lo, m, c0)
            self.set_curve(m, hi, c1)
        marker = self.boundary.get(key)
        if marker is not None:
            self.boundary[edge_key(lo, m)] = marker
            self.boundary[edge_key(m, hi)] = marker
        return m

    def _center_node(self, nodes, p) -> int:
        """Vertex at `p` inside the element with the given corners, made once."""
        key = tuple(sorted(nodes))
        c = self.centroid.get(key)
        if c is None:
            c = self.add_node(p[0], p[1])
            self.centroid[key] = c
        return c

    def _check_mode(self, e: Element, mode: RefinementMode):
        if e.is_triangle and mode != 0:
            raise InvalidRefinementMode(
                f"triangle {e.id} only supports uniform refinement, got mode {mode}")
        if mode not in (0, 1, 2):
            raise InvalidRefinementMode(f"unknown refinement mode {mode}")
        if mode != 0 and self.is_curved(e.id):
            raise InvalidRefinementMode(
                f"anisotropic refinement of curved element {e.id} is not supported")

    def refine_element(self, eid: int, mode: RefinementMode=0) -> List[int]:
        """
        Split an active element into children covering exactly its area.

        Parameters:
            eid (int): Id of an active element.
            mode (int): 0 uniform, 1 horizontal or 2 vertical (quads only).

        Returns:
            list of int: Ids of the new children.

        Raises:
            InvalidRefinementMode: The mode does not apply to the element.
            AlreadyRefined: The element is not active.
        """
        if self._in_criterion:
            raise RuntimeError("a refinement criterion must not modify the mesh")
        e = self.element(eid)
        if not e.active:
            raise AlreadyRefined(f"element {eid} is already refined")
        self._check_mode(e, mode)

        if e.is_triangle:
            cells = self._refine_triangle(e)
        elif mode == 0:
            cells = self._refine_quad(e)
        else:
            cells = self._refine_quad_aniso(e, mode)

        e.active = False
        for nodes in cells:
            child = self._add_element(nodes, e.marker, parent=e.id)
            e.children.append(child.id)
        logger.debug(f"Element {eid} refined with mode {mode} into {e.children}.")
        return list(e.children)

    def _refine_triangle(self, e: Element):
        v0, v1, v2 = e.nodes
        m0 = self._split_edge(v0, v1)
        m1 = self._split_edge(v1, v2)
        m2 = self._split_edge(v2, v0)
        return [(v0, m0, m2), (m0, v1, m1), (m2, m1, v2), (m1, m2, m0)]

    def _refine_quad(self, e: Element):
        v0, v1, v2, v3 = e.nodes
        m0 = self._split_edge(v0, v1)
        m1 = self._split_edge(v1, v2)
        m2 = self._split_edge(v2, v3)
        m3 = self._split_edge(v3, v0)
        # centre of the transfinite (Coons) map, exact for curved sides
        node = self.node
        p = 0.5*(node[m0] + node[m1] + node[m2] + node[m3]) \
            - 0.25*(node[v0] + node[v1] + node[v2] + node[v3])
        c = self._center_node(e.nodes, p)
        return [(v0, m0, c, m3), (m0, v1, m1, c), (c, m1, v2, m2), (m3, c, m2, v3)]

    def _refine_quad_aniso(self, e: Element, mode: RefinementMode):
        v0, v1, v2, v3 = e.nodes
        if mode == 1:
            m1 = self._split_edge(v1, v2)
            m3 = self._split_edge(v3, v0)
            return [(v0, v1, m1, m3), (m3, m1, v2, v3)]
        m0 = self._split_edge(v0, v1)
        m2 = self._split_edge(v2, v3)
        return [(v0, m0, m2, v3), (m0, v1, v2, m2)]

    def refine_all_elements(self, mode: RefinementMode=0, mark_as_initial: bool=False):
        """
        Refine every active element once. Triangles are refined uniformly
        whatever `mode` asks for quadrilaterals.
        """
        if mode not in (0, 1, 2):
            raise InvalidRefinementMode(f"unknown refinement mode {mode}")
        active = list(self.active_elements())
        if mode != 0:
            for e in active:
                if e.is_quad:
                    self._check_mode(e, mode)
        for e in active:
            self.refine_element(e.id, mode if e.is_quad else 0)
        logger.info(f"All {len(active)} active elements refined with mode {mode}.")
        if mark_as_initial:
            self._flatten()

    def refine_towards_vertex(self, vertex: int, depth: int=1, mark_as_initial: bool=False):
        """Refine, `depth` times, every active element having `vertex` as a corner."""
        self.vertex(vertex)
        for _ in range(depth):
            n2e = self.node_to_element()
            idx = n2e.indices[n2e.indptr[vertex]:n2e.indptr[vertex+1]]
            for eid in np.sort(idx):
                self.refine_element(int(eid), 0)
        if mark_as_initial:
            self._flatten()

    def refine_towards_boundary(self, marker: MarkerName, depth: int=1,
                                aniso: bool=True, mark_as_initial: bool=False):
        """
        Refine, `depth` times, every active element touching a boundary edge
        with the given marker.

        A quadrilateral whose marked edges are all horizontal (local edges
        0 and 2) or all vertical (1 and 3) is split anisotropically parallel
        to them when `aniso` is set and it has no curved edge. Everything else
        is refined uniformly.
        """
        mid = self.boundary_markers.id(marker)
        for _ in range(depth):
            bdnode = set()
            for key, m in self.boundary.items():
                if m == mid:
                    bdnode.update(key)
            for e in list(self.active_elements()):
                marked = [i for i, (a, b) in enumerate(e.edges())
                          if self.boundary.get(edge_key(a, b)) == mid]
                if marked:
                    mode = 0
                    if aniso and e.is_quad and not self.is_curved(e.id):
                        parity = {i % 2 for i in marked}
                        if parity == {0}:
                            mode = 1
                        elif parity == {1}:
                            mode = 2
                    self.refine_element(e.id, mode)
                elif bdnode.intersection(e.nodes):
                    self.refine_element(e.id, 0)
        if mark_as_initial:
            self._flatten()

    ## Derefinement

    def _remove_descendants(self, e: Element):
        for cid in e.children:
            c = self.elements[cid]
            self._remove_descendants(c)
            self._release_element(c)

    def unrefine_element(self, eid: int):
        """
        Discard all descendants of an element and make it active again.

        Raises:
            NotAParent: The element has no children.
        """
        e = self.element(eid)
        if not e.children:
            raise NotAParent(f"element {eid} has no children")
        self._remove_descendants(e)
        e.children = []
        e.active = True
        logger.debug(f"Element {eid} unrefined.")

    def unrefine_all_elements(self):
        """Collapse every tree of the forest to its root."""
        roots = [e for e in self.root_elements() if e.children]
        for e in roots:
            self.unrefine_element(e.id)
        logger.info(f"{len(roots)} root elements unrefined.")

    def _flatten(self):
        """Make the active partition the new base mesh, dropping history."""
        cells = [(e.nodes, e.marker) for e in self.active_elements()]
        self._rebuild(cells)

    ## Element type conversion

    def convert_quads_to_triangles(self):
        """Split every active quadrilateral along its v0-v2 diagonal."""
        cells = []
        for e in self.active_elements():
            if e.is_quad:
                v0, v1, v2, v3 = e.nodes
                cells.append(((v0, v1, v2), e.marker))
                cells.append(((v0, v2, v3), e.marker))
            else:
                cells.append((e.nodes, e.marker))
        self._rebuild(cells)
        logger.info(f"Quadrilaterals converted, mesh has {len(cells)} elements.")

    def _merge_triangles(self, t: Element, o: Element, a: int, b: int) -> Optional[Tuple[int, ...]]:
        """
        Quad made of triangle `t` and its neighbour `o` across the edge a -> b
        of `t`, or None if that quad is not strictly convex.
        """
        c, = set(t.nodes) - {a, b}
        rest = set(o.nodes) - {a, b}
        if len(rest) != 1:
            return None
        d, = rest
        quad = (b, c, a, d)
        p = self.node[list(quad)]
        scale = np.max(np.ptp(p, axis=0))**2
        for i in range(4):
            u = p[(i + 1) % 4] - p[i]
            v = p[(i + 2) % 4] - p[(i + 1) % 4]
            if u[0]*v[1] - u[1]*v[0] <= EPS*scale:
                return None
        return quad

    def convert_triangles_to_quads(self):
        """
        Merge the active triangles pairwise into quadrilaterals.

        Two triangles can be merged when they share the material marker and
        a straight, unmarked edge, and their union is strictly convex. The
        pairing is a maximum matching of that neighbour graph, weighted by
        the length of the shared edge, so a triangle only fails when no
        complete pairing exists at all.

        Raises:
            UnpairableTriangle: The triangles admit no complete pairing.
        """
        e2c = self.edge_to_element()
        node = self.node
        G = nx.Graph()
        for t in self.active_elements():
            if not t.is_triangle:
                continue
            G.add_node(t.id)
            for a, b in t.edges():
                key = edge_key(a, b)
                if key in self.curve or key in self.boundary:
                    continue
                others = [i for i in e2c.get(key, []) if i != t.id]
                if len(others) != 1 or others[0] < t.id:
                    continue
                o = self.elements[others[0]]
                if not o.is_triangle or o.marker != t.marker:
                    continue
                quad = self._merge_triangles(t, o, a, b)
                if quad is not None:
                    G.add_edge(t.id, o.id, weight=np.linalg.norm(node[b] - node[a]),
                               quad=quad)

        matching = nx.max_weight_matching(G, maxcardinality=True)
        merged = {}
        paired = set()
        for i, j in matching:
            merged[min(i, j)] = G.edges[i, j]['quad']
            paired.update((i, j))
        unpaired = sorted(set(G.nodes) - paired)
        if unpaired:
            raise UnpairableTriangle(
                f"triangle {unpaired[0]} has no neighbour to merge with")

        cells = []
        for e in self.active_elements():
            if e.is_quad:
                cells.append((e.nodes, e.marker))
            elif e.id in merged:
                cells.append((merged[e.id], e.marker))
        self._rebuild(cells)
        logger.info(f"Triangles converted, mesh has {len(cells)} elements.")
