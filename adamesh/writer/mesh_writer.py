from typing import List, Tuple, Optional

import numpy as np

from ..geometry import Nurbs, Curve
from ..mesh.mesh_data_structure import edge_key


class MeshWriter:
    """
    Collects the active partition of a mesh in file order.

    Vertices used by active elements are renumbered densely in id order;
    boundary entries and curves are taken over the edges of the active
    elements, written as `(lo, hi)` in the new numbering.

    Attributes:
        node (np.ndarray): (NN, 2) coordinates of the kept vertices.
        cells (list): (nodes, marker name) of the active elements.
        boundaries (list): (v1, v2, marker name).
        curves (list): (v1, v2, curve directed v1 -> v2).
    """
    def __init__(self, mesh):
        self.mesh = mesh
        active = list(mesh.active_elements())
        idx = np.unique(np.concatenate([np.asarray(e.nodes) for e in active]))
        vmap = {int(v): i for i, v in enumerate(idx)}
        self.node = mesh.node[idx]
        self.cells: List[Tuple[Tuple[int, ...], object]] = [
            (tuple(vmap[v] for v in e.nodes), mesh.element_markers.name(e.marker))
            for e in active]

        self.boundaries: List[Tuple[int, int, object]] = []
        self.curves: List[Tuple[int, int, Curve]] = []
        seen = set()
        for e in active:
            for a, b in e.edges():
                key = edge_key(a, b)
                if key in seen:
                    continue
                seen.add(key)
                lo, hi = key
                i, j = sorted((vmap[lo], vmap[hi]))
                marker = mesh.edge_marker(lo, hi)
                if marker is not None:
                    self.boundaries.append((i, j, marker))
                curve = mesh.edge_curve(int(idx[i]), int(idx[j]))
                if curve is not None:
                    self.curves.append((i, j, curve))

    @staticmethod
    def number(x) -> str:
        x = float(x)
        if x.is_integer() and abs(x) < 1e15:
            return str(int(x)) if x != 0 else '0'
        return repr(x)

    @staticmethod
    def nurbs_data(curve: Nurbs):
        return curve.degree, curve.inner_points(), curve.inner_knots()

    def write(self, fname):
        raise NotImplementedError(f"write must be implemented by {self.__class__.__name__}")
