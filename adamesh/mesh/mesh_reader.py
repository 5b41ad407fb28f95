from typing import List, Tuple, Dict, Optional, Any

import numpy as np

from ..errors import ParseError, MeshError
from ..typing import MarkerName
from ..geometry import Arc, Nurbs
from .mesh_base import EPS
from .mesh_data_structure import edge_key


class MeshReader:
    """
    Common back end of the mesh file parsers.

    A parser fills the record lists below, each record carrying the line it
    came from, and `to_mesh` validates them and builds the mesh.

    Attributes:
        vertices (Dict[int, tuple]): index -> (x, y, lineno)
        cells (List[tuple]): (nodes, marker, lineno)
        boundaries (List[tuple]): (v1, v2, marker, lineno)
        curves (List[tuple]): (v1, v2, ('arc', angle) |
            ('nurbs', degree, inner points, inner knots), lineno)
        refinements (List[tuple]): (element id, mode, lineno)
    """
    def __init__(self):
        self.filename: Optional[str] = None
        self.vertices: Dict[int, Tuple[float, float, int]] = {}
        self.cells: List[Tuple[Tuple[int, ...], MarkerName, int]] = []
        self.boundaries: List[Tuple[int, int, MarkerName, int]] = []
        self.curves: List[Tuple[int, int, Tuple[Any, ...], int]] = []
        self.refinements: List[Tuple[int, int, int]] = []

    def error(self, message: str, lineno: Optional[int]=None) -> ParseError:
        return ParseError(message, self.filename, lineno)

    def read_text(self, filename) -> str:
        """Read a UTF-8 mesh file; undecodable bytes are a `ParseError`."""
        self.filename = str(filename)
        with open(filename, 'rb') as f:
            data = f.read()
        try:
            return data.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            lineno = data.count(b'\n', 0, e.start) + 1
            raise self.error(f"invalid UTF-8 byte 0x{data[e.start]:02x}", lineno) from e

    ## Record helpers shared by the parsers

    def add_vertex(self, index: int, x: float, y: float, lineno: int):
        if index in self.vertices:
            raise self.error(f"duplicate vertex index {index}", lineno)
        self.vertices[index] = (float(x), float(y), lineno)

    def to_index(self, value, what: str, lineno: int) -> int:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise self.error(f"{what} must be an integer, got {value!r}", lineno)
        if isinstance(value, float):
            if not value.is_integer():
                raise self.error(f"{what} must be an integer, got {value!r}", lineno)
            value = int(value)
        return value

    def to_number(self, value, what: str, lineno: int) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise self.error(f"{what} must be a number, got {value!r}", lineno)
        return float(value)

    def to_marker(self, value, lineno: int) -> MarkerName:
        if isinstance(value, str):
            return value
        return self.to_index(value, "marker", lineno)

    ## Validation and construction

    def _check_vertices(self):
        for i, index in enumerate(sorted(self.vertices)):
            if index != i:
                lineno = self.vertices[index][2]
                raise self.error(
                    f"vertex indices must run from 0 without gaps, found {index} "
                    f"where {i} was expected", lineno)
        node = np.array([self.vertices[i][:2] for i in range(len(self.vertices))],
                        dtype=np.float64).reshape(-1, 2)
        return node

    def _check_cell(self, node, nodes, marker, lineno):
        NN = len(node)
        if len(nodes) not in (3, 4):
            raise self.error(f"an element has 3 or 4 vertices, got {len(nodes)}", lineno)
        for v in nodes:
            if v < 0 or v >= NN:
                raise self.error(f"element references undefined vertex {v}", lineno)
        if len(set(nodes)) != len(nodes):
            raise self.error(f"element repeats a vertex: {list(nodes)}", lineno)
        if isinstance(marker, int) and marker < 0:
            raise self.error(f"element marker must be non-negative, got {marker}", lineno)

        p = node[list(nodes)]
        scale = max(np.max(np.ptp(p, axis=0))**2, EPS)
        nv = len(nodes)
        for i in range(nv):
            u = p[(i + 1) % nv] - p[i]
            v = p[(i + 2) % nv] - p[(i + 1) % nv]
            if u[0]*v[1] - u[1]*v[0] <= EPS*scale:
                kind = 'triangle' if nv == 3 else 'quad'
                raise self.error(
                    f"vertices {list(nodes)} of the {kind} are not in "
                    f"counter-clockwise order (or the element is not convex)", lineno)

    def _make_curve(self, node, a, b, cdef, lineno):
        if cdef[0] == 'arc':
            angle = cdef[1]
            if not (0 < abs(angle) < 180):
                raise self.error(f"arc angle must lie in (-180, 0) or (0, 180), got {angle}", lineno)
            return Arc(float(angle))

        _, degree, inner, knots = cdef
        if degree < 1:
            raise self.error(f"NURBS degree must be at least 1, got {degree}", lineno)
        inner = np.asarray(inner, dtype=np.float64).reshape(-1, 3)
        knots = np.asarray(knots, dtype=np.float64)
        if len(knots) != len(inner) + 1 - degree:
            raise self.error(
                f"a NURBS of degree {degree} with {len(inner)} inner control points "
                f"needs {len(inner) + 1 - degree} inner knots, got {len(knots)}", lineno)
        if np.any(inner[:, 2] <= 0):
            raise self.error("NURBS weights must be positive", lineno)
        if np.any(knots < 0) or np.any(knots > 1) or np.any(np.diff(knots) < 0):
            raise self.error("inner knots must be non-decreasing values in [0, 1]", lineno)
        return Nurbs.from_inner(node[a], node[b], degree, inner, knots)

    def to_mesh(self, mesh_type, **kwargs):
        """
        Validate the records and build a `mesh_type` instance, then apply the
        recorded refinements in order.
        """
        node = self._check_vertices()
        if len(self.cells) == 0:
            raise self.error("the mesh has no elements")
        edges = set()
        for nodes, marker, lineno in self.cells:
            self._check_cell(node, nodes, marker, lineno)
            nv = len(nodes)
            edges.update(edge_key(nodes[i], nodes[(i + 1) % nv]) for i in range(nv))

        mesh = mesh_type(**kwargs)
        mesh.add_nodes(node)
        for nodes, marker, _ in self.cells:
            mesh.add_element(nodes, marker)

        for a, b, marker, lineno in self.boundaries:
            if edge_key(a, b) not in edges:
                raise self.error(f"boundary edge ({a}, {b}) is not an edge of any element", lineno)
            if isinstance(marker, int) and marker <= 0:
                raise self.error(f"boundary marker must be positive, got {marker}", lineno)
            mesh.set_boundary(a, b, marker)

        for a, b, cdef, lineno in self.curves:
            key = edge_key(a, b)
            if key not in edges:
                raise self.error(f"curve edge ({a}, {b}) is not an edge of any element", lineno)
            if key in mesh.curve:
                raise self.error(f"edge ({a}, {b}) already has a curve", lineno)
            mesh.set_curve(a, b, self._make_curve(node, a, b, cdef, lineno))

        for eid, mode, lineno in self.refinements:
            try:
                mesh.refine_element(eid, mode)
            except MeshError as e:
                raise self.error(f"refinement of element {eid} failed: {e}", lineno) from e
        return mesh
