import heapq
from typing import Optional, List, Dict, Tuple, Iterator, Set

import numpy as np
from scipy.sparse import coo_matrix, csr_matrix

from .. import logger
from ..errors import ElementNotFound, VertexNotFound
from ..typing import MarkerName, EdgeKey
from ..common import DynamicArray
from ..geometry import Curve, reverse_curve, curve_area_integral
from .marker import MarkerTable
from .mesh_data_structure import Element, Edge, ElementInfo, edge_key

EPS = 1e-12


##################################################
### Mesh Base
##################################################

class MeshBase:
    """
    Storage and queries of a 2D mesh of (possibly curved) triangles and
    quadrilaterals together with its refinement history.

    Attributes:
        node : DynamicArray
            Vertex coordinates, shape (NN, 2). Row index is the vertex id.
        elements : list of Element
            The element arena over all generations. Element id is the index.
        boundary : dict
            Edge key -> internal boundary marker id, for marked edges only.
        curve : dict
            Edge key (a, b), a < b -> curve directed from a to b.
        midpoint : dict
            Edge key -> id of the vertex that splits the edge.
        centroid : dict
            Sorted vertex ids of an element -> id of its centre vertex.
        element_markers, boundary_markers : MarkerTable
            Name <-> id tables for material and boundary markers.
    """
    def __init__(self, itype=np.int_, ftype=np.float64):
        self.itype = itype
        self.ftype = ftype
        self.node = DynamicArray((0, 2), dtype=ftype)
        self.elements: List[Element] = []
        self.boundary: Dict[EdgeKey, int] = {}
        self.curve: Dict[EdgeKey, Curve] = {}
        self.midpoint: Dict[EdgeKey, int] = {}
        self.centroid: Dict[Tuple[int, ...], int] = {}
        # removed arena slots, reused smallest first
        self._free: List[int] = []
        self.element_markers = MarkerTable()
        self.boundary_markers = MarkerTable()
        self.meshtype = 'h2d'

    ## Construction

    def add_node(self, x: float, y: float) -> int:
        return self.node.append((x, y))

    def add_nodes(self, points) -> np.ndarray:
        """Append (n, 2) coordinates and return the new vertex ids."""
        start = len(self.node)
        self.node.extend(np.reshape(points, (-1, 2)))
        return np.arange(start, len(self.node), dtype=self.itype)

    def add_element(self, nodes, marker: MarkerName) -> Element:
        """Append a root element. `marker` is the user's material name."""
        return self._add_element(nodes, self.element_markers.intern(marker))

    def _add_element(self, nodes, marker: int, parent: int=-1) -> Element:
        level = 0 if parent < 0 else self.elements[parent].level + 1
        if self._free:
            e = Element(heapq.heappop(self._free), nodes, marker, parent=parent, level=level)
            self.elements[e.id] = e
        else:
            e = Element(len(self.elements), nodes, marker, parent=parent, level=level)
            self.elements.append(e)
        return e

    def _release_element(self, e: Element):
        """Mark `e` removed and hand its slot back to the arena."""
        e.active = False
        e.used = False
        e.children = []
        heapq.heappush(self._free, e.id)

    def set_boundary(self, a: int, b: int, marker: MarkerName):
        self.boundary[edge_key(a, b)] = self.boundary_markers.intern(marker)

    def set_curve(self, a: int, b: int, curve: Curve):
        """Attach `curve`, given in the direction a -> b, to edge (a, b)."""
        if a < b:
            self.curve[(a, b)] = curve
        else:
            self.curve[(b, a)] = reverse_curve(curve)

    def _rebuild(self, cells):
        """
        Replace the forest with one root element per `(nodes, marker id)`
        pair. Vertices, boundary markers and curves are kept.
        """
        self.elements = []
        self._free = []
        for nodes, marker in cells:
            self._add_element(nodes, marker)

    ## Counting and lookup

    def number_of_nodes(self) -> int:
        return len(self.node)

    def number_of_elements(self) -> int:
        """Number of elements in the forest, active or not."""
        return sum(1 for e in self.elements if e.used)

    def number_of_active_elements(self) -> int:
        return sum(1 for e in self.elements if e.active)

    def element(self, eid: int) -> Element:
        if eid < 0 or eid >= len(self.elements) or not self.elements[eid].used:
            raise ElementNotFound(f"element {eid} does not exist")
        return self.elements[eid]

    def vertex(self, vid: int) -> np.ndarray:
        if vid < 0 or vid >= len(self.node):
            raise VertexNotFound(f"vertex {vid} does not exist")
        return self.node[vid]

    def active_elements(self) -> Iterator[Element]:
        return (e for e in self.elements if e.active)

    def root_elements(self) -> Iterator[Element]:
        return (e for e in self.elements if e.used and e.parent < 0)

    def active_element_index(self) -> np.ndarray:
        return np.array([e.id for e in self.elements if e.active], dtype=self.itype)

    def active_cell(self, celltype: str='tri') -> np.ndarray:
        """
        Connectivity of the active triangles (`celltype='tri'`) or
        quadrilaterals (`celltype='quad'`).
        """
        nv = {'tri': 3, 'quad': 4}[celltype]
        cell = [e.nodes for e in self.active_elements() if e.nv == nv]
        return np.array(cell, dtype=self.itype).reshape(-1, nv)

    def edge_curve(self, a: int, b: int) -> Optional[Curve]:
        """The curve of edge (a, b) in the direction a -> b, or None."""
        curve = self.curve.get(edge_key(a, b))
        if curve is None or a < b:
            return curve
        return reverse_curve(curve)

    def edge_marker(self, a: int, b: int) -> Optional[MarkerName]:
        mid = self.boundary.get(edge_key(a, b))
        return None if mid is None else self.boundary_markers.name(mid)

    def edge_to_element(self) -> Dict[EdgeKey, List[int]]:
        """Active elements on each edge of the active partition."""
        e2c: Dict[EdgeKey, List[int]] = {}
        for e in self.active_elements():
            for a, b in e.edges():
                e2c.setdefault(edge_key(a, b), []).append(e.id)
        return e2c

    def node_to_element(self) -> csr_matrix:
        """
        Sparse incidence between vertices and active elements, shape
        (NN, len(elements)); columns are element ids.
        """
        NN = self.number_of_nodes()
        I = []
        J = []
        for e in self.active_elements():
            I.extend(e.nodes)
            J.extend([e.id]*e.nv)
        val = np.ones(len(I), dtype=np.bool_)
        n2e = coo_matrix((val, (I, J)), shape=(NN, len(self.elements)))
        return n2e.tocsr()

    def edge(self, a: int, b: int, e2c=None) -> Edge:
        if e2c is None:
            e2c = self.edge_to_element()
        key = edge_key(a, b)
        if key not in e2c and key not in self.boundary and key not in self.curve:
            raise KeyError(f"edge ({a}, {b}) does not exist")
        return Edge((a, b), self.edge_marker(a, b), self.edge_curve(a, b),
                    tuple(e2c.get(key, ())))

    def element_edges(self, eid: int) -> List[Edge]:
        e = self.element(eid)
        e2c = self.edge_to_element()
        return [self.edge(a, b, e2c) for a, b in e.edges()]

    def is_curved(self, eid: int) -> bool:
        e = self.element(eid)
        return any(edge_key(a, b) in self.curve for a, b in e.edges())

    ## Geometry

    def element_area(self, eid: int) -> float:
        """
        Area of an element, curved edges included, computed as the boundary
        integral 1/2 * int (x dy - y dx).
        """
        e = self.element(eid)
        node = self.node
        area = 0.0
        for a, b in e.edges():
            pa = node[a]
            pb = node[b]
            curve = self.edge_curve(a, b)
            if curve is None:
                area += 0.5*(pa[0]*pb[1] - pa[1]*pb[0])
            else:
                area += curve_area_integral(curve, pa, pb)
        return area

    def entity_measure(self) -> np.ndarray:
        """Areas of the active elements, in element id order."""
        return np.array([self.element_area(e.id) for e in self.active_elements()],
                        dtype=self.ftype)

    def total_area(self) -> float:
        return float(np.sum(self.entity_measure()))

    def bounding_box(self) -> np.ndarray:
        """[xmin, xmax, ymin, ymax] over the vertices of active elements."""
        idx = np.unique(np.concatenate(
            [np.asarray(e.nodes) for e in self.active_elements()]))
        p = self.node[idx]
        return np.array([p[:, 0].min(), p[:, 0].max(), p[:, 1].min(), p[:, 1].max()])

    def element_info(self, eid: int) -> ElementInfo:
        e = self.element(eid)
        return ElementInfo(
            e.id, e.nodes, self.node[list(e.nodes)].copy(),
            self.element_markers.name(e.marker), e.level,
            self.element_area(eid), self.is_curved(eid))

    ## Hanging nodes

    def active_node_set(self) -> Set[int]:
        s = set()
        for e in self.active_elements():
            s.update(e.nodes)
        return s

    def hanging_points(self, a: int, b: int, active: Optional[Set[int]]=None) -> List[int]:
        """
        Vertices of active elements lying strictly inside edge (a, b),
        ordered from a to b.
        """
        if active is None:
            active = self.active_node_set()
        m = self.midpoint.get(edge_key(a, b))
        if m is None or m not in active:
            return []
        return self.hanging_points(a, m, active) + [m] + self.hanging_points(m, b, active)

    def hanging_nodes(self, eid: int, active: Optional[Set[int]]=None) -> List[int]:
        """Number of hanging nodes on each edge of an active element."""
        e = self.element(eid)
        if active is None:
            active = self.active_node_set()
        return [len(self.hanging_points(a, b, active)) for a, b in e.edges()]

    ## Copy

    def copy(self):
        mesh = type(self)(itype=self.itype, ftype=self.ftype)
        mesh.node = self.node.copy()
        mesh.elements = [e.clone() for e in self.elements]
        mesh.boundary = dict(self.boundary)
        mesh.curve = dict(self.curve)
        mesh.midpoint = dict(self.midpoint)
        mesh.centroid = dict(self.centroid)
        mesh._free = list(self._free)
        mesh.element_markers = self.element_markers.copy()
        mesh.boundary_markers = self.boundary_markers.copy()
        logger.debug(f"Mesh copied, with {mesh.number_of_active_elements()} active elements.")
        return mesh
