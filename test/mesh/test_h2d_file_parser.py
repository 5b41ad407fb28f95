import numpy as np
import pytest

from adamesh import Mesh, Arc, Nurbs, ParseError, load
from adamesh.mesh import H2dFileParser

from h2d_mesh_data import *


def from_text(text, **kwargs):
    return H2dFileParser().parse_string(text).to_mesh(Mesh, **kwargs)


class TestH2dFileParser:
    def test_lshape(self):
        mesh = from_text(lshape_text)
        assert mesh.number_of_nodes() == 8
        assert mesh.number_of_active_elements() == 4
        assert mesh.total_area() == pytest.approx(lshape_area, rel=1e-12)

        assert mesh.element(0).is_quad
        assert mesh.element(1).is_triangle
        assert mesh.element_info(2).marker == 0

        assert mesh.edge_marker(0, 1) == 1
        assert mesh.edge_marker(4, 1) == 2
        assert mesh.edge_marker(5, 2) == 3
        assert mesh.edge_marker(3, 4) is None
        assert mesh.boundary_markers.names() == [1, 2, 4, 3]

        assert mesh.edge_curve(4, 7) == Arc(45.0)
        assert mesh.edge_curve(7, 4) == Arc(-45.0)
        assert mesh.edge_curve(3, 4) is None
        assert mesh.is_curved(1) and mesh.is_curved(2)
        assert not mesh.is_curved(0)

    def test_edge_queries(self):
        mesh = from_text(lshape_text)
        edge = mesh.edge(4, 7)
        assert edge.is_boundary and edge.is_curved and not edge.is_shared
        assert edge.elements == (1,)

        edge = mesh.edge(3, 7)
        assert not edge.is_boundary and edge.is_shared
        assert set(edge.elements) == {1, 2}

        edges = mesh.element_edges(3)
        assert [e.nodes for e in edges] == [(2, 3), (3, 6), (6, 5), (5, 2)]
        assert [e.marker for e in edges] == [4, None, 2, 3]

        with pytest.raises(KeyError):
            mesh.edge(0, 7)

    def test_nurbs(self):
        mesh = from_text(nurbs_square_text)
        curve = mesh.edge_curve(2, 3)
        assert isinstance(curve, Nurbs)
        np.testing.assert_array_equal(curve.inner_points(), [[0.5, 1.5, 1.0]])
        assert len(curve.inner_knots()) == 0
        assert mesh.total_area() == pytest.approx(nurbs_square_area, rel=1e-12)
        assert mesh.element_info(0).marker == "Steel"
        assert mesh.edge_marker(3, 2) == "Top"

    def test_refinements(self):
        mesh = from_text(triangles_text)
        assert mesh.number_of_active_elements() == 5
        assert mesh.element(0).children == [2, 3, 4, 5]
        assert mesh.hanging_nodes(1) == [1, 0, 0]
        assert mesh.total_area() == pytest.approx(2.0)

    def test_markers(self):
        mesh = from_text(triangles_text)
        assert mesh.element_markers.names() == ["Copper", "Steel"]
        assert mesh.element_info(5).marker == "Copper"
        assert mesh.edge_marker(3, 0) == "Inner"
        # the refined edge keeps its marker on both halves
        m = mesh.midpoint[(0, 1)]
        assert mesh.edge_marker(0, m) == "Outer"
        assert mesh.edge_marker(m, 1) == "Outer"

    @pytest.mark.parametrize("text, lineno", bad_mesh_data)
    def test_bad_mesh(self, text, lineno):
        with pytest.raises(ParseError) as e:
            from_text(text)
        assert e.value.lineno == lineno

    @pytest.mark.parametrize("text", missing_section_data)
    def test_missing_section(self, text):
        with pytest.raises(ParseError):
            from_text(text)

    def test_load_file(self, tmp_path):
        fname = tmp_path / "lshape.mesh"
        fname.write_text(lshape_text)
        mesh = load(fname)
        assert mesh.number_of_active_elements() == 4
        assert mesh.total_area() == pytest.approx(lshape_area, rel=1e-12)

    def test_error_position(self, tmp_path):
        fname = tmp_path / "bad.mesh"
        text, lineno = bad_mesh_data[0]
        fname.write_text(text)
        with pytest.raises(ParseError) as e:
            Mesh.from_file(fname)
        assert str(e.value).startswith(f"{fname}:{lineno}: ")

    def test_invalid_utf8(self, tmp_path):
        fname = tmp_path / "latin1.mesh"
        fname.write_bytes(b"a = 1\n# Stra\xdfe\n" + lshape_text.encode())
        with pytest.raises(ParseError) as e:
            load(fname)
        assert e.value.lineno == 2
        assert e.value.filename == str(fname)

    def test_byte_order_mark(self, tmp_path):
        fname = tmp_path / "bom.mesh"
        fname.write_bytes(b"\xef\xbb\xbf" + lshape_text.encode())
        assert load(fname).number_of_active_elements() == 4

    def test_integer_types(self):
        mesh = from_text(lshape_text, itype=np.int32)
        assert mesh.active_element_index().dtype == np.int32
        assert mesh.active_cell('quad').shape == (2, 4)
        assert mesh.active_cell('tri').shape == (2, 3)


if __name__ == "__main__":
    pytest.main(["./test_h2d_file_parser.py"])
