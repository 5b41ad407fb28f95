import pytest

from adamesh import Mesh, ParseError, load
from adamesh.mesh import InpFileParser
from adamesh.mesh.inp_file_sections import NodeSection, ElementSection, NsetSection

from inp_mesh_data import *


def from_inp(text):
    return InpFileParser().parse_string(text).to_mesh(Mesh)


class TestInpFileParser:
    def test_sections(self):
        parser = InpFileParser().parse_string(plate_inp)
        assert len(parser.get_sections(NodeSection)) == 1
        assert len(parser.get_sections(ElementSection)) == 2
        assert [s.name for s in parser.get_sections(NsetSection)] == ["Bottom", "Left", "Top"]
        assert parser.node_map == {1: 0, 2: 1, 3: 2, 4: 3, 10: 4, 11: 5}
        assert parser.get_sections(ElementSection)[1].type == "CPS3"

    def test_plate(self):
        mesh = from_inp(plate_inp)
        assert mesh.number_of_nodes() == 6
        assert mesh.number_of_active_elements() == 3
        assert mesh.total_area() == pytest.approx(2.0)

        assert mesh.element(0).is_quad
        assert mesh.element(2).nodes == (1, 5, 2)
        assert [mesh.element_info(i).marker for i in range(3)] == ["Steel", "Copper", "Copper"]

        assert mesh.edge_marker(0, 1) == "Bottom"
        assert mesh.edge_marker(1, 4) == "Bottom"
        assert mesh.edge_marker(3, 0) == "Left"
        assert mesh.edge_marker(2, 3) == "Top"
        # interior edges are never marked
        assert mesh.edge_marker(1, 2) is None
        assert mesh.edge_marker(1, 5) is None
        assert mesh.edge_marker(4, 5) is None

    def test_default_marker(self):
        mesh = from_inp(plain_inp)
        assert mesh.element_info(0).marker == 0
        assert len(mesh.boundary) == 0

    @pytest.mark.parametrize("text, lineno", bad_inp_data)
    def test_bad_mesh(self, text, lineno):
        with pytest.raises(ParseError) as e:
            from_inp(text)
        assert e.value.lineno == lineno

    def test_load_file(self, tmp_path):
        fname = tmp_path / "plate.inp"
        fname.write_text(plate_inp)
        mesh = load(fname)
        mesh.refine_towards_boundary("Bottom", 1)
        assert mesh.total_area() == pytest.approx(2.0)

    def test_invalid_utf8(self, tmp_path):
        fname = tmp_path / "plate.inp"
        fname.write_bytes(b"** \xe9\xe9\n" + plate_inp.encode())
        with pytest.raises(ParseError) as e:
            load(fname)
        assert e.value.lineno == 1


if __name__ == "__main__":
    pytest.main(["./test_inp_file_parser.py"])
