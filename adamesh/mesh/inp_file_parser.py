import re
from typing import List, Dict, Type, Optional, Set, Tuple

from .. import logger
from .mesh_reader import MeshReader
from .mesh_data_structure import edge_key
from .inp_file_sections import Section, find_section


class InpFileParser(MeshReader):
    """
    Reader of Abaqus .inp meshes.

    Section headers (lines starting with a single '*') are matched against
    the section registry; data lines go to the current section, lines of
    unknown sections are skipped and '**' lines are comments.

    Element sets become element markers. A boundary edge whose two vertices
    lie in a node set takes the name of that set as boundary marker; when
    several sets match, the one defined last wins.

    Examples:
        >>> mesh = InpFileParser().parse('plate.inp').to_mesh(Mesh)
    """
    def __init__(self):
        super().__init__()
        self.sections: List[Section] = []
        self.node_map: Dict[int, int] = {}
        self.nsets: Dict[str, Tuple[Set[int], int]] = {}

    def parse(self, filename):
        return self.parse_string(self.read_text(filename))

    def parse_string(self, text: str):
        current: Optional[Section] = None
        skipped = set()
        for lineno, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith('**'):
                continue
            if line.startswith('*'):
                current = self._start_section(line, lineno)
                if current is not None:
                    self.sections.append(current)
                else:
                    skipped.add(self._keyword(line).upper())
                continue
            if current is not None:
                current.parse_line(self, line, lineno)
        if skipped:
            logger.debug(f"Sections skipped in {self.filename}: {sorted(skipped)}.")

        for sec in self.sections:
            sec.attach(self)
        self._boundary_from_nsets()
        return self

    @staticmethod
    def _keyword(header: str) -> str:
        return re.split(r"\s*,\s*", header[1:].strip())[0]

    def _start_section(self, header: str, lineno: int) -> Optional[Section]:
        parts = re.split(r"\s*,\s*", header[1:].strip())
        keyword = parts[0]
        options: Dict[str, str] = {}
        for part in parts[1:]:
            if not part:
                continue
            if '=' in part:
                k, v = part.split('=', 1)
                options[k.strip().lower()] = v.strip()
            else:
                options[part.strip().lower()] = 'true'
        sec_cls = find_section(keyword)
        if sec_cls is None:
            return None
        return sec_cls(options, lineno)

    def get_sections(self, section_type: Type[Section]) -> List[Section]:
        return [sec for sec in self.sections if isinstance(sec, section_type)]

    def _boundary_from_nsets(self):
        count: Dict[Tuple[int, int], int] = {}
        oriented = {}
        for nodes, _, _ in self.cells:
            nv = len(nodes)
            for i in range(nv):
                a, b = nodes[i], nodes[(i + 1) % nv]
                key = edge_key(a, b)
                count[key] = count.get(key, 0) + 1
                oriented[key] = (a, b)

        marked = {}
        for name, (nodes, lineno) in self.nsets.items():
            for key, n in count.items():
                if n == 1 and key[0] in nodes and key[1] in nodes:
                    marked[key] = (name, lineno)
        for key, (name, lineno) in marked.items():
            a, b = oriented[key]
            self.boundaries.append((a, b, name, lineno))
