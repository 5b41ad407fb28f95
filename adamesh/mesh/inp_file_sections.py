import re
from typing import List, Dict, Type, Optional, Tuple


class Section:
    """
    Base class of the parsed sections of an Abaqus .inp file.

    Each subclass handles one keyword: it parses the data lines following
    the keyword header and then attaches what it read to the parser.

    Parameters:
        options (Dict[str, str]): Options of the section header, keys in
            lower case. Flags without a value are stored as 'true'.
        lineno (int): Line of the section header.

    Attributes:
        keyword (str): Section keyword, e.g. 'NODE' or 'ELEMENT'.
    """
    keyword: str = ''

    def __init__(self, options: Dict[str, str], lineno: int):
        self.options = options
        self.lineno = lineno

    @classmethod
    def match_keyword(cls, keyword: str) -> bool:
        return cls.keyword.upper() == keyword.upper()

    def parse_line(self, parser, line: str, lineno: int) -> None:
        raise NotImplementedError(f"parse_line must be implemented by {self.__class__.__name__}")

    def attach(self, parser) -> None:
        pass

    @staticmethod
    def split(line: str) -> List[str]:
        return [s for s in re.split(r'\s*,\s*', line.strip()) if s]


class NodeSection(Section):
    """
    Parses the *NODE section: a node id followed by its coordinates. Only
    the first two coordinates are kept.
    """
    keyword = 'NODE'

    def __init__(self, options, lineno):
        super().__init__(options, lineno)
        self._id: List[int] = []
        self._node: List[Tuple[float, float, int]] = []

    def parse_line(self, parser, line, lineno):
        parts = self.split(line)
        try:
            nid = int(parts[0])
            coords = [float(val) for val in parts[1:]]
        except ValueError:
            raise parser.error(f"malformed node line {line!r}", lineno) from None
        if len(coords) < 2:
            raise parser.error(f"node {nid} needs at least 2 coordinates", lineno)
        self._id.append(nid)
        self._node.append((coords[0], coords[1], lineno))

    def attach(self, parser):
        for nid, (x, y, lineno) in zip(self._id, self._node):
            if nid in parser.node_map:
                raise parser.error(f"duplicate node id {nid}", lineno)
            index = len(parser.node_map)
            parser.node_map[nid] = index
            parser.add_vertex(index, x, y, lineno)


class ElementSection(Section):
    """
    Parses the *ELEMENT section: an element id followed by the ids of its
    3 or 4 corner nodes. The ELSET option names the material of the
    elements.
    """
    keyword = 'ELEMENT'

    def __init__(self, options, lineno):
        super().__init__(options, lineno)
        self.type = options.get('type', '')
        self.elset = options.get('elset')
        self._cell: List[Tuple[int, List[int], int]] = []

    def parse_line(self, parser, line, lineno):
        parts = self.split(line)
        try:
            eid = int(parts[0])
            conn = [int(val) for val in parts[1:]]
        except ValueError:
            raise parser.error(f"malformed element line {line!r}", lineno) from None
        if len(conn) not in (3, 4):
            raise parser.error(
                f"element {eid} of type {self.type or '?'} has {len(conn)} nodes, "
                f"only 3-node and 4-node elements are supported", lineno)
        self._cell.append((eid, conn, lineno))

    def attach(self, parser):
        marker = 0 if self.elset is None else self.elset
        for eid, conn, lineno in self._cell:
            nodes = []
            for nid in conn:
                if nid not in parser.node_map:
                    raise parser.error(f"element {eid} references undefined node {nid}", lineno)
                nodes.append(parser.node_map[nid])
            parser.cells.append((tuple(nodes), marker, lineno))


class NsetSection(Section):
    """
    Parses the *NSET section: a named set of node ids, listed or, with the
    GENERATE flag, given as start, stop, step.
    """
    keyword = 'NSET'

    def __init__(self, options, lineno):
        super().__init__(options, lineno)
        self.name = options.get('nset', '')
        self.generate = options.get('generate', '').lower() == 'true'
        self._id: List[int] = []

    def parse_line(self, parser, line, lineno):
        parts = self.split(line)
        try:
            if self.generate:
                start, stop, step = map(int, parts[:3])
                self._id.extend(range(start, stop + 1, step))
            else:
                self._id.extend(int(p) for p in parts)
        except ValueError:
            raise parser.error(f"malformed node set line {line!r}", lineno) from None

    def attach(self, parser):
        if not self.name:
            raise parser.error("a node set needs a NSET name", self.lineno)
        nodes = set()
        for nid in self._id:
            if nid not in parser.node_map:
                raise parser.error(f"node set {self.name} references undefined node {nid}",
                                   self.lineno)
            nodes.add(parser.node_map[nid])
        parser.nsets.setdefault(self.name, (set(), self.lineno))[0].update(nodes)


# Registry of available section handlers
SECTION_REGISTRY: List[Type[Section]] = [NodeSection, ElementSection, NsetSection]


def find_section(keyword: str) -> Optional[Type[Section]]:
    for sec_cls in SECTION_REGISTRY:
        if sec_cls.match_keyword(keyword):
            return sec_cls
    return None
