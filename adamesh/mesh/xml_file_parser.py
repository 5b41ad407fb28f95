import re
import xml.sax
from xml.sax.handler import ContentHandler
from typing import Dict, Optional, List

from ..errors import ParseError
from .mesh_reader import MeshReader


class _MeshHandler(ContentHandler):
    """
    SAX handler turning the XML mesh elements into reader records. Tags are
    matched by local name and case-insensitively, so namespace prefixes and
    the `NURBS`/`nurbs` spellings are both accepted.
    """
    def __init__(self, reader: 'XmlFileParser'):
        super().__init__()
        self.reader = reader
        self.locator = None
        self.variables: Dict[str, float] = {}
        self.nurbs: Optional[dict] = None
        self.element_count = 0

    def setDocumentLocator(self, locator):
        self.locator = locator

    @property
    def lineno(self) -> Optional[int]:
        return None if self.locator is None else self.locator.getLineNumber()

    def startElement(self, name, attrs):
        tag = name.split(':')[-1].lower()
        handler = getattr(self, 'start_' + tag, None)
        if handler is not None:
            handler(dict(attrs), self.lineno)

    def endElement(self, name):
        tag = name.split(':')[-1].lower()
        if tag == 'nurbs' and self.nurbs is not None:
            n = self.nurbs
            self.reader.curves.append(
                (n['v1'], n['v2'], ('nurbs', n['degree'], n['inner'], n['knots']), n['lineno']))
            self.nurbs = None

    ## Attribute helpers

    def attr(self, attrs, key, lineno):
        try:
            return attrs[key]
        except KeyError:
            raise self.reader.error(f"missing attribute '{key}'", lineno) from None

    def number(self, attrs, key, lineno) -> float:
        text = self.attr(attrs, key, lineno).strip()
        try:
            return float(text)
        except ValueError:
            pass
        sign = 1.0
        name = text
        if text and text[0] in '+-':
            sign = -1.0 if text[0] == '-' else 1.0
            name = text[1:].strip()
        if name not in self.variables:
            raise self.reader.error(
                f"attribute '{key}' is neither a number nor a defined variable: {text!r}", lineno)
        return sign*self.variables[name]

    def index(self, attrs, key, lineno) -> int:
        return self.reader.to_index(self.number(attrs, key, lineno), key, lineno)

    def marker(self, attrs, lineno):
        text = self.attr(attrs, 'marker', lineno).strip()
        if re.fullmatch(r'[-+]?\d+', text):
            return int(text)
        return text

    ## Tags

    def start_var(self, attrs, lineno):
        name = self.attr(attrs, 'name', lineno).strip()
        self.variables[name] = self.number(attrs, 'value', lineno)

    def start_vertex(self, attrs, lineno):
        index = self.index(attrs, 'i', lineno)
        x = self.number(attrs, 'x', lineno)
        y = self.number(attrs, 'y', lineno)
        self.reader.add_vertex(index, x, y, lineno)

    def _cell(self, attrs, lineno, nv):
        nodes = tuple(self.index(attrs, f'v{i}', lineno) for i in range(1, nv + 1))
        self.reader.cells.append((nodes, self.marker(attrs, lineno), lineno))

    def start_t(self, attrs, lineno):
        self._cell(attrs, lineno, 3)

    def start_q(self, attrs, lineno):
        self._cell(attrs, lineno, 4)

    start_triangle = start_t
    start_quad = start_q

    def start_edge(self, attrs, lineno):
        a = self.index(attrs, 'v1', lineno)
        b = self.index(attrs, 'v2', lineno)
        self.reader.boundaries.append((a, b, self.marker(attrs, lineno), lineno))

    def start_arc(self, attrs, lineno):
        a = self.index(attrs, 'v1', lineno)
        b = self.index(attrs, 'v2', lineno)
        angle = self.number(attrs, 'angle', lineno)
        self.reader.curves.append((a, b, ('arc', angle), lineno))

    def start_nurbs(self, attrs, lineno):
        self.nurbs = {
            'v1': self.index(attrs, 'v1', lineno),
            'v2': self.index(attrs, 'v2', lineno),
            'degree': self.index(attrs, 'degree', lineno),
            'inner': [], 'knots': [], 'lineno': lineno,
        }

    def start_inner_point(self, attrs, lineno):
        if self.nurbs is None:
            raise self.reader.error("inner_point outside of a NURBS curve", lineno)
        self.nurbs['inner'].append([
            self.number(attrs, 'x', lineno),
            self.number(attrs, 'y', lineno),
            self.number(attrs, 'weight', lineno)])

    def start_knot(self, attrs, lineno):
        if self.nurbs is None:
            raise self.reader.error("knot outside of a NURBS curve", lineno)
        self.nurbs['knots'].append(self.number(attrs, 'value', lineno))

    def start_refinement(self, attrs, lineno):
        eid = self.index(attrs, 'element_id', lineno)
        mode = self.index(attrs, 'refinement_type', lineno)
        self.reader.refinements.append((eid, mode, lineno))


class XmlFileParser(MeshReader):
    """
    Reader of the XML mesh format.

        <mesh>
          <variables><var name="a" value="1.0"/></variables>
          <vertices><vertex x="0" y="-a" i="0"/> ...</vertices>
          <elements>
            <t v1="0" v2="1" v3="2" marker="Steel"/>
            <q v1="0" v2="1" v3="2" v4="3" marker="0"/>
          </elements>
          <edges><edge v1="0" v2="1" marker="Bottom"/></edges>
          <curves>
            <arc v1="1" v2="2" angle="90"/>
            <NURBS v1="2" v2="3" degree="2">
              <inner_point x="0" y="1" weight="0.7"/>
            </NURBS>
          </curves>
          <refinements><refinement element_id="0" refinement_type="0"/></refinements>
        </mesh>

    Vertices may come in any order, their `i` attribute is the index.
    Numeric attributes may name a variable defined earlier, optionally
    negated. All-digit markers are read as integers.
    """
    def parse(self, filename):
        self.filename = str(filename)
        handler = _MeshHandler(self)
        try:
            xml.sax.parse(str(filename), handler)
        except xml.sax.SAXParseException as e:
            raise ParseError(e.getMessage(), self.filename, e.getLineNumber()) from e
        return self

    def parse_string(self, text: str):
        handler = _MeshHandler(self)
        try:
            xml.sax.parseString(text.encode('utf-8'), handler)
        except xml.sax.SAXParseException as e:
            raise ParseError(e.getMessage(), self.filename, e.getLineNumber()) from e
        return self
