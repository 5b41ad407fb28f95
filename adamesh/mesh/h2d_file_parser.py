from typing import Optional

from ..errors import ParseError, UndefinedVariableError, VariableTypeError
from .variable_resolver import resolve, is_scalar
from .mesh_reader import MeshReader


class H2dFileParser(MeshReader):
    """
    Reader of the native mesh format.

    The file binds the variables `vertices`, `elements` and `boundaries`,
    and optionally `curves` and `refinements`:

        vertices = [[x, y], ...]
        elements = [[v1, v2, v3, marker], [v1, v2, v3, v4, marker], ...]
        boundaries = [[v1, v2, marker], ...]
        curves = [[v1, v2, angle], [v1, v2, degree, [[x, y, w], ...], [knots]], ...]
        refinements = [[element, mode], ...]

    Examples:
        >>> mesh = H2dFileParser().parse('domain.mesh').to_mesh(Mesh)
    """
    REQUIRED = ('vertices', 'elements', 'boundaries')

    def parse(self, filename):
        return self.parse_string(self.read_text(filename))

    def parse_string(self, text: str):
        try:
            resolver = resolve(text, self.filename)
            for name in self.REQUIRED:
                if name not in resolver.variables:
                    raise self.error(f"missing section '{name}'")

            self._section(resolver, 'vertices', self._vertex)
            self._section(resolver, 'elements', self._element)
            self._section(resolver, 'boundaries', self._boundary)
            if 'curves' in resolver.variables:
                self._section(resolver, 'curves', self._curve)
            if 'refinements' in resolver.variables:
                self._section(resolver, 'refinements', self._refinement)
        except (UndefinedVariableError, VariableTypeError) as e:
            raise ParseError(str(e), self.filename, e.lineno) from e
        return self

    def _section(self, resolver, name, handler):
        entries = resolver.matrix(name)
        line = resolver.lines.get(name)
        for i, entry in enumerate(entries):
            lineno = getattr(entry, 'lineno', None) or line
            handler(i, entry, lineno)

    def _vertex(self, i, entry, lineno):
        if len(entry) != 2:
            raise self.error(f"a vertex needs 2 coordinates, got {len(entry)}", lineno)
        x, y = (self.to_number(v, "vertex coordinate", lineno) for v in entry)
        self.add_vertex(i, x, y, lineno)

    def _element(self, i, entry, lineno):
        if len(entry) not in (4, 5):
            raise self.error(
                f"an element needs 3 or 4 vertices and a marker, got {len(entry)} values", lineno)
        nodes = tuple(self.to_index(v, "vertex index", lineno) for v in entry[:-1])
        marker = self.to_marker(entry[-1], lineno)
        self.cells.append((nodes, marker, lineno))

    def _boundary(self, i, entry, lineno):
        if len(entry) != 3:
            raise self.error(f"a boundary entry needs 2 vertices and a marker, got {len(entry)} values", lineno)
        a, b = (self.to_index(v, "vertex index", lineno) for v in entry[:2])
        self.boundaries.append((a, b, self.to_marker(entry[2], lineno), lineno))

    def _curve(self, i, entry, lineno):
        if len(entry) == 3:
            a, b = (self.to_index(v, "vertex index", lineno) for v in entry[:2])
            angle = self.to_number(entry[2], "arc angle", lineno)
            self.curves.append((a, b, ('arc', angle), lineno))
        elif len(entry) == 5:
            a, b = (self.to_index(v, "vertex index", lineno) for v in entry[:2])
            degree = self.to_index(entry[2], "NURBS degree", lineno)
            inner = entry[3]
            knots = entry[4]
            if not isinstance(inner, list) or not all(
                    isinstance(p, list) and len(p) == 3 and all(is_scalar(v) for v in p)
                    for p in inner):
                raise self.error("NURBS inner points must be a list of [x, y, weight]", lineno)
            if not isinstance(knots, list) or not all(is_scalar(v) for v in knots):
                raise self.error("NURBS knots must be a list of numbers", lineno)
            self.curves.append((a, b, ('nurbs', degree, inner, knots), lineno))
        else:
            raise self.error(
                f"a curve is [v1, v2, angle] or [v1, v2, degree, points, knots], "
                f"got {len(entry)} values", lineno)

    def _refinement(self, i, entry, lineno):
        if len(entry) != 2:
            raise self.error(f"a refinement needs an element and a mode, got {len(entry)} values", lineno)
        eid, mode = (self.to_index(v, "refinement value", lineno) for v in entry)
        self.refinements.append((eid, mode, lineno))
