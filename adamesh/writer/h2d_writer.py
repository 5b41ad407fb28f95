from .. import logger
from ..geometry import Arc
from .mesh_writer import MeshWriter


class H2dWriter(MeshWriter):
    """Writes the active partition in the native mesh format."""

    def marker(self, name) -> str:
        if isinstance(name, str):
            return "'" + name + "'" if '"' in name else '"' + name + '"'
        return str(name)

    def lines(self):
        n = self.number
        yield "# written by adamesh"
        yield "vertices = ["
        for x, y in self.node:
            yield f"  [{n(x)}, {n(y)}],"
        yield "]"
        yield ""
        yield "elements = ["
        for nodes, marker in self.cells:
            yield "  [" + ", ".join(str(v) for v in nodes) + f", {self.marker(marker)}],"
        yield "]"
        yield ""
        yield "boundaries = ["
        for a, b, marker in self.boundaries:
            yield f"  [{a}, {b}, {self.marker(marker)}],"
        yield "]"
        if self.curves:
            yield ""
            yield "curves = ["
            for a, b, curve in self.curves:
                if isinstance(curve, Arc):
                    yield f"  [{a}, {b}, {n(curve.angle)}],"
                else:
                    degree, inner, knots = self.nurbs_data(curve)
                    points = ", ".join(f"[{n(x)}, {n(y)}, {n(w)}]" for x, y, w in inner)
                    knots = ", ".join(n(k) for k in knots)
                    yield f"  [{a}, {b}, {degree}, [{points}], [{knots}]],"
            yield "]"

    def write(self, fname):
        with open(fname, 'w') as f:
            for line in self.lines():
                f.write(line + "\n")
        logger.info(f"Mesh written to {fname} with {len(self.cells)} elements.")
