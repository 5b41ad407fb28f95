import xml.etree.ElementTree as ET

from .. import logger
from ..geometry import Arc
from .mesh_writer import MeshWriter


class XmlWriter(MeshWriter):
    """Writes the active partition in the XML mesh format."""

    def to_tree(self) -> ET.ElementTree:
        n = self.number
        root = ET.Element('mesh')

        vertices = ET.SubElement(root, 'vertices')
        for i, (x, y) in enumerate(self.node):
            ET.SubElement(vertices, 'vertex', x=n(x), y=n(y), i=str(i))

        elements = ET.SubElement(root, 'elements')
        for nodes, marker in self.cells:
            tag = 't' if len(nodes) == 3 else 'q'
            attrs = {f'v{i+1}': str(v) for i, v in enumerate(nodes)}
            attrs['marker'] = str(marker)
            ET.SubElement(elements, tag, attrs)

        edges = ET.SubElement(root, 'edges')
        for a, b, marker in self.boundaries:
            ET.SubElement(edges, 'edge', v1=str(a), v2=str(b), marker=str(marker))

        if self.curves:
            curves = ET.SubElement(root, 'curves')
            for a, b, curve in self.curves:
                if isinstance(curve, Arc):
                    ET.SubElement(curves, 'arc', v1=str(a), v2=str(b), angle=n(curve.angle))
                    continue
                degree, inner, knots = self.nurbs_data(curve)
                nurbs = ET.SubElement(curves, 'NURBS', v1=str(a), v2=str(b), degree=str(degree))
                for x, y, w in inner:
                    ET.SubElement(nurbs, 'inner_point', x=n(x), y=n(y), weight=n(w))
                for k in knots:
                    ET.SubElement(nurbs, 'knot', value=n(k))

        tree = ET.ElementTree(root)
        ET.indent(tree)
        return tree

    def write(self, fname):
        self.to_tree().write(fname, encoding='utf-8', xml_declaration=True)
        logger.info(f"Mesh written to {fname} with {len(self.cells)} elements.")
