from .mesh_writer import MeshWriter
from .h2d_writer import H2dWriter
from .xml_writer import XmlWriter
