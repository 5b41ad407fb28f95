from .marker import MarkerTable
from .mesh_data_structure import Element, Edge, ElementInfo, edge_key
from .mesh_base import MeshBase
from .mesh import Mesh, load, copy, create_ref_mesh
from .adaptive_tools import mark, bulk_criterion
from .variable_resolver import VariableResolver, resolve
from .h2d_file_parser import H2dFileParser
from .xml_file_parser import XmlFileParser
from .inp_file_parser import InpFileParser
