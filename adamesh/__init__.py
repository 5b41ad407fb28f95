import logging

__version__ = '0.3.1'

logger = logging.getLogger('adamesh')
logger.setLevel(logging.WARNING)
handler = logging.StreamHandler()
formatter = logging.Formatter('[%(asctime)s][%(levelname)s] %(name)s: %(message)s', datefmt='%m-%d %H:%M:%S')
handler.setFormatter(formatter)

if not logger.handlers:
    logger.addHandler(handler)
    logger.propagate = False

from .errors import (
    MeshError, ParseError, RefinementError, InvalidRefinementMode,
    AlreadyRefined, NotAParent, UnpairableTriangle,
    CurvedRegularizationUnsupported, ElementNotFound, VertexNotFound,
    UndefinedVariableError, VariableTypeError
)
from .geometry import Arc, Nurbs
from .mesh import Mesh, load, copy, create_ref_mesh
