import os
from typing import Optional

import numpy as np

from .. import logger
from .mesh_base import MeshBase
from .refinement import Refinable
from .regularization import Regularizable
from .adaptive_tools import Adaptive


_FORMATS = {
    '.mesh': 'h2d',
    '.h2d': 'h2d',
    '.xml': 'xml',
    '.inp': 'inp',
}


def _guess_format(path, fmt: Optional[str]) -> str:
    if fmt is not None:
        return fmt
    ext = os.path.splitext(str(path))[1].lower()
    try:
        return _FORMATS[ext]
    except KeyError:
        raise ValueError(f"can not tell the mesh format of '{path}', pass fmt") from None


class Mesh(Regularizable, Adaptive, Refinable, MeshBase):
    """
    Adaptive 2D mesh of triangles and quadrilaterals.

    The mesh is built once, by a reader or by `copy`, and afterwards only
    changed through refinement and derefinement.

    Examples:
        >>> mesh = Mesh.from_file('domain.mesh')
        >>> mesh.refine_all_elements()
        >>> mesh.refine_towards_boundary('Outer', 2)
        >>> ref = mesh.create_ref_mesh()
    """
    def __init__(self, itype=np.int_, ftype=np.float64):
        super().__init__(itype=itype, ftype=ftype)
        self._in_criterion = False
        self.regularize_sweeps = 0

    @classmethod
    def from_file(cls, path, fmt: Optional[str]=None, **kwargs) -> 'Mesh':
        """
        Read a mesh file. The format follows the extension (`.mesh`/`.h2d`
        native, `.xml`, `.inp` Abaqus) unless `fmt` is given.
        """
        fmt = _guess_format(path, fmt)
        if fmt == 'h2d':
            from .h2d_file_parser import H2dFileParser as Parser
        elif fmt == 'xml':
            from .xml_file_parser import XmlFileParser as Parser
        elif fmt == 'inp':
            from .inp_file_parser import InpFileParser as Parser
        else:
            raise ValueError(f"unknown mesh format {fmt!r}")
        mesh = Parser().parse(path).to_mesh(cls, **kwargs)
        logger.info(f"Mesh loaded from {path}, with {mesh.number_of_nodes()} "
                    f"vertices and {mesh.number_of_active_elements()} elements.")
        return mesh

    def save(self, path, fmt: Optional[str]=None):
        """Write the active partition in the native or the XML format."""
        fmt = _guess_format(path, fmt)
        if fmt == 'h2d':
            from ..writer import H2dWriter as Writer
        elif fmt == 'xml':
            from ..writer import XmlWriter as Writer
        else:
            raise ValueError(f"can not write mesh format {fmt!r}")
        Writer(self).write(path)

    def create_ref_mesh(self) -> 'Mesh':
        """A copy of this mesh with every active element refined once."""
        ref = self.copy()
        ref.refine_all_elements(0)
        return ref


def load(path, fmt: Optional[str]=None, **kwargs) -> Mesh:
    return Mesh.from_file(path, fmt=fmt, **kwargs)


def copy(mesh: Mesh) -> Mesh:
    return mesh.copy()


def create_ref_mesh(mesh: Mesh) -> Mesh:
    return mesh.create_ref_mesh()
