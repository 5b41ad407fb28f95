from typing import Optional


class MeshError(Exception):
    """Base class of every error raised by the mesh engine."""


class ParseError(MeshError, ValueError):
    """
    Malformed mesh input.

    Parameters:
        message (str): What went wrong.
        filename (str, optional): The source being parsed.
        lineno (int, optional): 1-based line of the offending entry.
    """
    def __init__(self, message: str, filename: Optional[str]=None,
                 lineno: Optional[int]=None):
        self.message = message
        self.filename = filename
        self.lineno = lineno
        super().__init__(str(self))

    def __str__(self):
        position = []
        if self.filename is not None:
            position.append(str(self.filename))
        if self.lineno is not None:
            position.append(str(self.lineno))
        if position:
            return ':'.join(position) + ': ' + self.message
        return self.message


class UndefinedVariableError(NameError):
    def __init__(self, name: str, lineno: Optional[int]=None):
        self.name = name
        self.lineno = lineno
        super().__init__(f"variable '{name}' is not defined")


class VariableTypeError(TypeError):
    def __init__(self, message: str, lineno: Optional[int]=None):
        self.lineno = lineno
        super().__init__(message)


class ElementNotFound(MeshError, IndexError): pass
class VertexNotFound(MeshError, IndexError): pass

class RefinementError(MeshError): pass
class InvalidRefinementMode(RefinementError, ValueError): pass
class AlreadyRefined(RefinementError): pass
class NotAParent(RefinementError): pass
class UnpairableTriangle(RefinementError): pass
class CurvedRegularizationUnsupported(RefinementError): pass
