import builtins
from typing import Tuple, Union, Callable, Any


### Types

Number = Union[builtins.int, builtins.float]
MarkerName = Union[builtins.int, builtins.str]
EdgeKey = Tuple[builtins.int, builtins.int]
Point = Tuple[builtins.float, builtins.float]
RefinementMode = builtins.int
Criterion = Callable[[Any], RefinementMode]
