from typing import Dict, List, Tuple

import numpy as np

from ..typing import MarkerName


def marker_key(name: MarkerName) -> Tuple[str, MarkerName]:
    """
    Tag a marker name as integer or string. Integer `1` and string `'1'` are
    different markers.
    """
    if isinstance(name, (bool, np.bool_)):
        raise TypeError(f"marker must be an integer or a string, got {name!r}")
    if isinstance(name, (int, np.integer)):
        return ('int', int(name))
    if isinstance(name, str):
        return ('str', name)
    raise TypeError(f"marker must be an integer or a string, got {name!r}")


class MarkerTable:
    """
    Bijection between user marker names and dense internal ids.

    Ids are handed out in order of first appearance, starting at 0.
    """
    def __init__(self):
        self._ids: Dict[Tuple[str, MarkerName], int] = {}
        self._names: List[MarkerName] = []

    def intern(self, name: MarkerName) -> int:
        key = marker_key(name)
        mid = self._ids.get(key)
        if mid is None:
            mid = len(self._names)
            self._ids[key] = mid
            self._names.append(key[1])
        return mid

    def id(self, name: MarkerName) -> int:
        try:
            return self._ids[marker_key(name)]
        except KeyError:
            raise KeyError(f"unknown marker {name!r}") from None

    def name(self, mid: int) -> MarkerName:
        return self._names[mid]

    def names(self) -> List[MarkerName]:
        return list(self._names)

    def copy(self) -> 'MarkerTable':
        table = MarkerTable()
        table._ids = dict(self._ids)
        table._names = list(self._names)
        return table

    def __contains__(self, name) -> bool:
        try:
            return marker_key(name) in self._ids
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self):
        return iter(self._names)

    def __repr__(self):
        return f"MarkerTable({self._names!r})"
