from typing import Callable

import numpy as np

from .. import logger
from ..typing import Criterion, RefinementMode
from .mesh_data_structure import ElementInfo


def mark(eta, theta, method='L2'):
    """
    Bulk marking of error indicators.

    Parameters:
        eta (array): One error indicator per element.
        theta (float): Marking parameter in (0, 1].
        method (str): 'MAX' marks every element with eta > theta*max(eta);
            'L2' (Doerfler) marks the fewest largest elements whose squared
            indicators add up to theta times the total.

    Returns:
        np.ndarray: Indices into `eta` of the marked elements.
    """
    eta = np.asarray(eta, dtype=np.float64)
    isMarked = np.zeros(len(eta), dtype=np.bool_)
    if len(eta) == 0:
        return np.nonzero(isMarked)[0]
    if method == 'MAX':
        isMarked[eta > theta*np.max(eta)] = True
    elif method == 'L2':
        eta = eta**2
        idx = np.argsort(eta)[-1::-1]
        x = np.cumsum(eta[idx])
        n = np.searchsorted(x, theta*x[-1])
        isMarked[idx[:n+1]] = True
    else:
        raise ValueError(f"unknown marking method {method!r}")
    markedCell, = np.nonzero(isMarked)
    return markedCell


def bulk_criterion(mesh, eta, theta, method='L2', mode: RefinementMode=0) -> Criterion:
    """
    Turn error indicators of the active elements (in `active_element_index`
    order) into a criterion for `refine_by_criterion`. Marked quads are
    refined with `mode`, marked triangles uniformly.
    """
    index = mesh.active_element_index()
    if len(eta) != len(index):
        raise ValueError(f"expected {len(index)} indicators, got {len(eta)}")
    marked = set(int(i) for i in index[mark(eta, theta, method=method)])

    def criterion(element: ElementInfo) -> RefinementMode:
        if element.id not in marked:
            return -1
        return mode if element.is_quad else 0

    return criterion


class Adaptive:
    """Entry point of external, error-driven adaptivity."""

    def refine_by_criterion(self, criterion: Callable[[ElementInfo], RefinementMode],
                            depth: int=1, mark_as_initial: bool=False):
        """
        Run `depth` rounds; in each, ask `criterion` about every active
        element and refine it with the returned mode, -1 meaning no
        refinement.

        The criterion receives an `ElementInfo` snapshot and must not touch
        the mesh; all answers of a round are collected before any element of
        that round is refined.
        """
        for r in range(depth):
            decisions = []
            self._in_criterion = True
            try:
                for e in list(self.active_elements()):
                    decisions.append((e.id, criterion(self.element_info(e.id))))
            finally:
                self._in_criterion = False

            count = 0
            for eid, mode in decisions:
                if mode == -1:
                    continue
                self.refine_element(eid, mode)
                count += 1
            logger.info(f"Criterion round {r}: {count} elements refined.")
        if mark_as_initial:
            self._flatten()
