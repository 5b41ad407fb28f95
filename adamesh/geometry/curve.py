"""
Curved edge geometry.

A curve is attached to a directed edge `a -> b` and is one of two variants:

    Arc(angle)                      circular arc with the given central angle
                                    in degrees, bulging to the right of a -> b
                                    when the angle is positive
    Nurbs(degree, points, knots)    rational B-spline with `points` rows
                                    (x, y, w), first and last row being the
                                    end vertices, and a clamped knot vector
                                    on [0, 1]

The functions of this module dispatch on the variant.
"""
from typing import NamedTuple, Union, Tuple

import numpy as np

from . import bspline_curve as bs


class Arc(NamedTuple):
    angle: float


class Nurbs(NamedTuple):
    degree: int
    points: np.ndarray
    knots: np.ndarray

    @classmethod
    def from_inner(cls, a, b, degree, inner, inner_knots):
        """
        Build a curve from its end vertices, inner control points `(x, y, w)`
        and inner knots, the way the mesh files describe it.
        """
        a = np.asarray(a, dtype=np.float64)
        b = np.asarray(b, dtype=np.float64)
        inner = np.asarray(inner, dtype=np.float64).reshape(-1, 3)
        points = np.concatenate((
            [[a[0], a[1], 1.0]], inner, [[b[0], b[1], 1.0]]), axis=0)
        knots = np.concatenate((
            np.zeros(degree + 1), np.asarray(inner_knots, dtype=np.float64),
            np.ones(degree + 1)))
        return cls(int(degree), points, knots)

    def inner_points(self):
        return self.points[1:-1]

    def inner_knots(self):
        p = self.degree
        return self.knots[p+1:len(self.knots)-p-1]


Curve = Union[Arc, Nurbs]


def to_nurbs(curve: Curve, a, b) -> Nurbs:
    """
    @brief 把圆弧转换成有理二次 NURBS 曲线

    The middle control point is the intersection of the end tangents and its
    weight is cos(angle/2), which reproduces the circle exactly.
    """
    if isinstance(curve, Nurbs):
        return curve
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    half = np.deg2rad(curve.angle)/2
    d = b - a
    c = 0.5*(a + b) + 0.5*np.tan(half)*np.array([d[1], -d[0]])
    points = np.array([
        [a[0], a[1], 1.0],
        [c[0], c[1], np.cos(half)],
        [b[0], b[1], 1.0]], dtype=np.float64)
    knots = np.array([0, 0, 0, 1, 1, 1], dtype=np.float64)
    return Nurbs(2, points, knots)


def _evaluate(curve: Nurbs, xi):
    pw = curve.points[:, :2]*curve.points[:, 2:]
    w = curve.points[:, 2]
    N = bs.basis(curve.knots, curve.degree, xi)
    dN = bs.grad_basis(curve.knots, curve.degree, xi)
    A = N@pw
    W = N@w
    dA = dN@pw
    dW = dN@w
    ps = A/W[:, None]
    ds = (dA - dW[:, None]*ps)/W[:, None]
    return ps, ds


def curve_point(curve: Curve, a, b, xi):
    """
    Points of the curve at parameters `xi` in [0, 1]; shape (len(xi), 2).
    """
    ps, _ = _evaluate(to_nurbs(curve, a, b), xi)
    return ps


def curve_derivative(curve: Curve, a, b, xi):
    """Derivatives d(x, y)/dxi at parameters `xi`; shape (len(xi), 2)."""
    _, ds = _evaluate(to_nurbs(curve, a, b), xi)
    return ds


def curve_midpoint(curve: Curve, a, b) -> np.ndarray:
    return curve_point(curve, a, b, 0.5)[0]


def split_curve(curve: Curve, a, b) -> Tuple[Curve, Curve]:
    """
    @brief 在参数 1/2 处把曲线一分为二

    An arc splits into two arcs of half the angle. A NURBS curve is cut by
    knot insertion and each half is re-parameterized over [0, 1].
    """
    if isinstance(curve, Arc):
        return Arc(curve.angle/2), Arc(curve.angle/2)

    p = curve.degree
    pw = np.concatenate((
        curve.points[:, :2]*curve.points[:, 2:], curve.points[:, 2:]), axis=1)
    (pw0, k0), (pw1, k1) = bs.split(pw, curve.knots, p, 0.5)
    c0 = Nurbs(p, np.concatenate((pw0[:, :2]/pw0[:, 2:], pw0[:, 2:]), axis=1), k0)
    c1 = Nurbs(p, np.concatenate((pw1[:, :2]/pw1[:, 2:], pw1[:, 2:]), axis=1), k1)
    return c0, c1


def reverse_curve(curve: Curve) -> Curve:
    if isinstance(curve, Arc):
        return Arc(-curve.angle)
    return Nurbs(curve.degree, curve.points[::-1].copy(), 1.0 - curve.knots[::-1])


def curve_area_integral(curve: Curve, a, b, nq=12) -> float:
    """
    @brief 计算曲线上的线积分 1/2 * int (x dy - y dx)

    Summed over the edges of a closed counter-clockwise loop this gives the
    enclosed area; for a straight edge the integral is (a x b)/2.
    """
    curve = to_nurbs(curve, a, b)
    xi, ws = bs.gauss_points(curve.knots, nq)
    ps = curve_point(curve, a, b, xi)
    ds = curve_derivative(curve, a, b, xi)
    f = ps[:, 0]*ds[:, 1] - ps[:, 1]*ds[:, 0]
    return 0.5*float(np.dot(f, ws))


def is_same_curve(c0: Curve, c1: Curve) -> bool:
    if isinstance(c0, Arc) and isinstance(c1, Arc):
        return np.isclose(c0.angle, c1.angle)
    if isinstance(c0, Nurbs) and isinstance(c1, Nurbs):
        return (c0.degree == c1.degree
                and c0.points.shape == c1.points.shape
                and np.allclose(c0.points, c1.points)
                and c0.knots.shape == c1.knots.shape
                and np.allclose(c0.knots, c1.knots))
    return False
