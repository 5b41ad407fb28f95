from .curve import (
    Arc, Nurbs, Curve, to_nurbs, curve_point, curve_derivative,
    curve_midpoint, split_curve, reverse_curve, curve_area_integral,
    is_same_curve
)
