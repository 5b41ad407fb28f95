import numpy as np

s = np.sqrt(0.5)
r = 1/np.sin(np.deg2rad(85))

# circular arcs; `integral` is 1/2 * int (x dy - y dx) along the arc
arc_data = [
    {"a": [1.0, 0.0], "b": [0.0, 1.0], "angle": 90.0,
     "center": [0.0, 0.0], "radius": 1.0,
     "midpoint": [s, s], "integral": np.pi/4},
    {"a": [2.0, 0.0], "b": [2*s, 2*s], "angle": 45.0,
     "center": [0.0, 0.0], "radius": 2.0,
     "midpoint": [2*np.cos(np.pi/8), 2*np.sin(np.pi/8)], "integral": np.pi/2},
    {"a": [0.0, 1.0], "b": [0.0, -1.0], "angle": 170.0,
     "center": [r*np.cos(np.deg2rad(85)), 0.0], "radius": r,
     "midpoint": [r*np.cos(np.deg2rad(85)) - r, 0.0], "integral": None},
]

# quadratic Bezier bulging over the top edge of the unit square
parabola_data = [
    {"a": [1.0, 1.0], "b": [0.0, 1.0], "degree": 2,
     "inner": [[0.5, 1.5, 1.0]], "knots": [],
     "midpoint": [0.5, 1.25], "integral": 2/3},
]

# NURBS with interior knots
nurbs_data = [
    {"a": [0.0, 0.0], "b": [3.0, 0.0], "degree": 2,
     "inner": [[0.5, 1.0, 1.0], [1.5, -1.0, 2.0], [2.5, 1.0, 0.5]],
     "knots": [0.3, 0.6]},
    {"a": [0.0, 0.0], "b": [1.0, 1.0], "degree": 3,
     "inner": [[0.2, 0.5, 1.0], [0.4, 0.1, 1.5], [0.8, 0.9, 1.0]],
     "knots": [0.5]},
]
