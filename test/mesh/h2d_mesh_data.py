import numpy as np

# L-shaped domain with a quarter circle, the usual first example
lshape_text = """# L-shaped domain
a = 1.0
b = 0.7071067811865476

vertices = [
  [0, -a],    # 0
  [a, -a],    # 1
  [-a, 0],    # 2
  [0, 0],     # 3
  [a, 0],     # 4
  [-a, a],    # 5
  [0, a],     # 6
  [b, b]      # 7
]

elements = [
  [0, 1, 4, 3, 0],
  [3, 4, 7, 0],
  [3, 7, 6, 0],
  [2, 3, 6, 5, 0]
]

boundaries = [
  [0, 1, 1],
  [1, 4, 2],
  [3, 0, 4],
  [4, 7, 2],
  [7, 6, 2],
  [2, 3, 4],
  [6, 5, 2],
  [5, 2, 3]
]

curves = [
  [4, 7, 45],
  [7, 6, 45]
]
"""

lshape_area = 2 + np.pi/4

# unit square whose top edge is a quadratic Bezier curve
nurbs_square_text = """vertices = {{0, 0}, {1, 0}, {1, 1}, {0, 1}};
elements = {{0, 1, 2, 3, "Steel"}};
boundaries = {{0, 1, "Bottom"}, {1, 2, "Right"}, {2, 3, "Top"}, {3, 0, "Left"}};
curves = {{2, 3, 2, {{0.5, 1.5, 1.0}}, {}}};
"""

nurbs_square_area = 7/6

# two triangles with named materials and boundaries, one refinement
triangles_text = """vertices = [[0, 0], [2, 0], [2, 1], [0, 1]]
elements = [[0, 1, 2, "Copper"], [0, 2, 3, "Steel"]]
boundaries = [[0, 1, "Outer"], [1, 2, "Outer"], [2, 3, "Outer"], [3, 0, "Inner"]]
refinements = [[0, 0]]
"""

# (text, line of the error)
bad_mesh_data = [
    ("""vertices = [[0, 0], [1, 0], [0, 1]]
elements = [[0, 1, 2, 0]]
boundaries = [
  [0, 1, 1],
  [1, 2, 0],
]
""", 5),
    ("""vertices = [[0, 0], [1, 0], [0, 1]]
elements = [[0, 1, 2, 0]]
boundaries = [
  [0, 1, -1]
]
""", 4),
    ("""vertices = [[0, 0], [1, 0], [0, 1]]
elements = [
  [0, 2, 1, 0]
]
boundaries = [[0, 1, 1]]
""", 3),
    ("""vertices = [[0, 0], [1, 0], [1, 1], [0, 1]]
elements = [
  [0, 1, 2, 3, 0],
  [0, 1, 3, 2, 0]
]
boundaries = [[0, 1, 1]]
""", 4),
    ("""vertices = [[0, 0], [1, 0], [0, 1]]
elements = [[0, 1, 5, 0]]
boundaries = [[0, 1, 1]]
""", 2),
    ("""vertices = [[0, 0], [1, 0], [0, 1]]
elements = [[0, 1, 2, -2]]
boundaries = [[0, 1, 1]]
""", 2),
    ("""vertices = [[0, 0], [1, 0], [0, 1]]
elements = [[0, 1, 2, 0]]
boundaries = [[0, 1, 1]]
curves = [
  [0, 1, 180]
]
""", 5),
    ("""vertices = [[0, 0], [1, 0], [0, 1]]
elements = [[0, 1, 2, 0]]
boundaries = [[0, 1, 1]]
curves = [
  [1, 2, 2, [[0.5, 0.5, 1.0]], [0.5]]
]
""", 5),
    ("""vertices = [[0, 0], [1, 0], [0, 1]]
elements = [[0, 1, 2, 0]]
boundaries = [[0, 1, 1]]
curves = [[0, 2, 30]]
refinements = [
  [3, 0]
]
""", 6),
    ("""vertices = [[0, 0], [1, 0], [0, 1]]
elements = [[0, 1, 2, 0]]
boundaries = [
  [1, 1, 1],
  [0, 5, 1]
]
""", 4),
    ("""vertices = [[0, 0], [1, 0], [0, 1]]
elements = [[0, 1, 2, 0]]
boundaries = [[0, 1, 1]]
refinements = [
  [0, 1]
]
""", 5),
    ("""vertices = [[0, 0], [1, 0], [0, 1]]
elements = [[0, 1, 2, 0]]
boundaries = [[0, 1, 1]]
curves = [[0, 1, c]]
""", 4),
]

missing_section_data = [
    """vertices = [[0, 0], [1, 0], [0, 1]]
elements = [[0, 1, 2, 0]]
""",
    """elements = [[0, 1, 2, 0]]
boundaries = [[0, 1, 1]]
""",
]

resolver_data = [
    {"text": "x = 1\ny = -x\nz = [x, y, [2.5, -1e-3]]\n",
     "variables": {"x": 1, "y": -1, "z": [1, -1, [2.5, -1e-3]]}},
    {"text": "# comment\nname = 'Steel' # trailing\nv = {1, 2,}; w = +3.5\n",
     "variables": {"name": "Steel", "v": [1, 2], "w": 3.5}},
    {"text": "a = [[0, 0], [1, 0]]\nb = [a, []]\n",
     "variables": {"a": [[0, 0], [1, 0]], "b": [[[0, 0], [1, 0]], []]}},
]
