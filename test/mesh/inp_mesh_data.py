plate_inp = """*Heading
** two materials on a 2 x 1 plate
*Part, name=Plate
*NODE
1, 0.0, 0.0
2, 1.0, 0.0, 0.0
3, 1.0, 1.0
4, 0.0, 1.0
10, 2.0, 0.0
11, 2.0, 1.0
*ELEMENT, TYPE=CPS4, ELSET=Steel
1, 1, 2, 3, 4
*Element, type=CPS3, elset=Copper
2, 2, 10, 11
3, 2, 11, 3
*NSET, NSET=Bottom
1, 2, 10
*Nset, nset=Left
1, 4
*NSET, NSET=Top, GENERATE
3, 4, 1
*End Part
"""

plain_inp = """*NODE
1, 0.0, 0.0
2, 1.0, 0.0
3, 0.0, 1.0
*ELEMENT, TYPE=CPS3
1, 1, 2, 3
"""

# (text, line of the error)
bad_inp_data = [
    ("""*NODE
1, 0.0, 0.0
2, 1.0, 0.0
3, 0.0, 1.0
*ELEMENT, TYPE=CPS3
1, 1, 2, 9
""", 6),
    ("""*NODE
1, 0.0, 0.0
2, 1.0, 0.0
3, 0.0, 1.0
*ELEMENT, TYPE=CPS6
1, 1, 2, 3, 4, 5, 6
""", 6),
    ("""*NODE
1, 0.0, 0.0
2, 1.0, 0.0
2, 0.0, 1.0
""", 4),
    ("""*NODE
1, 0.0, 0.0
2, 1.0, 0.0
3, 0.0, 1.0
*ELEMENT, TYPE=CPS3
1, 1, 3, 2
""", 6),
    ("""*NODE
1, 0.0, zero
""", 2),
]
