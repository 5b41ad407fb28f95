import numpy as np

lshape_xml = """<?xml version="1.0" encoding="utf-8"?>
<mesh:mesh xmlns:mesh="XMLMesh">
  <variables>
    <var name="a" value="1.0"/>
    <var name="b" value="0.7071067811865476"/>
  </variables>
  <vertices>
    <vertex x="b" y="b" i="7"/>
    <vertex x="0" y="-a" i="0"/>
    <vertex x="a" y="-a" i="1"/>
    <vertex x="-a" y="0" i="2"/>
    <vertex x="0" y="0" i="3"/>
    <vertex x="a" y="0" i="4"/>
    <vertex x="-a" y="a" i="5"/>
    <vertex x="0" y="a" i="6"/>
  </vertices>
  <elements>
    <mesh:q v1="0" v2="1" v3="4" v4="3" marker="0"/>
    <mesh:t v1="3" v2="4" v3="7" marker="0"/>
    <mesh:t v1="3" v2="7" v3="6" marker="0"/>
    <mesh:q v1="2" v2="3" v3="6" v4="5" marker="0"/>
  </elements>
  <edges>
    <edge v1="0" v2="1" marker="Bottom"/>
    <edge v1="1" v2="4" marker="Outer"/>
    <edge v1="3" v2="0" marker="Inner"/>
    <edge v1="4" v2="7" marker="Outer"/>
    <edge v1="7" v2="6" marker="Outer"/>
    <edge v1="2" v2="3" marker="Inner"/>
    <edge v1="6" v2="5" marker="Outer"/>
    <edge v1="5" v2="2" marker="Left"/>
  </edges>
  <curves>
    <arc v1="4" v2="7" angle="45"/>
    <arc v1="7" v2="6" angle="45"/>
  </curves>
  <refinements>
    <refinement element_id="0" refinement_type="1"/>
  </refinements>
</mesh:mesh>
"""

lshape_area = 2 + np.pi/4

nurbs_square_xml = """<?xml version="1.0" encoding="utf-8"?>
<mesh>
  <vertices>
    <vertex x="0" y="0" i="0"/>
    <vertex x="1" y="0" i="1"/>
    <vertex x="1" y="1" i="2"/>
    <vertex x="0" y="1" i="3"/>
  </vertices>
  <elements>
    <quad v1="0" v2="1" v3="2" v4="3" marker="Steel"/>
  </elements>
  <edges>
    <edge v1="2" v2="3" marker="Top"/>
  </edges>
  <curves>
    <NURBS v1="2" v2="3" degree="2">
      <inner_point x="0.5" y="1.5" weight="1.0"/>
    </NURBS>
  </curves>
</mesh>
"""

nurbs_square_area = 7/6

_head = """<?xml version="1.0" encoding="utf-8"?>
<mesh>
  <vertices>
    <vertex x="0" y="0" i="0"/>
    <vertex x="1" y="0" i="1"/>
    <vertex x="0" y="1" i="2"/>
  </vertices>
"""

# (text, line of the error); the head ends on line 7
bad_xml_data = [
    (_head + """  <elements>
    <t v1="0" v2="1" v3="2" marker="0"/>
  </elements>
  <edges>
    <edge v1="0" v2="1" marker="0"/>
  </edges>
</mesh>
""", 12),
    (_head + """  <elements>
    <t v1="0" v2="2" v3="1" marker="0"/>
  </elements>
</mesh>
""", 9),
    (_head + """  <elements>
    <t v1="0" v2="1" v3="2" marker="0"/>
  </elements>
  <curves>
    <arc v1="1" v2="2" angle="-200"/>
  </curves>
</mesh>
""", 12),
    (_head + """  <elements>
    <t v1="0" v2="1" v3="2" marker="0"/>
  </elements>
  <edges>
    <edge v1="0" v2="1" marker="1">
  </edges>
</mesh>
""", 13),
    (_head + """  <elements>
    <t v1="0" v2="1" v3="x" marker="0"/>
  </elements>
</mesh>
""", 9),
    (_head + """  <elements>
    <t v1="0" v2="1" marker="0"/>
  </elements>
</mesh>
""", 9),
    (_head.replace('i="2"', 'i="1"'), 6),
]
