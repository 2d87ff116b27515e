"""
drillblock: parametric drilled blocks.

Rectangular blocks with a vertical drill hole, cross holes at every level and
optional grooves, previewed in 3D and exported as OBJ or as a Rhino script.
"""
