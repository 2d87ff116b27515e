"""
The CONTROLLER layer turns parameters into geometry and decides when to
rebuild it.
"""
