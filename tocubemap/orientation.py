"""
orientation.py — Face-local coordinates to points on the cube surface.

The cube is centred at the origin with side length 2.  Each face maps
(x, y) ∈ [-1, +1]² (x left→right, y top→bottom in the output image) onto
its own plane.  Works on scalars and on numpy arrays alike.
"""

FACES = ['pz', 'nz', 'px', 'nx', 'py', 'ny']


def cube_orientation(face: str, x, y) -> tuple:
    """
    Return the point (X, Y, Z) on *face* for face-local coordinates (x, y).

    Constant components are returned as plain floats; callers working on
    arrays broadcast them.
    """
    if face == 'pz':
        return -1.0, -x, -y
    elif face == 'nz':
        return 1.0, x, -y
    elif face == 'px':
        return x, -1.0, -y
    elif face == 'nx':
        return -x, 1.0, -y
    elif face == 'py':
        return -y, -x, 1.0
    elif face == 'ny':
        return y, -x, -1.0
    else:
        raise ValueError(f"Unknown face: {face!r}")
