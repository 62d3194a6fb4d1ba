#!/usr/bin/env python3
"""plane_projection.py – Rotate a square of points and map it onto a tilted plane.

Outputs one line per point:
  rotated (x, y, z)  plane (x', y')  distance from the plane's y axis

Usage:
  python3 examples/plane_projection.py [angle_deg]
"""
import os
import sys

import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from vmath import Vector, Quaternion, get_logger

logger = get_logger('plane_projection')

ORIGIN = Vector(0, 0, 1)
NORMAL = Vector(0, 1, 1)
Y_AXIS = Vector(1, 0, 0)


def main():
    angle = np.radians(float(sys.argv[1])) if len(sys.argv) > 1 else np.pi / 6
    square = [Vector(1, 1, 0), Vector(-1, 1, 0), Vector(-1, -1, 0), Vector(1, -1, 0)]

    spin = Quaternion().rotate_z(angle)
    logger.info("rotation matrix:\n%s", np.round(spin.get_rotation_matrix(), 4))

    for p in square:
        r = spin.rotate_vector(p)
        uv = r.project_2d(ORIGIN, NORMAL, Y_AXIS)
        d = r.planar_project(ORIGIN, NORMAL).distance_from_line(ORIGIN, ORIGIN.add(Y_AXIS))
        logger.info("(%.3f, %.3f, %.3f)  (%.3f, %.3f)  %.3f", r.x, r.y, r.z, uv.x, uv.y, d)


if __name__ == '__main__':
    main()
