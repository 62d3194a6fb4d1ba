"""
3D vector and quaternion value types.

Both classes live in this module because they depend on each other:
vectors are rotated through quaternion sandwich products, and axis-angle
quaternions are built from normalized vectors.
"""
from collections.abc import Mapping
from numbers import Real

import numpy as np

from . import config
from .errors import MissingArgumentError, DivideByZeroError
from .logger import get_logger

logger = get_logger(__name__)


def _frozen(values):
    arr = np.array(values, dtype=float)
    arr.setflags(write=False)
    return arr


def _field(record, name, default=None):
    if isinstance(record, Mapping):
        if default is None:
            return record[name]
        return record.get(name, default)
    if default is None:
        return getattr(record, name)
    return getattr(record, name, default)


class Vector:
    """Point or direction in 3D space.

    Every operation returns a new Vector. ``v`` hands out a copy of the
    components, so writing to it never changes the Vector.
    """

    def __init__(self, x=None, y=None, z=0):
        if x is None:
            self._v = _frozen([0.0, 0.0, 0.0])
            return
        if not isinstance(x, Real):
            raise TypeError("Vector() takes numeric components; use Vector.from_record for records.")
        if y is None:
            raise MissingArgumentError("Missing y value for Vector constructor.")
        self._v = _frozen([x, y, z if z is not None else 0])

    @classmethod
    def from_components(cls, x, y, z=0):
        return cls(x, y, z)

    @classmethod
    def from_record(cls, record):
        """Build a Vector from a mapping or object exposing ``x``, ``y`` and optionally ``z``."""
        return cls(_field(record, 'x'), _field(record, 'y'), _field(record, 'z', 0))

    @property
    def v(self):
        return self._v.copy()

    @property
    def x(self):
        return float(self._v[0])

    @property
    def y(self):
        return float(self._v[1])

    @property
    def z(self):
        return float(self._v[2])

    def as_dict(self):
        return {'x': self.x, 'y': self.y, 'z': self.z}

    # -- Arithmetic -------------------------------------------------------
    def add(self, v):
        return Vector(*(self._v + v._v))

    def neg(self):
        return Vector(*(-self._v))

    def sub(self, v):
        return self.add(v.neg())

    def mul(self, a):
        """Componentwise product with a scalar or another Vector."""
        if isinstance(a, Vector):
            return Vector(*(self._v * a._v))
        return Vector(*(self._v * a))

    def mag(self):
        return float(np.linalg.norm(self._v))

    def norm(self):
        """Return the unit vector in the same direction, or the zero vector if this one is zero."""
        mag = self.mag()
        if mag == 0:
            logger.debug("norm() of zero vector, returning zero vector")
            return Vector()
        return Vector(*(self._v / mag))

    def cross(self, v):
        return Vector(*np.cross(self._v, v._v))

    def dot(self, v):
        """Return scalar dot‐product between two vectors."""
        return float(np.dot(self._v, v._v))

    # -- Rotation ---------------------------------------------------------
    def quaternion_rotate(self, q):
        """Rotate this vector by quaternion ``q`` (normalized first) using q * p * q̄."""
        q = q.normalize()
        # Lift the vector into quaternion space with a zero real part
        p = Quaternion(0, *self._v)
        p = q.quaternion_multiply(p).quaternion_multiply(q.conjugate())
        return Vector(p.i, p.j, p.k)

    q_rotate = quaternion_rotate

    def rotate_axis(self, axis, angle):
        return self.quaternion_rotate(Quaternion.from_axis_rotation(axis, angle))

    def rotate_x(self, angle):
        return self.rotate_axis(Vector(1, 0, 0), angle)

    def rotate_y(self, angle):
        return self.rotate_axis(Vector(0, 1, 0), angle)

    def rotate_z(self, angle):
        return self.rotate_axis(Vector(0, 0, 1), angle)

    def transform(self, M):
        """Apply a 3×3 linear or 3×4 affine matrix.

        Parameters
        ----------
        M : array_like
            3×3 matrix, or 3×4 matrix whose last column is a translation.
        """
        M = np.asarray(M, dtype=float)
        if M.shape not in ((3, 3), (3, 4)):
            raise ValueError(f"Expected a 3x3 or 3x4 matrix, got shape {M.shape}")
        out = M[:, :3] @ self._v
        if M.shape[1] == 4:
            out = out + M[:, 3]
        return Vector(*out)

    # -- Geometry ---------------------------------------------------------
    def angle_between(self, v):
        """Angle in radians in [0, π]; 0 when either vector has zero magnitude."""
        denominator = self.mag() * v.mag()
        if denominator == 0:
            logger.debug("angle_between() with zero-magnitude vector, returning 0")
            return 0.0
        # Clamp to absorb floating-point overshoot outside acos' domain
        return float(np.arccos(np.clip(self.dot(v) / denominator, -1.0, 1.0)))

    def project(self, v):
        """Project this vector onto the direction of ``v``."""
        theta = self.angle_between(v)
        return v.norm().mul(np.cos(theta) * self.mag())

    def planar_project(self, origin, normal):
        """Project this point onto the plane through ``origin`` with the given ``normal``."""
        diff = origin.sub(self)
        return self.add(diff.project(normal))

    def project_2d(self, origin, normal, y_axis):
        """Return the in-plane coordinates of this point as ``Vector(x', y', 0)``.

        ``y'`` is measured along ``y_axis`` and ``x'`` along ``y_axis`` rotated
        by π/2 about ``normal``.
        """
        proj = self.planar_project(origin, normal).sub(origin)
        theta = proj.angle_between(y_axis)
        theta2 = proj.angle_between(y_axis.rotate_axis(normal, np.pi / 2))
        mag = proj.mag()
        return Vector(np.cos(theta2) * mag, np.cos(theta) * mag, 0)

    def distance_from_line(self, a, b):
        """Perpendicular distance from this point to the infinite line through ``a`` and ``b``."""
        dist_a = self.sub(a).mag()
        dist_b = self.sub(b).mag()
        dist = a.sub(b).mag()
        # Foot of the perpendicular measured from a, by the law of cosines
        foot = (dist_b * dist_b - dist_a * dist_a - dist * dist) / (-2 * dist)
        return float(np.sqrt(max(0.0, dist_a * dist_a - foot * foot)))

    def isclose(self, other, atol=None):
        atol = config.ATOL if atol is None else atol
        return bool(np.allclose(self._v, other._v, rtol=0, atol=atol))

    # -- Operators --------------------------------------------------------
    def __add__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.sub(other)

    def __neg__(self):
        return self.neg()

    def __mul__(self, other):
        return self.mul(other)

    def __rmul__(self, other):
        return self.mul(other)

    def __abs__(self):
        return self.mag()

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def __repr__(self):
        return f"Vector({self.x}, {self.y}, {self.z})"


class Quaternion:
    """Quaternion ``a + i·î + j·ĵ + k·k̂``.

    Used as a rotation once normalized; the type itself does not track
    whether it is unit length.
    """

    def __init__(self, a=None, i=None, j=None, k=None):
        if a is None:
            self._q = _frozen([1.0, 0.0, 0.0, 0.0])
            return
        if not isinstance(a, Real):
            raise TypeError("Quaternion() takes numeric components; use Quaternion.from_record for records.")
        if i is None or j is None or k is None:
            raise MissingArgumentError("Missing i, j, or k values in Quaternion constructor.")
        self._q = _frozen([a, i, j, k])

    @classmethod
    def from_components(cls, a, i, j, k):
        return cls(a, i, j, k)

    @classmethod
    def from_record(cls, record):
        return cls(_field(record, 'a'), _field(record, 'i'),
                   _field(record, 'j'), _field(record, 'k'))

    @property
    def q(self):
        return self._q.copy()

    @property
    def a(self):
        return float(self._q[0])

    @property
    def i(self):
        return float(self._q[1])

    @property
    def j(self):
        return float(self._q[2])

    @property
    def k(self):
        return float(self._q[3])

    def as_dict(self):
        return {'a': self.a, 'i': self.i, 'j': self.j, 'k': self.k}

    def copy(self):
        return Quaternion(*self._q)

    # -- Arithmetic -------------------------------------------------------
    def add(self, q):
        return Quaternion(*(self._q + q._q))

    def sub(self, q):
        return Quaternion(*(self._q - q._q))

    def conjugate(self):
        a, i, j, k = self._q
        return Quaternion(a, -i, -j, -k)

    def mul(self, a):
        return Quaternion(*(self._q * a))

    def div(self, a):
        if a == 0:
            logger.debug("Quaternion division by zero: %r", self)
            raise DivideByZeroError("Cannot divide by 0.")
        return Quaternion(*(self._q / a))

    def mag(self):
        return float(np.linalg.norm(self._q))

    def normalize(self):
        """Return this quaternion scaled to unit length; raises DivideByZeroError for a zero quaternion."""
        return self.div(self.mag())

    def quaternion_multiply(self, q):
        """Hamilton product ``self * q``."""
        a1, i1, j1, k1 = self._q
        a2, i2, j2, k2 = q._q
        a = a1 * a2 - i1 * i2 - j1 * j2 - k1 * k2
        i = a1 * i2 + i1 * a2 + j1 * k2 - k1 * j2
        j = a1 * j2 - i1 * k2 + j1 * a2 + k1 * i2
        k = a1 * k2 + i1 * j2 - j1 * i2 + k1 * a2
        return Quaternion(a, i, j, k)

    q_mul = quaternion_multiply

    # -- Rotation ---------------------------------------------------------
    def quaternion_rotate(self, q):
        """Compose rotations: ``q.normalize() * self.normalize()``."""
        return q.normalize().quaternion_multiply(self.normalize())

    q_rotate = quaternion_rotate

    def rotate_axis(self, axis, angle):
        q = Quaternion.from_axis_rotation(axis, angle)
        return self.quaternion_rotate(q)

    def rotate_x(self, angle):
        return self.rotate_axis(Vector(1, 0, 0), angle)

    def rotate_y(self, angle):
        return self.rotate_axis(Vector(0, 1, 0), angle)

    def rotate_z(self, angle):
        return self.rotate_axis(Vector(0, 0, 1), angle)

    def rotate_vector(self, vector):
        """Rotate a Vector by this quaternion and return a new Vector."""
        return vector.quaternion_rotate(self)

    def get_rotation_matrix(self):
        """3×3 rotation matrix; assumes this quaternion is unit length."""
        a, i, j, k = self._q
        return np.array([
            [a*a + i*i - j*j - k*k, 2 * (i*j - a*k), 2 * (a*j + i*k)],
            [2 * (i*j + a*k), a*a - i*i + j*j - k*k, 2 * (-a*i + j*k)],
            [2 * (-a*j + i*k), 2 * (a*i + j*k), a*a - i*i - j*j + k*k]
        ], dtype=float)

    def to_euler(self):
        a, i, j, k = self._q

        # Roll (x-axis rotation)
        sinr_cosp = 2 * (a * i + j * k)
        cosr_cosp = 1 - 2 * (i * i + j * j)
        roll = np.arctan2(sinr_cosp, cosr_cosp)

        # Pitch (y-axis rotation)
        sinp = 2 * (a * j - k * i)
        if abs(sinp) >= 1:
            pitch = np.sign(sinp) * np.pi / 2  # gimbal lock
        else:
            pitch = np.arcsin(sinp)

        # Yaw (z-axis rotation)
        siny_cosp = 2 * (a * k + i * j)
        cosy_cosp = 1 - 2 * (j * j + k * k)
        yaw = np.arctan2(siny_cosp, cosy_cosp)

        return float(roll), float(pitch), float(yaw)

    @staticmethod
    def from_axis_rotation(axis, angle):
        """Unit quaternion rotating by ``angle`` radians about ``axis``.

        ``axis`` may be a Vector or any 3-element sequence and need not be
        normalized. A zero axis is not rejected.
        """
        if not isinstance(axis, Vector):
            axis = Vector(*axis)
        axis = axis.norm()
        s = np.sin(angle / 2.0)
        a = np.cos(angle / 2.0)
        return Quaternion(a, axis.x * s, axis.y * s, axis.z * s).normalize()

    @staticmethod
    def from_euler(roll, pitch, yaw):
        # ZYX (yaw, pitch, roll) aerospace sequence
        cy = np.cos(yaw * 0.5)
        sy = np.sin(yaw * 0.5)
        cp = np.cos(pitch * 0.5)
        sp = np.sin(pitch * 0.5)
        cr = np.cos(roll * 0.5)
        sr = np.sin(roll * 0.5)

        a = cy * cp * cr + sy * sp * sr
        i = cy * cp * sr - sy * sp * cr
        j = sy * cp * sr + cy * sp * cr
        k = sy * cp * cr - cy * sp * sr

        return Quaternion(a, i, j, k)

    def isclose(self, other, atol=None):
        atol = config.ATOL if atol is None else atol
        return bool(np.allclose(self._q, other._q, rtol=0, atol=atol))

    # -- Operators --------------------------------------------------------
    def __add__(self, other):
        if isinstance(other, Quaternion):
            return self.add(other)
        raise TypeError("Addition is only defined for Quaternion objects.")

    def __sub__(self, other):
        if isinstance(other, Quaternion):
            return self.sub(other)
        raise TypeError("Subtraction is only defined for Quaternion objects.")

    def __mul__(self, other):
        if isinstance(other, Quaternion):
            return self.quaternion_multiply(other)
        elif isinstance(other, Real):
            return self.mul(other)
        else:
            raise TypeError("Multiplication is only defined for Quaternion objects and scalars.")

    def __rmul__(self, other):
        if isinstance(other, Real):
            return self.mul(other)
        raise TypeError("Multiplication is only defined for Quaternion objects and scalars.")

    def __truediv__(self, other):
        return self.div(other)

    def __abs__(self):
        return self.mag()

    def __iter__(self):
        return iter((self.a, self.i, self.j, self.k))

    def __repr__(self):
        return f"Quaternion({self.a}, {self.i}, {self.j}, {self.k})"
