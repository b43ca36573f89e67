# Copyright (c) 2020, authors
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# 1. Redistributions of source code must retain the above copyright notice, this
#    list of conditions and the following disclaimer.
# 2. Redistributions in binary form must reproduce the above copyright notice,
#    this list of conditions and the following disclaimer in the documentation
#    and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND
# ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED
# WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
# DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT OWNER OR CONTRIBUTORS BE LIABLE FOR
# ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES
# (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES;
# LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND
# ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT
# (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS
# SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.


# Quaternion algebra for head orientations.
#
# Angles are in radians throughout.
# The rotation reference axis (the direction a viewer faces before rotation) is +x.


import math
import numbers
from collections import namedtuple

from vector3 import VectorCartesian, ZeroNormError


EulerAngles = namedtuple('EulerAngles', 'roll pitch yaw')

REFERENCE_AXIS = VectorCartesian(1, 0, 0)


def _clamp_unit(value):
    return max(-1.0, min(1.0, value))


class Quaternion:

    def __init__(self, w = 0.0, v = None):
        if isinstance(w, VectorCartesian):
            # pure quaternion from a direction
            assert(v is None)
            w, v = 0.0, w
        self._w = float(w)
        self._v = VectorCartesian() if v is None else v
        # unit hint, see normalize()
        self._is_normalized = False

    @classmethod
    def from_wxyz(cls, w, x, y, z):
        return cls(w, VectorCartesian(x, y, z))

    @classmethod
    def from_vector(cls, v):
        return cls(0.0, v)

    @classmethod
    def identity(cls):
        q = cls(1.0)
        q._is_normalized = True
        return q

    @classmethod
    def from_euler(cls, yaw, pitch, roll):
        t0 = math.cos(yaw * 0.5)
        t1 = math.sin(yaw * 0.5)
        t2 = math.cos(roll * 0.5)
        t3 = math.sin(roll * 0.5)
        t4 = math.cos(pitch * 0.5)
        t5 = math.sin(pitch * 0.5)

        q = cls(t0 * t2 * t4 + t1 * t3 * t5,
                VectorCartesian(t0 * t3 * t4 - t1 * t2 * t5,
                                t0 * t2 * t5 + t1 * t3 * t4,
                                t1 * t2 * t4 - t0 * t3 * t5))
        q.normalize()
        return q

    @classmethod
    def from_angle_axis(cls, theta, axis):
        return cls(math.cos(theta / 2), axis.normalized() * math.sin(theta / 2))

    def to_euler(self):
        (x, y, z) = self._v
        w = self._w

        sinr = 2.0 * (w * x + y * z)
        cosr = 1.0 - 2.0 * (x * x + y * y)
        roll = math.atan2(sinr, cosr)

        sinp = 2.0 * (w * y - z * x)
        if abs(sinp) >= 1:
            # rounding near gimbal lock, use +/- 90 degrees
            pitch = math.copysign(math.pi / 2, sinp)
        else:
            pitch = math.asin(sinp)

        siny = 2.0 * (w * z + x * y)
        cosy = 1.0 - 2.0 * (y * y + z * z)
        yaw = math.atan2(siny, cosy)

        return EulerAngles(roll = roll, pitch = pitch, yaw = yaw)

    @property
    def w(self):
        return self._w

    @property
    def v(self):
        return self._v

    def is_pure(self):
        return self._w == 0

    def is_normalized(self):
        return self._is_normalized

    def __repr__(self):
        return 'Quaternion(%r, %r)' % (self._w, self._v)

    def __str__(self):
        return '%g + %g i + %g j + %g k' % (self._w, self._v.x, self._v.y, self._v.z)

    def __eq__(self, other):
        if not isinstance(other, Quaternion):
            return NotImplemented
        return self._w == other._w and self._v == other._v

    def dot(self, q):
        return self._w * q._w + self._v.dot(q._v)

    def norm(self):
        return math.sqrt(self.dot(self))

    @staticmethod
    def _as_quaternion(value):
        if isinstance(value, Quaternion):
            return value
        if isinstance(value, VectorCartesian):
            return Quaternion(0.0, value)
        if isinstance(value, numbers.Real):
            return Quaternion(value)
        return None

    def __add__(self, other):
        q = Quaternion._as_quaternion(other)
        if q is None:
            return NotImplemented
        return Quaternion(self._w + q._w, self._v + q._v)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        q = Quaternion._as_quaternion(other)
        if q is None:
            return NotImplemented
        return Quaternion(self._w - q._w, self._v - q._v)

    def __rsub__(self, other):
        q = Quaternion._as_quaternion(other)
        if q is None:
            return NotImplemented
        return q - self

    def __neg__(self):
        return Quaternion(-self._w, -self._v)

    def __mul__(self, other):
        if isinstance(other, numbers.Real):
            return Quaternion(self._w * other, self._v * other)
        q = Quaternion._as_quaternion(other)
        if q is None:
            return NotImplemented
        # Hamilton product
        return Quaternion(self._w * q._w - self._v.dot(q._v),
                          q._v * self._w + self._v * q._w + self._v.cross(q._v))

    def __rmul__(self, other):
        if isinstance(other, numbers.Real):
            return self * other
        if isinstance(other, VectorCartesian):
            return Quaternion(0.0, other) * self
        return NotImplemented

    def __truediv__(self, s):
        if not isinstance(s, numbers.Real):
            return NotImplemented
        return Quaternion(self._w / s, self._v / s)

    def copy(self):
        q = Quaternion(self._w, self._v)
        q._is_normalized = self._is_normalized
        return q

    def normalize(self):
        if not self._is_normalized:
            n = self.norm()
            if n == 0:
                raise ZeroNormError('cannot normalize a zero quaternion')
            self._w /= n
            self._v = self._v / n
            self._is_normalized = True

    def normalized(self):
        q = self.copy()
        q.normalize()
        return q

    def conj(self):
        return Quaternion(self._w, -self._v)

    def inv(self):
        if self._is_normalized:
            return self.conj()
        n2 = self.dot(self)
        if n2 == 0:
            raise ZeroNormError('zero quaternion has no inverse')
        return self.conj() / n2

    # q * v * conj(q), restricted to the vector part
    def rotation(self, v):
        rotated = self * v * self.conj()
        if not self._is_normalized:
            n2 = self.dot(self)
            if n2 == 0:
                raise ZeroNormError('cannot rotate by a zero quaternion')
            rotated = rotated / n2
        return rotated.v

    @staticmethod
    def exp(q):
        vn = q._v.norm()
        ew = math.exp(q._w)
        if vn == 0:
            return Quaternion(ew, q._v)
        return Quaternion(math.cos(vn) * ew, q._v * (math.sin(vn) * ew / vn))

    @staticmethod
    def log(q):
        n = q.norm()
        if n == 0:
            raise ZeroNormError('logarithm of a zero quaternion')
        vn = q._v.norm()
        if vn == 0:
            return Quaternion(math.log(n), q._v)
        return Quaternion(math.log(n), q._v * (math.acos(_clamp_unit(q._w / n)) / vn))

    @staticmethod
    def pow(q, k):
        return Quaternion.exp(Quaternion.log(q) * k)

    @staticmethod
    def distance(q1, q2):
        return (q2 - q1).norm()

    @staticmethod
    def orthodromic_distance(q1, q2):
        p1 = Quaternion(0.0, q1.rotation(REFERENCE_AXIS))
        p2 = Quaternion(0.0, q2.rotation(REFERENCE_AXIS))
        p = p1 * p2
        # p1 and p2 are pure: -p.w is their dot product and p.v their cross product
        return math.atan2(p.v.norm(), -p.w)

    @staticmethod
    def slerp(q1, q2, k):
        if q1.dot(q2) < 0:
            # take the short way around
            q2 = -q2
        return q1 * Quaternion.pow(q1.inv() * q2, k)

    @staticmethod
    def average_angular_velocity(q1, q2, delta_t):
        if delta_t == 0:
            raise ValueError('average angular velocity needs a non-zero delta_t')

        if q1.dot(q2) < 0:
            q2 = -q2

        # compare the directions the two orientations face
        if not q1.is_pure():
            q1 = Quaternion(0.0, q1.normalized().rotation(REFERENCE_AXIS))
        if not q2.is_pure():
            q2 = Quaternion(0.0, q2.normalized().rotation(REFERENCE_AXIS))

        delta_q = q2 - q1
        w = (delta_q * (2.0 / delta_t)) * q1.inv()
        return w.v
