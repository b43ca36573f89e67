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


import math
import numbers
import numpy as np
from collections import namedtuple


# r: radius
# theta: azimuth in (-pi, pi], measured from +x towards +y
# phi: polar angle in [0, pi], measured from +z
VectorSpherical = namedtuple('VectorSpherical', 'r theta phi')


class ZeroNormError(ValueError):
    pass


class VectorCartesian:

    __slots__ = ('_xyz',)

    def __init__(self, x = 0.0, y = 0.0, z = 0.0):
        self._xyz = np.array([x, y, z], dtype = float)

    @classmethod
    def from_array(cls, xyz):
        v = cls.__new__(cls)
        v._xyz = np.array(xyz, dtype = float)
        assert(v._xyz.shape == (3,))
        return v

    @property
    def x(self):
        return float(self._xyz[0])

    @property
    def y(self):
        return float(self._xyz[1])

    @property
    def z(self):
        return float(self._xyz[2])

    def as_array(self):
        return self._xyz.copy()

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def __repr__(self):
        return 'VectorCartesian(%r, %r, %r)' % (self.x, self.y, self.z)

    def __str__(self):
        return '(%.6f, %.6f, %.6f)' % (self.x, self.y, self.z)

    def __eq__(self, other):
        if not isinstance(other, VectorCartesian):
            return NotImplemented
        return bool(np.array_equal(self._xyz, other._xyz))

    def __add__(self, other):
        if not isinstance(other, VectorCartesian):
            return NotImplemented
        return VectorCartesian.from_array(self._xyz + other._xyz)

    def __sub__(self, other):
        if not isinstance(other, VectorCartesian):
            return NotImplemented
        return VectorCartesian.from_array(self._xyz - other._xyz)

    def __neg__(self):
        return VectorCartesian.from_array(-self._xyz)

    def __mul__(self, s):
        # only scalars here, Quaternion handles vector * quaternion through __rmul__
        if not isinstance(s, numbers.Real):
            return NotImplemented
        return VectorCartesian.from_array(self._xyz * s)

    def __rmul__(self, s):
        return self.__mul__(s)

    def __truediv__(self, s):
        if not isinstance(s, numbers.Real):
            return NotImplemented
        return VectorCartesian.from_array(self._xyz / s)

    def dot(self, other):
        return float(np.dot(self._xyz, other._xyz))

    def cross(self, other):
        return VectorCartesian.from_array(np.cross(self._xyz, other._xyz))

    def norm(self):
        return math.sqrt(self.dot(self))

    def is_zero(self):
        return not self._xyz.any()

    def normalized(self):
        n = self.norm()
        if n == 0:
            raise ZeroNormError('cannot normalize a zero vector')
        return self / n

    def to_spherical(self):
        r = self.norm()
        if r == 0:
            return VectorSpherical(r = 0.0, theta = 0.0, phi = 0.0)
        # clamp: z / r can land just outside [-1, 1]
        cos_phi = max(-1.0, min(1.0, self.z / r))
        return VectorSpherical(r = r,
                               theta = math.atan2(self.y, self.x),
                               phi = math.acos(cos_phi))
