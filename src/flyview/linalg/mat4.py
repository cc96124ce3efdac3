import math

from flyview.linalg.vec3 import Vec3
from flyview.linalg.vec4 import Vec4


class Mat4:
    """4x4 matrix (row-major storage).

    Vectors are treated as column vectors:
        p' = M @ (x, y, z, w)

    So `A @ B` applies B first. GPU uploads want column-major order; use
    `to_column_major()` (or upload with transpose=True).
    """

    def __init__(self, m=None):
        if m is None:
            self.m = [
                1.0, 0.0, 0.0, 0.0,
                0.0, 1.0, 0.0, 0.0,
                0.0, 0.0, 1.0, 0.0,
                0.0, 0.0, 0.0, 1.0,
            ]  # fmt: skip
        else:
            if len(m) != 16:
                raise ValueError("Mat4 expects 16 elements")
            self.m = [float(x) for x in m]

    @classmethod
    def identity(cls):
        return cls()

    @classmethod
    def from_rows(cls, rows):
        return cls([v for row in rows for v in row])

    @classmethod
    def translate(cls, tx, ty, tz):
        return cls(
            [
                1.0, 0.0, 0.0, float(tx),
                0.0, 1.0, 0.0, float(ty),
                0.0, 0.0, 1.0, float(tz),
                0.0, 0.0, 0.0, 1.0,
            ]
        )  # fmt: skip

    @classmethod
    def rotate(cls, axis, angle):
        """Rotation of `angle` radians around `axis` (Rodrigues, right-handed).

        A zero axis or zero angle gives the identity.
        """
        k = axis.norm()
        if k.mag2() == 0.0:
            return cls()
        x, y, z = k.x, k.y, k.z
        c = math.cos(angle)
        s = math.sin(angle)
        t = 1.0 - c
        return cls(
            [
                t * x * x + c,     t * x * y - s * z, t * x * z + s * y, 0.0,
                t * x * y + s * z, t * y * y + c,     t * y * z - s * x, 0.0,
                t * x * z - s * y, t * y * z + s * x, t * z * z + c,     0.0,
                0.0,               0.0,               0.0,               1.0,
            ]
        )  # fmt: skip

    @classmethod
    def perspective(cls, fov_y, aspect, near, far):
        """Right-handed perspective matrix.

        fov_y in radians. near/far > 0.
        Maps to OpenGL-style clip space: z in [-w, +w] after projection.
        """
        if aspect == 0:
            raise ValueError("aspect must be non-zero")
        n = float(near)
        fa = float(far)
        if n <= 0 or fa <= 0 or n == fa:
            raise ValueError("invalid near/far")
        f = 1.0 / math.tan(fov_y * 0.5)
        return cls(
            [
                f / float(aspect), 0.0, 0.0,                 0.0,
                0.0,               f,   0.0,                 0.0,
                0.0,               0.0, (fa + n) / (n - fa), (2.0 * fa * n) / (n - fa),
                0.0,               0.0, -1.0,                0.0,
            ]
        )  # fmt: skip

    @classmethod
    def look_at(cls, eye, target, up):
        """Right-handed look-at view matrix (camera looks down -Z)."""
        f = (target - eye).norm()
        s = f.cross(up).norm()
        u = s.cross(f)
        return cls(
            [
                s.x,  s.y,  s.z,  -s.dot(eye),
                u.x,  u.y,  u.z,  -u.dot(eye),
                -f.x, -f.y, -f.z, f.dot(eye),
                0.0,  0.0,  0.0,  1.0,
            ]
        )  # fmt: skip

    def __repr__(self):
        m = self.m
        return f"Mat4({m[0:4]}, {m[4:8]}, {m[8:12]}, {m[12:16]})"

    def to_tuple(self):
        m = self.m
        return tuple(tuple(m[r * 4 : r * 4 + 4]) for r in range(4))

    def transpose(self):
        m = self.m
        return Mat4([m[c * 4 + r] for r in range(4) for c in range(4)])

    def to_column_major(self):
        return self.transpose().m

    def is_finite(self):
        return all(math.isfinite(v) for v in self.m)

    def _mul_mat4(self, other):
        a = self.m
        b = other.m
        out = [0.0] * 16
        for r in range(4):
            for c in range(4):
                out[r * 4 + c] = (
                    a[r * 4 + 0] * b[0 * 4 + c]
                    + a[r * 4 + 1] * b[1 * 4 + c]
                    + a[r * 4 + 2] * b[2 * 4 + c]
                    + a[r * 4 + 3] * b[3 * 4 + c]
                )
        return Mat4(out)

    def transform_point(self, v):
        return self.transform_vec4(v.to_vec4(1.0)).to_vec3()

    def transform_vector(self, v):
        return self.transform_vec4(v.to_vec4(0.0)).xyz()

    def transform_vec4(self, v):
        x = float(v.x)
        y = float(v.y)
        z = float(v.z)
        w = float(v.w)
        m = self.m
        return Vec4(
            m[0] * x + m[1] * y + m[2] * z + m[3] * w,
            m[4] * x + m[5] * y + m[6] * z + m[7] * w,
            m[8] * x + m[9] * y + m[10] * z + m[11] * w,
            m[12] * x + m[13] * y + m[14] * z + m[15] * w,
        )

    def __matmul__(self, other):
        if isinstance(other, Mat4):
            return self._mul_mat4(other)
        if isinstance(other, Vec3):
            return self.transform_point(other)
        if isinstance(other, Vec4):
            return self.transform_vec4(other)
        raise TypeError(
            f"unsupported operand type(s) for @: 'Mat4' and '{type(other)}'"
        )
