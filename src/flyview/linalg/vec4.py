from flyview.linalg.vec3 import Vec3


class Vec4:
    def __init__(self, x=0.0, y=0.0, z=0.0, w=0.0):
        self.x, self.y, self.z, self.w = x, y, z, w

    def __repr__(self):
        return (
            self.x,
            self.y,
            self.z,
            self.w,
        ).__repr__()

    def to_tuple(self):
        return (self.x, self.y, self.z, self.w)

    def xyz(self):
        return Vec3(self.x, self.y, self.z)

    def to_vec3(self, perspective_divide=True):
        """Drop w, dividing by it first (clip space -> NDC) unless told not to."""
        if perspective_divide and self.w != 0:
            invw = 1.0 / self.w
            return Vec3(self.x * invw, self.y * invw, self.z * invw)
        return Vec3(self.x, self.y, self.z)
