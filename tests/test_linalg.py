import math

import pytest

from flyview.linalg import Mat4, Vec3, Vec4


def approx_vec(v, expected, abs_tol=1e-9):
    return v.to_tuple() == pytest.approx(expected, abs=abs_tol)


def test_mat4_rejects_wrong_length():
    with pytest.raises(ValueError):
        Mat4([1.0, 2.0])


def test_perspective_rejects_zero_aspect_and_bad_planes():
    with pytest.raises(ValueError):
        Mat4.perspective(math.pi / 4, 0.0, 0.1, 100.0)
    with pytest.raises(ValueError):
        Mat4.perspective(math.pi / 4, 1.0, 0.0, 100.0)
    with pytest.raises(ValueError):
        Mat4.perspective(math.pi / 4, 1.0, 1.0, 1.0)


def test_matmul_unsupported_operand():
    with pytest.raises(TypeError):
        Mat4() @ 3


def test_identity_product():
    m = Mat4.translate(1, 2, 3)
    assert (Mat4.identity() @ m).m == m.m
    assert (m @ Mat4.identity()).m == m.m


def test_translate_moves_points_not_vectors():
    m = Mat4.translate(1, 2, 3)
    assert approx_vec(m @ Vec3(1, 1, 1), (2, 3, 4))
    assert approx_vec(m.transform_vector(Vec3(1, 1, 1)), (1, 1, 1))


def test_column_major_puts_translation_last():
    cm = Mat4.translate(1, 2, 3).to_column_major()
    assert cm[12:15] == [1.0, 2.0, 3.0]
    assert cm[15] == 1.0


def test_transpose_twice_is_identity_op():
    m = Mat4([float(i) for i in range(16)])
    assert m.transpose().transpose().m == m.m
    assert m.transpose().m[1] == 4.0


def test_rotate_about_y():
    m = Mat4.rotate(Vec3(0, 1, 0), math.pi / 2)
    assert approx_vec(m @ Vec3(1, 0, 0), (0, 0, -1))
    assert approx_vec(m @ Vec3(0, 0, 1), (1, 0, 0))


def test_rotate_with_zero_axis_is_identity():
    assert Mat4.rotate(Vec3(0, 0, 0), 1.0).m == Mat4().m


def test_look_at_maps_target_down_negative_z():
    view = Mat4.look_at(Vec3(-5, 0, 0), Vec3(-4, 0, 0), Vec3(0, 1, 0))
    assert approx_vec(view @ Vec3(-4, 0, 0), (0, 0, -1))
    assert approx_vec(view @ Vec3(-5, 0, 0), (0, 0, 0))
    # +z in world is to the camera's right when looking along +x.
    assert approx_vec(view @ Vec3(-5, 0, 1), (1, 0, 0))


def test_perspective_maps_near_and_far_planes():
    proj = Mat4.perspective(math.pi / 2, 1.0, 1.0, 10.0)
    near = (proj @ Vec4(0, 0, -1, 1)).to_vec3()
    far = (proj @ Vec4(0, 0, -10, 1)).to_vec3()
    assert near.z == pytest.approx(-1.0)
    assert far.z == pytest.approx(1.0)


def test_perspective_scales_x_by_aspect_and_y_by_focal():
    proj = Mat4.perspective(math.pi / 4, 2.0, 0.1, 100.0)
    f = 1.0 / math.tan(math.pi / 8)
    assert proj.m[0] == pytest.approx(f / 2.0)
    assert proj.m[5] == pytest.approx(f)
    # A point on the top edge of the frustum lands on y = 1, the matching
    # horizontal point on x = 1.
    half = math.tan(math.pi / 8)
    top = (proj @ Vec4(0.0, half * 10.0, -10.0, 1.0)).to_vec3()
    side = (proj @ Vec4(half * 2.0 * 10.0, 0.0, -10.0, 1.0)).to_vec3()
    assert top.y == pytest.approx(1.0)
    assert side.x == pytest.approx(1.0)


def test_vec3_norm_and_cross():
    assert Vec3(3, 0, 4).mag() == 5.0
    assert Vec3(3, 0, 4).mag2() == 25.0
    assert approx_vec(Vec3(0, 0, 2).norm(), (0, 0, 1))
    assert Vec3().norm().to_tuple() == (0, 0, 0)
    assert Vec3(1, 0, 0).cross(Vec3(0, 1, 0)).to_tuple() == (0, 0, 1)


def test_is_finite():
    assert Mat4().is_finite()
    assert not Mat4([math.nan] + [0.0] * 15).is_finite()
