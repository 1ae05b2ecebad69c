import math

import numpy as np
import pytest
from linmath import Matrix2d, Vector2d


def test_mul():
    m = Matrix2d(2, 3, 5, 7).mul(Matrix2d(11, 13, 17, 19))
    assert m.equals(Matrix2d(87, 124, 129, 184), 0.001)

def test_mul_local():
    m = Matrix2d(11, 13, 17, 19).mul_local(Matrix2d(2, 3, 5, 7))
    assert m.equals(Matrix2d(87, 124, 129, 184), 0.001)

def test_determinant():
    assert Matrix2d(2, 3, 5, 7).determinant() == -1.0

def test_invert():
    m = Matrix2d(11, 13, 17, 19).invert()
    assert m.equals(Matrix2d(-19.0 / 12, 13.0 / 12, 17.0 / 12, -11.0 / 12), 0.001)

def test_invert_singular_raises():
    with pytest.raises(ZeroDivisionError):
        Matrix2d(1, 2, 2, 4).invert()

def test_rotation():
    mat = Matrix2d().rotation(math.pi / 4)
    coord = 1 / math.sqrt(2)
    assert mat.transform(Vector2d(1, 0)).equals(Vector2d(coord, coord), 0.001)

def test_normal():
    expected = Matrix2d(2, 3, 5, 7).invert().transpose()
    assert Matrix2d(2, 3, 5, 7).normal().equals(expected, 0.001)

def test_positive_x():
    inv = Matrix2d(2, 3, 5, 7).invert()
    expected = inv.transform(Vector2d(1, 0)).normalize()
    assert Matrix2d(2, 3, 5, 7).positive_x(Vector2d()).equals(expected, 0.001)

def test_positive_y():
    inv = Matrix2d(11, 13, 17, 19).invert()
    expected = inv.transform(Vector2d(0, 1)).normalize()
    assert Matrix2d(11, 13, 17, 19).positive_y(Vector2d()).equals(expected, 0.001)

def test_get_and_set_element():
    m = Matrix2d(1, 2, 3, 4)
    assert m.get(1, 0) == 3
    m.set_element(0, 1, 9)
    assert m.m01 == 9
    with pytest.raises(IndexError):
        m.get(2, 0)

def test_rotate_matches_mul_rotation():
    m = Matrix2d(2, 3, 5, 7)
    a = m.rotate(0.3, Matrix2d())
    b = m.mul(Matrix2d().rotation(0.3), Matrix2d())
    assert a.equals(b, 1e-12)

def test_operators_and_equality():
    a = Matrix2d(2, 3, 5, 7)
    b = Matrix2d(11, 13, 17, 19)
    c = a @ b
    assert c == Matrix2d(87, 124, 129, 184)
    # Operands untouched
    assert a == Matrix2d(2, 3, 5, 7)
    with pytest.raises(TypeError):
        hash(a)

def test_to_bytes_is_float32_column_major():
    data = Matrix2d(1, 2, 3, 4).to_bytes()
    assert len(data) == 16
    assert np.frombuffer(data, dtype=np.float32).tolist() == [1.0, 2.0, 3.0, 4.0]

def test_add_sub_and_component_wise():
    a = Matrix2d(1, 2, 3, 4)
    b = Matrix2d(5, 6, 7, 8)
    assert a.add(b, Matrix2d()) == Matrix2d(6, 8, 10, 12)
    assert b.sub(a, Matrix2d()) == Matrix2d(4, 4, 4, 4)
    assert a.mul_component_wise(b, Matrix2d()) == Matrix2d(5, 12, 21, 32)
    # Destination defaults to self
    a.add(b)
    assert a == Matrix2d(6, 8, 10, 12)

def test_lerp():
    a = Matrix2d(0, 0, 0, 0)
    b = Matrix2d(2, 4, 6, 8)
    assert a.lerp(b, 0.5, Matrix2d()) == Matrix2d(1, 2, 3, 4)
    assert a.lerp(b, 0.0, Matrix2d()) == a
    assert a.lerp(b, 1.0, Matrix2d()) == b

def test_rotate_local_matches_mul_local_rotation():
    m = Matrix2d(2, 3, 5, 7)
    a = m.rotate_local(0.7, Matrix2d())
    b = m.mul_local(Matrix2d().rotation(0.7), Matrix2d())
    assert a.equals(b, 1e-12)

def test_scale_local_matches_mul_local_scaling():
    m = Matrix2d(2, 3, 5, 7)
    a = m.scale_local(2, 3, Matrix2d())
    b = m.mul_local(Matrix2d().scaling(2, 3), Matrix2d())
    assert a == b
    assert m.scale_local(4, dest=Matrix2d()) == Matrix2d(8, 12, 20, 28)

@pytest.mark.parametrize("angle", [0.0, 0.5, -1.2, 3.0])
def test_get_rotation(angle):
    assert Matrix2d().rotation(angle).get_rotation() == pytest.approx(angle, abs=1e-12)

def test_transform_transpose():
    m = Matrix2d(2, 3, 5, 7)
    expected = m.transpose(Matrix2d()).transform(Vector2d(1, 2))
    assert m.transform_transpose(Vector2d(1, 2)).equals(expected, 1e-12)
    # Input vector is overwritten only when no destination is given
    v = Vector2d(1, 2)
    m.transform_transpose(v, Vector2d())
    assert v.to_tuple() == (1, 2)

def test_rows_and_columns():
    m = Matrix2d(1, 2, 3, 4)
    assert m.get_row(0, Vector2d()).to_tuple() == (1, 3)
    assert m.get_row(1, Vector2d()).to_tuple() == (2, 4)
    assert m.get_column(1, Vector2d()).to_tuple() == (3, 4)
    m.set_row(0, 9, 8)
    assert m == Matrix2d(9, 2, 8, 4)
    m.set_column(1, Vector2d(5, 6))
    assert m == Matrix2d(9, 2, 5, 6)
    with pytest.raises(IndexError):
        m.get_row(2, Vector2d())
    with pytest.raises(IndexError):
        m.set_column(-1, 0, 0)

def test_is_finite():
    assert Matrix2d(1, 2, 3, 4).is_finite()
    assert not Matrix2d(1, math.nan, 3, 4).is_finite()
    assert not Matrix2d(1, 2, math.inf, 4).is_finite()
