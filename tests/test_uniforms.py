import numpy as np
import pytest
from linmath import Matrix3d, Matrix4d, Matrix4x3d, Vector3d
from linmath.render import pack_matrices, write_buffer, write_uniform


class FakeUniform:
    def __init__(self):
        self.data = None

    def write(self, data):
        self.data = data


class FakeBuffer:
    def __init__(self, size):
        self.size = size
        self.writes = []

    def write(self, data, offset=0):
        self.writes.append((data, offset))


def test_pack_column_major():
    m = Matrix4d().translation(1, 2, 3)
    packed = pack_matrices([m])
    assert packed.dtype == np.float32
    assert packed.shape == (16,)
    # translation sits in the last column
    assert tuple(packed[12:15]) == (1.0, 2.0, 3.0)

def test_pack_several():
    packed = pack_matrices([Matrix4d(), Matrix4d().scaling(2.0)])
    assert packed.shape == (32,)
    assert packed[16] == 2.0

def test_pack_std140_pads_columns():
    packed = pack_matrices([Matrix3d()], std140=True)
    assert packed.nbytes == 48
    assert list(packed) == [1, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0]
    packed = pack_matrices([Matrix4x3d().translation(5, 6, 7)], std140=True)
    assert packed.nbytes == 64
    assert list(packed[12:]) == [5, 6, 7, 0]

def test_pack_std140_leaves_mat4_alone():
    m = Matrix4d().rotation_x(0.3)
    assert np.array_equal(pack_matrices([m], std140=True), pack_matrices([m]))

def test_pack_vectors_and_dtype():
    packed = pack_matrices([Vector3d(1, 2, 3)], dtype=np.float64)
    assert packed.dtype == np.float64
    assert list(packed) == [1.0, 2.0, 3.0]

def test_pack_empty():
    packed = pack_matrices([])
    assert packed.size == 0

def test_write_uniform():
    program = {'u_mvp': FakeUniform()}
    m = Matrix4d().perspective(1.0, 1.5, 0.1, 10.0)
    assert write_uniform(program, 'u_mvp', m)
    assert program['u_mvp'].data == m.to_bytes()

def test_write_uniform_missing():
    # inactive uniforms are skipped, not an error
    assert not write_uniform({}, 'u_model', Matrix4d())

def test_write_buffer():
    buf = FakeBuffer(256)
    n = write_buffer(buf, [Matrix4d(), Matrix3d()], offset=64, std140=True)
    assert n == 64 + 48
    data, offset = buf.writes[0]
    assert offset == 64
    assert len(data) == n

def test_write_buffer_overflow():
    buf = FakeBuffer(64)
    with pytest.raises(ValueError):
        write_buffer(buf, [Matrix4d()], offset=16)
    assert buf.writes == []

def test_upload_helpers_import_without_moderngl():
    # moderngl is an optional extra; the helpers only need duck-typed objects
    from linmath.render import uniforms
    assert 'moderngl' not in vars(uniforms)
