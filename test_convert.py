# -*- coding: utf-8 -*-
import numpy as np
import pytest
from objmesh import (
    Config, DataIntegrityError, EncodingError, ObjSyntaxError,
    TangentGenerationError, load_from_data, load_from_obj, load_obj_file, parse,
)
from objmesh.mesh.convert import NORMAL, POSITION, TANGENT, TEX_COORD, convert_geometry
from objmesh.mesh.weld import RawAttributes


def assert_unit_tangents(builder):
    lengths = np.linalg.norm(builder.get(TANGENT)[:, :3], axis=1)
    assert np.allclose(lengths, 1.0, atol=1e-4)

def test_cube(cube_obj):
    result = load_from_obj(cube_obj)
    assert len(result) == 1
    builder, material = result[0]
    assert material is None
    # 4 уникальные комбинации атрибутов на каждую из 6 граней
    assert builder.vertex_count == 24
    assert builder.index_count == 36
    assert builder.attribute_names == [POSITION, NORMAL, TANGENT, TEX_COORD]
    for name, data in builder.attributes:
        assert len(data) == 24
    assert builder.get(TANGENT).shape == (24, 4)
    assert builder.get(TEX_COORD).shape == (24, 2)
    assert builder.indices.dtype == np.uint32
    assert int(builder.indices.max()) < 24
    assert_unit_tangents(builder)

def test_cube_front_face_tangents(cube_obj):
    builder, _ = load_from_obj(cube_obj)[0]
    front = builder.get(NORMAL)[:, 2] == 1.0
    assert front.sum() == 4
    assert np.allclose(builder.get(TANGENT)[front], [[1, 0, 0, 1]] * 4, atol=1e-6)

def test_cube_vertex_order_follows_sorted_keys(cube_obj):
    builder, _ = load_from_obj(cube_obj)[0]
    # первый ключ – (позиция 0, texcoord 0, нормаль 0)
    assert builder.get(POSITION)[0].tolist() == [-1.0, -1.0, 1.0]
    assert builder.get(NORMAL)[0].tolist() == [0.0, 0.0, 1.0]
    assert builder.get(TEX_COORD)[0].tolist() == [0.0, 0.0]

def test_cube_with_accessor_strategy(cube_obj):
    builder, _ = load_from_obj(cube_obj, Config(tangents={"strategy": "accessor"}))[0]
    assert builder.vertex_count == 24
    assert builder.index_count == 36
    assert_unit_tangents(builder)
    direct, _ = load_from_obj(cube_obj)[0]
    assert np.allclose(builder.get(TANGENT), direct.get(TANGENT), atol=1e-5)

def test_deterministic(cube_obj):
    first = load_from_obj(cube_obj)[0][0]
    second = load_from_obj(cube_obj)[0][0]
    for (name, a), (_, b) in zip(first.attributes, second.attributes):
        assert a.tobytes() == b.tobytes(), name
    assert first.indices.tobytes() == second.indices.tobytes()

def test_parallel_matches_sequential(two_materials_obj):
    sequential = load_from_obj(two_materials_obj)
    parallel = load_from_obj(two_materials_obj, Config(workers=4))
    assert [m for _, m in parallel] == ["red", "blue"]
    for (a, _), (b, _) in zip(sequential, parallel):
        assert a.interleaved().tobytes() == b.interleaved().tobytes()
        assert a.indices.tobytes() == b.indices.tobytes()

def test_material_names_pass_through(two_materials_obj):
    result = load_from_obj(two_materials_obj)
    assert [m for _, m in result] == ["red", "blue"]
    assert [b.vertex_count for b, _ in result] == [3, 3]

def test_missing_attributes_use_defaults():
    builder, _ = load_from_obj(b"v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n")[0]
    assert np.array_equal(builder.get(NORMAL), np.zeros((3, 3), dtype=np.float32))
    assert np.array_equal(builder.get(TEX_COORD), np.zeros((3, 2), dtype=np.float32))
    assert builder.get(TANGENT).tolist() == [[1.0, 0.0, 0.0, 1.0]] * 3

def test_non_triangles_contribute_nothing():
    text = b"v 0 0 0\nv 1 0 0\nv 0 1 0\nv 1 1 0\nf 1 2 4 3\nl 1 2\nf 1 2 3\n"
    builder, _ = load_from_obj(text)[0]
    assert builder.index_count == 3
    assert builder.vertex_count == 3

def test_quads_only_give_empty_mesh():
    builder, _ = load_from_obj(b"v 0 0 0\nv 1 0 0\nv 0 1 0\nv 1 1 0\nf 1 2 4 3\n")[0]
    assert builder.vertex_count == 0
    assert builder.index_count == 0

def test_winding_separation(flipped_obj):
    builder, _ = load_from_obj(flipped_obj)[0]
    assert builder.vertex_count == 6
    indices = builder.indices.tolist()
    assert set(indices[:3]).isdisjoint(indices[3:])

def test_winding_separation_can_be_disabled(flipped_obj):
    builder, _ = load_from_obj(flipped_obj, Config(weld={"split_winding": False}))[0]
    assert builder.vertex_count == 3
    assert builder.index_count == 6

def test_degenerate_uv_direct(degenerate_uv_obj):
    builder, _ = load_from_obj(degenerate_uv_obj)[0]
    tangents = builder.get(TANGENT)
    assert np.all(np.isfinite(tangents))
    assert tangents.tolist() == [[1.0, 0.0, 0.0, 1.0]] * 3

def test_degenerate_uv_accessor(degenerate_uv_obj):
    with pytest.raises(TangentGenerationError):
        load_from_obj(degenerate_uv_obj, Config(tangents={"strategy": "accessor"}))

def test_malformed_index(malformed_index_obj):
    with pytest.raises(DataIntegrityError):
        load_from_obj(malformed_index_obj)

def test_malformed_index_in_parallel(two_materials_obj):
    text = two_materials_obj + b"usemtl broken\nf 1 2 999\n"
    with pytest.raises(DataIntegrityError):
        load_from_obj(text, Config(workers=2))

def test_invalid_utf8():
    with pytest.raises(EncodingError):
        load_from_obj(b"v 0 0 0\n\xff\xfe\n")

def test_syntax_error_is_propagated():
    with pytest.raises(ObjSyntaxError) as info:
        load_from_obj(b"v 0 0 0\nv 1 0\n")
    assert info.value.line_number == 2

def test_convert_single_geometry(cube_obj):
    obj_set = parse(cube_obj.decode())
    raw = RawAttributes.from_obj_set(obj_set)
    builder = convert_geometry(obj_set.objects[0].geometry[0], raw)
    assert builder.vertex_count == 24
    assert len(load_from_data(obj_set)) == 1

def test_interleaved_layout(cube_obj):
    builder, _ = load_from_obj(cube_obj)[0]
    # 3 + 3 + 4 + 2 float32
    assert builder.stride == 48
    data = builder.interleaved().reshape(24, 12)
    assert np.array_equal(data[:, 0:3], builder.get(POSITION))
    assert np.array_equal(data[:, 6:10], builder.get(TANGENT))

def test_load_obj_file(tmp_path, cube_obj):
    path = tmp_path / "cube.obj"
    path.write_bytes(cube_obj)
    result = load_obj_file(path)
    assert result[0][0].vertex_count == 24

def test_load_obj_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_obj_file(tmp_path / "nope.obj")
