import pytest

from mazewalk.objloader import ObjFormatError, load_obj

QUAD = """\
# a unit quad
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
vt 0 0
vt 1 0
vt 1 1
vt 0.25 0.75
vn 0 0 1
f 1/1/1 2/2/1 3/3/1
f 1/1/1 3/3/1 4/4/1
"""


def _write(tmp_path, text):
    path = tmp_path / "model.obj"
    path.write_text(text, encoding="utf-8")
    return path


def test_shared_corners_are_deduplicated(tmp_path):
    mesh = load_obj(_write(tmp_path, QUAD))
    assert len(mesh.vertices) == 4
    assert len(mesh.indices) == 6
    assert mesh.indices[0] == mesh.indices[3]
    assert mesh.indices[2] == mesh.indices[4]


def test_arrays_are_parallel(tmp_path):
    mesh = load_obj(_write(tmp_path, QUAD))
    assert len(mesh.vertices) == len(mesh.uvs) == len(mesh.normals)
    assert all(0 <= i < len(mesh.vertices) for i in mesh.indices)


def test_positions_and_normals_preserved(tmp_path):
    mesh = load_obj(_write(tmp_path, QUAD))
    assert set(mesh.vertices) == {(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)}
    assert all(n == (0.0, 0.0, 1.0) for n in mesh.normals)


def test_texture_coordinates_swapped(tmp_path):
    mesh = load_obj(_write(tmp_path, QUAD))
    corner = mesh.vertices.index((0.0, 1.0, 0.0))
    assert mesh.uvs[corner] == (0.75, 0.25)


def test_empty_file_gives_empty_mesh(tmp_path):
    mesh = load_obj(_write(tmp_path, ""))
    assert (mesh.vertices, mesh.indices) == ([], [])


def test_face_without_uv_rejected(tmp_path):
    text = "v 0 0 0\nv 1 0 0\nv 0 1 0\nvn 0 0 1\nf 1//1 2//1 3//1\n"
    with pytest.raises(ObjFormatError):
        load_obj(_write(tmp_path, text))


def test_index_out_of_range_rejected(tmp_path):
    text = "v 0 0 0\nvt 0 0\nvn 0 0 1\nf 1/1/1 2/1/1 1/1/1\n"
    with pytest.raises(ObjFormatError):
        load_obj(_write(tmp_path, text))


def test_bad_number_rejected(tmp_path):
    with pytest.raises(ObjFormatError):
        load_obj(_write(tmp_path, "v 0 zero 0\n"))


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_obj(tmp_path / "absent.obj")