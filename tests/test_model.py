import numpy as np
import pytest

from mazewalk.model import Model, build_vertices
from mazewalk.objloader import ObjFormatError, ObjMesh
from mazewalk.shader import ShaderProgram
from mazewalk.transforms import translate

OBJ_TEXT = """\
v 0 0 0
v 1 0 0
v 0 1 0
vt 0.1 0.2
vn 0 0 1
f 1/1/1 2/1/1 3/1/1
"""


def _obj_file(tmp_path, text=OBJ_TEXT):
    path = tmp_path / "tri.obj"
    path.write_text(text, encoding="utf-8")
    return path


def test_build_vertices_pairs_arrays():
    obj = ObjMesh(
        vertices=[(1.0, 2.0, 3.0)],
        uvs=[(0.5, 0.25)],
        normals=[(0.0, 1.0, 0.0)],
        indices=[0],
    )
    (vertex,) = build_vertices(obj)
    assert vertex.position == (1.0, 2.0, 3.0)
    assert vertex.normal == (0.0, 1.0, 0.0)
    assert vertex.tex_coords == (0.5, 0.25)


def test_model_from_file_has_one_mesh(tmp_path):
    model = Model(_obj_file(tmp_path), ShaderProgram())
    assert len(model.meshes) == 1
    mesh = model.meshes[0]
    assert mesh.indices == [0, 1, 2]
    assert [v.position for v in mesh.vertices] == [
        (0.0, 0.0, 0.0),
        (1.0, 0.0, 0.0),
        (0.0, 1.0, 0.0),
    ]
    assert mesh.texture_id == 0


def test_model_from_file_needs_shader(tmp_path):
    with pytest.raises(ValueError):
        Model(_obj_file(tmp_path))


def test_bad_obj_propagates(tmp_path):
    path = _obj_file(tmp_path, "v 0 0 0\nf 1 1 1\n")
    with pytest.raises(ObjFormatError):
        Model(path, ShaderProgram())


def test_empty_model_composes_identity():
    model = Model()
    assert model.meshes == []
    assert np.allclose(model.compose_matrix(), np.identity(4))


def test_origin_becomes_translation():
    model = Model()
    model.origin = np.array([1.5, -2.0, 3.0])
    assert np.allclose(model.compose_matrix()[:3, 3], [1.5, -2.0, 3.0])


def test_offset_becomes_translation():
    assert np.allclose(Model().compose_matrix(offset=(4.0, 0.5, -1.0))[:3, 3], [4.0, 0.5, -1.0])


def test_local_matrix_multiplies_on_the_left():
    model = Model()
    model.origin = np.array([1.0, 2.0, 3.0])
    model.orientation = np.array([0.3, 0.2, 0.1])
    base = model.compose_matrix(offset=(0.5, 0.0, 0.0))
    local = translate(np.identity(4), (7.0, 8.0, 9.0))
    model.local_model_matrix = local
    assert np.allclose(model.compose_matrix(offset=(0.5, 0.0, 0.0)), local @ base)


def test_copy_shares_meshes_but_not_placement(tmp_path):
    model = Model(_obj_file(tmp_path), ShaderProgram())
    model.transparent = True
    twin = model.copy()
    twin.origin[0] = 10.0
    assert twin.meshes[0] is model.meshes[0]
    assert model.origin[0] == 0.0
    assert twin.transparent is True


def test_draw_reports_cleared_meshes(tmp_path, capsys):
    model = Model(_obj_file(tmp_path), ShaderProgram())
    model.meshes[0].clear()
    model.draw()
    model.draw_matrix(np.identity(4))
    assert capsys.readouterr().err.count("VAO not initialized!") == 2