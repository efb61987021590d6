import numpy as np
import pytest

from mazewalk.shader import ShaderError, ShaderProgram, read_text_file


def test_read_text_file_returns_contents(tmp_path):
    path = tmp_path / "basic.vert"
    path.write_text("void main() {}\n", encoding="utf-8")
    assert read_text_file(path) == "void main() {}\n"


def test_read_text_file_missing_raises(tmp_path):
    with pytest.raises(ShaderError):
        read_text_file(tmp_path / "absent.vert")


def test_empty_program_has_zero_id():
    assert ShaderProgram().id == 0


def test_missing_vertex_source_raises(tmp_path):
    with pytest.raises(ShaderError):
        ShaderProgram(tmp_path / "absent.vert", tmp_path / "absent.frag")


def test_missing_fragment_source_raises(tmp_path):
    vertex = tmp_path / "basic.vert"
    vertex.write_text("void main() {}\n", encoding="utf-8")
    with pytest.raises(ShaderError):
        ShaderProgram(vertex, tmp_path / "absent.frag")


def test_single_path_is_rejected():
    with pytest.raises(ValueError):
        ShaderProgram("shaders/basic.vert")


@pytest.mark.parametrize(
    "value",
    ["text", b"bytes", (1.0, 2.0), [[1.0, 2.0], [3.0, 4.0]], None, np.zeros(5)],
)
def test_unsupported_uniform_values_raise(value):
    with pytest.raises(TypeError):
        ShaderProgram().set_uniform("anything", value)


@pytest.mark.parametrize(
    "value",
    [1, True, 0.5, (0.1, 0.2, 0.3), np.ones(4), np.identity(3), np.identity(4)],
)
def test_missing_uniform_is_reported(capsys, value):
    ShaderProgram().set_uniform("uM_m", value)
    assert "no uniform with name:uM_m" in capsys.readouterr().err