import json
import math

import numpy as np
import pytest

from mazewalk.app import App
from mazewalk.model import Model


@pytest.fixture
def app(tmp_path):
    return App(tmp_path / "missing.json")


def test_constructor_builds_maze_grid_and_camera(app):
    assert (app.grid.width, app.grid.height) == (33, 33)
    assert np.allclose(app.camera.position, [0.0, 0.0, 2.0])
    assert app.scene == {}
    assert app.window is None


def test_missing_config_keeps_defaults(app, tmp_path):
    assert app.state.vsync is True
    assert (app.win_width, app.win_height) == (800, 600)


def test_config_file_is_applied(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"free_cam": True, "window_width": 1024, "flashlight": True}),
        encoding="utf-8",
    )
    app = App(path)
    assert app.state.free_cam is True
    assert app.state.flashlight_on is True
    assert app.win_width == 1024
    assert app.state.vsync is False


def test_add_to_scene_stores_copy(app):
    model = Model()
    model.origin = np.array([1.0, 2.0, 3.0])
    app.add_to_scene("box", model)
    model.origin[0] = 99.0
    stored = app.find_in_scene("box")
    assert stored is not model
    assert np.allclose(stored.origin, [1.0, 2.0, 3.0])


def test_add_to_scene_replaces_existing(app):
    first, second = Model(), Model()
    second.transparent = True
    app.add_to_scene("item", first)
    app.add_to_scene("item", second)
    assert len(app.scene) == 1
    assert app.find_in_scene("item").transparent is True


def test_add_none_reports_error(app, capsys):
    app.add_to_scene("nothing", None)
    assert "nothing" not in app.scene
    assert "Attempting to add a null model to the scene." in capsys.readouterr().out


def test_find_missing_model_reports_error(app, capsys):
    assert app.find_in_scene("ghost") is None
    assert "Model not found: ghost" in capsys.readouterr().out


def test_update_projection_matches_aspect(app):
    app.width, app.height = 800, 400
    proj = app.update_projection()
    assert proj[3, 2] == pytest.approx(-1.0)
    assert proj[1, 1] / proj[0, 0] == pytest.approx(2.0)
    assert proj[1, 1] == pytest.approx(1.0 / math.tan(math.radians(app.state.fov) / 2.0))
    assert np.array_equal(app.projection, proj)


def test_update_projection_clamps_zero_height(app):
    app.width, app.height = 640, 0
    proj = app.update_projection()
    assert app.height == 1
    assert np.all(np.isfinite(proj))


def test_projection_follows_fov_changes(app):
    app.width, app.height = 100, 100
    wide = app.update_projection()[1, 1]
    app.state.apply_scroll(-20.0)
    narrow_fov = app.update_projection()[1, 1]
    assert narrow_fov < wide


def test_toggle_vsync_without_window(app, capsys):
    app.toggle_vsync()
    assert app.state.vsync is False
    assert "VSync: OFF" in capsys.readouterr().out
    app.toggle_vsync()
    assert app.state.vsync is True


def test_toggle_fullscreen_needs_window(app):
    with pytest.raises(RuntimeError):
        app.toggle_fullscreen()
    assert app.state.fullscreen is False


def test_run_without_init_fails(app, capsys):
    assert app.run() == 1
    assert "App failed : " in capsys.readouterr().out


def test_close_without_window_is_harmless(app):
    app.close()
    app.close()
    assert app.window is None
    assert app.shader.id == 0