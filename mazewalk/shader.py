"""GLSL shader programs: compiling, linking and setting uniforms."""

from __future__ import annotations

import os
import sys
from numbers import Integral, Real
from typing import Any

import numpy as np

from . import logger

__all__ = ["ShaderError", "ShaderProgram", "read_text_file"]


class ShaderError(RuntimeError):
    """Raised when a shader source cannot be read, compiled or linked."""


def read_text_file(path: str | os.PathLike) -> str:
    """Return the whole text of the file at ``path``."""
    try:
        with open(path, encoding="utf-8") as handle:
            return handle.read()
    except OSError as exc:
        raise ShaderError(f"Error opening file: {os.fspath(path)}") from exc


def _classify(value: Any) -> tuple[str, Any]:
    """Work out which uniform setter fits ``value`` and the data to pass it."""
    if isinstance(value, (bool, np.bool_, Integral)):
        return "int", int(value)
    if isinstance(value, Real):
        return "float", float(value)
    if isinstance(value, (str, bytes, bytearray)):
        raise TypeError(f"unsupported uniform value: {value!r}")
    try:
        arr = np.asarray(value, dtype=np.float32)
    except (TypeError, ValueError):
        raise TypeError(f"unsupported uniform value: {value!r}") from None
    kinds = {(3,): "vec3", (4,): "vec4", (3, 3): "mat3", (4, 4): "mat4"}
    kind = kinds.get(arr.shape)
    if kind is None:
        raise TypeError(f"unsupported uniform shape: {arr.shape}")
    if kind.startswith("mat"):
        # GL expects column-major storage.
        arr = np.ascontiguousarray(arr.T)
    else:
        arr = np.ascontiguousarray(arr)
    return kind, arr


def _uniform_data(kind: str, data: Any) -> Any:
    if kind in ("int", "float"):
        return data
    return tuple(float(x) for x in np.ravel(data))


class ShaderProgram:
    """A linked vertex + fragment shader program.

    Created without paths it is an empty program with id 0.
    """

    def __init__(
        self,
        vertex_path: str | os.PathLike | None = None,
        fragment_path: str | os.PathLike | None = None,
    ) -> None:
        self._program: Any = None
        if vertex_path is None and fragment_path is None:
            return
        if vertex_path is None or fragment_path is None:
            raise ValueError("both a vertex and a fragment shader are needed")

        vertex_source = read_text_file(vertex_path)
        fragment_source = read_text_file(fragment_path)

        from pyglet.graphics.shader import Shader, ShaderException
        from pyglet.graphics.shader import ShaderProgram as _GLProgram

        shaders = []
        try:
            for source, path, stage in (
                (vertex_source, vertex_path, "vertex"),
                (fragment_source, fragment_path, "fragment"),
            ):
                try:
                    shaders.append(Shader(source, stage))
                except ShaderException as exc:
                    logger.error(
                        f"Shader compilation failed for {os.fspath(path)}:\n{exc}"
                    )
                    raise ShaderError("Shader compile err.") from exc
            try:
                self._program = _GLProgram(*shaders)
            except ShaderException as exc:
                print(exc, file=sys.stderr)
                raise ShaderError("Link err.") from exc
        finally:
            for shader in shaders:
                shader.delete()

    @property
    def id(self) -> int:
        """GL name of the program, 0 when empty."""
        return 0 if self._program is None else self._program.id

    def activate(self) -> None:
        """Make this program the current one."""
        if self._program is not None:
            self._program.use()
        else:
            from pyglet import gl

            gl.glUseProgram(0)

    def deactivate(self) -> None:
        """Unbind any current program."""
        from pyglet import gl

        gl.glUseProgram(0)

    def clear(self) -> None:
        """Release the program; it becomes empty."""
        self.deactivate()
        if self._program is not None:
            self._program.delete()
        self._program = None

    def set_uniform(self, name: str, value: Any) -> None:
        """Set uniform ``name`` from an int, float, 3/4-vector or 3x3/4x4 matrix.

        A uniform missing from the program is reported on stderr and skipped.
        """
        kind, data = _classify(value)
        if self._program is None:
            print(f"no uniform with name:{name}", file=sys.stderr)
            return

        from pyglet.graphics.shader import ShaderException

        try:
            self._program[name] = _uniform_data(kind, data)
        except (ShaderException, KeyError):
            print(f"no uniform with name:{name}", file=sys.stderr)