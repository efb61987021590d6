"""Indexed triangle meshes held in GL vertex and element buffers."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from .shader import ShaderProgram

__all__ = ["POINTS", "TRIANGLES", "Vertex", "Mesh", "pack_vertices"]

POINTS = 0x0000
TRIANGLES = 0x0004

_FLOATS_PER_VERTEX = 8
_FLOAT_SIZE = 4


@dataclass
class Vertex:
    """One mesh vertex: position, normal and texture coordinates."""

    position: tuple[float, float, float]
    normal: tuple[float, float, float]
    tex_coords: tuple[float, float]


def pack_vertices(vertices: Iterable[Vertex]) -> np.ndarray:
    """Interleave vertices into an (n, 8) float32 array: position, normal, uv."""
    rows = [(*v.position, *v.normal, *v.tex_coords) for v in vertices]
    return np.array(rows, dtype=np.float32).reshape(-1, _FLOATS_PER_VERTEX)


class Mesh:
    """Vertex and index data drawn with one shader and an optional texture.

    GL buffers are created on the first draw; after :meth:`clear` the mesh
    can no longer be drawn.
    """

    def __init__(
        self,
        primitive_type: int,
        shader: ShaderProgram,
        vertices: Iterable[Vertex],
        indices: Iterable[int],
        origin: Sequence[float] = (0.0, 0.0, 0.0),
        orientation: Sequence[float] = (0.0, 0.0, 0.0),
        texture_id: int = 0,
    ) -> None:
        self.primitive_type = primitive_type
        self.shader = shader
        self.vertices = list(vertices)
        self.indices = [int(i) for i in indices]
        self.origin = np.array(origin, dtype=float)
        self.orientation = np.array(orientation, dtype=float)
        self.texture_id = texture_id

        self.ambient_material = np.ones(4)
        self.diffuse_material = np.ones(4)
        self.specular_material = np.ones(4)
        self.reflectivity = 1.0

        self._vao = 0
        self._vbo = 0
        self._ebo = 0
        self._released = False

    def _upload(self, gl) -> None:
        data = pack_vertices(self.vertices)
        indices = np.asarray(self.indices, dtype=np.uint32)

        vao = (gl.GLuint * 1)()
        buffers = (gl.GLuint * 2)()
        gl.glGenVertexArrays(1, vao)
        gl.glGenBuffers(2, buffers)
        vbo, ebo = int(buffers[0]), int(buffers[1])
        gl.glBindVertexArray(vao[0])

        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, vbo)
        gl.glBufferData(
            gl.GL_ARRAY_BUFFER, data.nbytes, data.ctypes.data, gl.GL_STATIC_DRAW
        )
        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, ebo)
        gl.glBufferData(
            gl.GL_ELEMENT_ARRAY_BUFFER,
            indices.nbytes,
            indices.ctypes.data,
            gl.GL_STATIC_DRAW,
        )

        stride = _FLOATS_PER_VERTEX * _FLOAT_SIZE
        for location, size, offset in ((0, 3, 0), (1, 3, 3), (2, 2, 6)):
            gl.glEnableVertexAttribArray(location)
            gl.glVertexAttribPointer(
                location,
                size,
                gl.GL_FLOAT,
                gl.GL_FALSE,
                stride,
                offset * _FLOAT_SIZE,
            )
        gl.glBindVertexArray(0)
        self._vao, self._vbo, self._ebo = int(vao[0]), vbo, ebo

    def draw(self, model_matrix: np.ndarray) -> None:
        """Draw the mesh with ``model_matrix`` as its model transform."""
        if self._released:
            print("VAO not initialized!", file=sys.stderr)
            return

        from pyglet import gl

        if self._vao == 0:
            self._upload(gl)

        self.shader.activate()
        self.shader.set_uniform("uM_m", np.asarray(model_matrix, dtype=float))
        self.shader.set_uniform("matAmbient", (0.1, 0.1, 0.1))
        self.shader.set_uniform("matSpecular", (0.8, 0.8, 0.8))
        self.shader.set_uniform("matShininess", 32.0)

        if self.texture_id > 0:
            gl.glActiveTexture(gl.GL_TEXTURE0)
            gl.glBindTexture(gl.GL_TEXTURE_2D, self.texture_id)
            self.shader.set_uniform("tex0", 0)

        gl.glBindVertexArray(self._vao)
        gl.glDrawElements(
            self.primitive_type, len(self.indices), gl.GL_UNSIGNED_INT, None
        )
        gl.glBindVertexArray(0)

    def clear(self) -> None:
        """Release the texture and buffers and drop all geometry."""
        if self.texture_id or self._vao:
            from pyglet import gl

            if self.texture_id:
                gl.glDeleteTextures(1, (gl.GLuint * 1)(self.texture_id))
            if self._vao:
                gl.glDeleteBuffers(2, (gl.GLuint * 2)(self._vbo, self._ebo))
                gl.glDeleteVertexArrays(1, (gl.GLuint * 1)(self._vao))
        self.texture_id = 0
        self.primitive_type = POINTS
        self.vertices.clear()
        self.indices.clear()
        self._vao = self._vbo = self._ebo = 0
        self._released = True