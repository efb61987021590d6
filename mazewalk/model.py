"""Scene models: meshes loaded from OBJ files plus their placement."""

from __future__ import annotations

import os
from typing import Sequence

import numpy as np

from .mesh import TRIANGLES, Mesh, Vertex
from .objloader import ObjMesh, load_obj
from .shader import ShaderProgram
from .texture import load_texture
from .transforms import rotate, scale, translate

__all__ = ["Model", "build_vertices"]

_X_AXIS = (1.0, 0.0, 0.0)
_Y_AXIS = (0.0, 1.0, 0.0)
_Z_AXIS = (0.0, 0.0, 1.0)


def build_vertices(obj: ObjMesh) -> list[Vertex]:
    """Combine the parallel arrays of a loaded OBJ into vertices."""
    return [
        Vertex(position, normal, uv)
        for position, uv, normal in zip(obj.vertices, obj.uvs, obj.normals)
    ]


def _trs(
    origin: Sequence[float], rotation: Sequence[float], factors: Sequence[float]
) -> np.ndarray:
    """Scale, then rotate z, y, x, then translate, all as one product."""
    identity = np.identity(4)
    rx = rotate(identity, rotation[0], _X_AXIS)
    ry = rotate(identity, rotation[1], _Y_AXIS)
    rz = rotate(identity, rotation[2], _Z_AXIS)
    return scale(identity, factors) @ rz @ ry @ rx @ translate(identity, origin)


class Model:
    """A set of meshes with an origin, orientation, scale and local matrix."""

    def __init__(
        self,
        filename: str | os.PathLike | None = None,
        shader: ShaderProgram | None = None,
        texture_path: str | os.PathLike | None = None,
    ) -> None:
        self.meshes: list[Mesh] = []
        self.name = ""
        self.origin = np.zeros(3)
        self.orientation = np.zeros(3)
        self.scale = np.ones(3)
        self.local_model_matrix = np.identity(4)
        self.tex_id = 0
        self.transparent = False

        if filename is None:
            return
        if shader is None:
            raise ValueError("a shader is needed to build a model from a file")

        obj = load_obj(filename)
        texture_id = load_texture(texture_path) if texture_path is not None else 0
        self.meshes.append(
            Mesh(
                TRIANGLES,
                shader,
                build_vertices(obj),
                obj.indices,
                (0.0, 0.0, 0.0),
                (0.0, 0.0, 0.0),
                texture_id,
            )
        )

    def compose_matrix(
        self,
        offset: Sequence[float] = (0.0, 0.0, 0.0),
        rotation: Sequence[float] = (0.0, 0.0, 0.0),
        scale_change: Sequence[float] = (1.0, 1.0, 1.0),
    ) -> np.ndarray:
        """Return the full model matrix for an extra offset, rotation and scale."""
        own = _trs(self.origin, self.orientation, self.scale)
        extra = _trs(offset, rotation, scale_change)
        return self.local_model_matrix @ own @ extra

    def draw(
        self,
        offset: Sequence[float] = (0.0, 0.0, 0.0),
        rotation: Sequence[float] = (0.0, 0.0, 0.0),
        scale_change: Sequence[float] = (1.0, 1.0, 1.0),
    ) -> None:
        """Draw every mesh with the composed model matrix."""
        matrix = self.compose_matrix(offset, rotation, scale_change)
        for mesh in self.meshes:
            mesh.draw(matrix)

    def draw_matrix(self, model_matrix: np.ndarray) -> None:
        """Draw every mesh with the local matrix times ``model_matrix``."""
        matrix = self.local_model_matrix @ np.asarray(model_matrix, dtype=float)
        for mesh in self.meshes:
            mesh.draw(matrix)

    def copy(self) -> Model:
        """Return a model sharing these meshes but with its own placement."""
        other = Model()
        other.meshes = list(self.meshes)
        other.name = self.name
        other.origin = self.origin.copy()
        other.orientation = self.orientation.copy()
        other.scale = self.scale.copy()
        other.local_model_matrix = self.local_model_matrix.copy()
        other.tex_id = self.tex_id
        other.transparent = self.transparent
        return other