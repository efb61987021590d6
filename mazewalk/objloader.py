"""Loader for simple Wavefront OBJ files with indexed, de-duplicated vertices."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

__all__ = ["ObjFormatError", "ObjMesh", "load_obj"]

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]


class ObjFormatError(ValueError):
    """Raised when an OBJ file cannot be read by this simple parser."""


@dataclass
class ObjMesh:
    """Parallel per-vertex arrays plus triangle indices into them."""

    vertices: list[Vec3] = field(default_factory=list)
    uvs: list[Vec2] = field(default_factory=list)
    normals: list[Vec3] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)


def _floats(parts: list[str], count: int, line_no: int) -> tuple[float, ...]:
    if len(parts) < count:
        raise ObjFormatError(f"line {line_no}: expected {count} numbers")
    try:
        return tuple(float(p) for p in parts[:count])
    except ValueError as exc:
        raise ObjFormatError(f"line {line_no}: {exc}") from None


def _corner(token: str, line_no: int) -> tuple[int, int, int]:
    pieces = token.split("/")
    try:
        if len(pieces) != 3:
            raise ValueError
        vi, ti, ni = (int(p) - 1 for p in pieces)
    except ValueError:
        raise ObjFormatError(
            f"line {line_no}: file can't be read by simple parser; "
            "try exporting with other options"
        ) from None
    return vi, ti, ni


def _lookup(items: list, index: int, what: str, line_no: int):
    if not 0 <= index < len(items):
        raise ObjFormatError(f"line {line_no}: {what} index {index + 1} out of range")
    return items[index]


def load_obj(path: str | os.PathLike) -> ObjMesh:
    """Parse the OBJ file at ``path``.

    Only ``v``, ``vt``, ``vn`` and triangular ``f a/b/c`` records are read;
    texture coordinates are stored with their two components swapped.
    """
    positions: list[Vec3] = []
    tex_coords: list[Vec2] = []
    normals: list[Vec3] = []
    seen: dict[tuple[int, int, int], int] = {}
    mesh = ObjMesh()

    with open(path, encoding="utf-8") as handle:
        for line_no, line in enumerate(handle, start=1):
            parts = line.split()
            if not parts:
                continue
            header, args = parts[0], parts[1:]
            if header == "v":
                positions.append(_floats(args, 3, line_no))
            elif header == "vt":
                u, v = _floats(args, 2, line_no)
                tex_coords.append((v, u))
            elif header == "vn":
                normals.append(_floats(args, 3, line_no))
            elif header == "f":
                if len(args) < 3:
                    raise ObjFormatError(
                        f"line {line_no}: file can't be read by simple parser; "
                        "try exporting with other options"
                    )
                for token in args[:3]:
                    key = _corner(token, line_no)
                    index = seen.get(key)
                    if index is None:
                        vi, ti, ni = key
                        position = _lookup(positions, vi, "vertex", line_no)
                        uv = _lookup(tex_coords, ti, "texture", line_no)
                        normal = _lookup(normals, ni, "normal", line_no)
                        index = len(mesh.vertices)
                        seen[key] = index
                        mesh.vertices.append(position)
                        mesh.uvs.append(uv)
                        mesh.normals.append(normal)
                    mesh.indices.append(index)
    return mesh