"""Loading images from disk and uploading them as GL textures."""

from __future__ import annotations

import os

import numpy as np
from PIL import Image

__all__ = ["TextureError", "read_image", "create_texture", "load_texture"]


class TextureError(RuntimeError):
    """Raised when an image cannot be read or turned into a texture."""


def _to_array(image: Image.Image) -> np.ndarray:
    if image.mode in ("RGB", "RGBA"):
        converted = image
    elif image.mode == "L":
        return np.asarray(image, dtype=np.uint8)[:, :, np.newaxis]
    elif image.mode in ("LA", "PA"):
        converted = image.convert("RGBA")
    elif image.mode == "P":
        converted = image.convert("RGBA" if "transparency" in image.info else "RGB")
    else:
        converted = image.convert("RGB")
    return np.asarray(converted, dtype=np.uint8)


def read_image(path: str | os.PathLike) -> np.ndarray:
    """Read ``path`` into a (height, width, channels) uint8 array, keeping alpha."""
    try:
        with Image.open(path) as image:
            image.load()
            array = _to_array(image)
    except OSError as exc:
        raise TextureError(f"No texture in file: {os.fspath(path)}") from exc
    if array.size == 0:
        raise TextureError(f"No texture in file: {os.fspath(path)}")
    return array


def create_texture(image: np.ndarray) -> int:
    """Upload an RGB or RGBA image as a mipmapped, repeating 2D texture; return its id."""
    array = np.asarray(image)
    if array.size == 0:
        raise TextureError("Image empty?")
    channels = 1 if array.ndim == 2 else array.shape[2]
    if array.ndim not in (2, 3) or channels not in (3, 4):
        raise TextureError(f"unsupported channel cnt. in texture:{channels}")

    from pyglet import gl

    height, width = array.shape[:2]
    data = np.ascontiguousarray(array, dtype=np.uint8)
    if channels == 3:
        internal, pixel_format = gl.GL_RGB8, gl.GL_RGB
    else:
        internal, pixel_format = gl.GL_RGBA8, gl.GL_RGBA

    names = (gl.GLuint * 1)()
    gl.glCreateTextures(gl.GL_TEXTURE_2D, 1, names)
    texture = int(names[0])
    gl.glTextureStorage2D(texture, 1, internal, width, height)
    gl.glPixelStorei(gl.GL_UNPACK_ALIGNMENT, 1)
    gl.glTextureSubImage2D(
        texture,
        0,
        0,
        0,
        width,
        height,
        pixel_format,
        gl.GL_UNSIGNED_BYTE,
        data.ctypes.data,
    )

    gl.glTextureParameteri(texture, gl.GL_TEXTURE_MAG_FILTER, gl.GL_LINEAR)
    gl.glTextureParameteri(texture, gl.GL_TEXTURE_MIN_FILTER, gl.GL_LINEAR_MIPMAP_LINEAR)
    gl.glGenerateTextureMipmap(texture)
    gl.glTextureParameteri(texture, gl.GL_TEXTURE_WRAP_S, gl.GL_REPEAT)
    gl.glTextureParameteri(texture, gl.GL_TEXTURE_WRAP_T, gl.GL_REPEAT)
    return texture


def load_texture(path: str | os.PathLike) -> int:
    """Read the image at ``path`` and upload it as a texture."""
    return create_texture(read_image(path))