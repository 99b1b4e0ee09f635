"""Draw ordering and camera matrices for a list of meshes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from voxelkit.camera import Camera
from voxelkit.mesh import Mesh
from voxelkit.shader import Shader

FOV_DEGREES = 45.0
NEAR_PLANE = 0.1
FAR_PLANE = 100.0
TEXTURE_UNIT = 0


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection to clip space in [-1, 1]; ``fovy`` in radians."""
    if aspect == 0 or not math.isfinite(aspect):
        raise ValueError(f"invalid aspect ratio {aspect}")
    if near == far:
        raise ValueError("near and far planes must differ")
    tan_half = math.tan(fovy / 2.0)
    matrix = np.zeros((4, 4))
    matrix[0, 0] = 1.0 / (aspect * tan_half)
    matrix[1, 1] = 1.0 / tan_half
    matrix[2, 2] = -(far + near) / (far - near)
    matrix[3, 2] = -1.0
    matrix[2, 3] = -(2.0 * far * near) / (far - near)
    return matrix


def _projection(width: int, height: int) -> np.ndarray:
    if height == 0:
        raise ValueError("viewport height must not be zero")
    return perspective(math.radians(FOV_DEGREES), width / height, NEAR_PLANE, FAR_PLANE)


@dataclass(frozen=True)
class DrawCall:
    """One mesh drawn with the matrices in effect and the depth-write state."""

    mesh: Mesh
    model: np.ndarray
    view: np.ndarray
    projection: np.ndarray
    texture_unit: int
    depth_write: bool


class Renderer:
    """Sets the shader's matrices and orders meshes for drawing."""

    def __init__(self, shader: Shader, camera: Camera, width: int, height: int) -> None:
        self.shader = shader
        self.camera = camera
        self.width = width
        self.height = height
        self.projection = _projection(width, height)

    def _begin(self) -> np.ndarray:
        view = self.camera.view_matrix()
        self.shader.use()
        self.shader.set_mat("view", view)
        self.shader.set_mat("projection", self.projection)
        return view

    def _draw(self, mesh: Mesh, view: np.ndarray, depth_write: bool) -> DrawCall:
        self.shader.set_mat("model", mesh.transform)
        self.shader.set_int("texture1", TEXTURE_UNIT)
        return DrawCall(mesh, mesh.transform, view, self.projection, TEXTURE_UNIT, depth_write)

    def render(self, meshes: Mesh | Iterable[Mesh]) -> list[DrawCall]:
        """Draw one mesh, or a list with opaque meshes first and transparent ones
        after them with depth writes off. Returns the draws in order."""
        view = self._begin()
        if isinstance(meshes, Mesh):
            return [self._draw(meshes, view, True)]
        meshes = list(meshes)
        calls = [self._draw(m, view, True) for m in meshes if not m.transparent]
        calls += [self._draw(m, view, False) for m in meshes if m.transparent]
        return calls

    def handle_resize(self, width: int, height: int) -> None:
        """Rebuild the projection for a new viewport size."""
        self.projection = _projection(width, height)
        self.width = width
        self.height = height