"""Geometry for a textured cube whose faces can be hidden one by one."""

from __future__ import annotations

from enum import IntEnum
from typing import Sequence

import numpy as np

from voxelkit.mesh import IndexType, Mesh, identity

ATLAS_WIDTH = 192.0
FACE_WIDTH = 32.0

ALL_FACES = (True, True, True, True, True, True)


class Face(IntEnum):
    """Cube faces in the order used for visibility flags and atlas slots."""

    LEFT = 0
    RIGHT = 1
    BOTTOM = 2
    TOP = 3
    FRONT = 4
    BACK = 5


_FACE_CORNERS = {
    Face.LEFT: ((-1, -1, -1), (-1, -1, 1), (-1, 1, 1), (-1, 1, -1)),
    Face.RIGHT: ((1, -1, -1), (1, -1, 1), (1, 1, 1), (1, 1, -1)),
    Face.BOTTOM: ((-1, -1, -1), (1, -1, -1), (1, -1, 1), (-1, -1, 1)),
    Face.TOP: ((-1, 1, -1), (1, 1, -1), (1, 1, 1), (-1, 1, 1)),
    Face.FRONT: ((-1, -1, -1), (1, -1, -1), (1, 1, -1), (-1, 1, -1)),
    Face.BACK: ((-1, -1, 1), (1, -1, 1), (1, 1, 1), (-1, 1, 1)),
}

_QUAD_INDICES = (0, 1, 2, 2, 3, 0)


def _face_uvs(face: Face) -> tuple[tuple[float, float], ...]:
    u0 = face * FACE_WIDTH / ATLAS_WIDTH
    u1 = (face + 1) * FACE_WIDTH / ATLAS_WIDTH
    v0, v1 = 0.0, 1.0
    return (u0, v1), (u1, v1), (u1, v0), (u0, v0)


def build_cube_geometry(
    size: float, face_visibility: Sequence[bool] = ALL_FACES
) -> tuple[np.ndarray, np.ndarray]:
    """Return (vertices, indices) for the visible faces of a cube.

    The cube spans ``-size`` to ``size`` on each axis. Each face samples its
    own slot of a horizontal texture atlas holding six faces.
    """
    if len(face_visibility) != len(Face):
        raise ValueError(f"expected {len(Face)} face flags, got {len(face_visibility)}")

    vertices: list[tuple[float, ...]] = []
    indices: list[int] = []
    for face, visible in zip(Face, face_visibility):
        if not visible:
            continue
        base = len(vertices)
        for (x, y, z), (u, v) in zip(_FACE_CORNERS[face], _face_uvs(face)):
            vertices.append((x * size, y * size, z * size, u, v))
        indices.extend(base + i for i in _QUAD_INDICES)

    return (
        np.array(vertices, dtype=np.float32).reshape(-1, 5),
        np.array(indices, dtype=np.uint32),
    )


class Cube:
    """A cube mesh built once at construction time."""

    def __init__(
        self,
        size: float = 1.0,
        transform: np.ndarray | None = None,
        texture_path: str = "",
        face_visibility: Sequence[bool] = ALL_FACES,
    ) -> None:
        self.size = float(size)
        self.transform = identity() if transform is None else np.array(transform, dtype=np.float32)
        self.texture_path = texture_path
        self.face_visibility = tuple(bool(flag) for flag in face_visibility)
        vertices, indices = build_cube_geometry(self.size, self.face_visibility)
        self._mesh = Mesh(
            vertices=vertices,
            indices=indices,
            transform=self.transform,
            texture=texture_path or None,
            index_type=IndexType.UNSIGNED_INT,
            transparent=False,
        )

    def set_transform(self, transform: np.ndarray) -> None:
        """Replace the cube's transform; the already built mesh keeps its own."""
        self.transform = np.array(transform, dtype=np.float32)

    def to_mesh(self) -> Mesh:
        """Return the mesh built for this cube."""
        return self._mesh