"""A cubic chunk of terrain: grass on top, dirt below."""

from __future__ import annotations

from typing import AbstractSet

from voxelkit.blocks import Dirt, Grass
from voxelkit.mesh import Mesh, translation

Position = tuple[int, int, int]

# Neighbour offsets in face order: left, right, bottom, top, back, front.
_NEIGHBOURS = (
    (-1, 0, 0),
    (1, 0, 0),
    (0, -1, 0),
    (0, 1, 0),
    (0, 0, -1),
    (0, 0, 1),
)


def block_positions(chunk_size: int) -> frozenset[Position]:
    """Grid positions filled in a chunk: x and z in [0, size), y in [-size, 0]."""
    return frozenset(
        (x, y, z)
        for x in range(chunk_size)
        for y in range(-chunk_size, 1)
        for z in range(chunk_size)
    )


def visible_faces(positions: AbstractSet[Position], position: Position) -> tuple[bool, ...]:
    """Return which faces of the block at ``position`` have no neighbour."""
    x, y, z = position
    return tuple((x + dx, y + dy, z + dz) not in positions for dx, dy, dz in _NEIGHBOURS)


class Chunk:
    """Builds one mesh per block, hiding faces shared with neighbours."""

    def __init__(self, chunk_size: int, cube_size: float, texture_path: str = "") -> None:
        # Block types choose their own textures; texture_path is not used.
        self.chunk_size = chunk_size
        self.cube_size = cube_size
        self.texture_path = texture_path
        positions = block_positions(chunk_size)
        step = cube_size * 2.0
        self._meshes: list[Mesh] = []
        for x in range(chunk_size):
            for y in range(-chunk_size, 1):
                for z in range(chunk_size):
                    transform = translation((x * step, y * step, z * step))
                    faces = visible_faces(positions, (x, y, z))
                    block_type = Grass if y == 0 else Dirt
                    self._meshes.append(block_type(cube_size, faces, transform).to_mesh())

    def get_meshes(self) -> list[Mesh]:
        """Return the chunk's block meshes."""
        return list(self._meshes)