"""Terrain blocks: a cube with a fixed texture."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from voxelkit.cube import ALL_FACES, Cube
from voxelkit.mesh import Mesh, identity

GRASS_TEXTURE = "assets/textures/grass_block.png"
DIRT_TEXTURE = "assets/textures/dirt_block.png"


class Block:
    """A single block; its mesh is built on construction."""

    def __init__(
        self,
        cube_size: int,
        texture_path: str,
        visible_faces: Sequence[bool] = ALL_FACES,
        transform: np.ndarray | None = None,
    ) -> None:
        # Block sizes are whole numbers; fractional sizes are truncated.
        self.cube_size = int(cube_size)
        self.texture_path = texture_path
        self.visible_faces = tuple(bool(flag) for flag in visible_faces)
        self.transform = identity() if transform is None else np.array(transform, dtype=np.float32)
        self.meshes: list[Mesh] = []
        self.render_mesh()

    def render_mesh(self) -> None:
        """Rebuild the block's mesh list."""
        cube = Cube(self.cube_size, self.transform, self.texture_path, self.visible_faces)
        self.meshes = [cube.to_mesh()]

    def to_mesh(self) -> Mesh:
        """Return the block's mesh."""
        if not self.meshes:
            raise RuntimeError("No mesh available")
        return self.meshes[0]


class Grass(Block):
    """A grass-topped block."""

    def __init__(
        self,
        cube_size: int = 1,
        visible_faces: Sequence[bool] = ALL_FACES,
        transform: np.ndarray | None = None,
    ) -> None:
        super().__init__(cube_size, GRASS_TEXTURE, visible_faces, transform)


class Dirt(Block):
    """A plain dirt block."""

    def __init__(
        self,
        cube_size: int = 1,
        visible_faces: Sequence[bool] = ALL_FACES,
        transform: np.ndarray | None = None,
    ) -> None:
        super().__init__(cube_size, DIRT_TEXTURE, visible_faces, transform)