"""CPU-side mesh data: interleaved vertices, indices, transform and texture."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Sequence

import numpy as np

FLOATS_PER_VERTEX = 5
"""Each vertex is x, y, z followed by the texture coordinates u, v."""


class IndexType(IntEnum):
    """Element type of an index buffer, using the OpenGL enum values."""

    UNSIGNED_SHORT = 0x1403
    UNSIGNED_INT = 0x1405

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(np.uint16 if self is IndexType.UNSIGNED_SHORT else np.uint32)


def identity() -> np.ndarray:
    """Return a 4x4 identity transform."""
    return np.eye(4, dtype=np.float32)


def translation(offset: Sequence[float]) -> np.ndarray:
    """Return a 4x4 transform that moves points by ``offset``."""
    x, y, z = offset
    matrix = identity()
    matrix[:3, 3] = (x, y, z)
    return matrix


def _empty_vertices() -> np.ndarray:
    return np.zeros((0, FLOATS_PER_VERTEX), dtype=np.float32)


def _empty_indices() -> np.ndarray:
    return np.zeros(0, dtype=np.uint32)


@dataclass
class Mesh:
    """A drawable triangle mesh.

    ``vertices`` holds one row of position and texture coordinates per vertex;
    ``texture`` is whatever the renderer uses to find the texture (a file path,
    decoded image data) or None for an untextured mesh.
    """

    vertices: np.ndarray = field(default_factory=_empty_vertices)
    indices: np.ndarray = field(default_factory=_empty_indices)
    transform: np.ndarray = field(default_factory=identity)
    texture: Any = None
    index_type: IndexType = IndexType.UNSIGNED_INT
    transparent: bool = False

    def __post_init__(self) -> None:
        self.index_type = IndexType(self.index_type)
        self.vertices = np.asarray(self.vertices, dtype=np.float32).reshape(
            -1, FLOATS_PER_VERTEX
        )
        self.indices = np.asarray(self.indices, dtype=self.index_type.dtype).reshape(-1)
        self.transform = np.array(self.transform, dtype=np.float32)
        if self.transform.shape != (4, 4):
            raise ValueError(f"transform must be 4x4, got shape {self.transform.shape}")

    @property
    def index_count(self) -> int:
        """Number of indices to draw."""
        return len(self.indices)

    def vertex_count(self) -> int:
        """Number of vertices in the mesh."""
        return len(self.vertices)