"""A shader program: its two source files and the uniform values set on it."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np


class ShaderError(RuntimeError):
    """Raised when a shader program cannot be built from its sources."""


class Shader:
    """Vertex and fragment sources plus the uniforms assigned to the program.

    Uniform values are kept by name as they would be uploaded to the GPU:
    booleans and integers as ``int``, floats as ``float``, vectors and
    matrices as float32 arrays.
    """

    def __init__(self, vert_path: str | Path, frag_path: str | Path) -> None:
        self.vertex_source = self._read(vert_path, "VERTEX")
        self.fragment_source = self._read(frag_path, "FRAGMENT")
        self.active = False
        self._uniforms: dict[str, Any] = {}

    @staticmethod
    def _read(path: str | Path, stage: str) -> str:
        try:
            source = Path(path).read_text()
        except OSError as exc:
            raise ShaderError(
                f"ERROR::SHADER::FILE_NOT_SUCCESFULLY_READ: {path}: {exc.strerror}"
            ) from None
        if not source.strip():
            raise ShaderError(f"ERROR::SHADER::{stage}::COMPILATION_FAILED: empty source {path}")
        return source

    def use(self) -> None:
        """Make this program the active one."""
        self.active = True

    def set_bool(self, name: str, value: bool) -> None:
        self._uniforms[name] = int(bool(value))

    def set_int(self, name: str, value: int) -> None:
        self._uniforms[name] = int(value)

    def set_float(self, name: str, value: float) -> None:
        self._uniforms[name] = float(value)

    def set_vec(self, name: str, *args: Any) -> None:
        """Set a vec2, vec3 or vec4 from one sequence or from its components."""
        values = args[0] if len(args) == 1 else args
        vector = np.asarray(values, dtype=np.float32).reshape(-1)
        if not 2 <= len(vector) <= 4:
            raise ValueError(f"a vector uniform needs 2 to 4 components, got {len(vector)}")
        self._uniforms[name] = vector

    def set_mat(self, name: str, matrix: Any) -> None:
        """Set a 2x2, 3x3 or 4x4 matrix uniform."""
        array = np.array(matrix, dtype=np.float32)
        if array.ndim != 2 or array.shape[0] != array.shape[1] or array.shape[0] not in (2, 3, 4):
            raise ValueError(f"a matrix uniform must be 2x2, 3x3 or 4x4, got shape {array.shape}")
        self._uniforms[name] = array

    def uniform(self, name: str) -> Any:
        """Return the value last set for ``name``; KeyError if it was never set."""
        return self._uniforms[name]