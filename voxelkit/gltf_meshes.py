"""Turn the node tree of a glTF model into drawable meshes."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np

from voxelkit.gltf import (
    COMPONENT_TYPE_FLOAT,
    COMPONENT_TYPE_UNSIGNED_BYTE,
    COMPONENT_TYPE_UNSIGNED_INT,
    COMPONENT_TYPE_UNSIGNED_SHORT,
    GltfError,
    Model,
    Node,
    Primitive,
    load_ascii,
)
from voxelkit.mesh import IndexType, Mesh, translation

_DTYPES = {
    COMPONENT_TYPE_UNSIGNED_BYTE: np.dtype("<u1"),
    COMPONENT_TYPE_UNSIGNED_SHORT: np.dtype("<u2"),
    COMPONENT_TYPE_UNSIGNED_INT: np.dtype("<u4"),
    COMPONENT_TYPE_FLOAT: np.dtype("<f4"),
}
_INDEX_TYPES = (COMPONENT_TYPE_UNSIGNED_BYTE, COMPONENT_TYPE_UNSIGNED_SHORT, COMPONENT_TYPE_UNSIGNED_INT)


def _read_accessor(
    model: Model, index: int, components: int, what: str, allowed: Sequence[int]
) -> np.ndarray:
    if not 0 <= index < len(model.accessors):
        raise GltfError(f"{what} accessor {index} out of range")
    accessor = model.accessors[index]
    if accessor.component_type not in allowed:
        raise GltfError(f"unsupported component type {accessor.component_type} for {what}")
    if not 0 <= accessor.buffer_view < len(model.buffer_views):
        raise GltfError(f"{what} accessor has no valid bufferView")
    view = model.buffer_views[accessor.buffer_view]
    if not 0 <= view.buffer < len(model.buffers):
        raise GltfError(f"{what} bufferView refers to missing buffer {view.buffer}")
    data = model.buffers[view.buffer].data
    dtype = _DTYPES[accessor.component_type]
    element = dtype.itemsize * components
    stride = view.byte_stride or element
    start = view.byte_offset + accessor.byte_offset
    if accessor.count == 0:
        return np.zeros((0, components), dtype=dtype)
    if start + (accessor.count - 1) * stride + element > len(data):
        raise GltfError(f"{what} accessor data out of bounds")
    array = np.ndarray(
        (accessor.count, components),
        dtype=dtype,
        buffer=data,
        offset=start,
        strides=(stride, dtype.itemsize),
    )
    return array.copy()


def _quaternion_matrix(x: float, y: float, z: float, w: float) -> np.ndarray:
    matrix = np.eye(4)
    matrix[:3, :3] = (
        (1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)),
        (2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)),
        (2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)),
    )
    return matrix


def node_transform(node: Node, parent_transform: np.ndarray) -> np.ndarray:
    """Combine a node's matrix or translation and rotation, then its scale, with the parent's."""
    transform = np.array(parent_transform, dtype=np.float64)
    if node.matrix:
        # glTF stores matrices column by column.
        transform = transform @ np.array(node.matrix, dtype=np.float64).reshape(4, 4).T
    else:
        if node.translation:
            transform = transform @ translation(node.translation[:3]).astype(np.float64)
        if node.rotation:
            transform = transform @ _quaternion_matrix(*node.rotation[:4])
    if node.scale:
        transform = transform @ np.diag([*node.scale[:3], 1.0])
    return transform


def primitive_vertices(model: Model, primitive: Primitive) -> np.ndarray:
    """Interleave positions with TEXCOORD_0 (zeros when absent) as rows of five floats."""
    if "POSITION" not in primitive.attributes:
        raise GltfError("primitive has no POSITION attribute")
    positions = _read_accessor(
        model, primitive.attributes["POSITION"], 3, "POSITION", (COMPONENT_TYPE_FLOAT,)
    )
    if "TEXCOORD_0" in primitive.attributes:
        uvs = _read_accessor(
            model, primitive.attributes["TEXCOORD_0"], 2, "TEXCOORD_0", (COMPONENT_TYPE_FLOAT,)
        )
        if len(uvs) < len(positions):
            raise GltfError("TEXCOORD_0 has fewer elements than POSITION")
        uvs = uvs[: len(positions)]
    else:
        uvs = np.zeros((len(positions), 2), dtype=np.float32)
    return np.hstack([positions, uvs]).astype(np.float32)


def primitive_indices(model: Model, primitive: Primitive) -> np.ndarray:
    """Return the primitive's index list as uint16 or uint32."""
    if primitive.indices < 0:
        raise GltfError("primitive has no indices")
    indices = _read_accessor(model, primitive.indices, 1, "indices", _INDEX_TYPES).reshape(-1)
    if indices.dtype == np.uint8:
        indices = indices.astype(np.uint16)
    return indices


def _mesh_texture(model: Model, primitive: Primitive):
    if not 0 <= primitive.material < len(model.materials):
        return None, False
    material = model.materials[primitive.material]
    texture = None
    index = material.pbr_metallic_roughness.base_color_texture.index
    if index >= 0:
        if index >= len(model.textures):
            raise GltfError(f"texture {index} not found")
        source = model.textures[index].source
        if not 0 <= source < len(model.images):
            raise GltfError(f"image {source} not found")
        texture = model.images[source]
    return texture, material.alpha_mode == "BLEND"


def process_node(model: Model, node_index: int, parent_transform: np.ndarray) -> list[Mesh]:
    """Build meshes for a node and, depth first, all of its children."""
    if not 0 <= node_index < len(model.nodes):
        raise GltfError(f"node {node_index} not found")
    node = model.nodes[node_index]
    transform = node_transform(node, parent_transform)
    meshes: list[Mesh] = []
    if node.mesh >= 0:
        if node.mesh >= len(model.meshes):
            raise GltfError(f"mesh {node.mesh} not found")
        for primitive in model.meshes[node.mesh].primitives:
            indices = primitive_indices(model, primitive)
            texture, transparent = _mesh_texture(model, primitive)
            index_type = (
                IndexType.UNSIGNED_SHORT if indices.dtype == np.uint16 else IndexType.UNSIGNED_INT
            )
            meshes.append(
                Mesh(
                    vertices=primitive_vertices(model, primitive),
                    indices=indices,
                    transform=transform,
                    texture=texture,
                    index_type=index_type,
                    transparent=transparent,
                )
            )
    for child in node.children:
        meshes.extend(process_node(model, child, transform))
    return meshes


def meshes_from_model(model: Model, starting_pos: Sequence[float] | None = None) -> list[Mesh]:
    """Meshes of the default scene (the first if none is named), moved by ``starting_pos``."""
    if not model.scenes:
        raise GltfError("model has no scenes")
    scene_index = model.default_scene if model.default_scene >= 0 else 0
    if scene_index >= len(model.scenes):
        raise GltfError(f"default scene {scene_index} not found")
    root = np.eye(4) if starting_pos is None else translation(starting_pos).astype(np.float64)
    meshes: list[Mesh] = []
    for node_index in model.scenes[scene_index].nodes:
        meshes.extend(process_node(model, node_index, root))
    return meshes


def load_model(path: str | Path, starting_pos: Sequence[float] | None = None) -> list[Mesh]:
    """Load a .gltf file and return the meshes of its default scene."""
    return meshes_from_model(load_ascii(path), starting_pos)