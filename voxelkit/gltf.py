"""Loading of glTF 2.0 models from JSON (.gltf) and binary (.glb) files."""

from __future__ import annotations

import base64
import binascii
import json
import math
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import unquote

TYPE_VEC2 = 2
TYPE_VEC3 = 3
TYPE_VEC4 = 4
TYPE_MAT2 = 32 + 2
TYPE_MAT3 = 32 + 3
TYPE_MAT4 = 32 + 4
TYPE_SCALAR = 64 + 1
TYPE_VECTOR = 64 + 4
TYPE_MATRIX = 64 + 16

COMPONENT_TYPE_BYTE = 5120
COMPONENT_TYPE_UNSIGNED_BYTE = 5121
COMPONENT_TYPE_SHORT = 5122
COMPONENT_TYPE_UNSIGNED_SHORT = 5123
COMPONENT_TYPE_INT = 5124
COMPONENT_TYPE_UNSIGNED_INT = 5125
COMPONENT_TYPE_FLOAT = 5126
COMPONENT_TYPE_DOUBLE = 5130

MODE_POINTS = 0
MODE_LINE = 1
MODE_LINE_LOOP = 2
MODE_LINE_STRIP = 3
MODE_TRIANGLES = 4
MODE_TRIANGLE_STRIP = 5
MODE_TRIANGLE_FAN = 6

TEXTURE_WRAP_REPEAT = 10497

_ACCESSOR_TYPES = {
    "SCALAR": TYPE_SCALAR,
    "VEC2": TYPE_VEC2,
    "VEC3": TYPE_VEC3,
    "VEC4": TYPE_VEC4,
    "MAT2": TYPE_MAT2,
    "MAT3": TYPE_MAT3,
    "MAT4": TYPE_MAT4,
}

_GLB_MAGIC = b"glTF"
_GLB_HEADER = 20
_CHUNK_JSON = 0x4E4F534A
_CHUNK_BIN = 0x004E4942

_BUFFER_MIME_TYPES = ("application/octet-stream", "application/gltf-buffer")
_IMAGE_MIME_BY_SUFFIX = {".png": "image/png", ".jpg": "image/jpeg", ".jpeg": "image/jpeg"}

_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
_PNG_CHANNELS = {0: 1, 2: 3, 3: 3, 4: 2, 6: 4}

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_UINT_MAX = 2**63 - 1


class GltfError(ValueError):
    """Raised when a glTF document cannot be read."""


@dataclass
class TextureInfo:
    """Reference to a texture from a material slot."""

    index: int = -1
    tex_coord: int = 0
    scale: float = 1.0
    strength: float = 1.0
    extensions: dict[str, Any] = field(default_factory=dict)
    extras: Any = None


@dataclass
class PbrMetallicRoughness:
    base_color_factor: list[float] = field(default_factory=lambda: [1.0, 1.0, 1.0, 1.0])
    base_color_texture: TextureInfo = field(default_factory=TextureInfo)
    metallic_factor: float = 1.0
    roughness_factor: float = 1.0
    metallic_roughness_texture: TextureInfo = field(default_factory=TextureInfo)
    extensions: dict[str, Any] = field(default_factory=dict)
    extras: Any = None


@dataclass
class Material:
    name: str = ""
    emissive_factor: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    alpha_mode: str = "OPAQUE"
    alpha_cutoff: float = 0.5
    double_sided: bool = False
    pbr_metallic_roughness: PbrMetallicRoughness = field(default_factory=PbrMetallicRoughness)
    normal_texture: TextureInfo = field(default_factory=TextureInfo)
    occlusion_texture: TextureInfo = field(default_factory=TextureInfo)
    emissive_texture: TextureInfo = field(default_factory=TextureInfo)
    extensions: dict[str, Any] = field(default_factory=dict)
    extras: Any = None


@dataclass
class Primitive:
    attributes: dict[str, int] = field(default_factory=dict)
    material: int = -1
    indices: int = -1
    mode: int = MODE_TRIANGLES
    targets: list[dict[str, int]] = field(default_factory=list)
    extensions: dict[str, Any] = field(default_factory=dict)
    extras: Any = None


@dataclass
class MeshDef:
    """A glTF mesh: a named list of primitives."""

    name: str = ""
    primitives: list[Primitive] = field(default_factory=list)
    weights: list[float] = field(default_factory=list)
    extensions: dict[str, Any] = field(default_factory=dict)
    extras: Any = None


@dataclass
class Accessor:
    name: str = ""
    buffer_view: int = -1
    byte_offset: int = 0
    normalized: bool = False
    component_type: int = -1
    count: int = 0
    type: int = -1
    min_values: list[float] = field(default_factory=list)
    max_values: list[float] = field(default_factory=list)
    sparse: dict[str, Any] | None = None
    extensions: dict[str, Any] = field(default_factory=dict)
    extras: Any = None


@dataclass
class BufferView:
    name: str = ""
    buffer: int = -1
    byte_offset: int = 0
    byte_length: int = 0
    byte_stride: int = 0
    target: int = 0
    extensions: dict[str, Any] = field(default_factory=dict)
    extras: Any = None


@dataclass
class Buffer:
    name: str = ""
    data: bytes = b""
    uri: str = ""
    extensions: dict[str, Any] = field(default_factory=dict)
    extras: Any = None


@dataclass
class Node:
    name: str = ""
    camera: int = -1
    mesh: int = -1
    skin: int = -1
    light: int = -1
    rotation: list[float] = field(default_factory=list)
    scale: list[float] = field(default_factory=list)
    translation: list[float] = field(default_factory=list)
    matrix: list[float] = field(default_factory=list)
    children: list[int] = field(default_factory=list)
    weights: list[float] = field(default_factory=list)
    extensions: dict[str, Any] = field(default_factory=dict)
    extras: Any = None


@dataclass
class Scene:
    name: str = ""
    nodes: list[int] = field(default_factory=list)
    extensions: dict[str, Any] = field(default_factory=dict)
    extras: Any = None


@dataclass
class Image:
    """An image with its encoded bytes; size is filled in for PNG data."""

    name: str = ""
    uri: str = ""
    mime_type: str = ""
    buffer_view: int = -1
    image: bytes = b""
    width: int = -1
    height: int = -1
    component: int = -1
    bits: int = -1
    extensions: dict[str, Any] = field(default_factory=dict)
    extras: Any = None


@dataclass
class Texture:
    name: str = ""
    sampler: int = -1
    source: int = -1
    extensions: dict[str, Any] = field(default_factory=dict)
    extras: Any = None


@dataclass
class Sampler:
    name: str = ""
    min_filter: int = -1
    mag_filter: int = -1
    wrap_s: int = TEXTURE_WRAP_REPEAT
    wrap_t: int = TEXTURE_WRAP_REPEAT
    extensions: dict[str, Any] = field(default_factory=dict)
    extras: Any = None


@dataclass
class Skin:
    name: str = ""
    inverse_bind_matrices: int = -1
    skeleton: int = -1
    joints: list[int] = field(default_factory=list)
    extensions: dict[str, Any] = field(default_factory=dict)
    extras: Any = None


@dataclass
class Asset:
    version: str = "2.0"
    generator: str = ""
    min_version: str = ""
    copyright: str = ""
    extensions: dict[str, Any] = field(default_factory=dict)
    extras: Any = None


@dataclass
class Model:
    """A whole glTF document; animations, cameras and lights stay as JSON objects."""

    asset: Asset = field(default_factory=Asset)
    accessors: list[Accessor] = field(default_factory=list)
    animations: list[dict[str, Any]] = field(default_factory=list)
    buffers: list[Buffer] = field(default_factory=list)
    buffer_views: list[BufferView] = field(default_factory=list)
    materials: list[Material] = field(default_factory=list)
    meshes: list[MeshDef] = field(default_factory=list)
    nodes: list[Node] = field(default_factory=list)
    textures: list[Texture] = field(default_factory=list)
    images: list[Image] = field(default_factory=list)
    skins: list[Skin] = field(default_factory=list)
    samplers: list[Sampler] = field(default_factory=list)
    cameras: list[dict[str, Any]] = field(default_factory=list)
    scenes: list[Scene] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)
    default_scene: int = -1
    extensions_used: list[str] = field(default_factory=list)
    extensions_required: list[str] = field(default_factory=list)
    extensions: dict[str, Any] = field(default_factory=dict)
    extras: Any = None
    warnings: list[str] = field(default_factory=list)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _where(parent: str) -> str:
    return f" in {parent}" if parent else ""


def _missing(key: str, parent: str) -> GltfError:
    return GltfError(f"'{key}' property is missing{_where(parent)}.")


def _int(obj: dict, key: str, default: int = -1, *, required: bool = False, parent: str = "") -> int:
    if key not in obj:
        if required:
            raise _missing(key, parent)
        return default
    value = obj[key]
    if not _is_int(value) or not _INT32_MIN <= value <= _INT32_MAX:
        raise GltfError(f"'{key}' property is not an integer type{_where(parent)}.")
    return value


def _uint(obj: dict, key: str, default: int = 0, *, required: bool = False, parent: str = "") -> int:
    if key not in obj:
        if required:
            raise _missing(key, parent)
        return default
    value = obj[key]
    if not _is_int(value) or not 0 <= value <= _UINT_MAX:
        raise GltfError(f"'{key}' property is not a positive integer{_where(parent)}.")
    return value


def _number(obj: dict, key: str, default: float, *, parent: str = "") -> float:
    if key not in obj:
        return default
    value = obj[key]
    if not _is_number(value):
        raise GltfError(f"'{key}' property is not a number type{_where(parent)}.")
    return float(value)


def _numbers(obj: dict, key: str, default: list[float] | None = None, *, parent: str = "") -> list[float]:
    if key not in obj:
        return list(default or [])
    values = obj[key]
    if not isinstance(values, list) or not all(_is_number(v) for v in values):
        raise GltfError(f"'{key}' property is not a number array{_where(parent)}.")
    return [float(v) for v in values]


def _ints(obj: dict, key: str, *, required: bool = False, parent: str = "") -> list[int]:
    if key not in obj:
        if required:
            raise _missing(key, parent)
        return []
    values = obj[key]
    if not isinstance(values, list):
        raise GltfError(f"'{key}' property is not an array{_where(parent)}.")
    for value in values:
        if not _is_int(value) or not _INT32_MIN <= value <= _INT32_MAX:
            raise GltfError(f"'{key}' array element is not an integer type{_where(parent)}.")
    return list(values)


def _str(obj: dict, key: str, default: str = "", *, required: bool = False, parent: str = "") -> str:
    if key not in obj:
        if required:
            raise _missing(key, parent)
        return default
    value = obj[key]
    if not isinstance(value, str):
        raise GltfError(f"'{key}' property is not a string type{_where(parent)}.")
    return value


def _strs(obj: dict, key: str) -> list[str]:
    values = obj.get(key, [])
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise GltfError(f"'{key}' property is not a string array.")
    return list(values)


def _bool(obj: dict, key: str, default: bool = False) -> bool:
    value = obj.get(key, default)
    if not isinstance(value, bool):
        raise GltfError(f"'{key}' property is not a bool type.")
    return value


def _objects(obj: dict, key: str) -> list[dict]:
    values = obj.get(key, [])
    if not isinstance(values, list):
        raise GltfError(f"'{key}' is not an array.")
    for value in values:
        if not isinstance(value, dict):
            raise GltfError(f"'{key}' array element is not a JSON object.")
    return values


def _extensions(obj: dict) -> dict[str, Any]:
    value = obj.get("extensions")
    return dict(value) if isinstance(value, dict) else {}


def _common(obj: dict) -> dict[str, Any]:
    return {"extensions": _extensions(obj), "extras": obj.get("extras")}


def _decode_data_uri(uri: str) -> tuple[str, bytes] | None:
    """Return (mime type, payload) for a base64 data URI, None for other URIs."""
    if not uri.startswith("data:"):
        return None
    header, sep, payload = uri.partition(",")
    if not sep or not header.endswith(";base64"):
        raise GltfError(f"Unsupported data URI: {uri[:40]!r}")
    try:
        data = base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise GltfError(f"Invalid base64 data in URI: {exc}") from None
    return header[len("data:") : -len(";base64")], data


def _png_info(data: bytes) -> tuple[int, int, int, int] | None:
    if len(data) >= 26 and data.startswith(_PNG_SIGNATURE) and data[12:16] == b"IHDR":
        width, height, bits, color = struct.unpack_from(">IIBB", data, 16)
        return width, height, _PNG_CHANNELS.get(color, -1), bits
    return None


class _Parser:
    def __init__(self, base_dir: str | Path, bin_chunk: bytes | None, is_binary: bool) -> None:
        self.base_dir = Path(base_dir) if base_dir else Path()
        self.bin_chunk = bin_chunk
        self.is_binary = is_binary
        self.model = Model()

    def parse(self, text: str | bytes) -> Model:
        try:
            root = json.loads(text)
        except (ValueError, UnicodeDecodeError) as exc:
            raise GltfError(f"JSON parsing error: {exc}") from None
        if not isinstance(root, dict):
            raise GltfError("Root element is not a JSON object")
        asset = root.get("asset")
        if not isinstance(asset, dict) or "version" not in asset:
            raise GltfError('"asset" object not found in .gltf or not an object type')

        model = self.model
        model.asset = Asset(
            version=_str(asset, "version"),
            generator=_str(asset, "generator"),
            min_version=_str(asset, "minVersion"),
            copyright=_str(asset, "copyright"),
            **_common(asset),
        )
        model.extensions_used = _strs(root, "extensionsUsed")
        model.extensions_required = _strs(root, "extensionsRequired")
        model.default_scene = _int(root, "scene")
        model.extensions = _extensions(root)
        model.extras = root.get("extras")

        model.buffers = [self._buffer(i, o) for i, o in enumerate(_objects(root, "buffers"))]
        model.buffer_views = [self._buffer_view(o) for o in _objects(root, "bufferViews")]
        model.accessors = [self._accessor(i, o) for i, o in enumerate(_objects(root, "accessors"))]
        model.meshes = [self._mesh(o) for o in _objects(root, "meshes")]
        model.nodes = [self._node(o) for o in _objects(root, "nodes")]
        model.scenes = [
            Scene(name=_str(o, "name"), nodes=_ints(o, "nodes", parent="scene"), **_common(o))
            for o in _objects(root, "scenes")
        ]
        model.materials = [self._material(o) for o in _objects(root, "materials")]
        model.images = [self._image(i, o) for i, o in enumerate(_objects(root, "images"))]
        model.textures = [
            Texture(name=_str(o, "name"), sampler=_int(o, "sampler"), source=_int(o, "source"), **_common(o))
            for o in _objects(root, "textures")
        ]
        model.samplers = [self._sampler(o) for o in _objects(root, "samplers")]
        model.skins = [self._skin(o) for o in _objects(root, "skins")]
        model.animations = list(_objects(root, "animations"))
        model.cameras = list(_objects(root, "cameras"))
        lights = model.extensions.get("KHR_lights_punctual")
        if isinstance(lights, dict) and isinstance(lights.get("lights"), list):
            model.lights = [light for light in lights["lights"] if isinstance(light, dict)]
        return model

    def _read_external(self, uri: str) -> bytes | None:
        try:
            return (self.base_dir / unquote(uri)).read_bytes()
        except OSError:
            return None

    def _buffer(self, index: int, obj: dict) -> Buffer:
        byte_length = _uint(obj, "byteLength", required=True, parent="Buffer")
        uri = _str(obj, "uri")
        if not uri:
            if not self.is_binary or index != 0:
                raise GltfError("'uri' is missing from non binary glTF file buffer.")
            if self.bin_chunk is None:
                raise GltfError("Invalid binary glTF: buffer[0] refers to a missing BIN chunk.")
            data = self.bin_chunk
        else:
            decoded = _decode_data_uri(uri)
            if decoded is not None:
                mime, data = decoded
                if mime not in _BUFFER_MIME_TYPES:
                    raise GltfError(f"Unsupported data URI mime type for buffer[{index}]: {mime}")
            else:
                data = self._read_external(uri)
                if data is None:
                    raise GltfError(f"Failed to load external '{uri}' for buffer[{index}] data.")
        if len(data) < byte_length:
            raise GltfError(
                f"buffer[{index}] byteLength {byte_length} exceeds the {len(data)} bytes of data."
            )
        return Buffer(name=_str(obj, "name"), data=bytes(data[:byte_length]), uri=uri, **_common(obj))

    def _buffer_view(self, obj: dict) -> BufferView:
        parent = "BufferView"
        return BufferView(
            name=_str(obj, "name"),
            buffer=_int(obj, "buffer", required=True, parent=parent),
            byte_offset=_uint(obj, "byteOffset", parent=parent),
            byte_length=_uint(obj, "byteLength", required=True, parent=parent),
            byte_stride=_uint(obj, "byteStride", parent=parent),
            target=_int(obj, "target", 0, parent=parent),
            **_common(obj),
        )

    def _accessor(self, index: int, obj: dict) -> Accessor:
        parent = "Accessor"
        buffer_view = _int(obj, "bufferView", parent=parent)
        if "bufferView" in obj and not 0 <= buffer_view < len(self.model.buffer_views):
            raise GltfError(f"accessor[{index}] invalid bufferView")
        type_name = _str(obj, "type", required=True, parent=parent)
        if type_name not in _ACCESSOR_TYPES:
            raise GltfError(f"Unsupported `type` for accessor object. Got \"{type_name}\"")
        sparse = obj.get("sparse")
        return Accessor(
            name=_str(obj, "name"),
            buffer_view=buffer_view,
            byte_offset=_uint(obj, "byteOffset", parent=parent),
            normalized=_bool(obj, "normalized"),
            component_type=_int(obj, "componentType", required=True, parent=parent),
            count=_uint(obj, "count", required=True, parent=parent),
            type=_ACCESSOR_TYPES[type_name],
            min_values=_numbers(obj, "min", parent=parent),
            max_values=_numbers(obj, "max", parent=parent),
            sparse=sparse if isinstance(sparse, dict) else None,
            **_common(obj),
        )

    def _mesh(self, obj: dict) -> MeshDef:
        accessors = len(self.model.accessors)
        primitives = []
        for prim in _objects(obj, "primitives"):
            attributes = prim.get("attributes", {})
            if not isinstance(attributes, dict) or not all(_is_int(v) for v in attributes.values()):
                raise GltfError("'attributes' property is not a map of integers.")
            for accessor in attributes.values():
                if not 0 <= accessor < accessors:
                    raise GltfError("primitive attribute accessor out of bounds")
            indices = _int(prim, "indices", parent="Primitive")
            if "indices" in prim and not 0 <= indices < accessors:
                raise GltfError("primitive indices accessor out of bounds")
            targets = prim.get("targets", [])
            primitives.append(
                Primitive(
                    attributes=dict(attributes),
                    material=_int(prim, "material", parent="Primitive"),
                    indices=indices,
                    mode=_int(prim, "mode", MODE_TRIANGLES, parent="Primitive"),
                    targets=[t for t in targets if isinstance(t, dict)] if isinstance(targets, list) else [],
                    **_common(prim),
                )
            )
        return MeshDef(
            name=_str(obj, "name"),
            primitives=primitives,
            weights=_numbers(obj, "weights"),
            **_common(obj),
        )

    def _node(self, obj: dict) -> Node:
        parent = "Node"
        common = _common(obj)
        light = -1
        punctual = common["extensions"].get("KHR_lights_punctual")
        if isinstance(punctual, dict):
            light = _int(punctual, "light", parent="KHR_lights_punctual")
        return Node(
            name=_str(obj, "name"),
            camera=_int(obj, "camera", parent=parent),
            mesh=_int(obj, "mesh", parent=parent),
            skin=_int(obj, "skin", parent=parent),
            light=light,
            rotation=_numbers(obj, "rotation", parent=parent),
            scale=_numbers(obj, "scale", parent=parent),
            translation=_numbers(obj, "translation", parent=parent),
            matrix=_numbers(obj, "matrix", parent=parent),
            children=_ints(obj, "children", parent=parent),
            weights=_numbers(obj, "weights", parent=parent),
            **common,
        )

    @staticmethod
    def _texture_info(obj: dict, key: str) -> TextureInfo:
        info = obj.get(key)
        if info is None:
            return TextureInfo()
        if not isinstance(info, dict):
            raise GltfError(f"'{key}' is not a JSON object.")
        return TextureInfo(
            index=_int(info, "index", required=True, parent=key),
            tex_coord=_int(info, "texCoord", 0, parent=key),
            scale=_number(info, "scale", 1.0, parent=key),
            strength=_number(info, "strength", 1.0, parent=key),
            **_common(info),
        )

    def _material(self, obj: dict) -> Material:
        pbr_obj = obj.get("pbrMetallicRoughness", {})
        if not isinstance(pbr_obj, dict):
            raise GltfError("'pbrMetallicRoughness' is not a JSON object.")
        pbr = PbrMetallicRoughness(
            base_color_factor=_numbers(pbr_obj, "baseColorFactor", [1.0, 1.0, 1.0, 1.0]),
            base_color_texture=self._texture_info(pbr_obj, "baseColorTexture"),
            metallic_factor=_number(pbr_obj, "metallicFactor", 1.0),
            roughness_factor=_number(pbr_obj, "roughnessFactor", 1.0),
            metallic_roughness_texture=self._texture_info(pbr_obj, "metallicRoughnessTexture"),
            **_common(pbr_obj),
        )
        return Material(
            name=_str(obj, "name"),
            emissive_factor=_numbers(obj, "emissiveFactor", [0.0, 0.0, 0.0]),
            alpha_mode=_str(obj, "alphaMode", "OPAQUE"),
            alpha_cutoff=_number(obj, "alphaCutoff", 0.5),
            double_sided=_bool(obj, "doubleSided"),
            pbr_metallic_roughness=pbr,
            normal_texture=self._texture_info(obj, "normalTexture"),
            occlusion_texture=self._texture_info(obj, "occlusionTexture"),
            emissive_texture=self._texture_info(obj, "emissiveTexture"),
            **_common(obj),
        )

    def _image(self, index: int, obj: dict) -> Image:
        image = Image(
            name=_str(obj, "name"),
            uri=_str(obj, "uri"),
            mime_type=_str(obj, "mimeType"),
            buffer_view=_int(obj, "bufferView", parent="Image"),
            **_common(obj),
        )
        if "bufferView" in obj:
            views = self.model.buffer_views
            if not 0 <= image.buffer_view < len(views):
                raise GltfError(f"image[{index}] bufferView \"{image.buffer_view}\" not found in the scene.")
            view = views[image.buffer_view]
            if not 0 <= view.buffer < len(self.model.buffers):
                raise GltfError(f"image[{index}] buffer \"{view.buffer}\" not found in the scene.")
            data = self.model.buffers[view.buffer].data
            image.image = data[view.byte_offset : view.byte_offset + view.byte_length]
        elif image.uri:
            decoded = _decode_data_uri(image.uri)
            if decoded is not None:
                image.mime_type, image.image = decoded
            else:
                data = self._read_external(image.uri)
                if data is None:
                    self.model.warnings.append(
                        f"Failed to load external '{image.uri}' for image[{index}] name = \"{image.name}\""
                    )
                    return image
                image.image = data
                if not image.mime_type:
                    image.mime_type = _IMAGE_MIME_BY_SUFFIX.get(Path(unquote(image.uri)).suffix.lower(), "")
        else:
            raise GltfError(f"image[{index}] has neither a 'uri' nor a 'bufferView'.")
        info = _png_info(image.image)
        if info is not None:
            image.width, image.height, image.component, image.bits = info
        return image

    @staticmethod
    def _sampler(obj: dict) -> Sampler:
        return Sampler(
            name=_str(obj, "name"),
            min_filter=_int(obj, "minFilter", parent="Sampler"),
            mag_filter=_int(obj, "magFilter", parent="Sampler"),
            wrap_s=_int(obj, "wrapS", TEXTURE_WRAP_REPEAT, parent="Sampler"),
            wrap_t=_int(obj, "wrapT", TEXTURE_WRAP_REPEAT, parent="Sampler"),
            **_common(obj),
        )

    @staticmethod
    def _skin(obj: dict) -> Skin:
        return Skin(
            name=_str(obj, "name"),
            inverse_bind_matrices=_int(obj, "inverseBindMatrices", parent="Skin"),
            skeleton=_int(obj, "skeleton", parent="Skin"),
            joints=_ints(obj, "joints", required=True, parent="Skin"),
            **_common(obj),
        )


def file_extension(filename: str) -> str:
    """Return the text after the last dot of ``filename``, or an empty string."""
    _, dot, ext = str(filename).rpartition(".")
    return ext if dot else ""


def parse_model(text: str | bytes, base_dir: str | Path = "") -> Model:
    """Parse a glTF JSON document; external files are looked up under ``base_dir``."""
    return _Parser(base_dir, None, False).parse(text)


def load_ascii(path: str | Path) -> Model:
    """Load a .gltf file."""
    path = Path(path)
    try:
        text = path.read_bytes()
    except OSError as exc:
        raise GltfError(f"File read error: {path}: {exc.strerror}") from None
    return parse_model(text, path.parent)


def load_binary(data: bytes, base_dir: str | Path = "") -> Model:
    """Parse a binary glTF (GLB) container."""
    data = bytes(data)
    if len(data) < _GLB_HEADER:
        raise GltfError("Too short data size for glTF Binary.")
    if data[:4] != _GLB_MAGIC:
        raise GltfError("Invalid magic.")
    _version, length, json_length, json_type = struct.unpack_from("<IIII", data, 4)
    if (
        length < _GLB_HEADER
        or length > len(data)
        or json_length < 1
        or _GLB_HEADER + json_length > length
        or json_type != _CHUNK_JSON
    ):
        raise GltfError("Invalid glTF binary.")

    json_bytes = data[_GLB_HEADER : _GLB_HEADER + json_length].rstrip(b"\x00 ")
    bin_chunk = None
    offset = _GLB_HEADER + json_length
    if offset + 8 <= length:
        bin_length, bin_type = struct.unpack_from("<II", data, offset)
        if bin_type != _CHUNK_BIN:
            raise GltfError("Invalid type for chunk1 data.")
        if offset + 8 + bin_length > length:
            raise GltfError("BIN chunk length exceeds the GLB size.")
        bin_chunk = data[offset + 8 : offset + 8 + bin_length]
    return _Parser(base_dir, bin_chunk, True).parse(json_bytes)


def load_file(path: str | Path) -> Model:
    """Load a .glb file as binary and anything else as JSON glTF."""
    path = Path(path)
    if file_extension(path.name) == "glb":
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise GltfError(f"File read error: {path}: {exc.strerror}") from None
        return load_binary(data, path.parent)
    return load_ascii(path)


def _finite(value: float) -> bool:
    return math.isfinite(value)