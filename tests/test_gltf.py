import base64
import json
import struct

import pytest

from voxelkit.gltf import (
    TYPE_VEC3,
    GltfError,
    Material,
    file_extension,
    load_ascii,
    load_binary,
    load_file,
    parse_model,
)

ASSET = {"version": "2.0"}


def doc(**sections):
    return json.dumps({"asset": ASSET, **sections})


def make_glb(document, bin_data=None):
    json_bytes = json.dumps(document).encode()
    json_bytes += b" " * (-len(json_bytes) % 4)
    body = struct.pack("<II", len(json_bytes), 0x4E4F534A) + json_bytes
    if bin_data is not None:
        padded = bin_data + b"\x00" * (-len(bin_data) % 4)
        body += struct.pack("<II", len(padded), 0x004E4942) + padded
    return b"glTF" + struct.pack("<II", 2, 12 + len(body)) + body


def png_header(width, height, color_type=6):
    ihdr = struct.pack(">IIBBBBB", width, height, 8, color_type, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + struct.pack(">I", 13) + b"IHDR" + ihdr + b"\x00" * 4


def test_parse_error():
    with pytest.raises(GltfError, match="JSON"):
        parse_model("bora")


def test_root_must_be_object():
    with pytest.raises(GltfError, match="Root element"):
        parse_model("[]")


def test_missing_asset():
    with pytest.raises(GltfError, match="asset"):
        parse_model("{}")


def test_glb_invalid_length():
    data = b"glTF" + b"\x20\x00\x00\x00" + b"\x6c\x66\x00\x00" + b"\x02\x00\x00\x00" + b"JSON{}\x00"
    with pytest.raises(GltfError, match="Invalid glTF binary."):
        load_binary(data)


def test_glb_too_short():
    with pytest.raises(GltfError, match="Too short"):
        load_binary(b"glTF\x02\x00")


def test_glb_bad_magic():
    data = make_glb({"asset": ASSET})
    with pytest.raises(GltfError, match="magic"):
        load_binary(b"gltx" + data[4:])


@pytest.mark.parametrize("count", ["-1234", "0.5", "1e300", "NaN"])
def test_unsigned_property_rejects_invalid(count):
    text = '{"asset": {"version": "2.0"}, "accessors": [{"componentType": 5126, "type": "SCALAR", "count": %s}]}' % count
    with pytest.raises(GltfError, match="not a positive integer"):
        parse_model(text)


def test_integer_out_of_bounds():
    text = doc(accessors=[{"componentType": 5126, "type": "SCALAR", "count": -1}])
    with pytest.raises(GltfError, match="not a positive integer"):
        parse_model(text)


@pytest.mark.parametrize("value", ["0.5", "1e300", "NaN"])
def test_integer_property_rejects_invalid(value):
    text = '{"asset": {"version": "2.0"}, "nodes": [{"camera": %s}]}' % value
    with pytest.raises(GltfError, match="not an integer type"):
        parse_model(text)


def test_integer_property_parses_valid_numbers():
    model = parse_model(doc(nodes=[{"camera": 0}, {"camera": -1234}]))
    assert [node.camera for node in model.nodes] == [0, -1234]


def test_unsigned_zero():
    model = parse_model(doc(accessors=[{"componentType": 5126, "type": "VEC3", "count": 0}]))
    assert model.accessors[0].count == 0
    assert model.accessors[0].type == TYPE_VEC3


def test_missing_required_property():
    with pytest.raises(GltfError, match="'count' property is missing"):
        parse_model(doc(accessors=[{"componentType": 5126, "type": "SCALAR"}]))


def test_missing_optional_property_keeps_default():
    model = parse_model(doc(nodes=[{}]))
    assert model.nodes[0].mesh == -1


def test_integer_array_valid():
    model = parse_model(doc(scenes=[{"nodes": [-1, 2, 3]}]))
    assert model.scenes[0].nodes == [-1, 2, 3]


def test_integer_array_invalid():
    with pytest.raises(GltfError, match="not an integer type"):
        parse_model(doc(scenes=[{"nodes": [-1, 1e300, 3]}]))


def test_unknown_accessor_type():
    with pytest.raises(GltfError, match="Unsupported `type`"):
        parse_model(doc(accessors=[{"componentType": 5126, "type": "VEC9", "count": 1}]))


def test_invalid_primitive_indices():
    text = doc(meshes=[{"primitives": [{"attributes": {}, "indices": 3}]}])
    with pytest.raises(GltfError, match="primitive indices accessor out of bounds"):
        parse_model(text)


def test_invalid_buffer_view_index():
    text = doc(accessors=[{"bufferView": 4, "componentType": 5126, "type": "SCALAR", "count": 1}])
    with pytest.raises(GltfError, match=r"accessor\[0\] invalid bufferView"):
        parse_model(text)


def test_invalid_buffer_index():
    data_uri = "data:application/octet-stream;base64," + base64.b64encode(b"abcd").decode()
    text = doc(
        buffers=[{"byteLength": 4, "uri": data_uri}],
        bufferViews=[{"buffer": 1, "byteLength": 4}],
        images=[{"bufferView": 0, "mimeType": "image/png"}],
    )
    with pytest.raises(GltfError, match='image\\[0\\] buffer "1" not found in the scene.'):
        parse_model(text)


def test_extension_with_empty_object():
    text = doc(
        extensionsUsed=["VENDOR_material_some_ext"],
        materials=[{"extensions": {"VENDOR_material_some_ext": {}}}],
    )
    model = parse_model(text)
    assert model.extensions_used == ["VENDOR_material_some_ext"]
    assert len(model.materials) == 1
    assert model.materials[0].extensions == {"VENDOR_material_some_ext": {}}


def test_extension_overwrite_keeps_all_top_level_extensions():
    text = doc(
        extensionsUsed=["NV_MDL", "KHR_lights_punctual", "KHR_materials_unlit"],
        extensions={
            "NV_MDL": {"modules": []},
            "KHR_lights_punctual": {"lights": [{"type": "point", "intensity": 0.75}]},
        },
        nodes=[{"extensions": {"KHR_lights_punctual": {"light": 0}}}],
    )
    model = parse_model(text)
    assert len(model.extensions_used) == 3
    assert "KHR_lights_punctual" in model.extensions_used
    assert set(model.extensions) == {"NV_MDL", "KHR_lights_punctual"}
    assert model.lights == [{"type": "point", "intensity": 0.75}]
    assert model.nodes[0].light == 0


def test_pbr_khr_texture_transform():
    transform = {"KHR_texture_transform": {"offset": [0, 1], "scale": [1, -1]}}
    text = doc(
        materials=[
            {"emissiveTexture": {"index": 0, "extensions": transform}},
            {"name": "plain"},
        ]
    )
    model = parse_model(text)
    assert len(model.materials) == 2
    texform = model.materials[0].emissive_texture.extensions["KHR_texture_transform"]
    assert isinstance(texform, dict)
    assert texform["scale"][0] == pytest.approx(1.0)
    assert texform["scale"][1] == pytest.approx(-1.0)


def test_default_material():
    mat = Material()
    assert mat.alpha_mode == "OPAQUE"
    assert mat.alpha_cutoff == 0.5
    assert mat.double_sided is False
    assert mat.emissive_factor == [0.0, 0.0, 0.0]
    assert mat.pbr_metallic_roughness.base_color_factor == [1.0, 1.0, 1.0, 1.0]
    assert mat.pbr_metallic_roughness.metallic_factor == 1.0
    assert mat.pbr_metallic_roughness.roughness_factor == 1.0
    assert mat.normal_texture.index == -1
    assert mat.occlusion_texture.index == -1
    assert mat.emissive_texture.index == -1


def test_parsed_empty_material_has_defaults():
    model = parse_model(doc(materials=[{}]))
    assert model.materials[0] == Material()


def test_empty_skeleton_id():
    model = parse_model(doc(skins=[{"joints": [0]}]))
    assert len(model.skins) == 1
    assert model.skins[0].skeleton == -1


def test_empty_scene_round():
    model = parse_model(doc(scenes=[{}]))
    assert len(model.scenes) == 1
    assert model.scenes[0].nodes == []


def test_empty_glb_loads():
    model = load_binary(make_glb({"asset": ASSET}))
    assert model.buffers == []


def test_glb_buffer_without_bin_chunk_fails():
    with pytest.raises(GltfError):
        load_binary(make_glb({"asset": ASSET, "buffers": [{"byteLength": 0}]}))


def test_glb_single_byte_buffer():
    data = make_glb({"asset": ASSET, "buffers": [{"byteLength": 1}]}, b"\x00")
    model = load_binary(data)
    assert model.buffers[0].data == b"\x00"


def test_zero_sized_bin_chunk():
    model = load_binary(make_glb({"asset": ASSET}, b""))
    assert model.asset.version == "2.0"


def test_glb_buffer_longer_than_chunk_fails():
    data = make_glb({"asset": ASSET, "buffers": [{"byteLength": 16}]}, b"\x01\x02")
    with pytest.raises(GltfError, match="byteLength"):
        load_binary(data)


def test_data_uri_buffer():
    payload = bytes(range(12))
    uri = "data:application/octet-stream;base64," + base64.b64encode(payload).decode()
    model = parse_model(doc(buffers=[{"byteLength": 12, "uri": uri}]))
    assert model.buffers[0].data == payload


def test_buffer_without_uri_in_text_gltf_fails():
    with pytest.raises(GltfError, match="'uri' is missing"):
        parse_model(doc(buffers=[{"byteLength": 4}]))


def test_external_buffer(tmp_path):
    (tmp_path / "data file.bin").write_bytes(b"\x01\x02\x03\x04")
    path = tmp_path / "scene.gltf"
    path.write_text(doc(buffers=[{"byteLength": 4, "uri": "data%20file.bin"}]))
    model = load_ascii(path)
    assert model.buffers[0].data == b"\x01\x02\x03\x04"


def test_missing_external_buffer_fails(tmp_path):
    path = tmp_path / "scene.gltf"
    path.write_text(doc(buffers=[{"byteLength": 4, "uri": "absent.bin"}]))
    with pytest.raises(GltfError, match="absent.bin"):
        load_ascii(path)


def test_image_uri_spaces(tmp_path):
    (tmp_path / " cube  image .png").write_bytes(png_header(2, 3))
    path = tmp_path / "scene.gltf"
    path.write_text(doc(images=[{"uri": " cube  image .png"}]))
    model = load_ascii(path)
    assert model.warnings == []
    assert len(model.images) == 1
    image = model.images[0]
    assert image.uri[0] == " "
    assert (image.width, image.height, image.component) == (2, 3, 4)
    assert image.mime_type == "image/png"


def test_missing_image_file_only_warns(tmp_path):
    path = tmp_path / "scene.gltf"
    path.write_text(doc(images=[{"uri": "missing.png"}]))
    model = load_ascii(path)
    assert len(model.warnings) == 1
    assert "missing.png" in model.warnings[0]
    assert model.images[0].image == b""


def test_image_from_buffer_view():
    png = png_header(4, 5, color_type=2)
    data = make_glb(
        {
            "asset": ASSET,
            "buffers": [{"byteLength": len(png)}],
            "bufferViews": [{"buffer": 0, "byteLength": len(png)}],
            "images": [{"bufferView": 0, "mimeType": "image/png"}],
        },
        png,
    )
    image = load_binary(data).images[0]
    assert image.image == png
    assert (image.width, image.height, image.component) == (4, 5, 3)


def test_nodes_meshes_and_scene():
    text = doc(
        scene=0,
        scenes=[{"name": "main", "nodes": [0]}],
        nodes=[{"name": "root", "mesh": 0, "translation": [1, 2, 3], "children": [1]}, {}],
        accessors=[{"componentType": 5126, "type": "VEC3", "count": 3}],
        meshes=[{"name": "m", "primitives": [{"attributes": {"POSITION": 0}}]}],
    )
    model = parse_model(text)
    assert model.default_scene == 0
    assert model.scenes[0].name == "main"
    assert model.nodes[0].translation == [1.0, 2.0, 3.0]
    assert model.nodes[0].children == [1]
    primitive = model.meshes[0].primitives[0]
    assert primitive.attributes == {"POSITION": 0}
    assert primitive.mode == 4
    assert primitive.indices == -1


def test_primitive_attribute_out_of_bounds():
    with pytest.raises(GltfError, match="attribute accessor out of bounds"):
        parse_model(doc(meshes=[{"primitives": [{"attributes": {"POSITION": 2}}]}]))


@pytest.mark.parametrize(
    "name, expected",
    [("model.glb", "glb"), ("a.b.gltf", "gltf"), ("noext", ""), ("dir/file.", "")],
)
def test_file_extension(name, expected):
    assert file_extension(name) == expected


def test_load_file_dispatches_on_extension(tmp_path):
    glb = tmp_path / "box.glb"
    glb.write_bytes(make_glb({"asset": {"version": "2.0", "generator": "binary"}}))
    gltf = tmp_path / "box.gltf"
    gltf.write_text(json.dumps({"asset": {"version": "2.0", "generator": "text"}}))
    assert load_file(glb).asset.generator == "binary"
    assert load_file(gltf).asset.generator == "text"


def test_load_file_missing(tmp_path):
    with pytest.raises(GltfError, match="File read error"):
        load_file(tmp_path / "nothing.gltf")