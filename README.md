# voxelkit

Building blocks for a small voxel world renderer, in plain Python with numpy:

- `voxelkit.rectpack`: a skyline rectangle packer (`Packer`, `Rect`,
  `Heuristic`) for building texture atlases.
- `voxelkit.mesh`: the `Mesh` dataclass (interleaved x, y, z, u, v vertices,
  indices, a 4x4 transform, a texture reference) and the `identity` and
  `translation` helpers.
- `voxelkit.cube`, `voxelkit.blocks`, `voxelkit.chunk`: cube geometry with
  per-face culling, `Grass` and `Dirt` blocks, and a `Chunk` that hides faces
  shared between neighbouring blocks.
- `voxelkit.camera`: a yaw/pitch free-look `Camera` with keyboard and mouse
  handling, and a `look_at` view matrix.
- `voxelkit.gltf`: a glTF 2.0 reader for `.gltf` and `.glb` data, producing a
  `Model`.
- `voxelkit.gltf_meshes`: turns a loaded model's node tree into `Mesh`
  objects.
- `voxelkit.shader`, `voxelkit.renderer`: a `Shader` that reads its two
  source files and records uniform values, and a `Renderer` that sets the view,
  projection and model matrices and returns the draws in order as `DrawCall`
  objects (opaque meshes first, transparent ones after with depth writes off).
- `voxelkit.game`, `voxelkit.app`: game state driven by keys (`Game`, `Key`),
  cursor offsets (`MouseTracker`) and frame timing (`FrameClock`).

## Install

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## Packing rectangles

```python
from voxelkit.rectpack import Packer, Rect

packer = Packer(256, 256, 256)
rects = [Rect(id=0, w=64, h=32), Rect(id=1, w=100, h=100)]
all_packed = packer.pack_rects(rects)
for rect in rects:
    print(rect.id, rect.x, rect.y, rect.was_packed)
```

Rectangles are tried tallest first, then widest; the list keeps its order.
`Packer.set_heuristic(Heuristic.SKYLINE_BF_SORT_HEIGHT)` switches from
bottom-left to best-fit placement.

## Building a chunk

```python
from voxelkit.chunk import Chunk

chunk = Chunk(16, 1.0)
meshes = chunk.get_meshes()
```

The top layer of a chunk is grass, everything below is dirt, and faces that
touch another block of the chunk are left out.

## Reading glTF

```python
from voxelkit.gltf import load_file
from voxelkit.gltf_meshes import meshes_from_model

model = load_file("scene.gltf")
print(len(model.meshes), len(model.nodes))
meshes = meshes_from_model(model, (16.0, 1.0, 16.0))
```

`load_file` reads `.glb` files as binary and anything else as JSON glTF, and
raises `GltfError` when the file cannot be read or is malformed.
`load_model(path, starting_pos)` in `voxelkit.gltf_meshes` does both steps for
a `.gltf` file.

## What it does not do

The package opens no window and does not talk to a GPU: shaders are not
compiled, textures are not uploaded and nothing is drawn on screen. The
renderer and game classes compute matrices, draw order and state that a
graphics front end would use. There is no command-line tool; everything is
used as a library.