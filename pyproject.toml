[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voxelkit"
version = "1.0.0"
description = "Voxel chunk meshing, a free-look camera, skyline rectangle packing and a glTF loader"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["voxel", "gltf", "camera", "mesh", "rectangle-packing", "3d"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["voxelkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
