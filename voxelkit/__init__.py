"""Voxel meshing, a free-look camera, rectangle packing and glTF loading."""

__version__ = "1.0.0"