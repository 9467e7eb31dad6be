# objmesh/assets/__init__.py
"""Пакет с материалами (MTL) и загрузкой текстур."""
from objmesh.assets.material import Material
from objmesh.assets.mtl_reader import (
    AsyncMaterialLoader,
    FileMaterialLoader,
    MaterialLoader,
    load_mtl,
    load_mtl_buf,
)
from objmesh.assets.texture_loader import TextureManager, load_texture

__all__ = [
    "Material",
    "MaterialLoader",
    "AsyncMaterialLoader",
    "FileMaterialLoader",
    "load_mtl",
    "load_mtl_buf",
    "TextureManager",
    "load_texture",
]
