"""
ObjMesh – загрузчик Wavefront OBJ/MTL в numpy‑буферы.
Поддерживает меши с одним индексом (для GPU) и с раздельными индексами
атрибутов, триангуляцию, слияние одинаковых точек и переупорядочивание.
"""

from objmesh.utils import logger, Config
# loader импортируется раньше assets: mtl_reader зависит от loader.errors
from objmesh.loader import (
    ErrorKind,
    LoadError,
    LoadOptions,
    GPU_LOAD_OPTIONS,
    OFFLINE_RENDERING_LOAD_OPTIONS,
    ObjLoadResult,
    load_obj,
    load_obj_buf,
    load_obj_buf_async,
)
from objmesh.scene import Mesh, Model
from objmesh.assets import (
    Material,
    MaterialLoader,
    AsyncMaterialLoader,
    FileMaterialLoader,
    load_mtl,
    load_mtl_buf,
    TextureManager,
)

__version__ = "1.0.0"

__all__ = [
    "Config",
    "ErrorKind",
    "LoadError",
    "LoadOptions",
    "GPU_LOAD_OPTIONS",
    "OFFLINE_RENDERING_LOAD_OPTIONS",
    "ObjLoadResult",
    "load_obj",
    "load_obj_buf",
    "load_obj_buf_async",
    "Mesh",
    "Model",
    "Material",
    "MaterialLoader",
    "AsyncMaterialLoader",
    "FileMaterialLoader",
    "load_mtl",
    "load_mtl_buf",
    "TextureManager",
]
