# objmesh/loader/__init__.py
"""
Пакет loader – разбор OBJ и построение мешей.

Экспортируем:
    * load_obj / load_obj_buf / load_obj_buf_async – точки входа
    * LoadOptions и готовые наборы опций
    * LoadError / ErrorKind – ошибки загрузки
"""

from .errors import ErrorKind, LoadError
from .options import GPU_LOAD_OPTIONS, OFFLINE_RENDERING_LOAD_OPTIONS, LoadOptions
from .faces import VertexIndices, parse_face, parse_vertex_indices
from .single_index import export_faces
from .multi_index import export_faces_multi_index
from .merge import merge_identical_points
from .reorder import reorder_data
from .obj_reader import ObjLoadResult, load_obj, load_obj_buf, load_obj_buf_async

__all__ = [
    "ErrorKind",
    "LoadError",
    "LoadOptions",
    "GPU_LOAD_OPTIONS",
    "OFFLINE_RENDERING_LOAD_OPTIONS",
    "VertexIndices",
    "parse_face",
    "parse_vertex_indices",
    "export_faces",
    "export_faces_multi_index",
    "merge_identical_points",
    "reorder_data",
    "ObjLoadResult",
    "load_obj",
    "load_obj_buf",
    "load_obj_buf_async",
]
