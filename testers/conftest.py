# -*- coding: utf-8 -*-
"""
conftest.py – общие OBJ/MTL‑исходники и загрузчики материалов из словаря.
Тесты не трогают файловую систему, кроме тех, что явно берут `tmp_path`.
"""

import io

import pytest

from objmesh.assets.mtl_reader import AsyncMaterialLoader, MaterialLoader, load_mtl_buf
from objmesh.assets.texture_loader import TextureManager
from objmesh.loader.errors import ErrorKind, LoadError
from objmesh.loader.obj_reader import load_obj_buf
from objmesh.utils.config import Config


TRIANGLE_OBJ = """\
# один треугольник
v 0 0 0
v 1 0 0
v 0 1 0

f 1 2 3
"""

QUAD_OBJ = """\
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
f 1 2 3 4
"""

TWO_MATERIALS_OBJ = """\
mtllib scene.mtl
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
o thing
usemtl red
f 1 2 3
usemtl blue
f 1 3 4
"""

SCENE_MTL = """\
newmtl red
Kd 1 0 0
newmtl blue
Kd 0 0 1
"""


# ----------------------------------------------------------------------
# Загрузчики материалов – MTL‑тексты берутся из словаря по имени
# ----------------------------------------------------------------------
class DictMaterialLoader(MaterialLoader):
    def __init__(self, sources):
        self.sources = sources
        self.requested = []

    def load(self, path):
        self.requested.append(path)
        if path not in self.sources:
            raise LoadError(ErrorKind.OPEN_FILE_FAILED, path)
        return load_mtl_buf(io.StringIO(self.sources[path]))


class DictAsyncMaterialLoader(AsyncMaterialLoader):
    def __init__(self, sources):
        self.sources = sources

    async def load(self, name):
        if name not in self.sources:
            raise LoadError(ErrorKind.OPEN_FILE_FAILED, name)
        return load_mtl_buf(io.StringIO(self.sources[name]))


@pytest.fixture
def material_loader() -> DictMaterialLoader:
    return DictMaterialLoader({"scene.mtl": SCENE_MTL})


@pytest.fixture
def async_material_loader() -> DictAsyncMaterialLoader:
    return DictAsyncMaterialLoader({"scene.mtl": SCENE_MTL})


@pytest.fixture
def load_src(material_loader):
    """Загрузить OBJ из строки с материалами из `material_loader`."""
    def _load(src, options, dtype=None, loader=None):
        kwargs = {} if dtype is None else {"dtype": dtype}
        return load_obj_buf(io.StringIO(src), options,
                            loader if loader is not None else material_loader,
                            **kwargs)
    return _load


@pytest.fixture
def fresh_config():
    Config.reset()
    yield
    Config.reset()


@pytest.fixture
def texture_cache():
    TextureManager.clear()
    yield TextureManager
    TextureManager.clear()
