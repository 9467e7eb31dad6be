# -*- coding: utf-8 -*-
import asyncio
import io

import pytest

from conftest import SCENE_MTL, TRIANGLE_OBJ, TWO_MATERIALS_OBJ
from objmesh.assets.mtl_reader import load_mtl_buf
from objmesh.loader.errors import ErrorKind, LoadError
from objmesh.loader.obj_reader import load_obj_buf_async
from objmesh.loader.options import GPU_LOAD_OPTIONS, LoadOptions


def test_async_matches_sync(async_material_loader, load_src):
    result = asyncio.run(load_obj_buf_async(io.StringIO(TWO_MATERIALS_OBJ),
                                            GPU_LOAD_OPTIONS, async_material_loader))
    expected = load_src(TWO_MATERIALS_OBJ, GPU_LOAD_OPTIONS)
    assert [m.name for m in result.materials] == ["red", "blue"]
    assert [m.mesh.material_id for m in result.models] == [0, 1]
    for got, want in zip(result.models, expected.models):
        assert got.mesh.indices.tolist() == want.mesh.indices.tolist()
        assert got.mesh.positions.tolist() == want.mesh.positions.tolist()


def test_async_callable_loader():
    async def loader(name):
        await asyncio.sleep(0)
        return load_mtl_buf(io.StringIO(SCENE_MTL))

    result = asyncio.run(load_obj_buf_async(io.StringIO(TWO_MATERIALS_OBJ),
                                            GPU_LOAD_OPTIONS, loader))
    assert result.material_map == {"red": 0, "blue": 1}


def test_async_line_source(async_material_loader):
    async def lines():
        for line in TRIANGLE_OBJ.splitlines():
            yield line

    result = asyncio.run(load_obj_buf_async(lines(), GPU_LOAD_OPTIONS, async_material_loader))
    assert result.models[0].mesh.indices.tolist() == [0, 1, 2]


def test_async_material_failure(async_material_loader):
    src = "mtllib other.mtl\n" + TRIANGLE_OBJ
    result = asyncio.run(load_obj_buf_async(io.StringIO(src), GPU_LOAD_OPTIONS,
                                            async_material_loader))
    assert len(result.models) == 1
    assert result.material_error.kind is ErrorKind.OPEN_FILE_FAILED


def test_async_invalid_options(async_material_loader):
    opts = LoadOptions(single_index=True, reorder_data=True)
    with pytest.raises(LoadError) as err:
        asyncio.run(load_obj_buf_async(io.StringIO(TRIANGLE_OBJ), opts, async_material_loader))
    assert err.value.kind is ErrorKind.INVALID_LOAD_OPTION_CONFIG


def test_async_line_source_read_error(async_material_loader):
    async def lines():
        yield "v 0 0 0"
        raise OSError("connection reset")

    with pytest.raises(LoadError) as err:
        asyncio.run(load_obj_buf_async(lines(), GPU_LOAD_OPTIONS, async_material_loader))
    assert err.value.kind is ErrorKind.READ_ERROR


def test_async_line_source_decode_error(async_material_loader):
    async def lines():
        yield b"v 0 0 0"
        raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

    with pytest.raises(LoadError) as err:
        asyncio.run(load_obj_buf_async(lines(), GPU_LOAD_OPTIONS, async_material_loader))
    assert err.value.kind is ErrorKind.READ_ERROR
