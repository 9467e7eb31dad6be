# -*- coding: utf-8 -*-
import io

import pytest

from objmesh.assets.material import Material
from objmesh.assets.mtl_reader import FileMaterialLoader, load_mtl, load_mtl_buf
from objmesh.loader.errors import ErrorKind, LoadError

FULL_MTL = """\
# материал со всеми полями
newmtl wood
Ka 0.1 0.1 0.1
Kd 0.6 0.4 0.2
Ks 1 1 1
Ns 32
Ni 1.5
d 0.75
illum 2
map_Kd textures/wood grain.png
map_Bump wood_n.png
map_d alpha.png
Ke 0.1 0.2 0.3
"""


def _parse(src):
    return load_mtl_buf(io.StringIO(src))


def test_full_material():
    materials, mat_map = _parse(FULL_MTL)
    assert mat_map == {"wood": 0}
    mat = materials[0]
    assert mat.ambient == (0.1, 0.1, 0.1)
    assert mat.diffuse == (0.6, 0.4, 0.2)
    assert mat.specular == (1.0, 1.0, 1.0)
    assert mat.shininess == 32.0
    assert mat.optical_density == 1.5
    assert mat.dissolve == 0.75
    assert mat.illumination_model == 2
    assert mat.diffuse_texture == "textures/wood grain.png"
    assert mat.normal_texture == "wood_n.png"
    assert mat.unknown_param == {"Ke": "0.1 0.2 0.3"}
    assert mat.texture_paths() == {
        "diffuse": "textures/wood grain.png",
        "normal": "wood_n.png",
        "dissolve": "alpha.png",
    }


def test_defaults():
    mat = Material()
    assert mat.dissolve == 1.0
    assert mat.illumination_model is None
    assert mat.texture_paths() == {}
    assert Material().unknown_param is not mat.unknown_param


@pytest.mark.parametrize("key", ["bump", "map_bump"])
def test_bump_aliases(key):
    materials, _ = _parse(f"newmtl a\n{key} n.png\n")
    assert materials[0].normal_texture == "n.png"


def test_several_materials():
    materials, mat_map = _parse("newmtl a\nKd 1 0 0\nnewmtl b\nKd 0 1 0\n")
    assert mat_map == {"a": 0, "b": 1}
    assert materials[1].diffuse == (0.0, 1.0, 0.0)


def test_attributes_before_first_newmtl_are_dropped():
    materials, mat_map = _parse("Kd 1 1 1\nnewmtl a\n")
    assert [m.name for m in materials] == ["a"]
    assert materials[0].diffuse == (0.0, 0.0, 0.0)


def test_empty_library():
    assert _parse("# nothing\n\n") == ([], {})


@pytest.mark.parametrize("src, kind", [
    ("newmtl a\nKd 1 2\n", ErrorKind.MATERIAL_PARSE_ERROR),
    ("newmtl a\nNs shiny\n", ErrorKind.MATERIAL_PARSE_ERROR),
    ("newmtl a\nd\n", ErrorKind.MATERIAL_PARSE_ERROR),
    ("newmtl a\nmap_Kd\n", ErrorKind.MATERIAL_PARSE_ERROR),
    ("newmtl a\nillum two\n", ErrorKind.MATERIAL_PARSE_ERROR),
    ("newmtl a\nillum 300\n", ErrorKind.MATERIAL_PARSE_ERROR),
    ("newmtl\n", ErrorKind.INVALID_OBJECT_NAME),
    ("newmtl a\nKd 1_0 0 0\n", ErrorKind.MATERIAL_PARSE_ERROR),
    ("newmtl a\nillum 1_0\n", ErrorKind.MATERIAL_PARSE_ERROR),
    ("newmtl a\nNs \u0663\n", ErrorKind.MATERIAL_PARSE_ERROR),
])
def test_malformed(src, kind):
    with pytest.raises(LoadError) as err:
        _parse(src)
    assert err.value.kind is kind


def test_load_mtl_missing(tmp_path):
    with pytest.raises(LoadError) as err:
        load_mtl(tmp_path / "none.mtl")
    assert err.value.kind is ErrorKind.OPEN_FILE_FAILED


def test_file_loader_resolves_against_base_dir(tmp_path):
    (tmp_path / "lib.mtl").write_text("newmtl stone\n", encoding="utf-8")
    materials, mat_map = FileMaterialLoader(tmp_path).load("lib.mtl")
    assert materials[0].name == "stone"
    assert mat_map == {"stone": 0}
