# -*- coding: utf-8 -*-
"""
Разбор MTL‑файлов и интерфейс загрузчика материалов.

`load_mtl_buf` принимает любой итератор строк; `load_mtl` – путь к файлу.
Загрузчик OBJ получает материалы через `MaterialLoader` (или обычную
функцию), поэтому сам ничего о файловой системе не знает.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

from objmesh.assets.material import Material
from objmesh.loader.errors import ErrorKind, LoadError
from objmesh.loader.tokens import parse_float, parse_int
from objmesh.utils.logger import logger

MtlLoadResult = Tuple[List[Material], Dict[str, int]]

_COLOR_KEYS = {"Ka": "ambient", "Kd": "diffuse", "Ks": "specular"}
_FLOAT_KEYS = {"Ns": "shininess", "Ni": "optical_density", "d": "dissolve"}
_TEXTURE_KEYS = {
    "map_Ka": "ambient_texture",
    "map_Kd": "diffuse_texture",
    "map_Ks": "specular_texture",
    "map_Bump": "normal_texture",
    "map_bump": "normal_texture",
    "bump": "normal_texture",
    "map_Ns": "shininess_texture",
    "map_ns": "shininess_texture",
    "map_NS": "shininess_texture",
    "map_d": "dissolve_texture",
}


# ----------------------------------------------------------------------
# Интерфейсы загрузчика материалов
# ----------------------------------------------------------------------
class MaterialLoader(ABC):
    """По имени библиотеки материалов вернуть (materials, name -> index)."""

    @abstractmethod
    def load(self, path) -> MtlLoadResult:
        pass


class AsyncMaterialLoader(ABC):
    """То же, что MaterialLoader, но `load` – корутина."""

    @abstractmethod
    async def load(self, name: str) -> MtlLoadResult:
        pass


class FileMaterialLoader(MaterialLoader):
    """Ищет MTL‑файлы относительно каталога OBJ‑файла."""

    def __init__(self, base_dir=None):
        self.base_dir = Path(base_dir) if base_dir is not None else None

    def load(self, path) -> MtlLoadResult:
        full_path = self.base_dir / path if self.base_dir is not None else Path(path)
        return load_mtl(full_path)


# ----------------------------------------------------------------------
def _parse_float(words: List[str], line: str) -> float:
    if not words:
        raise LoadError(ErrorKind.MATERIAL_PARSE_ERROR, line)
    try:
        return parse_float(words[0])
    except ValueError as exc:
        raise LoadError(ErrorKind.MATERIAL_PARSE_ERROR, line) from exc


def _parse_color(words: List[str], line: str) -> Tuple[float, float, float]:
    if len(words) < 3:
        raise LoadError(ErrorKind.MATERIAL_PARSE_ERROR, line)
    try:
        return parse_float(words[0]), parse_float(words[1]), parse_float(words[2])
    except ValueError as exc:
        raise LoadError(ErrorKind.MATERIAL_PARSE_ERROR, line) from exc


def _rest_of_line(line: str, keyword: str) -> str:
    return line[len(keyword):].strip()


def load_mtl_buf(lines: Iterable[str]) -> MtlLoadResult:
    """Разобрать материалы из итератора строк."""
    materials: List[Material] = []
    mat_map: Dict[str, int] = {}
    current = Material()

    def finish(mat: Material) -> None:
        # материал без имени (до первого newmtl) отбрасывается
        if mat.name:
            mat_map[mat.name] = len(materials)
            materials.append(mat)

    try:
        for raw in lines:
            line = raw.strip()
            words = line.split()
            if not words or words[0].startswith("#"):
                continue
            key, args = words[0], words[1:]

            if key == "newmtl":
                finish(current)
                current = Material(name=_rest_of_line(line, key))
                if not current.name:
                    raise LoadError(ErrorKind.INVALID_OBJECT_NAME, line)
            elif key in _COLOR_KEYS:
                setattr(current, _COLOR_KEYS[key], _parse_color(args, line))
            elif key in _FLOAT_KEYS:
                setattr(current, _FLOAT_KEYS[key], _parse_float(args, line))
            elif key in _TEXTURE_KEYS:
                texture = _rest_of_line(line, key)
                if not texture:
                    raise LoadError(ErrorKind.MATERIAL_PARSE_ERROR, line)
                setattr(current, _TEXTURE_KEYS[key], texture)
            elif key == "illum":
                try:
                    illum = parse_int(args[0]) if args else -1
                except ValueError as exc:
                    raise LoadError(ErrorKind.MATERIAL_PARSE_ERROR, line) from exc
                if not 0 <= illum <= 255:
                    raise LoadError(ErrorKind.MATERIAL_PARSE_ERROR, line)
                current.illumination_model = illum
            else:
                current.unknown_param[key] = _rest_of_line(line, key)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error(f"[MtlReader] Failed to read line: {exc}")
        raise LoadError(ErrorKind.READ_ERROR) from exc

    finish(current)
    logger.debug(f"[MtlReader] Parsed {len(materials)} material(s)")
    return materials, mat_map


def load_mtl(path) -> MtlLoadResult:
    """Загрузить материалы из MTL‑файла на диске."""
    try:
        f = open(path, "r", encoding="utf-8")
    except OSError as exc:
        logger.error(f"[MtlReader] Failed to open {path}: {exc}")
        raise LoadError(ErrorKind.OPEN_FILE_FAILED, str(path)) from exc
    with f:
        return load_mtl_buf(f)
