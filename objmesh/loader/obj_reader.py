# -*- coding: utf-8 -*-
"""
Построчный разбор OBJ.

Читатель накапливает сырые массивы позиций/UV/нормалей/цветов и список
граней текущего объекта.  На границе объекта (`o`/`g`), при смене
материала (`usemtl`) и в конце потока накопленные грани отдаются
экспортёру (с одним или с раздельными индексами) и превращаются в `Model`.

Сырые массивы между объектами не сбрасываются – индексы в OBJ глобальны
для всего файла.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, NamedTuple, Optional

import numpy as np

from objmesh.assets.material import Material
from objmesh.assets.mtl_reader import (
    AsyncMaterialLoader,
    FileMaterialLoader,
    MaterialLoader,
    MtlLoadResult,
)
from objmesh.assets.texture_loader import TextureManager
from objmesh.loader.errors import ErrorKind, LoadError
from objmesh.loader.faces import parse_face
from objmesh.loader.multi_index import export_faces_multi_index
from objmesh.loader.options import LoadOptions
from objmesh.loader.single_index import export_faces
from objmesh.loader.tokens import parse_float
from objmesh.scene.model import Model
from objmesh.utils.logger import logger
from objmesh.utils.profiler import Profiler

DEFAULT_OBJECT_NAME = "unnamed_object"


class ObjLoadResult(NamedTuple):
    """
    Результат загрузки.  Геометрия возвращается даже если библиотеку
    материалов загрузить не удалось – тогда ошибка лежит в `material_error`.
    """
    models: List[Model]
    materials: List[Material]
    material_map: Dict[str, int]
    material_error: Optional[LoadError] = None

    def require_materials(self) -> List[Material]:
        if self.material_error is not None:
            raise self.material_error
        return self.materials

    def load_textures(self, base_dir=None) -> List[Dict[str, np.ndarray]]:
        """
        Загрузить карты каждого материала (пути – относительно `base_dir`,
        обычно каталога OBJ).  Отсутствующие файлы пропускаются с
        предупреждением; результат выровнен по `materials`.
        """
        base = Path(base_dir) if base_dir is not None else Path()
        textures = []
        for material in self.materials:
            maps = {}
            for slot, rel in material.texture_paths().items():
                try:
                    maps[slot] = TextureManager.get(base / rel)
                except FileNotFoundError as exc:
                    logger.warning(f"[ObjReader] Material {material.name}: {exc}")
            textures.append(maps)
        return textures


def _check_dtype(dtype) -> np.dtype:
    dt = np.dtype(dtype)
    if dt not in (np.dtype(np.float32), np.dtype(np.float64)):
        raise ValueError(f"Unsupported attribute dtype: {dt} (use float32 or float64)")
    return dt


def _parse_floats(words: List[str], start: int, n: int) -> Optional[List[float]]:
    values = words[start:start + n]
    if len(values) != n:
        return None
    try:
        return [parse_float(x) for x in values]
    except ValueError:
        return None


def _decode(line) -> str:
    if isinstance(line, bytes):
        try:
            return line.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise LoadError(ErrorKind.READ_ERROR, str(exc)) from exc
    return line


async def _read_lines_async(lines):
    """То же, что `_read_lines`, для асинхронного источника строк."""
    it = lines.__aiter__()
    while True:
        try:
            line = await it.__anext__()
        except StopAsyncIteration:
            return
        except (OSError, UnicodeDecodeError) as exc:
            raise LoadError(ErrorKind.READ_ERROR, str(exc)) from exc
        yield _decode(line)


def _read_lines(lines: Iterable):
    """Итерация по строкам с переводом ошибок чтения в LoadError."""
    it = iter(lines)
    while True:
        try:
            line = next(it)
        except StopIteration:
            return
        except (OSError, UnicodeDecodeError) as exc:
            raise LoadError(ErrorKind.READ_ERROR, str(exc)) from exc
        yield _decode(line)


class _ObjParser:
    """Состояние разбора одного OBJ‑потока."""

    def __init__(self, options: LoadOptions, dtype):
        options.validate()
        self.options = options
        self.dtype = _check_dtype(dtype)
        self._export = export_faces if options.single_index else export_faces_multi_index

        self.models: List[Model] = []
        self.materials: List[Material] = []
        self.mat_map: Dict[str, int] = {}
        self.material_error: Optional[LoadError] = None

        self.pos: List[float] = []
        self.v_color: List[float] = []
        self.texcoord: List[float] = []
        self.normal: List[float] = []
        self.faces = []

        self.name = DEFAULT_OBJECT_NAME
        self.mat_id: Optional[int] = None

    # -----------------------------------------------------------------
    def feed(self, line: str) -> Optional[str]:
        """
        Обработать одну строку.  Для `mtllib` возвращает имя библиотеки,
        которую должен загрузить вызывающий код.
        """
        words = line.split()
        if not words or words[0].startswith("#"):
            return None
        key = words[0]

        if key == "v":
            values = _parse_floats(words, 1, 3)
            if values is None:
                raise LoadError(ErrorKind.POSITION_PARSE_ERROR, line.strip())
            self.pos.extend(values)
            # необязательный цвет вершины: v x y z r g b
            color = _parse_floats(words, 4, 3)
            if color is not None:
                self.v_color.extend(color)
        elif key == "vt":
            values = _parse_floats(words, 1, 2)
            if values is None:
                raise LoadError(ErrorKind.TEXCOORD_PARSE_ERROR, line.strip())
            self.texcoord.extend(values)
        elif key == "vn":
            values = _parse_floats(words, 1, 3)
            if values is None:
                raise LoadError(ErrorKind.NORMAL_PARSE_ERROR, line.strip())
            self.normal.extend(values)
        elif key in ("f", "l"):
            self.faces.append(parse_face(words[1:],
                                         len(self.pos) // 3,
                                         len(self.texcoord) // 2,
                                         len(self.normal) // 3))
        elif key in ("o", "g"):
            # объекты и группы обрабатываются одинаково
            if self.faces:
                self._flush()
            self.name = line.strip()[1:].strip() or DEFAULT_OBJECT_NAME
        elif key == "mtllib":
            if len(words) < 2:
                raise LoadError(ErrorKind.MATERIAL_PARSE_ERROR, line.strip())
            return words[1]
        elif key == "usemtl":
            self._use_material(line)
        return None

    def _use_material(self, line: str) -> None:
        parts = line.strip().split(None, 1)
        mat_name = parts[1].strip() if len(parts) > 1 else ""
        if not mat_name:
            raise LoadError(ErrorKind.MATERIAL_PARSE_ERROR, line.strip())

        new_mat = self.mat_map.get(mat_name)
        # материал хранится на меш, поэтому смена материала внутри объекта
        # порождает новую модель с тем же именем
        if new_mat != self.mat_id and self.faces:
            self._flush()
        if new_mat is None:
            logger.warning(f"[ObjReader] Object {self.name} refers to unfound material: {mat_name}")
        self.mat_id = new_mat

    # -----------------------------------------------------------------
    def add_materials(self, result: MtlLoadResult) -> None:
        """Добавить библиотеку, сдвинув её индексы на число уже загруженных."""
        mats, mmap = result
        offset = len(self.materials)
        self.materials.extend(mats)
        for mat_name, index in mmap.items():
            self.mat_map[mat_name] = index + offset

    def material_failed(self, lib: str, exc: LoadError) -> None:
        logger.error(f"[ObjReader] Failed to load material library {lib}: {exc}")
        self.material_error = exc

    # -----------------------------------------------------------------
    def _flush(self) -> None:
        with Profiler(f"export '{self.name}'", items=len(self.faces)):
            mesh = self._export(self.pos, self.v_color, self.texcoord, self.normal,
                                self.faces, self.mat_id, self.options, self.dtype)
        self.models.append(Model(mesh, self.name))
        logger.debug(f"[ObjReader] Model '{self.name}': {len(self.faces)} face(s), "
                     f"{mesh.num_vertices} vertices")
        self.faces = []

    def finish(self) -> ObjLoadResult:
        # у последнего объекта нет закрывающего маркера – выгружаем всегда
        self._flush()
        return ObjLoadResult(self.models, self.materials, self.mat_map, self.material_error)


# ----------------------------------------------------------------------
# Публичные функции
# ----------------------------------------------------------------------
def _sync_loader(material_loader):
    if material_loader is None:
        return FileMaterialLoader().load
    if isinstance(material_loader, MaterialLoader):
        return material_loader.load
    return material_loader


def load_obj_buf(lines: Iterable,
                 options: LoadOptions = LoadOptions(),
                 material_loader=None,
                 dtype=np.float32) -> ObjLoadResult:
    """
    Загрузить OBJ из любого итератора строк (файл, io.StringIO, список).

    `material_loader` – `MaterialLoader` или функция `path -> (materials,
    name_map)`, поднимающая `LoadError`.  По‑умолчанию MTL ищутся
    относительно текущего каталога.
    """
    load_material = _sync_loader(material_loader)
    try:
        parser = _ObjParser(options, dtype)
        for line in _read_lines(lines):
            lib = parser.feed(line)
            if lib is None:
                continue
            try:
                result = load_material(lib)
            except LoadError as exc:
                parser.material_failed(lib, exc)
            else:
                parser.add_materials(result)
        return parser.finish()
    except LoadError as exc:
        logger.error(f"[ObjReader] Load failed: {exc}")
        raise


async def load_obj_buf_async(lines,
                             options: LoadOptions,
                             material_loader,
                             dtype=np.float32) -> ObjLoadResult:
    """
    Асинхронный вариант `load_obj_buf`: ждать можно только загрузку
    материалов, геометрия обрабатывается синхронно.

    `material_loader` – `AsyncMaterialLoader` или async‑функция
    `name -> (materials, name_map)`.  `lines` – обычный или асинхронный
    итератор строк.
    """
    if isinstance(material_loader, AsyncMaterialLoader):
        load_material = material_loader.load
    else:
        load_material = material_loader

    try:
        parser = _ObjParser(options, dtype)

        async def feed(line):
            lib = parser.feed(line)
            if lib is None:
                return
            try:
                result = await load_material(lib)
            except LoadError as exc:
                parser.material_failed(lib, exc)
            else:
                parser.add_materials(result)

        if hasattr(lines, "__aiter__"):
            async for line in _read_lines_async(lines):
                await feed(line)
        else:
            for line in _read_lines(lines):
                await feed(line)
        return parser.finish()
    except LoadError as exc:
        logger.error(f"[ObjReader] Load failed: {exc}")
        raise


def load_obj(path, options: LoadOptions = LoadOptions(), dtype=np.float32) -> ObjLoadResult:
    """
    Загрузить OBJ‑файл; библиотеки материалов ищутся рядом с ним.
    """
    path = Path(path)
    try:
        f = open(path, "r", encoding="utf-8")
    except OSError as exc:
        logger.error(f"[ObjReader] Failed to open {path}: {exc}")
        raise LoadError(ErrorKind.OPEN_FILE_FAILED, str(path)) from exc
    with f:
        return load_obj_buf(f, options, FileMaterialLoader(path.parent), dtype)
