# objmesh/loader/multi_index.py
"""
Экспорт граней с отдельными индексами для позиций, нормалей и UV.

Топология исходного файла сохраняется: каждый атрибут дедуплицируется
независимо.  Цвет вершины – свойство позиции, поэтому он идёт по индексу
позиций.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from objmesh.loader.errors import ErrorKind, LoadError
from objmesh.loader.faces import Face, VertexIndices, emit_faces
from objmesh.loader.merge import merge_identical_points
from objmesh.loader.options import LoadOptions
from objmesh.loader.reorder import reorder_data
from objmesh.scene.mesh import Mesh


class _AttributeStream:
    """Один атрибут (нормали или UV): свой словарь, буфер и поток индексов."""

    def __init__(self, raw: Sequence[float], width: int, error_kind: ErrorKind):
        self.raw = raw
        self.width = width
        self.count = len(raw) // width
        self.error_kind = error_kind
        self.index_map: dict = {}
        self.values = []
        self.indices = []

    def add(self, ref: Optional[int]) -> None:
        w = self.width
        if ref is None:
            # Атрибут не указан у этой вершины.  Для самой первой вершины
            # ссылаемся на элемент 0, дальше повторяем предыдущий индекс.
            # Это приближение, а не восстановление настоящих данных.
            if not self.indices:
                self.values.extend(self.raw[:w])
                self.index_map[0] = 0
                self.indices.append(0)
            else:
                self.indices.append(self.indices[-1])
            return

        index = self.index_map.get(ref)
        if index is None:
            if not 0 <= ref < self.count:
                raise LoadError(self.error_kind, f"index {ref}")
            self.values.extend(self.raw[ref * w:ref * w + w])
            index = len(self.index_map)
            self.index_map[ref] = index
        self.indices.append(index)


class _MultiIndexBuilder:
    def __init__(self, pos, v_color, texcoord, normal):
        self.pos = pos
        self.v_color = v_color
        self.pos_count = len(pos) // 3
        self.color_count = len(v_color) // 3
        self.uniform_color = len(v_color) == 3

        self.index_map: dict = {}
        self.positions = []
        self.vertex_color = []
        self.indices = []
        self.texcoords = (_AttributeStream(texcoord, 2, ErrorKind.FACE_TEXCOORD_OUT_OF_BOUNDS)
                          if len(texcoord) else None)
        self.normals = (_AttributeStream(normal, 3, ErrorKind.FACE_NORMAL_OUT_OF_BOUNDS)
                        if len(normal) else None)

    def add_vertex(self, vert: VertexIndices) -> None:
        v = vert.v
        index = self.index_map.get(v)
        if index is None:
            if v is None or not 0 <= v < self.pos_count:
                raise LoadError(ErrorKind.FACE_VERTEX_OUT_OF_BOUNDS, f"position index {v}")
            self.positions.extend(self.pos[v * 3:v * 3 + 3])
            index = len(self.index_map)
            self.index_map[v] = index

            if len(self.v_color):
                if self.uniform_color:
                    self.vertex_color.extend(self.v_color)
                elif v >= self.color_count:
                    raise LoadError(ErrorKind.FACE_COLOR_OUT_OF_BOUNDS, f"color index {v}")
                else:
                    self.vertex_color.extend(self.v_color[v * 3:v * 3 + 3])
        self.indices.append(index)

        if self.texcoords is not None:
            self.texcoords.add(vert.vt)
        if self.normals is not None:
            self.normals.add(vert.vn)


def export_faces_multi_index(pos: Sequence[float],
                             v_color: Sequence[float],
                             texcoord: Sequence[float],
                             normal: Sequence[float],
                             faces: Sequence[Face],
                             mat_id: Optional[int],
                             options: LoadOptions,
                             dtype=np.float32) -> Mesh:
    """
    Собрать `Mesh` с отдельными потоками индексов, затем (по опциям)
    слить одинаковые точки и/или переупорядочить данные.
    """
    builder = _MultiIndexBuilder(pos, v_color, texcoord, normal)
    face_arities = emit_faces(faces, options, builder.add_vertex)

    tex = builder.texcoords
    norm = builder.normals
    mesh = Mesh(
        positions=builder.positions,
        vertex_color=builder.vertex_color,
        normals=norm.values if norm is not None else None,
        texcoords=tex.values if tex is not None else None,
        indices=builder.indices,
        face_arities=face_arities,
        texcoord_indices=tex.indices if tex is not None else None,
        normal_indices=norm.indices if norm is not None else None,
        material_id=mat_id,
        dtype=dtype,
    )

    if options.merge_identical_points:
        if len(mesh.vertex_color):
            # цвета идут по индексу позиций – берём его копию до слияния позиций
            mesh.vertex_color, mesh.vertex_color_indices = merge_identical_points(
                mesh.vertex_color, mesh.indices.copy(), 3)
        mesh.positions, mesh.indices = merge_identical_points(mesh.positions, mesh.indices, 3)
        mesh.normals, mesh.normal_indices = merge_identical_points(
            mesh.normals, mesh.normal_indices, 3)
        mesh.texcoords, mesh.texcoord_indices = merge_identical_points(
            mesh.texcoords, mesh.texcoord_indices, 2)

    if options.reorder_data:
        reorder_data(mesh)

    return mesh
