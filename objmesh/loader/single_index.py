# objmesh/loader/single_index.py
"""
Экспорт граней в меш с одним общим индексом для позиций, нормалей,
UV и цветов.  Каждая уникальная тройка (v, vt, vn) становится отдельной
вершиной, так что вершины могут дублироваться.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from objmesh.loader.errors import ErrorKind, LoadError
from objmesh.loader.faces import Face, VertexIndices, emit_faces
from objmesh.loader.options import LoadOptions
from objmesh.scene.mesh import Mesh


class _SingleIndexBuilder:
    """Накопитель выходных буферов; `index_map` – (v, vt, vn) -> индекс."""

    def __init__(self, pos, v_color, texcoord, normal):
        self.pos = pos
        self.v_color = v_color
        self.texcoord = texcoord
        self.normal = normal
        self.pos_count = len(pos) // 3
        self.tex_count = len(texcoord) // 2
        self.norm_count = len(normal) // 3
        self.color_count = len(v_color) // 3
        # один цвет на весь файл – применяется ко всем вершинам
        self.uniform_color = len(v_color) == 3

        self.index_map: dict = {}
        self.positions = []
        self.vertex_color = []
        self.texcoords = []
        self.normals = []
        self.indices = []

    def add_vertex(self, vert: VertexIndices) -> None:
        index = self.index_map.get(vert)
        if index is not None:
            self.indices.append(index)
            return

        v = vert.v
        if v is None or not 0 <= v < self.pos_count:
            raise LoadError(ErrorKind.FACE_VERTEX_OUT_OF_BOUNDS, f"position index {v}")
        self.positions.extend(self.pos[v * 3:v * 3 + 3])

        vt = vert.vt
        if self.tex_count and vt is not None:
            if not 0 <= vt < self.tex_count:
                raise LoadError(ErrorKind.FACE_TEXCOORD_OUT_OF_BOUNDS, f"texcoord index {vt}")
            self.texcoords.extend(self.texcoord[vt * 2:vt * 2 + 2])

        vn = vert.vn
        if self.norm_count and vn is not None:
            if not 0 <= vn < self.norm_count:
                raise LoadError(ErrorKind.FACE_NORMAL_OUT_OF_BOUNDS, f"normal index {vn}")
            self.normals.extend(self.normal[vn * 3:vn * 3 + 3])

        if len(self.v_color):
            if self.uniform_color:
                self.vertex_color.extend(self.v_color)
            elif v >= self.color_count:
                raise LoadError(ErrorKind.FACE_COLOR_OUT_OF_BOUNDS, f"color index {v}")
            else:
                self.vertex_color.extend(self.v_color[v * 3:v * 3 + 3])

        # размер словаря – следующий свободный индекс
        index = len(self.index_map)
        self.index_map[vert] = index
        self.indices.append(index)


def export_faces(pos: Sequence[float],
                 v_color: Sequence[float],
                 texcoord: Sequence[float],
                 normal: Sequence[float],
                 faces: Sequence[Face],
                 mat_id: Optional[int],
                 options: LoadOptions,
                 dtype=np.float32) -> Mesh:
    """Собрать `Mesh` с одним индексом из списка граней."""
    builder = _SingleIndexBuilder(pos, v_color, texcoord, normal)
    face_arities = emit_faces(faces, options, builder.add_vertex)
    return Mesh(
        positions=builder.positions,
        vertex_color=builder.vertex_color,
        normals=builder.normals,
        texcoords=builder.texcoords,
        indices=builder.indices,
        face_arities=face_arities,
        material_id=mat_id,
        dtype=dtype,
    )
