"""
Меш, полученный из OBJ: плоские массивы атрибутов и потоки индексов.
"""

from __future__ import annotations

from typing import Iterator, Optional

import numpy as np


def _flat(values, dtype) -> np.ndarray:
    if values is None:
        return np.zeros(0, dtype=dtype)
    return np.asarray(values, dtype=dtype).reshape(-1)


class Mesh:
    """
    Геометрия одного объекта/группы.

    Все атрибуты хранятся «плоско»: positions = [x, y, z, x, y, z, ...],
    texcoords = [u, v, ...].  Если нормалей, UV или цветов нет – массив пуст.

    * indices – индексы вершин граней.  При `single_index` они общие для
      всех атрибутов, иначе у нормалей и UV свои `normal_indices` /
      `texcoord_indices` (пустые после `reorder_data`).
    * face_arities – число вершин каждой грани; пусто, если все грани
      треугольники.
    * vertex_color_indices – заполняется только слиянием точек.
    """

    def __init__(self,
                 positions=None,
                 vertex_color=None,
                 normals=None,
                 texcoords=None,
                 indices=None,
                 face_arities=None,
                 vertex_color_indices=None,
                 texcoord_indices=None,
                 normal_indices=None,
                 material_id: Optional[int] = None,
                 dtype=np.float32):
        self.positions = _flat(positions, dtype)
        self.vertex_color = _flat(vertex_color, np.float32)
        self.normals = _flat(normals, dtype)
        self.texcoords = _flat(texcoords, dtype)
        self.indices = _flat(indices, np.uint32)
        self.face_arities = _flat(face_arities, np.uint32)
        self.vertex_color_indices = _flat(vertex_color_indices, np.uint32)
        self.texcoord_indices = _flat(texcoord_indices, np.uint32)
        self.normal_indices = _flat(normal_indices, np.uint32)
        self.material_id = material_id

    # -----------------------------------------------------------------
    @property
    def num_vertices(self) -> int:
        return len(self.positions) // 3

    @property
    def num_faces(self) -> int:
        if len(self.face_arities):
            return len(self.face_arities)
        return len(self.indices) // 3

    def faces(self) -> Iterator[np.ndarray]:
        """Срезы `indices` по граням (тройками, если face_arities пуст)."""
        if not len(self.face_arities):
            for start in range(0, len(self.indices) - 2, 3):
                yield self.indices[start:start + 3]
            return
        start = 0
        for arity in self.face_arities:
            end = start + int(arity)
            yield self.indices[start:end]
            start = end

    # -----------------------------------------------------------------
    @property
    def bounding_sphere(self) -> tuple[np.ndarray, float]:
        """(центр, радиус) по позициям меша."""
        verts = self.positions.reshape((-1, 3))
        if not len(verts):
            return np.zeros(3, dtype=self.positions.dtype), 0.0
        centre = verts.mean(axis=0).astype(self.positions.dtype)
        radius = float(np.linalg.norm(verts - centre, axis=1).max())
        return centre, radius

    def interleaved(self) -> np.ndarray:
        """
        Строки [позиция, нормаль, uv] на вершину – для мешей с одним
        индексом (как вершинный буфер для GPU).
        """
        if len(self.normal_indices) or len(self.texcoord_indices):
            raise ValueError("interleaving requires a single-index mesh")
        n = self.num_vertices
        components = [self.positions.reshape((n, 3))]
        if len(self.normals) == n * 3 and n:
            components.append(self.normals.reshape((n, 3)))
        if len(self.texcoords) == n * 2 and n:
            components.append(self.texcoords.reshape((n, 2)))
        return np.column_stack(components).astype(self.positions.dtype)

    def __repr__(self):
        return (f"Mesh(vertices={self.num_vertices}, indices={len(self.indices)}, "
                f"faces={self.num_faces}, material_id={self.material_id})")
