# objmesh/loader/reorder.py
"""
Переупорядочивание нормалей и UV под индекс позиций.

После прохода `normal_indices` и `texcoord_indices` пусты, а данные
адресуются напрямую (см. `reorder_data`).
"""

from __future__ import annotations

import numpy as np
from numba import njit

from objmesh.scene.mesh import Mesh


@njit
def _scatter_rows(out, rows, attr_indices, indices):
    # при конфликте побеждает последняя пара
    for k in range(attr_indices.shape[0]):
        src = attr_indices[k]
        dst = indices[k]
        for c in range(rows.shape[1]):
            out[dst, c] = rows[src, c]


def reorder_attribute(values: np.ndarray, attr_indices: np.ndarray,
                      indices: np.ndarray, num_positions: int,
                      width: int) -> np.ndarray:
    """
    * Элементов больше, чем позиций (данные «на вершину на грань») –
      собираем их по `attr_indices`: результат выровнен 1:1 с потоком
      индексов.
    * Иначе (данные «на вершину») – раскладываем в слоты позиций:
      элемент `attr_indices[k]` пишется в слот `indices[k]`.
    """
    if not len(values) or not len(attr_indices):
        return values
    rows = values.reshape((-1, width))
    if len(rows) > num_positions:
        return rows[attr_indices].reshape(-1)

    out = np.zeros((num_positions, width), dtype=values.dtype)
    _scatter_rows(out, rows, attr_indices, indices)
    return out.reshape(-1)


def reorder_data(mesh: Mesh) -> None:
    """Избавить меш от отдельных индексов UV и нормалей (на месте)."""
    n = mesh.num_vertices
    mesh.texcoords = reorder_attribute(mesh.texcoords, mesh.texcoord_indices,
                                       mesh.indices, n, 2)
    mesh.texcoord_indices = np.zeros(0, dtype=np.uint32)

    mesh.normals = reorder_attribute(mesh.normals, mesh.normal_indices,
                                     mesh.indices, n, 3)
    mesh.normal_indices = np.zeros(0, dtype=np.uint32)
