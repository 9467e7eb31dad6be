# objmesh/loader/merge.py
"""
Слияние побитово одинаковых точек (позиций, нормалей, UV, цветов).

Сравнение точное – по битовому представлению значений, без допуска.
Два числа, равные математически, но записанные с разным округлением,
остаются разными точками.
"""

from __future__ import annotations

import numpy as np


def bit_keys(points: np.ndarray, width: int) -> np.ndarray:
    """
    Ключи для сравнения: строки по `width` компонент, переинтерпретированные
    как беззнаковые целые той же ширины.  Только для хеширования/сравнения,
    не для арифметики.
    """
    rows = np.ascontiguousarray(points).reshape((-1, width))
    return rows.view(np.dtype(f"u{rows.dtype.itemsize}"))


def merge_identical_points(points: np.ndarray, indices: np.ndarray,
                           width: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Оставить первое вхождение каждой уникальной точки (в исходном
    порядке) и переписать `indices` на канонические номера.

    Возвращает (новый плоский буфер, новые индексы).  Пустой поток
    индексов – ничего не делаем.
    """
    if not len(indices):
        return points, indices

    keys = bit_keys(points, width)
    _, first, inverse = np.unique(keys, axis=0, return_index=True, return_inverse=True)

    # np.unique сортирует ключи; возвращаем порядок первых вхождений
    order = np.argsort(first, kind="stable")
    rank = np.empty_like(order)
    rank[order] = np.arange(len(order))
    remap = rank[inverse.reshape(-1)].astype(np.uint32)

    rows = points.reshape((-1, width))
    merged = rows[first[order]].reshape(-1)
    return merged, remap[indices]
