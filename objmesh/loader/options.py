# objmesh/loader/options.py
"""
Опции обработки меша во время загрузки.

По‑умолчанию все флаги выключены – результат максимально близок к
исходным данным файла.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

from objmesh.loader.errors import ErrorKind, LoadError
from objmesh.utils.config import DEFAULT_CONFIG


@dataclass(frozen=True)
class LoadOptions:
    """
    * merge_identical_points – слить побитово равные позиции/нормали/UV.
      Несовместимо с `single_index`.
    * reorder_data – переупорядочить нормали и UV так, чтобы хватало
      индекса позиций.  Несовместимо с `single_index`.
    * single_index – один общий индекс на все атрибуты (GPU‑режим).
      Вершины могут дублироваться.
    * triangulate – разбить грани на треугольники (веером).  Точки и
      линии превращаются в вырожденные треугольники.
    * ignore_points / ignore_lines – отбрасывать грани из 1 / 2 вершин.
    """
    merge_identical_points: bool = False
    reorder_data: bool = False
    single_index: bool = False
    triangulate: bool = False
    ignore_points: bool = False
    ignore_lines: bool = False

    def is_valid(self) -> bool:
        """False, если заданы взаимоисключающие флаги."""
        return not (self.single_index
                    and (self.merge_identical_points or self.reorder_data))

    def validate(self) -> None:
        if not self.is_valid():
            raise LoadError(ErrorKind.INVALID_LOAD_OPTION_CONFIG)

    @classmethod
    def from_config(cls, config) -> "LoadOptions":
        """
        Собрать опции из секции `load_options` конфигурации.  Флаги,
        которых нет в секции, берутся из `DEFAULT_CONFIG`.
        """
        section = dict(DEFAULT_CONFIG["load_options"])
        section.update(config["load_options"] or {})
        known = {f.name for f in fields(cls)}
        return cls(**{k: bool(v) for k, v in section.items() if k in known})


# Типичные опции для рендеринга на GPU/в реальном времени.
GPU_LOAD_OPTIONS = LoadOptions(
    single_index=True,
    triangulate=True,
    ignore_points=True,
    ignore_lines=True,
)

# Типичные опции для offline‑рендера: n‑угольники сохраняются,
# нормали и UV переупорядочены под один индекс.
OFFLINE_RENDERING_LOAD_OPTIONS = LoadOptions(
    merge_identical_points=True,
    reorder_data=True,
    ignore_points=True,
    ignore_lines=True,
)
