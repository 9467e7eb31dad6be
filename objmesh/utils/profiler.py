"""
Замер времени экспорта моделей.

    with Profiler("export 'cube'", items=len(faces)):
        ...
"""

import time
from typing import Optional

from objmesh.utils.logger import logger


class Profiler:
    """
    Контекст‑менеджер: после выхода `elapsed_ms` содержит время блока.
    Если передан `items` (например, число граней), в лог пишется ещё и
    скорость обработки.
    """
    def __init__(self, name: str, items: Optional[int] = None):
        self.name = name
        self.items = items
        self._start = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self):
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0
        if exc_type is not None:
            logger.debug(f"[Profiler] {self.name}: aborted after {self.elapsed_ms:.2f} ms")
        elif self.items and self.elapsed_ms > 0.0:
            rate = self.items / self.elapsed_ms
            logger.debug(f"[Profiler] {self.name}: {self.elapsed_ms:.2f} ms "
                         f"({self.items} items, {rate:.1f}/ms)")
        else:
            logger.debug(f"[Profiler] {self.name}: {self.elapsed_ms:.2f} ms")
