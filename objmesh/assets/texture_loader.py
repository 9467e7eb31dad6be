"""
Загружает PNG/JPG‑текстуры материалов в RGBA‑массивы numpy.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict

import numpy as np
from PIL import Image

from objmesh.assets.material import Material
from objmesh.utils.logger import logger


def load_texture(path) -> np.ndarray:
    """
    Загружает изображение через Pillow.
    Возврат – массив (h, w, 4) uint8.
    """
    p = Path(path).expanduser().resolve()
    if not p.is_file():
        raise FileNotFoundError(f"Texture not found: {p}")

    with Image.open(p) as img:
        rgba = img.convert("RGBA")
    data = np.array(rgba, dtype=np.uint8)
    logger.debug(f"[TextureLoader] Loaded texture {p} ({data.shape[1]}x{data.shape[0]})")
    return data


class TextureManager:
    """Кеширующий менеджер текстур – один объект на процесс."""
    _cache: Dict[Path, np.ndarray] = {}

    @classmethod
    def get(cls, path) -> np.ndarray:
        key = Path(path).expanduser().resolve()
        if key in cls._cache:
            return cls._cache[key]
        tex = load_texture(key)
        cls._cache[key] = tex
        logger.debug(f"[TextureManager] Cached texture: {key}")
        return tex

    @classmethod
    def load_material(cls, material: Material, base_dir=None) -> Dict[str, np.ndarray]:
        """Загрузить все карты материала (пути – относительно `base_dir`)."""
        base = Path(base_dir) if base_dir is not None else Path()
        return {slot: cls.get(base / rel)
                for slot, rel in material.texture_paths().items()}

    @classmethod
    def clear(cls) -> None:
        cls._cache.clear()
