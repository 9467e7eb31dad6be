# -*- coding: utf-8 -*-
"""
Материал из MTL‑файла.

Поддерживаются стандартные атрибуты MTL (Ka/Kd/Ks, Ns, Ni, d, illum и
карты текстур).  Всё нераспознанное складывается в `unknown_param`
как «ключ → остаток строки».  Пути к текстурам хранятся как есть, без
префикса каталога.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

Color = Tuple[float, float, float]

# слот текстуры -> атрибут Material
TEXTURE_SLOTS = {
    "ambient": "ambient_texture",
    "diffuse": "diffuse_texture",
    "specular": "specular_texture",
    "normal": "normal_texture",
    "shininess": "shininess_texture",
    "dissolve": "dissolve_texture",
}


@dataclass
class Material:
    name: str = ""
    ambient: Color = (0.0, 0.0, 0.0)
    diffuse: Color = (0.0, 0.0, 0.0)
    specular: Color = (0.0, 0.0, 0.0)
    shininess: float = 0.0
    # альфа материала («dissolve» в терминах MTL)
    dissolve: float = 1.0
    # коэффициент преломления; 1.0 – свет не преломляется
    optical_density: float = 1.0
    ambient_texture: str = ""
    diffuse_texture: str = ""
    specular_texture: str = ""
    normal_texture: str = ""
    shininess_texture: str = ""
    dissolve_texture: str = ""
    illumination_model: Optional[int] = None
    unknown_param: Dict[str, str] = field(default_factory=dict)

    def texture_paths(self) -> Dict[str, str]:
        """Только заданные карты: {"diffuse": "wood.png", ...}."""
        paths = {}
        for slot, attr in TEXTURE_SLOTS.items():
            value = getattr(self, attr)
            if value:
                paths[slot] = value
        return paths
