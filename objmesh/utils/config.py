"""
Конфигурация загрузчика в JSON (по‑умолчанию objmesh.json).

Если файл не найден – создаётся файл с настройками по‑умолчанию.
Неверные значения не роняют загрузку: они заменяются значениями
по‑умолчанию с предупреждением в логе.
"""

import copy
import json
import logging
from pathlib import Path
from objmesh.utils.logger import logger

DEFAULT_CONFIG = {
    "load_options": {
        "merge_identical_points": False,
        "reorder_data": False,
        "single_index": True,
        "triangulate": True,
        "ignore_points": True,
        "ignore_lines": True,
    },
    "dtype": "float32",
    "log_level": "INFO",
}

SUPPORTED_DTYPES = ("float32", "float64")


class Config:
    """Singleton‑подобный объект конфигурации (один на путь к файлу)."""
    _instance = None

    def __new__(cls, path: str = "objmesh.json"):
        if cls._instance is None or cls._instance.path != Path(path):
            cls._instance = super().__new__(cls)
            cls._instance.path = Path(path)
            cls._instance._load()
        return cls._instance

    @classmethod
    def reset(cls):
        """Забыть текущий экземпляр (нужно тестам и CLI с --config)."""
        cls._instance = None

    def _load(self):
        if not self.path.is_file():
            logger.info(f"[Config] No config at {self.path} – creating default.")
            self.data = copy.deepcopy(DEFAULT_CONFIG)
            self.save()
            return
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top level must be an object")
        except (OSError, ValueError) as exc:
            logger.error(f"[Config] Failed to read {self.path}: {exc}")
            self.data = copy.deepcopy(DEFAULT_CONFIG)
            self.save()
            return
        self.data = data
        self._validate()
        logger.info(f"[Config] Loaded {self.path}.")

    def _validate(self):
        options = self.data.get("load_options")
        if options is not None:
            if not isinstance(options, dict):
                logger.warning("[Config] load_options must be an object – using defaults")
                self.data["load_options"] = copy.deepcopy(DEFAULT_CONFIG["load_options"])
            else:
                known = DEFAULT_CONFIG["load_options"]
                for key in list(options):
                    if key not in known or not isinstance(options[key], bool):
                        logger.warning(f"[Config] Ignoring load option {key}={options[key]!r}")
                        del options[key]

        dtype = self.data.get("dtype")
        if dtype is not None and dtype not in SUPPORTED_DTYPES:
            logger.warning(f"[Config] Unsupported dtype {dtype!r} – using float32")
            self.data["dtype"] = DEFAULT_CONFIG["dtype"]

        level = self.data.get("log_level")
        if level is not None and not isinstance(logging.getLevelName(str(level).upper()), int):
            logger.warning(f"[Config] Unknown log level {level!r} – using INFO")
            self.data["log_level"] = DEFAULT_CONFIG["log_level"]

    def save(self):
        try:
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=4)
            logger.info("[Config] Configuration saved.")
        except OSError as exc:
            logger.error(f"[Config] Unable to save config: {exc}")

    def __getitem__(self, key):
        return self.data.get(key, DEFAULT_CONFIG.get(key))

    def __setitem__(self, key, value):
        self.data[key] = value
        self.save()

    def get(self, key, default=None):
        return self.data.get(key, default)
