# objmesh/utils/logger.py
# ---------------------------------------------------------------
# Общий логгер пакета.  Настраивается один раз при импорте.
# ---------------------------------------------------------------

import logging


def init_logger(level=logging.INFO):
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    return logging.getLogger("ObjMesh")


logger = init_logger()


def set_log_level(level) -> None:
    """Сменить уровень логгера (принимает int или имя уровня, напр. "DEBUG")."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")
    logger.setLevel(level)
