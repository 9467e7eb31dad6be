# objmesh/loader/errors.py
"""
Ошибки загрузки OBJ/MTL.

Все сбои разбора и проверки индексов поднимаются как `LoadError`,
а конкретная причина хранится в `LoadError.kind`.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    OPEN_FILE_FAILED = "open file failed"
    READ_ERROR = "read error"
    UNRECOGNIZED_CHARACTER = "unrecognized character"
    POSITION_PARSE_ERROR = "position parse error"
    NORMAL_PARSE_ERROR = "normal parse error"
    TEXCOORD_PARSE_ERROR = "texcoord parse error"
    FACE_PARSE_ERROR = "face parse error"
    MATERIAL_PARSE_ERROR = "material parse error"
    INVALID_OBJECT_NAME = "invalid object name"
    INVALID_POLYGON = "invalid polygon"
    FACE_VERTEX_OUT_OF_BOUNDS = "face vertex index out of bounds"
    FACE_TEXCOORD_OUT_OF_BOUNDS = "face texcoord index out of bounds"
    FACE_NORMAL_OUT_OF_BOUNDS = "face normal index out of bounds"
    FACE_COLOR_OUT_OF_BOUNDS = "face vertex color index out of bounds"
    INVALID_LOAD_OPTION_CONFIG = "mutually exclusive load options"
    GENERIC_FAILURE = "generic failure"


class LoadError(Exception):
    """Сбой загрузки; `kind` – одна из `ErrorKind`."""

    def __init__(self, kind: ErrorKind, detail: str | None = None):
        self.kind = kind
        self.detail = detail
        msg = kind.value if not detail else f"{kind.value}: {detail}"
        super().__init__(msg)
