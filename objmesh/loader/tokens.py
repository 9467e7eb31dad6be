# objmesh/loader/tokens.py
"""
Строгий разбор чисел в OBJ/MTL.

`int()`/`float()` в Python принимают больше, чем допускает формат:
подчёркивания ("1_0"), не‑ASCII цифры и пробелы вокруг числа.  Здесь
принимаются только ASCII‑записи.
"""

import re

_INT_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|[+-]?(?:inf|infinity|nan)",
    re.ASCII | re.IGNORECASE,
)


def parse_int(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)


def parse_float(text: str) -> float:
    if not _FLOAT_RE.fullmatch(text):
        raise ValueError(f"invalid float: {text!r}")
    return float(text)
