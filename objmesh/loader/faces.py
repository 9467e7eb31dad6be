# objmesh/loader/faces.py
"""
Разбор вершин грани ("v/vt/vn") и классификация граней по числу вершин.

Грань – закрытое множество вариантов: Point, Line, Triangle, Quad и
Polygon (N >= 5, либо 0 вершин).  Экспортёры выбирают быстрый путь по
типу грани, а общий случай обрабатывается как веер треугольников.
"""

from __future__ import annotations

from typing import Callable, NamedTuple, Optional, Sequence, Tuple, Union

from objmesh.loader.errors import ErrorKind, LoadError
from objmesh.loader.options import LoadOptions
from objmesh.loader.tokens import parse_int


class VertexIndices(NamedTuple):
    """
    Индексы (с нуля) позиции, текстурной координаты и нормали одной
    вершины грани.  `None` – атрибут не указан в исходном токене.
    """
    v: Optional[int]
    vt: Optional[int] = None
    vn: Optional[int] = None

    def sort_key(self) -> Tuple[int, int, int]:
        return tuple(-1 if i is None else i for i in self)

    def __lt__(self, other: "VertexIndices") -> bool:
        return self.sort_key() < other.sort_key()


def parse_vertex_indices(token: str, pos_count: int, tex_count: int,
                         norm_count: int) -> VertexIndices:
    """
    Разобрать один токен грани.

    Положительные индексы в OBJ начинаются с 1, отрицательные отсчитываются
    от текущего конца соответствующего массива (-1 – последний элемент),
    поэтому нужны текущие размеры массивов.
    """
    fields = token.split("/")
    if len(fields) > 3:
        raise LoadError(ErrorKind.FACE_PARSE_ERROR, f"too many fields in {token!r}")

    counts = (pos_count, tex_count, norm_count)
    resolved = [None, None, None]
    for slot, field in enumerate(fields):
        # v//vn – пустое поле означает отсутствие атрибута
        if not field:
            continue
        try:
            value = parse_int(field)
        except ValueError as exc:
            raise LoadError(ErrorKind.FACE_PARSE_ERROR,
                            f"invalid index {field!r}") from exc
        resolved[slot] = counts[slot] + value if value < 0 else value - 1
    return VertexIndices(*resolved)


# ----------------------------------------------------------------------
# Варианты граней
# ----------------------------------------------------------------------
class Point(NamedTuple):
    a: VertexIndices


class Line(NamedTuple):
    a: VertexIndices
    b: VertexIndices


class Triangle(NamedTuple):
    a: VertexIndices
    b: VertexIndices
    c: VertexIndices


class Quad(NamedTuple):
    a: VertexIndices
    b: VertexIndices
    c: VertexIndices
    d: VertexIndices


class Polygon(NamedTuple):
    refs: Tuple[VertexIndices, ...]


Face = Union[Point, Line, Triangle, Quad, Polygon]


def parse_face(tokens: Sequence[str], pos_count: int, tex_count: int,
               norm_count: int) -> Face:
    """Разобрать все токены записи `f`/`l`; ошибка в любом – ошибка всей грани."""
    refs = [parse_vertex_indices(t, pos_count, tex_count, norm_count) for t in tokens]
    n = len(refs)
    if n == 3:
        return Triangle(*refs)
    if n == 4:
        return Quad(*refs)
    if n == 1:
        return Point(refs[0])
    if n == 2:
        return Line(*refs)
    return Polygon(tuple(refs))


def emit_face(face: Face, options: LoadOptions,
              add_vertex: Callable[[VertexIndices], None]) -> Optional[int]:
    """
    Передать вершины грани в `add_vertex` согласно политике
    триангуляции и вырожденных граней.

    Возвращает арность, которую нужно записать в `face_arities`,
    или None, если записывать нечего.
    """
    triangulate = options.triangulate

    if isinstance(face, Triangle):
        add_vertex(face.a)
        add_vertex(face.b)
        add_vertex(face.c)
        return None if triangulate else 3

    if isinstance(face, Quad):
        a, b, c, d = face
        add_vertex(a)
        add_vertex(b)
        add_vertex(c)
        if triangulate:
            add_vertex(a)
            add_vertex(c)
            add_vertex(d)
            return None
        add_vertex(d)
        return 4

    if isinstance(face, Point):
        if options.ignore_points:
            return None
        add_vertex(face.a)
        if triangulate:
            # вырожденный треугольник нулевой площади
            add_vertex(face.a)
            add_vertex(face.a)
            return None
        return 1

    if isinstance(face, Line):
        if options.ignore_lines:
            return None
        add_vertex(face.a)
        add_vertex(face.b)
        if triangulate:
            add_vertex(face.b)
            return None
        return 2

    refs = face.refs
    if triangulate:
        # Веер от первой вершины.  Невыпуклые полигоны могут дать
        # самопересечения – это известное ограничение.
        if len(refs) < 2:
            raise LoadError(ErrorKind.INVALID_POLYGON)
        a, b = refs[0], refs[1]
        for c in refs[2:]:
            add_vertex(a)
            add_vertex(b)
            add_vertex(c)
            b = c
        return None

    if not refs:
        return None
    for ref in refs:
        add_vertex(ref)
    return len(refs)


def emit_faces(faces: Sequence[Face], options: LoadOptions,
               add_vertex: Callable[[VertexIndices], None]) -> list:
    """
    Пройти все грани и собрать `face_arities`.

    Если ни одна грань не оказалась отличной от треугольника, список
    пуст – это признак «чисто треугольного» меша.
    """
    arities = []
    all_triangles = True
    for face in faces:
        arity = emit_face(face, options, add_vertex)
        if arity is None:
            continue
        arities.append(arity)
        if arity != 3:
            all_triangles = False
    return [] if all_triangles else arities
