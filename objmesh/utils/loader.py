# -*- coding: utf-8 -*-
"""
Минимальный парсер Wavefront OBJ → ObjSet.

Понимает v / vt / vn / f / l / p / o / g / s / usemtl / mtllib.
Материалы MTL не загружаются – сохраняется только имя.
Индексы переводятся в 0‑based, отрицательные (относительные)
разрешаются по количеству уже прочитанных элементов.
"""
from typing import List, Optional

from objmesh.errors import ObjSyntaxError
from objmesh.scene.obj_set import (
    FaceReference, Geometry, Normal, Object, ObjSet, Other, Shape,
    Triangle, TVertex, Vertex,
)
from objmesh.utils.logger import logger

DEFAULT_OBJECT_NAME = "default"


def _logical_lines(text: str):
    """(номер строки, строка) с учётом переноса через `\\`."""
    pending = ""
    start = 0
    # только \n – номера строк совпадают с редактором
    for number, raw in enumerate(text.split("\n"), start=1):
        line = raw.rstrip("\r").split("#", 1)[0].rstrip()
        if not pending:
            start = number
        if line.endswith("\\"):
            pending += line[:-1] + " "
            continue
        yield start, pending + line
        pending = ""
    if pending:
        yield start, pending


class _ParserState:
    """Текущий объект/геометрия/группы; объекты создаются лениво."""

    def __init__(self, obj_set: ObjSet):
        self.obj_set = obj_set
        self.object_name = DEFAULT_OBJECT_NAME
        self.material: Optional[str] = None
        self.groups: List[str] = []
        self.smoothing_group = 0
        self.current_object: Optional[Object] = None
        self.current_geometry: Optional[Geometry] = None

    def new_object(self, name: str):
        self.object_name = name
        self.current_object = None
        self.current_geometry = None

    def new_geometry(self):
        self.current_geometry = None

    def add_shape(self, primitive):
        if self.current_object is None:
            self.current_object = Object(self.object_name)
            self.obj_set.objects.append(self.current_object)
        if self.current_geometry is None:
            self.current_geometry = Geometry(self.material)
            self.current_object.geometry.append(self.current_geometry)
        self.current_geometry.shapes.append(
            Shape(primitive, self.groups, self.smoothing_group)
        )


def _floats(args, line_number, minimum, maximum, keyword):
    if not minimum <= len(args) <= maximum:
        raise ObjSyntaxError(
            line_number,
            f"'{keyword}' expects {minimum}..{maximum} values, got {len(args)}",
        )
    try:
        return [float(a) for a in args]
    except ValueError as exc:
        raise ObjSyntaxError(line_number, f"invalid number in '{keyword}': {exc}") from exc


def _resolve_index(token: str, count: int, line_number: int, what: str) -> int:
    try:
        value = int(token)
    except ValueError as exc:
        raise ObjSyntaxError(line_number, f"invalid {what} index '{token}'") from exc
    if value == 0:
        raise ObjSyntaxError(line_number, f"{what} index 0 is not allowed")
    if value < 0:
        resolved = count + value
        if resolved < 0:
            raise ObjSyntaxError(
                line_number, f"relative {what} index {value} is out of range"
            )
        return resolved
    return value - 1


def _parse_reference(token: str, obj_set: ObjSet, line_number: int) -> FaceReference:
    # форматы: v, v/vt, v//vn, v/vt/vn
    parts = token.split("/")
    if len(parts) > 3 or not parts[0]:
        raise ObjSyntaxError(line_number, f"malformed vertex reference '{token}'")
    p = _resolve_index(parts[0], len(obj_set.vertices), line_number, "vertex")
    t = None
    n = None
    if len(parts) > 1 and parts[1]:
        t = _resolve_index(parts[1], len(obj_set.tex_vertices), line_number, "texture")
    if len(parts) > 2 and parts[2]:
        n = _resolve_index(parts[2], len(obj_set.normals), line_number, "normal")
    return FaceReference(p, t, n)


def parse(text: str) -> ObjSet:
    """Разобрать текст OBJ. ObjSyntaxError с номером строки при ошибке."""
    obj_set = ObjSet()
    state = _ParserState(obj_set)

    for line_number, line in _logical_lines(text):
        parts = line.split()
        if not parts:
            continue
        keyword, args = parts[0], parts[1:]

        if keyword == "v":
            # 4‑я компонента (w) и vertex colors отбрасываются
            xyz = _floats(args, line_number, 3, 7, keyword)
            obj_set.vertices.append(Vertex(*xyz[:3]))
        elif keyword == "vn":
            obj_set.normals.append(Normal(*_floats(args, line_number, 3, 3, keyword)))
        elif keyword == "vt":
            obj_set.tex_vertices.append(TVertex(*_floats(args, line_number, 1, 3, keyword)))
        elif keyword in ("f", "l", "p"):
            refs = tuple(_parse_reference(a, obj_set, line_number) for a in args)
            if keyword == "f":
                if len(refs) < 3:
                    raise ObjSyntaxError(line_number, "face needs at least 3 vertices")
                primitive = Triangle(*refs) if len(refs) == 3 else Other("polygon", refs)
            elif keyword == "l":
                if len(refs) < 2:
                    raise ObjSyntaxError(line_number, "line needs at least 2 vertices")
                primitive = Other("line", refs)
            else:
                if not refs:
                    raise ObjSyntaxError(line_number, "point needs a vertex")
                primitive = Other("point", refs)
            state.add_shape(primitive)
        elif keyword == "o":
            state.new_object(" ".join(args) or DEFAULT_OBJECT_NAME)
        elif keyword == "g":
            state.groups = args or ["default"]
            state.new_geometry()
        elif keyword == "usemtl":
            if not args:
                raise ObjSyntaxError(line_number, "usemtl needs a material name")
            state.material = " ".join(args)
            state.new_geometry()
        elif keyword == "mtllib":
            if not args:
                raise ObjSyntaxError(line_number, "mtllib needs a file name")
            obj_set.material_library = " ".join(args)
        elif keyword == "s":
            if not args:
                raise ObjSyntaxError(line_number, "s needs a group number or 'off'")
            if args[0] == "off":
                state.smoothing_group = 0
            else:
                try:
                    state.smoothing_group = int(args[0])
                except ValueError as exc:
                    raise ObjSyntaxError(
                        line_number, f"invalid smoothing group '{args[0]}'"
                    ) from exc
        else:
            logger.debug(f"[Loader] line {line_number}: ignoring '{keyword}'")

    logger.debug(
        f"[Loader] Parsed {len(obj_set.vertices)} vertices, "
        f"{len(obj_set.normals)} normals, {len(obj_set.tex_vertices)} texcoords, "
        f"{obj_set.geometry_count()} geometries"
    )
    return obj_set
