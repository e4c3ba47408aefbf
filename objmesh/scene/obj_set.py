"""
Модель данных разобранного OBJ‑файла.

Массивы вершин/нормалей/texcoords глобальны для всего ObjSet,
индексы в FaceReference – 0‑based и указывают прямо в них.
"""

from typing import List, NamedTuple, Optional, Tuple, Union


class Vertex(NamedTuple):
    x: float
    y: float
    z: float


class Normal(NamedTuple):
    x: float
    y: float
    z: float


class TVertex(NamedTuple):
    u: float
    v: float = 0.0
    w: float = 0.0


class FaceReference(NamedTuple):
    """Угол грани: (позиция, texcoord | None, нормаль | None)."""
    position: int
    texcoord: Optional[int] = None
    normal: Optional[int] = None


class Triangle(NamedTuple):
    a: FaceReference
    b: FaceReference
    c: FaceReference


class Other(NamedTuple):
    """Любой не‑треугольный примитив (point / line / polygon)."""
    kind: str
    references: Tuple[FaceReference, ...]


Primitive = Union[Triangle, Other]


class Shape:
    """Примитив + группы (`g`) и smoothing‑группа (`s`), в которых он объявлен."""
    def __init__(self, primitive: Primitive, groups: Optional[List[str]] = None,
                 smoothing_group: int = 0):
        self.primitive = primitive
        self.groups = list(groups) if groups else []
        self.smoothing_group = smoothing_group

    def __repr__(self):
        return f"Shape({self.primitive!r}, groups={self.groups}, s={self.smoothing_group})"


class Geometry:
    """Набор примитивов с общим материалом."""
    def __init__(self, material_name: Optional[str] = None):
        self.material_name = material_name
        self.shapes: List[Shape] = []

    def triangles(self) -> List[Triangle]:
        """Только треугольники, в исходном порядке."""
        return [s.primitive for s in self.shapes
                if isinstance(s.primitive, Triangle)]


class Object:
    def __init__(self, name: str):
        self.name = name
        self.geometry: List[Geometry] = []


class ObjSet:
    """Результат разбора OBJ: глобальные массивы + дерево объектов."""
    def __init__(self):
        self.material_library: Optional[str] = None
        self.objects: List[Object] = []
        self.vertices: List[Vertex] = []
        self.tex_vertices: List[TVertex] = []
        self.normals: List[Normal] = []

    def geometry_count(self) -> int:
        return sum(len(o.geometry) for o in self.objects)
