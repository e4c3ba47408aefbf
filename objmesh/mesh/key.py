# objmesh/mesh/key.py
"""
Ключ уникальной вершины и классификатор обхода (winding).

Одна позиция OBJ может понадобиться в нескольких выходных вершинах –
с разными нормалями/texcoords. Ключ однозначно задаёт комбинацию
атрибутов, а дополнительное поле winding не даёт склеить вершины
треугольников с противоположным обходом.
"""

from typing import NamedTuple, Optional, Sequence

import numpy as np

from objmesh.errors import DataIntegrityError
from objmesh.scene.obj_set import FaceReference

# отсутствующий индекс: меньше и не равен любому валидному (>= 0)
MISSING = -1


class VertexKey(NamedTuple):
    """Неизменяемый ключ вершины, упорядочен лексикографически."""
    position: int
    texcoord: int = MISSING
    normal: int = MISSING
    winding: int = 0

    @classmethod
    def from_reference(cls, ref: FaceReference, winding: int = 0) -> "VertexKey":
        # отрицательный индекс нельзя путать с MISSING
        for what, index in (("vertex", ref.position), ("texture coordinate", ref.texcoord),
                            ("normal", ref.normal)):
            if index is not None and index < 0:
                raise DataIntegrityError(f"Face references negative {what} index {index}")
        return cls(
            ref.position,
            MISSING if ref.texcoord is None else ref.texcoord,
            MISSING if ref.normal is None else ref.normal,
            winding,
        )

    @property
    def has_texcoord(self) -> bool:
        return self.texcoord != MISSING

    @property
    def has_normal(self) -> bool:
        return self.normal != MISSING


def _sign(value: float) -> int:
    if value > 0.0:
        return 1
    if value < 0.0:
        return -1
    return 0


def handedness(a: Sequence[float], b: Sequence[float], c: Sequence[float],
               reference: Optional[Sequence[float]] = None) -> int:
    """
    Ориентация треугольника (a, b, c): +1, -1 или 0 (вырожденный).

    С опорным направлением (обычно – сумма нормалей углов) возвращается
    знак dot(cross, reference): лицевой/обратный треугольник относительно
    нормалей, одинаковый по всей гладкой поверхности. Без опоры (или если
    она перпендикулярна) – знак доминирующей компоненты cross, т.е.
    знак площади проекции на главную плоскость.
    Перестановка двух вершин всегда меняет знак результата.
    """
    a = np.asarray(a, dtype=np.float64)
    d = np.asarray(b, dtype=np.float64) - a
    e = np.asarray(c, dtype=np.float64) - a
    cross = np.cross(d, e)
    if not np.any(cross):
        return 0
    if reference is not None:
        facing = _sign(float(np.dot(cross, np.asarray(reference, dtype=np.float64))))
        if facing != 0:
            return facing
    axis = int(np.argmax(np.abs(cross)))
    return _sign(float(cross[axis]))
