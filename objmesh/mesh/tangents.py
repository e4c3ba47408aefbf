# objmesh/mesh/tangents.py
"""
Генерация касательных (tangent space) для сваренного меша.

OBJ касательных не хранит, поэтому они выводятся из позиций, нормалей
и texcoords. Две стратегии:

* "direct"   – касательная/бикасательная каждого треугольника через
               определитель UV‑рёбер, накопление по вершинам
               (numba‑ядро) и нормализация;
* "accessor" – внешний алгоритм tangent space работает через
               интерфейс MeshAccessor (грань/угол → атрибуты,
               set_tangent_encoded), а ObjGeometry накапливает
               результат по вершинам.

Результат – float32 массив (N, 4): xyz единичной длины + знак
handedness в w. NaN/Inf наружу не выходят никогда.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

import numpy as np
from numba import njit

from objmesh.errors import ConfigError, TangentGenerationError
from objmesh.utils.logger import logger

DEFAULT_TANGENT = (1.0, 0.0, 0.0, 1.0)
EPSILON = 1e-12


# ----------------------------------------------------------------------
# Интерфейс для внешних алгоритмов (только треугольники)
# ----------------------------------------------------------------------
class MeshAccessor(ABC):
    """Доступ к мешу по (грань, угол) для алгоритмов tangent space."""

    @abstractmethod
    def num_faces(self) -> int:
        pass

    @abstractmethod
    def num_vertices_of_face(self, face: int) -> int:
        pass

    @abstractmethod
    def position(self, face: int, vert: int) -> np.ndarray:
        pass

    @abstractmethod
    def normal(self, face: int, vert: int) -> np.ndarray:
        pass

    @abstractmethod
    def tex_coord(self, face: int, vert: int) -> np.ndarray:
        pass

    @abstractmethod
    def set_tangent_encoded(self, tangent: Sequence[float], face: int, vert: int) -> None:
        pass


TangentAlgorithm = Callable[[MeshAccessor], bool]


class ObjGeometry(MeshAccessor):
    """
    MeshAccessor поверх сваренных массивов и индексного буфера.

    indices.len() должно делиться на 3, каждая тройка – треугольник.
    set_tangent_encoded не перезаписывает, а суммирует вклад в вершину:
    вершины, которые алгоритм считает общими, у нас могут быть общими
    и так (сварка по тем же атрибутам), а несваренные в исходном OBJ
    просто получат свои касательные.
    """

    def __init__(self, positions: np.ndarray, normals: np.ndarray,
                 tex_coords: np.ndarray, indices: np.ndarray,
                 default: Sequence[float] = DEFAULT_TANGENT):
        self.positions = positions
        self.normals = normals
        self.tex_coords = tex_coords
        self.indices = indices
        self.default = np.asarray(default, dtype=np.float64)
        self._accumulator = np.zeros((len(positions), 4), dtype=np.float64)
        self._accumulator[:, 3] = 1.0

    def _vertex(self, face: int, vert: int) -> int:
        return int(self.indices[face * 3 + vert])

    def num_faces(self) -> int:
        return len(self.indices) // 3

    def num_vertices_of_face(self, face: int) -> int:
        return 3

    def position(self, face: int, vert: int) -> np.ndarray:
        return self.positions[self._vertex(face, vert)]

    def normal(self, face: int, vert: int) -> np.ndarray:
        return self.normals[self._vertex(face, vert)]

    def tex_coord(self, face: int, vert: int) -> np.ndarray:
        return self.tex_coords[self._vertex(face, vert)]

    def set_tangent_encoded(self, tangent: Sequence[float], face: int, vert: int) -> None:
        acc = self._accumulator[self._vertex(face, vert)]
        acc[:3] += tangent[:3]
        acc[3] = tangent[3]

    def get_tangents(self) -> np.ndarray:
        """Нормализованные касательные; нулевые заменяются на default."""
        xyz = self._accumulator[:, :3]
        length = np.linalg.norm(xyz, axis=1)
        ok = length > EPSILON
        out = np.tile(self.default, (len(xyz), 1))
        out[ok, :3] = xyz[ok] / length[ok, None]
        out[ok, 3] = self._accumulator[ok, 3]
        return out.astype(np.float32)


def lengyel_tangents(geometry: MeshAccessor) -> bool:
    """
    Алгоритм tangent space через MeshAccessor (метод Ленгьела).

    Для каждого угла касательная ортогонализуется к нормали угла,
    нормализуется и передаётся в set_tangent_encoded вместе со знаком
    handedness. Треугольники с вырожденной UV‑развёрткой пропускаются.
    Возвращает False, если ни один треугольник не пригоден.
    """
    faces = geometry.num_faces()
    suitable = 0
    for face in range(faces):
        if geometry.num_vertices_of_face(face) != 3:
            continue
        p0, p1, p2 = (np.asarray(geometry.position(face, v), dtype=np.float64)
                      for v in range(3))
        uv0, uv1, uv2 = (np.asarray(geometry.tex_coord(face, v), dtype=np.float64)
                         for v in range(3))
        e1, e2 = p1 - p0, p2 - p0
        du1, dv1 = uv1 - uv0
        du2, dv2 = uv2 - uv0
        det = du1 * dv2 - du2 * dv1
        if abs(det) < EPSILON:
            continue
        r = 1.0 / det
        sdir = (e1 * dv2 - e2 * dv1) * r
        tdir = (e2 * du1 - e1 * du2) * r
        suitable += 1

        for vert in range(3):
            n = np.asarray(geometry.normal(face, vert), dtype=np.float64)
            nn = float(np.dot(n, n))
            t = sdir - n * (np.dot(n, sdir) / nn) if nn > 0.0 else sdir
            length = float(np.linalg.norm(t))
            if length < EPSILON:
                continue
            t = t / length
            w = -1.0 if np.dot(np.cross(n, t), tdir) < 0.0 else 1.0
            geometry.set_tangent_encoded((t[0], t[1], t[2], w), face, vert)

    return faces == 0 or suitable > 0


# ----------------------------------------------------------------------
# Стратегия "direct"
# ----------------------------------------------------------------------
@njit
def _accumulate_triangles(positions, texcoords, indices, eps, tan, bitan):
    """Сумма касательных/бикасательных треугольников по вершинам."""
    used = 0
    for f in range(indices.shape[0] // 3):
        i0 = indices[3 * f]
        i1 = indices[3 * f + 1]
        i2 = indices[3 * f + 2]

        x1 = positions[i1, 0] - positions[i0, 0]
        y1 = positions[i1, 1] - positions[i0, 1]
        z1 = positions[i1, 2] - positions[i0, 2]
        x2 = positions[i2, 0] - positions[i0, 0]
        y2 = positions[i2, 1] - positions[i0, 1]
        z2 = positions[i2, 2] - positions[i0, 2]

        du1 = texcoords[i1, 0] - texcoords[i0, 0]
        dv1 = texcoords[i1, 1] - texcoords[i0, 1]
        du2 = texcoords[i2, 0] - texcoords[i0, 0]
        dv2 = texcoords[i2, 1] - texcoords[i0, 1]

        det = du1 * dv2 - du2 * dv1
        if abs(det) < eps:
            continue
        r = 1.0 / det
        sx = (dv2 * x1 - dv1 * x2) * r
        sy = (dv2 * y1 - dv1 * y2) * r
        sz = (dv2 * z1 - dv1 * z2) * r
        tx = (du1 * x2 - du2 * x1) * r
        ty = (du1 * y2 - du2 * y1) * r
        tz = (du1 * z2 - du2 * z1) * r
        used += 1

        for k in range(3):
            v = indices[3 * f + k]
            tan[v, 0] += sx
            tan[v, 1] += sy
            tan[v, 2] += sz
            bitan[v, 0] += tx
            bitan[v, 1] += ty
            bitan[v, 2] += tz
    return used


def direct_tangents(positions: np.ndarray, normals: np.ndarray,
                    texcoords: np.ndarray, indices: np.ndarray,
                    default: Sequence[float] = DEFAULT_TANGENT) -> np.ndarray:
    """
    Касательные по треугольникам с накоплением по вершинам.

    Вырожденные по UV треугольники (det == 0) ничего не добавляют;
    вершина без единого вклада получает default.
    """
    count = len(positions)
    tan = np.zeros((count, 3), dtype=np.float64)
    bitan = np.zeros((count, 3), dtype=np.float64)
    used = _accumulate_triangles(
        np.ascontiguousarray(positions, dtype=np.float64),
        np.ascontiguousarray(texcoords, dtype=np.float64),
        np.ascontiguousarray(indices, dtype=np.uint32),
        EPSILON, tan, bitan,
    )
    faces = len(indices) // 3
    if used < faces:
        logger.debug(f"[Tangents] {faces - used} of {faces} triangles have degenerate UVs")

    # Грам–Шмидт: t - n * dot(n, t) / dot(n, n)
    n = np.asarray(normals, dtype=np.float64)
    nn = np.einsum("ij,ij->i", n, n)
    nt = np.einsum("ij,ij->i", n, tan)
    scale = np.divide(nt, nn, out=np.zeros_like(nt), where=nn > 0.0)
    t = tan - n * scale[:, None]

    length = np.linalg.norm(t, axis=1)
    ok = length > EPSILON
    out = np.tile(np.asarray(default, dtype=np.float64), (count, 1))
    out[ok, :3] = t[ok] / length[ok, None]
    handed = np.einsum("ij,ij->i", np.cross(n, t), bitan)
    out[ok, 3] = np.where(handed[ok] < 0.0, -1.0, 1.0)
    return out.astype(np.float32)


def accessor_tangents(positions: np.ndarray, normals: np.ndarray,
                      texcoords: np.ndarray, indices: np.ndarray,
                      default: Sequence[float] = DEFAULT_TANGENT,
                      algorithm: Optional[TangentAlgorithm] = None) -> np.ndarray:
    """Прогнать algorithm (по умолчанию lengyel_tangents) через ObjGeometry."""
    geometry = ObjGeometry(positions, normals, texcoords, indices, default)
    algorithm = algorithm or lengyel_tangents
    if not algorithm(geometry):
        raise TangentGenerationError("Geometry is unsuitable for tangent generation")
    return geometry.get_tangents()


def generate_tangents(positions: np.ndarray, normals: np.ndarray,
                      texcoords: np.ndarray, indices: np.ndarray,
                      strategy: str = "direct",
                      default: Sequence[float] = DEFAULT_TANGENT,
                      algorithm: Optional[TangentAlgorithm] = None) -> np.ndarray:
    """
    Касательные (N, 4) float32 для сваренного меша.

    TangentGenerationError – если входные данные или результат содержат
    NaN/Inf, либо алгоритм признал геометрию непригодной.
    """
    for name, arr in (("positions", positions), ("normals", normals),
                      ("texture coordinates", texcoords)):
        if not np.all(np.isfinite(arr)):
            raise TangentGenerationError(f"Non-finite values in {name}")

    if strategy == "direct":
        tangents = direct_tangents(positions, normals, texcoords, indices, default)
    elif strategy == "accessor":
        tangents = accessor_tangents(positions, normals, texcoords, indices,
                                     default, algorithm)
    else:
        raise ConfigError(f"Unknown tangent strategy: {strategy}")

    if not np.all(np.isfinite(tangents)):
        raise TangentGenerationError("Tangent generation produced non-finite values")
    return tangents
