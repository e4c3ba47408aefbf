# objmesh/mesh/weld.py
"""
Сварка (welding) вершин OBJ и переиндексация треугольников.

В целевом меше позиция, нормаль, касательная и texcoord делят один
индекс, поэтому для каждого уникального VertexKey заводится своя
выходная вершина. Пример: `f 1/1/1 2/2/1 1/2/1` требует трёх вершин,
хотя позиций в исходнике только две.

Плотные индексы назначаются в порядке сортировки ключей, а не в порядке
первого появления – результат не зависит от порядка обхода.
"""

from typing import Dict, List, Sequence

import numpy as np

from objmesh.errors import DataIntegrityError
from objmesh.mesh.key import VertexKey, handedness
from objmesh.scene.obj_set import ObjSet, Triangle
from objmesh.utils.logger import logger


def _check_range(indices: np.ndarray, size: int, what: str) -> None:
    if indices.size == 0:
        return
    bad = indices[(indices < 0) | (indices >= size)]
    if bad.size:
        raise DataIntegrityError(
            f"Face references {what} #{int(bad[0]) + 1}, "
            f"but only {size} {what}s are defined"
        )


class RawAttributes:
    """Глобальные массивы сцены в виде ndarray (только чтение)."""

    def __init__(self, positions: np.ndarray, normals: np.ndarray, texcoords: np.ndarray):
        self.positions = positions
        self.normals = normals
        self.texcoords = texcoords

    @classmethod
    def from_obj_set(cls, obj_set: ObjSet) -> "RawAttributes":
        positions = np.array(obj_set.vertices, dtype=np.float64).reshape(-1, 3)
        normals = np.array(obj_set.normals, dtype=np.float64).reshape(-1, 3)
        # лишние компоненты (w) игнорируются
        texcoords = np.array(
            [(t.u, t.v) for t in obj_set.tex_vertices], dtype=np.float64
        ).reshape(-1, 2)
        for arr in (positions, normals, texcoords):
            arr.setflags(write=False)
        return cls(positions, normals, texcoords)

    def position(self, index: int) -> np.ndarray:
        _check_range(np.array([index]), len(self.positions), "vertex")
        return self.positions[index]

    def normal(self, index: int) -> np.ndarray:
        _check_range(np.array([index]), len(self.normals), "normal")
        return self.normals[index]


class WeldResult:
    """
    Результат сварки одной геометрии.

    * corner_keys – ключ каждого угла каждого треугольника (3 * T)
    * keys        – уникальные ключи в отсортированном порядке (N)
    * index_map   – ключ → плотный индекс
    * positions / normals / texcoords – float32 массивы длины N
    """

    def __init__(self, corner_keys, keys, index_map, positions, normals, texcoords):
        self.corner_keys: List[VertexKey] = corner_keys
        self.keys: List[VertexKey] = keys
        self.index_map: Dict[VertexKey, int] = index_map
        self.positions: np.ndarray = positions
        self.normals: np.ndarray = normals
        self.texcoords: np.ndarray = texcoords

    @property
    def vertex_count(self) -> int:
        return len(self.keys)


def corner_keys(triangles: Sequence[Triangle], raw: RawAttributes,
                split_winding: bool = True) -> List[VertexKey]:
    """Ключи углов в исходном порядке треугольников и углов."""
    keys = []
    for tri in triangles:
        winding = 0
        if split_winding:
            corners = [raw.position(ref.position) for ref in tri]
            present = [raw.normal(ref.normal) for ref in tri if ref.normal is not None]
            reference = np.sum(present, axis=0) if present else None
            winding = handedness(*corners, reference=reference)
        keys.extend(VertexKey.from_reference(ref, winding) for ref in tri)
    return keys


def deduplicate(triangles: Sequence[Triangle], raw: RawAttributes,
                split_winding: bool = True) -> WeldResult:
    """Собрать уникальные ключи и материализовать параллельные массивы."""
    corners = corner_keys(triangles, raw, split_winding)
    keys = sorted(set(corners))
    index_map = {key: i for i, key in enumerate(keys)}
    count = len(keys)

    p_idx = np.fromiter((k.position for k in keys), dtype=np.int64, count=count)
    t_idx = np.fromiter((k.texcoord for k in keys), dtype=np.int64, count=count)
    n_idx = np.fromiter((k.normal for k in keys), dtype=np.int64, count=count)

    _check_range(p_idx, len(raw.positions), "vertex")
    positions = raw.positions[p_idx].astype(np.float32)

    normals = np.zeros((count, 3), dtype=np.float32)
    has_normal = np.fromiter((k.has_normal for k in keys), dtype=bool, count=count)
    _check_range(n_idx[has_normal], len(raw.normals), "normal")
    normals[has_normal] = raw.normals[n_idx[has_normal]]

    texcoords = np.zeros((count, 2), dtype=np.float32)
    has_tex = np.fromiter((k.has_texcoord for k in keys), dtype=bool, count=count)
    _check_range(t_idx[has_tex], len(raw.texcoords), "texture coordinate")
    texcoords[has_tex] = raw.texcoords[t_idx[has_tex]]

    logger.debug(
        f"[Weld] {len(triangles)} triangles, {len(corners)} corners "
        f"-> {count} unique vertices"
    )
    return WeldResult(corners, keys, index_map, positions, normals, texcoords)


def remap(corners: Sequence[VertexKey], index_map: Dict[VertexKey, int]) -> np.ndarray:
    """Плотные индексы углов; порядок треугольников и обход сохраняются."""
    return np.fromiter((index_map[k] for k in corners), dtype=np.uint32, count=len(corners))
