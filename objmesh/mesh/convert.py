# objmesh/mesh/convert.py
# -*- coding: utf-8 -*-
"""
OBJ → MeshBuilder.

Объекты содержат геометрии, геометрии – примитивы с индексами
позиция/texcoord/нормаль в глобальные массивы сцены. Каждая геометрия
превращается в отдельный MeshBuilder с атрибутами
position, normal, tangent, tex_coord (именно в этом порядке)
и uint32‑индексами.

Геометрии независимы: при workers > 1 они конвертируются в пуле
потоков, результат всё равно возвращается в исходном порядке.
Ошибка в любой геометрии пробрасывается наружу, частичных мешей нет.
"""

from pathlib import Path
from typing import List, Optional, Tuple

from objmesh.errors import EncodingError
from objmesh.mesh.builder import MeshBuilder
from objmesh.mesh.tangents import TangentAlgorithm, generate_tangents
from objmesh.mesh.weld import RawAttributes, deduplicate, remap
from objmesh.multithread.task_pool import TaskPool
from objmesh.scene.obj_set import Geometry, ObjSet
from objmesh.utils.config import Config
from objmesh.utils.loader import parse
from objmesh.utils.logger import logger
from objmesh.utils.profiler import Profiler

POSITION = "position"
NORMAL = "normal"
TANGENT = "tangent"
TEX_COORD = "tex_coord"

LoadedMesh = Tuple[MeshBuilder, Optional[str]]


def convert_geometry(geometry: Geometry, raw: RawAttributes,
                     config: Optional[Config] = None,
                     algorithm: Optional[TangentAlgorithm] = None) -> MeshBuilder:
    """Сварка → переиндексация → касательные → MeshBuilder для одной геометрии."""
    config = config or Config()
    triangles = geometry.triangles()
    skipped = len(geometry.shapes) - len(triangles)
    if skipped:
        logger.debug(f"[Convert] Skipping {skipped} non-triangle primitives")

    weld = deduplicate(triangles, raw, config.split_winding)
    indices = remap(weld.corner_keys, weld.index_map)
    tangents = generate_tangents(
        weld.positions, weld.normals, weld.texcoords, indices,
        strategy=config.tangent_strategy,
        default=config.default_tangent,
        algorithm=algorithm,
    )

    builder = MeshBuilder()
    builder.add_vertices(POSITION, weld.positions)
    builder.add_vertices(NORMAL, weld.normals)
    builder.add_vertices(TANGENT, tangents)
    builder.add_vertices(TEX_COORD, weld.texcoords)
    builder.set_indices(indices)
    return builder


def load_from_data(obj_set: ObjSet, config: Optional[Config] = None,
                   algorithm: Optional[TangentAlgorithm] = None) -> List[LoadedMesh]:
    """Один (MeshBuilder, имя материала) на каждую геометрию ObjSet."""
    config = config or Config()
    raw = RawAttributes.from_obj_set(obj_set)
    jobs = [(obj.name, geometry)
            for obj in obj_set.objects
            for geometry in obj.geometry]

    def work(job):
        name, geometry = job
        with Profiler(f"geometry '{name}' ({geometry.material_name})",
                      shapes=len(geometry.shapes)) as prof:
            builder = convert_geometry(geometry, raw, config, algorithm)
            prof.count(vertices=builder.vertex_count, indices=builder.index_count)
        return builder

    logger.debug(f"[Convert] Loading {len(jobs)} geometries")
    if config.workers > 1 and len(jobs) > 1:
        with TaskPool(max_workers=config.workers) as pool:
            builders = pool.map_ordered(work, jobs)
    else:
        builders = [work(job) for job in jobs]
    logger.debug("[Convert] Loaded mesh")

    return [(builder, geometry.material_name)
            for builder, (_, geometry) in zip(builders, jobs)]


def load_from_obj(data: bytes, config: Optional[Config] = None,
                  algorithm: Optional[TangentAlgorithm] = None) -> List[LoadedMesh]:
    """Байты OBJ (UTF‑8) → список (MeshBuilder, имя материала)."""
    try:
        text = bytes(data).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError(f"OBJ data is not valid UTF-8: {exc}") from exc
    return load_from_data(parse(text), config, algorithm)


def load_obj_file(path, config: Optional[Config] = None,
                  algorithm: Optional[TangentAlgorithm] = None) -> List[LoadedMesh]:
    """Прочитать OBJ‑файл с диска и сконвертировать."""
    p = Path(path).expanduser().resolve()
    if not p.is_file():
        raise FileNotFoundError(f"OBJ not found: {p}")
    meshes = load_from_obj(p.read_bytes(), config, algorithm)
    logger.info(f"[Convert] Loaded {p.name}: {len(meshes)} meshes")
    return meshes
