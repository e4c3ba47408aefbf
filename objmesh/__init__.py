"""
objmesh – конвертер Wavefront OBJ в меш, готовый для рендерера.
Сваривает вершины по уникальным комбинациям атрибутов, переиндексирует
треугольники и генерирует касательные.
"""

from objmesh.utils import logger, Config
from objmesh.errors import (
    ObjMeshError,
    EncodingError,
    ObjSyntaxError,
    DataIntegrityError,
    TangentGenerationError,
    ConfigError,
)
from objmesh.utils.loader import parse
from objmesh.mesh import (
    MeshBuilder,
    MeshAccessor,
    ObjGeometry,
    convert_geometry,
    load_from_data,
    load_from_obj,
    load_obj_file,
)

__version__ = "1.0.0"

__all__ = [
    "Config",
    "ObjMeshError",
    "EncodingError",
    "ObjSyntaxError",
    "DataIntegrityError",
    "TangentGenerationError",
    "ConfigError",
    "parse",
    "MeshBuilder",
    "MeshAccessor",
    "ObjGeometry",
    "convert_geometry",
    "load_from_data",
    "load_from_obj",
    "load_obj_file",
]
