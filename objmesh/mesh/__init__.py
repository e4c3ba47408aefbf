"""
Пакет mesh – сварка вершин OBJ, касательные и сборка меша.
"""

from objmesh.mesh.builder import MeshBuilder
from objmesh.mesh.key import VertexKey, handedness
from objmesh.mesh.weld import RawAttributes, WeldResult, deduplicate, remap
from objmesh.mesh.tangents import (
    MeshAccessor, ObjGeometry, generate_tangents, lengyel_tangents,
)
from objmesh.mesh.convert import (
    convert_geometry, load_from_data, load_from_obj, load_obj_file,
)

__all__ = ["MeshBuilder", "VertexKey", "handedness", "RawAttributes",
           "WeldResult", "deduplicate", "remap", "MeshAccessor",
           "ObjGeometry", "generate_tangents", "lengyel_tangents",
           "convert_geometry", "load_from_data", "load_from_obj",
           "load_obj_file"]
