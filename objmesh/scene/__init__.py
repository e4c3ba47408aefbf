"""
Пакет scene – разобранная OBJ‑сцена: объекты → геометрии → примитивы.
"""

from objmesh.scene.obj_set import (
    Vertex, Normal, TVertex, FaceReference,
    Triangle, Other, Shape, Geometry, Object, ObjSet,
)

__all__ = ["Vertex", "Normal", "TVertex", "FaceReference",
           "Triangle", "Other", "Shape", "Geometry", "Object", "ObjSet"]
