# -*- coding: utf-8 -*-
"""
conftest.py – OBJ‑фикстуры для тестов конвертера.
"""

import pytest


# ----------------------------------------------------------------------
# Куб: 8 общих позиций, нормаль на грань, 2 треугольника на грань
# ----------------------------------------------------------------------
CUBE_OBJ = b"""v -1.000000 -1.000000 1.000000
v 1.000000 -1.000000 1.000000
v -1.000000 1.000000 1.000000
v 1.000000 1.000000 1.000000
v -1.000000 1.000000 -1.000000
v 1.000000 1.000000 -1.000000
v -1.000000 -1.000000 -1.000000
v 1.000000 -1.000000 -1.000000
vt 0.000000 0.000000
vt 1.000000 0.000000
vt 0.000000 1.000000
vt 1.000000 1.000000
vn 0.000000 0.000000 1.000000
vn 0.000000 1.000000 0.000000
vn 0.000000 0.000000 -1.000000
vn 0.000000 -1.000000 0.000000
vn 1.000000 0.000000 0.000000
vn -1.000000 0.000000 0.000000
s 1
f 1/1/1 2/2/1 3/3/1
f 3/3/1 2/2/1 4/4/1
s 2
f 3/1/2 4/2/2 5/3/2
f 5/3/2 4/2/2 6/4/2
s 3
f 5/4/3 6/3/3 7/2/3
f 7/2/3 6/3/3 8/1/3
s 4
f 7/1/4 8/2/4 1/3/4
f 1/3/4 8/2/4 2/4/4
s 5
f 2/1/5 8/2/5 4/3/5
f 4/3/5 8/2/5 6/4/5
s 6
f 7/1/6 1/2/6 5/3/6
f 5/3/6 1/2/6 3/4/6
"""

# треугольник, все UV которого совпадают
DEGENERATE_UV_OBJ = b"""v 0 0 0
v 1 0 0
v 0 1 0
vt 0.5 0.5
vn 0 0 1
f 1/1/1 2/1/1 3/1/1
"""

# одинаковые индексы атрибутов, противоположный обход
FLIPPED_OBJ = b"""v 0 0 0
v 1 0 0
v 0 1 0
vt 0 0
vt 1 0
vt 0 1
vn 0 0 1
f 1/1/1 2/2/1 3/3/1
f 1/1/1 3/3/1 2/2/1
"""

MALFORMED_INDEX_OBJ = b"""v 0 0 0
v 1 0 0
v 0 1 0
v 1 1 0
f 1 2 999
"""

TWO_MATERIALS_OBJ = b"""mtllib scene.mtl
v 0 0 0
v 1 0 0
v 0 1 0
v 1 1 0
vt 0 0
vt 1 0
vt 0 1
vt 1 1
vn 0 0 1
o panel
usemtl red
f 1/1/1 2/2/1 3/3/1
usemtl blue
f 3/3/1 2/2/1 4/4/1
"""


@pytest.fixture
def cube_obj() -> bytes:
    return CUBE_OBJ


@pytest.fixture
def degenerate_uv_obj() -> bytes:
    return DEGENERATE_UV_OBJ


@pytest.fixture
def flipped_obj() -> bytes:
    return FLIPPED_OBJ


@pytest.fixture
def malformed_index_obj() -> bytes:
    return MALFORMED_INDEX_OBJ


@pytest.fixture
def two_materials_obj() -> bytes:
    return TWO_MATERIALS_OBJ
