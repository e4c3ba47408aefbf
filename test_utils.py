# -*- coding: utf-8 -*-
import logging
import pytest
from objmesh.multithread import TaskPool
from objmesh import load_from_obj
from objmesh.utils import Profiler, logger, set_level

def test_task_pool_keeps_order():
    with TaskPool(max_workers=3) as pool:
        assert pool.map_ordered(lambda x: x * x, range(10)) == [x * x for x in range(10)]

def test_task_pool_propagates_errors():
    def boom(x):
        if x == 2:
            raise KeyError(x)
        return x

    with TaskPool(max_workers=2) as pool:
        with pytest.raises(KeyError):
            pool.map_ordered(boom, range(5))

def test_task_pool_rejects_after_shutdown():
    pool = TaskPool(max_workers=1)
    pool.shutdown()
    with pytest.raises(RuntimeError):
        pool.submit(print)

def test_profiler_logs_counters(caplog):
    caplog.set_level(logging.DEBUG, logger="objmesh")
    with Profiler("weld", shapes=12) as prof:
        prof.count(vertices=24)
    assert prof.elapsed_ms >= 0.0
    assert "weld:" in caplog.text
    assert "(shapes=12, vertices=24)" in caplog.text

def test_profiler_reports_failure(caplog):
    caplog.set_level(logging.DEBUG, logger="objmesh")
    with pytest.raises(KeyError):
        with Profiler("broken"):
            raise KeyError("x")
    assert "failed with KeyError" in caplog.text

def test_conversion_is_profiled(caplog, cube_obj):
    caplog.set_level(logging.DEBUG, logger="objmesh")
    load_from_obj(cube_obj)
    assert "vertices=24, indices=36" in caplog.text

def test_set_level():
    previous = logger.level
    try:
        set_level("debug")
        assert logger.level == logging.DEBUG
        with pytest.raises(ValueError):
            set_level("nonsense")
    finally:
        logger.setLevel(previous)
