"""
Замер этапов конвертации: время блока + счётчики (вершины, индексы…),
всё уходит одной строкой в debug‑лог.
"""

import time
from objmesh.utils.logger import logger

class Profiler:
    """Контекст‑менеджер: время выполнения и произвольные счётчики блока."""
    def __init__(self, name: str, **counters):
        self.name = name
        self.counters = dict(counters)
        self.elapsed_ms = 0.0
        self._start = 0.0

    def count(self, **counters) -> None:
        """Добавить/обновить счётчики, которые попадут в лог."""
        self.counters.update(counters)

    def summary(self) -> str:
        parts = ", ".join(f"{k}={v}" for k, v in self.counters.items())
        text = f"{self.name}: {self.elapsed_ms:.2f} ms"
        return f"{text} ({parts})" if parts else text

    def __enter__(self):
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0
        if exc_type is not None:
            logger.debug(f"[Profiler] {self.summary()} failed with {exc_type.__name__}")
        else:
            logger.debug(f"[Profiler] {self.summary()}")
