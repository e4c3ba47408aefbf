"""
Пакет multithread – пул потоков для параллельной конвертации геометрий.
"""

from objmesh.multithread.task_pool import TaskPool

__all__ = ["TaskPool"]
