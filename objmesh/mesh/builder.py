"""
MeshBuilder – приёмник готовых данных меша (append‑only).

Атрибуты добавляются в фиксированном порядке, индексы задаются один раз.
Загрузка в GPU сюда не входит – билдер только хранит массивы.
"""

from typing import List, Optional, Tuple

import numpy as np


class MeshBuilder:
    """Плоские массивы атрибутов (float32) + индексный буфер (uint32)."""
    def __init__(self):
        self._attributes: List[Tuple[str, np.ndarray]] = []
        self.indices: Optional[np.ndarray] = None

    def add_vertices(self, name: str, data: np.ndarray) -> "MeshBuilder":
        data = np.asarray(data, dtype=np.float32)
        if data.ndim != 2:
            raise ValueError(f"Attribute '{name}' must be a 2‑D array, got shape {data.shape}")
        if self._attributes and len(data) != self.vertex_count:
            raise ValueError(
                f"Attribute '{name}' has {len(data)} entries, expected {self.vertex_count}"
            )
        if any(n == name for n, _ in self._attributes):
            raise ValueError(f"Attribute '{name}' already added")
        self._attributes.append((name, data))
        return self

    def set_indices(self, indices: np.ndarray) -> "MeshBuilder":
        self.indices = np.asarray(indices, dtype=np.uint32)
        return self

    # -----------------------------------------------------------------
    @property
    def attributes(self) -> List[Tuple[str, np.ndarray]]:
        return list(self._attributes)

    @property
    def attribute_names(self) -> List[str]:
        return [n for n, _ in self._attributes]

    @property
    def vertex_count(self) -> int:
        return len(self._attributes[0][1]) if self._attributes else 0

    @property
    def index_count(self) -> int:
        return len(self.indices) if self.indices is not None else 0

    def get(self, name: str) -> np.ndarray:
        for n, data in self._attributes:
            if n == name:
                return data
        raise KeyError(name)

    def interleaved(self) -> np.ndarray:
        """Все атрибуты вершины подряд, в порядке добавления (float32, 1‑D)."""
        if not self._attributes:
            return np.zeros(0, dtype=np.float32)
        return np.column_stack([d for _, d in self._attributes]).astype(np.float32).ravel()

    @property
    def stride(self) -> int:
        """Размер одной вершины interleaved‑буфера в байтах."""
        return sum(d.shape[1] for _, d in self._attributes) * 4

    def __repr__(self):
        return (f"MeshBuilder(vertices={self.vertex_count}, indices={self.index_count}, "
                f"attributes={self.attribute_names})")
