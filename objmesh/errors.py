# objmesh/errors.py
"""
Иерархия исключений конвертера OBJ → меш.

Все ошибки наследуются от ObjMeshError, поэтому вызывающему коду
достаточно одного `except ObjMeshError`.
"""


class ObjMeshError(Exception):
    """Базовая ошибка пакета."""


class EncodingError(ObjMeshError):
    """Входные байты – не валидный UTF‑8."""


class ObjSyntaxError(ObjMeshError):
    """Парсер OBJ не смог разобрать строку."""

    def __init__(self, line_number: int, message: str):
        self.line_number = line_number
        self.message = message
        super().__init__(
            f"Error during parsing obj-file at line '{line_number}': {message}"
        )


class DataIntegrityError(ObjMeshError):
    """Грань ссылается на несуществующую вершину/нормаль/texcoord."""


class TangentGenerationError(ObjMeshError):
    """Геометрия непригодна для генерации касательных."""


class ConfigError(ObjMeshError):
    """Некорректное значение в конфигурации."""
