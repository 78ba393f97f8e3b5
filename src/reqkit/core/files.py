"""File references for multipart uploads."""

import mimetypes
import os
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .exceptions import FileNotFoundError

# Строковое значение поля с этим префиксом считается путем к файлу
FILE_SIGIL = '@'

DEFAULT_MIME_TYPE = 'application/octet-stream'


@dataclass(frozen=True)
class HttpFile:
    """
    Ссылка на локальный файл для multipart/form-data.

    Args:
        path: Путь к файлу
        mime_type: MIME тип (определяется по файлу)
        filename: Имя файла в запросе (basename пути)

    Example:
        >>> upload = HttpFile.from_path("/tmp/report.csv")
        >>> upload.filename
        'report.csv'
    """
    path: str
    mime_type: str = DEFAULT_MIME_TYPE
    filename: Optional[str] = None

    @classmethod
    def from_path(cls, path: str) -> 'HttpFile':
        """
        Создать ссылку на файл, проверив его существование.

        Raises:
            FileNotFoundError: Если файла нет
        """
        path = os.fspath(path)
        if not os.path.isfile(path):
            raise FileNotFoundError(path)

        mime_type, _ = mimetypes.guess_type(path)
        return cls(
            path=path,
            mime_type=mime_type or DEFAULT_MIME_TYPE,
            filename=os.path.basename(path),
        )

    def read(self) -> bytes:
        """Прочитать содержимое файла."""
        if not os.path.isfile(self.path):
            raise FileNotFoundError(self.path)
        with open(self.path, 'rb') as f:
            return f.read()

    def as_multipart(self) -> Tuple[str, bytes, str]:
        """(filename, data, mime_type) для urllib3.encode_multipart_formdata."""
        return (self.filename or os.path.basename(self.path), self.read(), self.mime_type)


def is_file_reference(value: Any) -> bool:
    """True для HttpFile и строк вида "@path"."""
    if isinstance(value, HttpFile):
        return True
    return isinstance(value, str) and value.startswith(FILE_SIGIL) and len(value) > 1


def to_http_file(value: Any) -> HttpFile:
    """"@path" -> HttpFile; HttpFile возвращается как есть."""
    if isinstance(value, HttpFile):
        return value
    return HttpFile.from_path(value[len(FILE_SIGIL):])
