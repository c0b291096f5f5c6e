import logging
from pathlib import Path
from typing import Protocol

from drop_server.errors import StorageError

logger = logging.getLogger(__name__)


class FileSink(Protocol):
    def write(self, code: str, data: bytes) -> None: ...


class DiskFileSink:
    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)

    def init(self):
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def path_of(self, code: str) -> Path:
        return self.base_dir / code

    def write(self, code: str, data: bytes) -> None:
        try:
            with open(self.path_of(code), "wb") as buffer:
                buffer.write(data)
        except OSError as e:
            logger.error("Error while writing %s: %s", code, e)
            raise StorageError(code) from e
