import logging
import threading

from drop_server.drop.codes import CODE_SIZE, allocate_code
from drop_server.drop.model import UploadEntry, StoreSnapshot
from drop_server.drop.persistence import MetadataPersister
from drop_server.errors import DuplicateCodeError, CodeNotFoundError, PersistError

logger = logging.getLogger(__name__)

RECENT_LIMIT = 20


class MetadataStore:
    """
    Process-wide map of code -> UploadEntry plus the recent uploads list.

    Reservation, insertion and the recent list update are serialized under
    one lock. Candidate generation runs outside it. Persistence is
    serialized under its own lock, never under the store lock.
    """

    def __init__(self, recent_limit: int = RECENT_LIMIT):
        self._lock = threading.Lock()
        self._persist_lock = threading.Lock()
        self._data: dict[str, UploadEntry] = {}
        self._reserved: set[str] = set()
        self._recent: list[str] = []
        self._recent_limit = recent_limit

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, code: str) -> bool:
        with self._lock:
            return code in self._data

    @property
    def recent(self) -> list[str]:
        with self._lock:
            return list(self._recent)

    def _is_taken(self, code: str) -> bool:
        return code in self._data or code in self._reserved

    def _try_reserve(self, code: str) -> bool:
        with self._lock:
            if self._is_taken(code):
                return False
            self._reserved.add(code)
            return True

    def reserve_code(self, size: int = CODE_SIZE) -> str:
        return allocate_code(lambda candidate: not self._try_reserve(candidate), size)

    def release(self, code: str) -> None:
        with self._lock:
            self._reserved.discard(code)

    def _insert(self, entry: UploadEntry) -> None:
        if entry.code in self._data:
            raise DuplicateCodeError(entry.code)
        self._data[entry.code] = entry
        self._reserved.discard(entry.code)

    def _record_recent(self, code: str) -> None:
        self._recent.insert(0, code)
        del self._recent[self._recent_limit:]

    def insert(self, entry: UploadEntry) -> None:
        with self._lock:
            self._insert(entry)

    def record_recent(self, code: str) -> None:
        with self._lock:
            self._record_recent(code)

    def commit(self, entry: UploadEntry) -> None:
        with self._lock:
            self._insert(entry)
            self._record_recent(entry.code)

    def lookup(self, code: str) -> UploadEntry:
        with self._lock:
            entry = self._data.get(code)
        if entry is None:
            raise CodeNotFoundError(code)
        return entry

    def snapshot(self) -> StoreSnapshot:
        with self._lock:
            return StoreSnapshot(entries=list(self._data.values()), recent=list(self._recent))

    def persist(self, persister: MetadataPersister) -> bool:
        # snapshot and write in one persist section, so the last write is the newest state
        with self._persist_lock:
            snapshot = self.snapshot()
            try:
                persister.persist(snapshot)
            except PersistError:
                logger.exception("Error while writing metadata (%d entries)", len(snapshot.entries))
                return False
        return True

    def load(self, persister: MetadataPersister) -> None:
        snapshot = persister.load()
        with self._lock:
            self._data = {entry.code: entry for entry in snapshot.entries}
            self._recent = snapshot.recent[:self._recent_limit]
        logger.info("Loaded %d metadata entries", len(snapshot.entries))
