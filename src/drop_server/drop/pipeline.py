import logging
from datetime import datetime, timezone
from typing import Callable

from drop_server.drop.codes import new_delete_key
from drop_server.drop.expiration import compute_end_of_life, is_unset
from drop_server.drop.model import UploadEntry, SendResponse
from drop_server.drop.persistence import MetadataPersister
from drop_server.drop.storage import FileSink
from drop_server.drop.store import MetadataStore
from drop_server.drop.validation import UploadRequest
from drop_server.error_code import ErrorCode
from drop_server.errors import UploadValidationError

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UploadPipeline:
    def __init__(self,
                 store: MetadataStore,
                 sink: FileSink,
                 persister: MetadataPersister | None = None,
                 clock: Callable[[], datetime] = utc_now):
        self.store = store
        self.sink = sink
        self.persister = persister
        self.clock = clock

    def upload(self, request: UploadRequest, payload: bytes) -> SendResponse:
        now = self.clock()
        try:
            deletion_time = compute_end_of_life(request.ttl, now)
        except OverflowError as e:
            raise UploadValidationError(request.ttl, ErrorCode.INVALID_TTL) from e
        delete_key = new_delete_key()

        code = self.store.reserve_code()
        try:
            self.sink.write(code, payload)
            entry = UploadEntry(code=code,
                                original=request.name,
                                tags=request.tags,
                                ttl=request.ttl,
                                delete_key=delete_key,
                                creation_time=now)
            self.store.commit(entry)
        except Exception:
            self.store.release(code)
            raise
        logger.info("Upload stored: %s (%s, %d bytes, %s)", code, entry.original, len(payload),
                    "no expiration" if is_unset(deletion_time) else f"until {deletion_time.isoformat()}")

        if self.persister is not None:
            self.store.persist(self.persister)

        return SendResponse(name=code, delete_key=entry.delete_key, deletion_time=deletion_time)
