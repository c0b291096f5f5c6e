from datetime import datetime, timezone
from typing import Protocol, cast

from sqlalchemy import Column, JSON, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, Field, Session, create_engine, select

from drop_server.drop.model import UploadEntry, StoreSnapshot
from drop_server.errors import PersistError


class MetadataPersister(Protocol):
    def persist(self, snapshot: StoreSnapshot) -> None: ...

    def load(self) -> StoreSnapshot: ...


class UploadRecord(SQLModel, table=True):
    code: str = Field(primary_key=True)
    original: str
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    ttl: str | None = None
    delete_key: str
    creation_time: datetime


class RecentUpload(SQLModel, table=True):
    position: int = Field(primary_key=True)
    code: str


def _as_utc(value: datetime) -> datetime:
    # sqlite drops tzinfo
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class SqlMetadataPersister:
    """Writes the whole store as one snapshot, replacing the previous one."""

    def __init__(self, sql_url: str, echo: bool = False):
        self.engine = create_engine(sql_url, echo=echo)

    def init(self):
        SQLModel.metadata.create_all(self.engine)

    def persist(self, snapshot: StoreSnapshot) -> None:
        try:
            with Session(self.engine) as session:
                session.execute(delete(UploadRecord))
                session.execute(delete(RecentUpload))
                session.add_all(UploadRecord(**entry.model_dump()) for entry in snapshot.entries)
                session.add_all(RecentUpload(position=i, code=code) for i, code in enumerate(snapshot.recent))
                session.commit()
        except SQLAlchemyError as e:
            raise PersistError(str(e)) from e

    def load(self) -> StoreSnapshot:
        try:
            with Session(self.engine) as session:
                records = cast(list[UploadRecord], session.exec(select(UploadRecord)).all())
                recent = cast(list[RecentUpload],
                              session.exec(select(RecentUpload).order_by(RecentUpload.position)).all())
                entries = [UploadEntry(**record.model_dump(exclude={'creation_time'}),
                                       creation_time=_as_utc(record.creation_time))
                           for record in records]
                return StoreSnapshot(entries=entries, recent=[item.code for item in recent])
        except SQLAlchemyError as e:
            raise PersistError(str(e)) from e
