from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UploadEntryVo(BaseModel):
    code: str
    original: str
    tags: list[str] = Field(default_factory=list)
    ttl: str | None = None
    creation_time: datetime


class UploadEntry(UploadEntryVo):
    model_config = ConfigDict(frozen=True)

    tags: tuple[str, ...] = ()
    delete_key: str

    def to_vo(self) -> UploadEntryVo:
        return UploadEntryVo(**self.model_dump(exclude={'delete_key'}))


class StoreSnapshot(BaseModel):
    entries: list[UploadEntry] = Field(default_factory=list)
    recent: list[str] = Field(default_factory=list)


class SendResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    delete_key: str
    # the misspelled key is part of the wire format
    deletion_time: datetime = Field(alias='availaible_until')
