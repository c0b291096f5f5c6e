import re
from typing import BinaryIO

from pydantic import BaseModel, Field, field_validator

from drop_server.drop.expiration import parse_duration
from drop_server.error_code import ErrorCode
from drop_server.errors import UploadValidationError, PayloadReadError

_SEPARATORS = re.compile(r'[/\\]')


def read_payload(file: BinaryIO | None) -> bytes:
    if file is None:
        raise PayloadReadError('no data field')
    try:
        return file.read()
    except OSError as e:
        raise PayloadReadError(str(e)) from e


def leaf_name(name: str) -> str:
    return _SEPARATORS.split(name.rstrip('/\\'))[-1]


def split_tags(raw: str | None) -> list[str]:
    # verbatim: no trimming, no dedup, empty segments kept
    if raw is None:
        return []
    return raw.split(',')


class UploadRequest(BaseModel):
    name: str | None = Field(default=None, validate_default=True)
    ttl: str | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator('name')
    @classmethod
    def validate_name(cls, name: str | None) -> str:
        if not name:
            raise UploadValidationError()
        original = leaf_name(name)
        if not original:
            raise UploadValidationError(name)
        return original

    @field_validator('ttl')
    @classmethod
    def validate_ttl(cls, ttl: str | None) -> str | None:
        if not ttl:
            return None
        try:
            parse_duration(ttl)
        except (ValueError, OverflowError) as e:
            raise UploadValidationError(str(e), ErrorCode.INVALID_TTL) from e
        return ttl

    @field_validator('tags', mode='before')
    @classmethod
    def validate_tags(cls, tags):
        if tags is None or isinstance(tags, str):
            return split_tags(tags)
        return tags

