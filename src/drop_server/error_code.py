from enum import Enum

from fastapi import HTTPException


class ErrorCode(Enum):
    ERROR_CODE_NOT_EXISTS = (520, "Error code not exists")
    AUTH_FAILED = (403, "invalid secret key")
    NAME_REQUIRED = (400, "name required")
    INVALID_TTL = (400, "invalid ttl")
    CODE_NOT_EXISTS = (404, "code not exists")
    PAYLOAD_READ_FAILED = (500, "error while receiving data")
    STORAGE_WRITE_FAILED = (500, "error while writing data")
    PERSIST_FAILED = (500, "error while writing metadata")
    DUPLICATE_CODE = (500, "code already allocated")

    def __init__(self, code, desc):
        self.code = code
        self.desc = desc


def format_desc(error_code: ErrorCode | None, desc: str | None = None) -> str | None:
    # remove redundant desc
    if error_code and desc and desc.startswith(error_code.desc):
        desc = desc[len(error_code.desc):]
        if desc.startswith(','):
            desc = desc[1:]
            desc = desc.strip()

    if error_code:
        desc = error_code.desc + (', ' + desc if desc else '')
    return desc


def raise_exception(error_code: ErrorCode | int, desc: str | None = None):
    error_code_ = None
    if isinstance(error_code, int):
        code_ = error_code
        for code in ErrorCode:
            if code.code == error_code:
                error_code_ = code
                break
    else:
        error_code_ = error_code
        code_ = error_code.code

    raise HTTPException(status_code=code_, detail=format_desc(error_code_, desc))
