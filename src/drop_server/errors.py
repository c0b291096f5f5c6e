from drop_server.error_code import ErrorCode, format_desc


class DropError(Exception):
    """Base of the upload pipeline errors, each bound to an ErrorCode."""
    error_code: ErrorCode = ErrorCode.ERROR_CODE_NOT_EXISTS

    def __init__(self, desc: str | None = None, error_code: ErrorCode | None = None):
        if error_code is not None:
            self.error_code = error_code
        self.desc = desc
        super().__init__(format_desc(self.error_code, desc))

    @property
    def status_code(self) -> int:
        return self.error_code.code

    @property
    def detail(self) -> str:
        return str(self)


class AuthError(DropError):
    error_code = ErrorCode.AUTH_FAILED


class UploadValidationError(DropError):
    error_code = ErrorCode.NAME_REQUIRED


class PayloadReadError(DropError):
    error_code = ErrorCode.PAYLOAD_READ_FAILED


class StorageError(DropError):
    error_code = ErrorCode.STORAGE_WRITE_FAILED


class PersistError(DropError):
    error_code = ErrorCode.PERSIST_FAILED


class DuplicateCodeError(DropError):
    """A reserved code was found occupied at insert time. Never expected."""
    error_code = ErrorCode.DUPLICATE_CODE


class CodeNotFoundError(DropError):
    error_code = ErrorCode.CODE_NOT_EXISTS
