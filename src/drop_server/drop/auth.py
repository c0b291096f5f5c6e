from typing import Annotated

from fastapi import Depends, Header

from drop_server.config.config import config
from drop_server.errors import AuthError

SECRET_KEY_HEADER = "X-Drop-Key"


def check_secret(configured: str, supplied: str | None) -> bool:
    if not configured:
        return True
    return supplied == configured


def get_secret_key() -> str:
    return config.secret_key


def verify_secret(x_drop_key: Annotated[str | None, Header(alias=SECRET_KEY_HEADER)] = None,
                  secret_key: str = Depends(get_secret_key)) -> None:
    if not check_secret(secret_key, x_drop_key):
        raise AuthError()
