import secrets
from typing import Callable

DICTIONARY = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
CODE_SIZE = 8
DELETE_KEY_SIZE = 16


def random_string(size: int) -> str:
    """Random URL-safe string of the given size over DICTIONARY."""
    return ''.join(secrets.choice(DICTIONARY) for _ in range(size))


def allocate_code(is_taken: Callable[[str], bool], size: int = CODE_SIZE) -> str:
    while True:
        candidate = random_string(size)
        if not is_taken(candidate):
            return candidate


def new_delete_key() -> str:
    # not checked for uniqueness
    return random_string(DELETE_KEY_SIZE)
