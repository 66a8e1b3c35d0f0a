"""Friends address book stored as ``friends.json``.

The book is reloaded from disk on every call. Adding a friend rewrites the
whole file under a cross-process lock so concurrent adds do not lose
updates.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from filelock import FileLock
from pydantic import ValidationError

from .errors import InvalidFormat, MalformedPersistedData
from .models import AddressBook, address_book_adapter
from .storage import read_text, write_private_json

logger = logging.getLogger(__name__)


def _lock_path(path: str) -> Path:
    return Path(str(path) + ".lock")


def parse_friend_spec(spec: str) -> tuple[str, str]:
    """Split ``username@ip:port`` into (username, address)."""
    parts = spec.split("@")
    if len(parts) != 2 or not all(parts):
        raise InvalidFormat(spec)
    return parts[0], parts[1]


def decode_address_book(raw: str) -> tuple[AddressBook, Optional[str]]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        return {}, str(e)
    if not isinstance(data, dict):
        return {}, f"expected a JSON object, got {type(data).__name__}"

    try:
        return address_book_adapter.validate_python(data), None
    except ValidationError as e:
        bad = {err["loc"][0] for err in e.errors() if err["loc"]}
        good = {k: v for k, v in data.items() if k not in bad}
        return address_book_adapter.validate_python(good), f"dropped entries: {', '.join(sorted(map(str, bad)))}"


def load_address_book(path: str, strict: bool = False) -> AddressBook:
    try:
        raw = read_text(path)
    except OSError as e:
        if strict:
            raise MalformedPersistedData(path, str(e)) from e
        logger.warning(f"Could not read address book {path}: {e}")
        return {}
    if raw is None:
        return {}
    book, problem = decode_address_book(raw)
    if problem:
        if strict:
            raise MalformedPersistedData(path, problem)
        logger.warning(f"Malformed address book {path}: {problem}")
    return book


def add_friend(path: str, spec: str) -> tuple[str, str]:
    """Add or overwrite a friend from a ``username@ip:port`` spec.

    The address part is stored verbatim. Raises InvalidFormat before touching
    the file if the spec does not split into exactly two non-empty parts.
    """
    username, address = parse_friend_spec(spec)

    with FileLock(_lock_path(path)):
        book = load_address_book(path)
        book[username] = address
        write_private_json(path, book)

    logger.info(f"Friend {username} saved as {address}")
    return username, address
