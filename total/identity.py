"""Local identity persistence.

The identity lives in ``config.json`` under the base directory. It is created
interactively on first run and only read afterwards; deleting the file is the
only way to start over.
"""

import json
import logging
import os
from typing import Callable, Optional

from pydantic import ValidationError

from .errors import MalformedPersistedData
from .localip import discover_local_ipv4
from .models import DEFAULT_PORT, Identity
from .storage import write_private_json

logger = logging.getLogger(__name__)


def decode_identity(raw: str) -> tuple[Identity, Optional[str]]:
    """Decode persisted identity JSON.

    Returns the identity together with the reason decoding was incomplete,
    or None when it was clean. Fields that fail to decode keep their zero
    values; the others are kept.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        return Identity(), str(e)
    if not isinstance(data, dict):
        return Identity(), f"expected a JSON object, got {type(data).__name__}"

    try:
        return Identity.model_validate(data), None
    except ValidationError as e:
        bad = {err["loc"][0] for err in e.errors() if err["loc"]}
        good = {k: v for k, v in data.items() if k.lower() not in bad}
        return Identity.model_validate(good), f"invalid fields: {', '.join(sorted(map(str, bad)))}"


def load_identity(path: str, strict: bool = False) -> Identity:
    """Load the identity at ``path``.

    Unreadable or malformed files are logged and yield zero values, or raise
    MalformedPersistedData when ``strict`` is set.
    """
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            raw = f.read()
    except OSError as e:
        if strict:
            raise MalformedPersistedData(path, str(e)) from e
        logger.warning(f"Could not read identity file {path}: {e}")
        return Identity()

    identity, problem = decode_identity(raw)
    if problem:
        if strict:
            raise MalformedPersistedData(path, problem)
        logger.warning(f"Malformed identity file {path}: {problem}")
    return identity


def create_identity(path: str, prompt: Callable[[str], str] = input, port: int = DEFAULT_PORT) -> Identity:
    """Ask for a username and persist a fresh identity at ``path``."""
    print("Welcome to Total.")
    print("Create your account.")
    username = ""
    while not username:
        fields = prompt("Enter your username: ").split()
        username = fields[0] if fields else ""

    identity = Identity(username=username, ip=discover_local_ipv4(), port=port)
    try:
        write_private_json(path, identity.model_dump())
    except OSError as e:
        logger.error(f"Could not write identity file {path}: {e}")
        print(f"Could not save account: {e}")
        return identity
    logger.info(f"Identity written to {path}")

    print("Account created.")
    return identity


def load_or_create_identity(path: str, prompt: Callable[[str], str] = input, port: int = DEFAULT_PORT) -> Identity:
    if os.path.exists(path):
        return load_identity(path)
    return create_identity(path, prompt=prompt, port=port)
