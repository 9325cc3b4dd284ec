"""Password hashing with bcrypt and login token generation."""

from __future__ import annotations

import base64
import hashlib
import hmac
import re
import secrets
import time

import bcrypt

_DEFAULT_COST = 10
_MAX_PASSWORD_BYTES = 72
_MIN_HASH_SIZE = 59
_MIN_COST = 4
_MAX_COST = 31
_COST_RE = re.compile(rb"[+-]?[0-9]+")


def hash_password(password: str) -> str:
    """Hash a password with bcrypt at the default cost."""
    data = password.encode("utf-8")
    if len(data) > _MAX_PASSWORD_BYTES:
        raise ValueError("bcrypt: password length exceeds 72 bytes")
    salt = bcrypt.gensalt(rounds=_DEFAULT_COST, prefix=b"2a")
    return bcrypt.hashpw(data, salt).decode("ascii")


def password_ok(hashed_password: str, password: str) -> bool:
    """Whether the password matches the bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def is_hashed_password(password: str) -> bool:
    """Whether the string has the shape of a bcrypt hash with a valid cost."""
    data = password.encode("utf-8")
    if len(data) < _MIN_HASH_SIZE:
        return False
    if data[0] != ord("$") or data[1] > ord("2"):
        return False
    pos = 3 if data[2] == ord("$") else 4
    cost_bytes = data[pos : pos + 2]
    if not _COST_RE.fullmatch(cost_bytes):
        return False
    return _MIN_COST <= int(cost_bytes) <= _MAX_COST


def generate_token(username: str) -> str:
    """A random base64 HMAC-SHA256 token bound to the user and current time."""
    key = str(secrets.randbits(64)).encode("ascii")
    message = f"{username}{int(time.time())}".encode("utf-8")
    digest = hmac.new(key, message, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")