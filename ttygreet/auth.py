"""
Authenticator interface.

An authenticator is any callable ``(username, password, session) -> None``
that raises `AuthenticationError` to reject the credentials. The greeter
makes exactly one call per submit and does not retry.
"""

from __future__ import annotations

import importlib
from typing import Callable, Protocol

from .config import Session
from .errors import AuthenticationError, ConfigError

__all__ = ["Authenticator", "AuthenticationError", "load_authenticator"]


class Authenticator(Protocol):
    def __call__(self, username: str, password: str, session: Session) -> None: ...


def load_authenticator(ref: str) -> Authenticator:
    """
    Resolve a ``package.module:callable`` reference.

    Args:
        ref: Import path and attribute, separated by a colon

    Returns:
        The callable found at that location

    Raises:
        ConfigError: if the reference is malformed, cannot be imported or
            does not point at a callable
    """
    module_name, sep, attr = (ref or "").partition(":")
    if not sep or not module_name or not attr:
        raise ConfigError(f"authenticator must be 'module:callable', got {ref!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"cannot import authenticator module {module_name!r}: {e}") from e

    obj = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise ConfigError(f"{module_name!r} has no attribute {attr!r}") from e

    if not callable(obj):
        raise ConfigError(f"authenticator {ref!r} is not callable")
    fn: Callable[[str, str, Session], None] = obj
    return fn
