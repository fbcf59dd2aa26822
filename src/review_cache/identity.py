"""Identity abstraction — who is signed in, and on which server."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from typing import Protocol

ANONYMOUS_NAMESPACE = "anonymous"


@dataclass(frozen=True)
class Identity:
    """The account a review session runs against.

    Attributes:
        server_url: Base URL of the remote server.
        api_key:    Credential used against that server.  Not part of the
                    namespace (see :func:`namespace_key`).
        user_name:  Display or login name of the signed-in user.
    """

    server_url: str
    api_key: str
    user_name: str

    @property
    def namespace(self) -> str:
        return namespace_key(self.server_url, self.user_name)


def namespace_key(server_url: str, user_name: str) -> str:
    """Return the namespace key for a ``(server_url, user_name)`` pair.

    The pair is JSON-encoded before hashing so that no two distinct pairs
    can concatenate to the same input (``("ab", "c")`` vs ``("a", "bc")``).
    """
    payload = json.dumps([server_url, user_name], ensure_ascii=False)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class IdentityProvider(Protocol):
    """Protocol for reading the active identity.  Inject a fake in tests."""

    def current(self) -> Identity | None: ...


class SessionIdentity:
    """Mutable in-process holder for the active identity.

    Plays the part of the authentication store: the login flow calls
    :meth:`set_config`, logout calls :meth:`clear`.
    """

    def __init__(self) -> None:
        self._identity: Identity | None = None

    def set_config(self, server_url: str, api_key: str, user_name: str) -> None:
        self._identity = Identity(
            server_url=server_url.rstrip("/"),
            api_key=api_key,
            user_name=user_name,
        )

    def clear(self) -> None:
        self._identity = None

    def current(self) -> Identity | None:
        return self._identity


class StaticIdentity:
    """Provider that always returns the same identity."""

    def __init__(self, identity: Identity | None) -> None:
        self._identity = identity

    def current(self) -> Identity | None:
        return self._identity


def current_namespace(provider: IdentityProvider) -> str:
    """Return the namespace key for whatever identity *provider* reports."""
    identity = provider.current()
    if identity is None:
        return ANONYMOUS_NAMESPACE
    return identity.namespace
