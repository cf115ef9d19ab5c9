from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol


class IdentityProvider(Protocol):
    def current_role(self) -> str | None:
        ...


def role_from_user(user: Mapping[str, Any] | None) -> str | None:
    """Read the role claim from an identity-provider user record.

    Returns ``None`` when nobody is signed in and ``""`` when the user is
    signed in but carries no usable role claim.
    """
    if user is None:
        return None
    metadata = user.get("app_metadata")
    if not isinstance(metadata, Mapping):
        return ""
    role = metadata.get("role")
    if not isinstance(role, str):
        return ""
    return role


@dataclass(frozen=True)
class StaticIdentity:
    """Identity resolved once, up front, for the lifetime of a request."""

    role: str | None = None

    @classmethod
    def from_user(cls, user: Mapping[str, Any] | None) -> StaticIdentity:
        return cls(role=role_from_user(user))

    def current_role(self) -> str | None:
        return self.role
