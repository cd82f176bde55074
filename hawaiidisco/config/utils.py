"""Credential lookup for ``env:`` references in configuration values."""

from __future__ import annotations

import os

ENV_PREFIX = "env:"


class MissingCredentialError(EnvironmentError):
    """An ``env:`` reference names a variable that is unset or blank."""

    def __init__(self, var_name: str) -> None:
        super().__init__(
            f"Credential variable {var_name} is unset or blank; export it or put the key in the config file"
        )
        self.var_name = var_name


def env_reference_name(value: str | None) -> str | None:
    """Return ``VAR`` for an ``env:VAR`` value, ``None`` for literal values."""

    if value is None or not value.startswith(ENV_PREFIX):
        return None
    return value[len(ENV_PREFIX):].strip()


def resolve_env_reference(value: str | None, *, required: bool = True) -> str | None:
    """Resolve a literal key or an ``env:VAR`` reference to the secret itself.

    A blank or unset variable raises :class:`MissingCredentialError` when
    ``required``, otherwise it resolves to ``None``.
    """

    if value is None:
        return None
    var_name = env_reference_name(value)
    if var_name is None:
        return value.strip() or None
    secret = os.environ.get(var_name, "").strip() if var_name else ""
    if secret:
        return secret
    if required:
        raise MissingCredentialError(var_name)
    return None


__all__ = ["ENV_PREFIX", "MissingCredentialError", "env_reference_name", "resolve_env_reference"]
