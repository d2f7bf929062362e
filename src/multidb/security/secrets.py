"""Secret resolution for credentials omitted from descriptors."""

from __future__ import annotations

import os
from typing import Optional, Protocol, Sequence

PASSWORD_ENV_VAR = "MULTIDB_PASSWORD"
# Name used by existing JV-Link deployments; still honoured after PASSWORD_ENV_VAR.
LEGACY_PASSWORD_ENV_VAR = "JVLINK_DB_PASSWORD"


class SecretResolver(Protocol):
    """
    Supplies a secret on demand; returns ``None`` when none is configured.
    """

    def resolve(self) -> Optional[str]: ...


class EnvironmentSecretResolver:
    """
    Reads the secret from an environment variable at resolution time.

    ``fallback_env_vars`` are consulted in order when ``env_var`` is unset or
    empty.
    """

    def __init__(
        self,
        env_var: str = PASSWORD_ENV_VAR,
        fallback_env_vars: Sequence[str] = (LEGACY_PASSWORD_ENV_VAR,),
    ) -> None:
        self.env_var = env_var
        self.fallback_env_vars = tuple(fallback_env_vars)

    def resolve(self) -> Optional[str]:
        for name in (self.env_var, *self.fallback_env_vars):
            value = os.getenv(name)
            if value:
                return value
        return None

    def __repr__(self) -> str:
        names = (self.env_var, *self.fallback_env_vars)
        return f"EnvironmentSecretResolver(env_vars={names!r})"


class StaticSecretResolver:
    def __init__(self, secret: Optional[str]) -> None:
        self._secret = secret

    def resolve(self) -> Optional[str]:
        return self._secret or None

    def __repr__(self) -> str:
        return "StaticSecretResolver(***)"
