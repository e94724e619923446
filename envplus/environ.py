from __future__ import annotations

import logging
import os
from typing import Iterator, MutableMapping, Protocol

logger = logging.getLogger("envplus.environ")


class EnvironmentStore(Protocol):
    def __contains__(self, key: object) -> bool: ...

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class ProcessEnvironment:
    """The real process environment (os.environ).

    Shared by every thread in the process; nothing here is synchronized.
    """

    def __init__(self, environ: MutableMapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def __contains__(self, key: object) -> bool:
        return key in self._environ

    def get(self, key: str) -> str | None:
        return self._environ.get(key)

    def set(self, key: str, value: str) -> None:
        # os.environ only rejects some of these on some platforms; be uniform.
        if not key or "=" in key or "\0" in key:
            raise ValueError(f"illegal environment variable name: {key!r}")
        if "\0" in value:
            raise ValueError(f"illegal environment variable value for {key!r}")
        self._environ[key] = value


class MemoryEnvironment:
    """Dict-backed store for tests and dry runs."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


def write_entry(env: EnvironmentStore, key: str, value: str, *, overwrite: bool) -> bool:
    """Apply the overwrite policy to one entry; return True if the store was written."""
    if key in env and not overwrite:
        return False
    try:
        env.set(key, value)
    except ValueError as exc:
        logger.warning("skipping entry: %s", exc)
        return False
    return True
