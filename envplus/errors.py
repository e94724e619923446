from __future__ import annotations


class EnvPlusError(Exception):
    pass


class MalformedLineError(EnvPlusError, ValueError):
    """A data line without the delimiter. Aborts the whole load."""

    def __init__(self, lineno: int, line: str) -> None:
        self.lineno = lineno
        self.line = line
        super().__init__(f"Line {lineno} with content '{line}' does not appear to be formatted properly.")


class ProfileError(EnvPlusError):
    pass
