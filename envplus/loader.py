from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path

from envplus.environ import EnvironmentStore, ProcessEnvironment, write_entry
from envplus.parse import iter_entries

logger = logging.getLogger("envplus.loader")

DEFAULT_FILE = Path(".env_plus")
DEFAULT_COMMENT = "//"
DEFAULT_DELIMITER = "="


@dataclass(frozen=True)
class EnvLoader:
    """Settings for one load of a key/value file into the environment.

    Defaults:
    * file: ``.env_plus`` relative to the current directory
    * comment: ``//``; a line starting with it is skipped, and anything after
      it on a data line is dropped
    * delimiter: ``=``; only the first occurrence splits key from value
    * overwrite: False; variables already present are left alone

    Instances are immutable; the ``with_*`` methods return modified copies::

        EnvLoader.create().with_comment("#").with_file("app.env").activate()

    Nothing is validated until ``activate`` runs.
    """

    file: Path = DEFAULT_FILE
    comment: str = DEFAULT_COMMENT
    delimiter: str = DEFAULT_DELIMITER
    overwrite: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.file, Path):
            object.__setattr__(self, "file", Path(self.file))

    @classmethod
    def create(cls) -> EnvLoader:
        return cls()

    @classmethod
    def from_profile(cls, path: Path) -> EnvLoader:
        from envplus.profile import load_profile

        return load_profile(path)

    def with_file(self, path: str | Path) -> EnvLoader:
        return replace(self, file=Path(path))

    def with_comment(self, comment: str) -> EnvLoader:
        return replace(self, comment=comment)

    def with_delimiter(self, delimiter: str) -> EnvLoader:
        return replace(self, delimiter=delimiter)

    def with_overwrite(self, overwrite: bool) -> EnvLoader:
        return replace(self, overwrite=bool(overwrite))

    change_file = with_file
    change_comment = with_comment
    change_delimiter = with_delimiter
    overwrite_envs = with_overwrite

    def activate(self, env: EnvironmentStore | None = None) -> bool:
        """Load the file into ``env`` (the process environment by default).

        Returns False, after logging, if the file cannot be read. A malformed
        line raises MalformedLineError and is not meant to be handled.
        """
        loaded = load_file(self, env)
        if not loaded:
            logger.error("failed to load %s", self.file)
        return loaded


def load_file(loader: EnvLoader, env: EnvironmentStore | None = None) -> bool:
    if env is None:
        env = ProcessEnvironment()

    try:
        text = loader.file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("cannot read %s: %s", loader.file, exc)
        return False

    # Each entry is written before the next line is parsed, so duplicates in
    # the same file see the earlier write.
    for key, value in iter_entries(text, comment=loader.comment, delimiter=loader.delimiter):
        write_entry(env, key, value, overwrite=loader.overwrite)

    return True
