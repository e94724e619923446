from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from envplus.errors import ProfileError
from envplus.loader import EnvLoader

_STRING_KEYS = ("file", "comment", "delimiter")
_KNOWN_KEYS = {*_STRING_KEYS, "overwrite"}


def read_profile(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ProfileError(f"{path}: invalid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ProfileError(f"{path}: expected a mapping, got {type(data).__name__}")
    return data


def load_profile(path: Path, *, base: EnvLoader | None = None) -> EnvLoader:
    """Build an EnvLoader from a YAML profile.

    Keys left out of the profile keep their value from ``base`` (the defaults
    when not given). A relative ``file`` is taken relative to the profile.
    """
    data = read_profile(path)
    unknown = sorted(str(k) for k in data if k not in _KNOWN_KEYS)
    if unknown:
        raise ProfileError(f"{path}: unknown keys: {', '.join(unknown)}")

    for key in _STRING_KEYS:
        if key in data and not isinstance(data[key], str):
            # Unquoted `comment: #` is the usual culprit: YAML reads it as null.
            raise ProfileError(f"{path}: {key!r} must be a string, got {data[key]!r}")
    if "overwrite" in data and not isinstance(data["overwrite"], bool):
        raise ProfileError(f"{path}: 'overwrite' must be true or false, got {data['overwrite']!r}")

    loader = base or EnvLoader.create()
    if "file" in data:
        file = Path(data["file"])
        if not file.is_absolute():
            file = path.parent / file
        loader = loader.with_file(file)
    if "comment" in data:
        loader = loader.with_comment(data["comment"])
    if "delimiter" in data:
        loader = loader.with_delimiter(data["delimiter"])
    if "overwrite" in data:
        loader = loader.with_overwrite(data["overwrite"])
    return loader
