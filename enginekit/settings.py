"""Typed application settings read from an INI file.

A key's first letter names its type: ``b`` bool, ``i`` int, ``u`` unsigned
int, ``f`` float and ``s`` string. Values are stored under
``"<section>#<key>"``.
"""

from __future__ import annotations

import logging
import os
import re
import struct
from typing import Any, Dict, FrozenSet, List, Tuple, Union

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = "config/settings.ini"

KINDS: Tuple[str, ...] = ("bool", "int", "uint", "float", "str")

_PREFIX_KINDS = {"b": "bool", "i": "int", "u": "uint", "f": "float", "s": "str"}

_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_INT_MIN, _INT_MAX = -(1 << 31), (1 << 31) - 1
_UINT_MAX = (1 << 32) - 1

PathLike = Union[str, "os.PathLike[str]"]
SettingsData = Dict[str, Tuple[str, Any]]


def _parse_integer(body: str, text: str) -> int:
    if not _INT_RE.fullmatch(body):
        raise ValueError(f"not an integer: {text!r}")
    return int(body)


def parse_str(text: str, kind: str) -> Any:
    """Parse ``text`` as a value of ``kind`` (one of ``KINDS``).

    Leading whitespace is skipped; anything left over after the value makes
    the text invalid. Raises ValueError when the text does not parse.
    """
    if kind not in KINDS:
        raise ValueError(f"unknown setting kind: {kind!r}")
    if kind == "str":
        return text
    body = text.lstrip()
    if kind == "bool":
        value = _parse_integer(body, text)
        if value not in (0, 1):
            raise ValueError(f"not a boolean: {text!r}")
        return bool(value)
    if kind == "int":
        value = _parse_integer(body, text)
        if not _INT_MIN <= value <= _INT_MAX:
            raise ValueError(f"integer out of range: {text!r}")
        return value
    if kind == "uint":
        value = _parse_integer(body, text)
        if abs(value) > _UINT_MAX:
            raise ValueError(f"unsigned integer out of range: {text!r}")
        # A leading minus sign negates within the unsigned range.
        return value % (1 << 32)
    if not _FLOAT_RE.fullmatch(body):
        raise ValueError(f"not a number: {text!r}")
    try:
        return struct.unpack("<f", struct.pack("<f", float(body)))[0]
    except OverflowError as exc:
        raise ValueError(f"float out of range: {text!r}") from exc


def _read_ini(path: PathLike) -> List[Tuple[str, List[Tuple[str, str]]]]:
    """Read sections and their key/value pairs; names match case-insensitively."""
    sections: Dict[str, Tuple[str, Dict[str, Tuple[str, str]]]] = {}
    current = sections.setdefault("", ("", {}))
    with open(path, encoding="utf-8-sig") as handle:
        for raw in handle:
            line = raw.strip()
            if not line or line[0] in ";#":
                continue
            if line.startswith("["):
                end = line.find("]")
                if end < 0:
                    continue
                name = line[1:end].strip()
                current = sections.setdefault(name.lower(), (name, {}))
                continue
            key, sep, value = line.partition("=")
            if not sep:
                continue
            key = key.strip()
            entries = current[1]
            spelling = entries.get(key.lower(), (key, ""))[0]
            entries[key.lower()] = (spelling, value.strip())
    return [(name, list(entries.values())) for name, entries in sections.values()]


def _kind_of_value(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "str"
    raise TypeError(f"unsupported setting type: {type(value).__name__}")


def _kinds_for_default(default: Any) -> FrozenSet[str]:
    kind = _kind_of_value(default)
    if kind == "int":
        return frozenset({"int", "uint"})
    return frozenset({kind})


class ConfigModule:
    """A view of one section of a Settings object."""

    __slots__ = ("_settings", "_section")

    def __init__(self, settings: "Settings", section: str) -> None:
        self._settings = settings
        self._section = section

    @property
    def section(self) -> str:
        return self._section

    def get(self, key: str, default: Any) -> Any:
        return self._settings.get_or_default(self._section, key, default)


class Settings:
    """Settings store whose contents are replaced whole on each read."""

    def __init__(self) -> None:
        self._data: SettingsData = {}

    @staticmethod
    def _full_key(section: str, key: str) -> str:
        return f"{section}#{key}"

    def read_all_settings(self, path: PathLike = DEFAULT_SETTINGS_PATH) -> None:
        """Replace all settings with those read from ``path``."""
        logger.info("Reading all settings")
        self._data = self.read_settings(path)

    def read_settings(self, path: PathLike) -> SettingsData:
        """Read ``path`` into a new mapping of full key to ``(kind, value)``.

        A missing or unreadable file is logged and gives an empty mapping;
        values that do not parse and keys of unknown type are skipped.
        """
        data: SettingsData = {}
        try:
            sections = _read_ini(path)
        except (OSError, UnicodeDecodeError):
            logger.error("Ini file %s not found", path)
            return data
        for section, entries in sections:
            for key, text in entries:
                if not key:
                    continue
                logger.debug("Reading setting %s %s %s", section, key, text)
                kind = _PREFIX_KINDS.get(key[0])
                if kind is None:
                    logger.warning("Invalid setting key format %s", key)
                    continue
                try:
                    value = parse_str(text, kind)
                except ValueError:
                    continue
                data[self._full_key(section, key)] = (kind, value)
        return data

    def set(self, section: str, key: str, value: Any) -> None:
        kind = _kind_of_value(value)
        updated = dict(self._data)
        updated[self._full_key(section, key)] = (kind, value)
        self._data = updated

    def get(self, section: str, key: str, kind: str) -> Any:
        """Return the value stored with ``kind``; raise KeyError if there is none."""
        if kind not in KINDS:
            raise ValueError(f"unknown setting kind: {kind!r}")
        full_key = self._full_key(section, key)
        entry = self._data.get(full_key)
        if entry is None or entry[0] != kind:
            raise KeyError(full_key)
        return entry[1]

    def get_or_default(self, section: str, key: str, default: Any) -> Any:
        """Return the stored value of the default's type, or the default."""
        kinds = _kinds_for_default(default)
        entry = self._data.get(self._full_key(section, key))
        if entry is not None and entry[0] in kinds:
            return entry[1]
        return default

    def module(self, section: str) -> ConfigModule:
        return ConfigModule(self, section)


_SETTINGS = Settings()


def get_settings() -> Settings:
    """Return the process-wide settings object."""
    return _SETTINGS