"""Errors raised while reading productrecon settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class ConfigurationError(RuntimeError):
    """A setting is present but cannot be used."""


class MissingConfigurationError(ConfigurationError):
    """Required environment variables are absent or blank."""

    def __init__(self, names: Iterable[str]) -> None:
        self.names = tuple(sorted(names))
        super().__init__(f"Missing configuration for: {', '.join(self.names)}")


class InvalidConfigurationError(ConfigurationError):
    """An environment variable holds a value of the wrong shape."""

    def __init__(self, name: str, value: str, *, expected: str) -> None:
        self.name = name
        self.value = value
        super().__init__(f"Invalid {expected} for {name}: {value!r}")
