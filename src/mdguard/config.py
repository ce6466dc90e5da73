"""ContextVar-based sanitizer configuration for mdguard.

Provides context-local configuration using Python's ContextVars (PEP 567).
Module-level functions read the active config when none is passed explicitly.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed. SanitizeConfig itself is frozen.

Usage:
    # Explicit config
    from mdguard import sanitize
    from mdguard.config import SanitizeConfig

    html = sanitize(text, config=SanitizeConfig(tables_enabled=False))

    # Or scope a config to a block
    with sanitize_config_context(SanitizeConfig(tables_enabled=False)):
        html = sanitize(text)

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields
from typing import Any

from mdguard.allowlist import ALLOWED_ATTRIBUTES, ALLOWED_TAGS, Allowlist, allowlist_for
from mdguard.errors import ConfigError

_NAME_FIELDS = ("allowed_tags", "allowed_attributes")


@dataclass(frozen=True, slots=True)
class SanitizeConfig:
    """Immutable sanitizer configuration.

    Frozen dataclass ensures thread-safety (immutable after creation) and
    makes configs usable as cache keys.

    Attributes:
        allowed_tags: Tag allowlist; include "#text" to keep bare text
        allowed_attributes: Attribute names allowed on every allowed tag
        html_enabled: Pass raw HTML in the markdown source through to the
            sanitizer (otherwise it is escaped as text)
        tables_enabled: Enable GFM table parsing
        strikethrough_enabled: Enable ~~strikethrough~~ syntax
        strict: Raise RenderError instead of degrading when a stage fails

    """

    allowed_tags: frozenset[str] = ALLOWED_TAGS
    allowed_attributes: frozenset[str] = ALLOWED_ATTRIBUTES
    html_enabled: bool = True
    tables_enabled: bool = True
    strikethrough_enabled: bool = True
    strict: bool = False

    def __post_init__(self) -> None:
        for name in _NAME_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, frozenset):
                raise ConfigError(name, f"expected frozenset, got {type(value).__name__}")
            invalid = [repr(n) for n in value if not isinstance(n, str) or not n.strip()]
            if invalid:
                raise ConfigError(name, f"invalid names {', '.join(sorted(invalid))}")
        for f in fields(self):
            if f.name in _NAME_FIELDS:
                continue
            value = getattr(self, f.name)
            if not isinstance(value, bool):
                raise ConfigError(f.name, f"expected bool, got {type(value).__name__}")

    @property
    def allowlist(self) -> Allowlist:
        """Allowlist built from allowed_tags and allowed_attributes."""
        return allowlist_for(self.allowed_tags, self.allowed_attributes)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> SanitizeConfig:
        """Create SanitizeConfig from dictionary.

        Useful when config comes from YAML/JSON settings. Unknown keys are
        silently ignored. Allowlist values may be any iterable of names and
        are frozen; a bare string is rejected rather than split into letters.

        Args:
            config_dict: Dictionary with config values. Keys should match
                SanitizeConfig attribute names.

        Returns:
            New SanitizeConfig instance with values from dict.

        Example:
            >>> config = SanitizeConfig.from_dict({
            ...     "allowed_tags": ["p", "em", "#text"],
            ...     "strict": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> sorted(config.allowed_tags)
            ['#text', 'em', 'p']

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        for name in _NAME_FIELDS:
            value = filtered.get(name)
            if value is not None and not isinstance(value, (str, frozenset)):
                try:
                    filtered[name] = frozenset(value)
                except TypeError as e:
                    raise ConfigError(name, f"expected iterable of names: {e}") from e
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: SanitizeConfig = SanitizeConfig()

_sanitize_config: ContextVar[SanitizeConfig] = ContextVar(
    "sanitize_config",
    default=_DEFAULT_CONFIG,
)


def get_sanitize_config() -> SanitizeConfig:
    """Get the active sanitizer configuration for this context."""
    return _sanitize_config.get()


def set_sanitize_config(config: SanitizeConfig) -> None:
    """Set sanitizer configuration for the current context.

    Only affects the current thread's context. Other threads are unaffected.
    """
    _sanitize_config.set(config)


def reset_sanitize_config() -> None:
    """Reset to the default configuration (module-level singleton)."""
    _sanitize_config.set(_DEFAULT_CONFIG)


@contextmanager
def sanitize_config_context(config: SanitizeConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Properly restores the previous config even if an exception is raised.

    Example:
        >>> with sanitize_config_context(SanitizeConfig(tables_enabled=False)):
        ...     get_sanitize_config().tables_enabled
        False
        >>> get_sanitize_config().tables_enabled
        True

    """
    previous = _sanitize_config.get()
    _sanitize_config.set(config)
    try:
        yield
    finally:
        _sanitize_config.set(previous)


__all__ = [
    "SanitizeConfig",
    "get_sanitize_config",
    "set_sanitize_config",
    "reset_sanitize_config",
    "sanitize_config_context",
]
