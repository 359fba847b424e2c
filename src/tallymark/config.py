"""ContextVar-based configuration for Tallymark.

The renderer and the rewriter read the active FootnoteConfig instead of
taking a dozen keyword arguments. Config is immutable; swap it for a scope
with config_context().

Usage:
    from tallymark.config import FootnoteConfig, config_context

    with config_context(FootnoteConfig(strict=True)):
        process_html_files("dist")

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FootnoteConfig:
    """Immutable footnote configuration.

    Attributes:
        marker_tag: Tag name of reference markers in source bodies
        anchor_class: CSS class put on rendered anchors
        href_prefix: Prefix of the anchor href, followed by the identifier
        placeholder: Text shown by deferred anchors until the rewrite pass
        output_suffix: File suffix of output units visited by the rewriter
        strict: Raise UnresolvedAnchorError instead of warning when a
            deferred anchor has no matching normal anchor

    """

    marker_tag: str = "FootnoteRef"
    anchor_class: str = "footnote-ref"
    href_prefix: str = "#fn-"
    placeholder: str = "0"
    output_suffix: str = ".html"
    strict: bool = False

    @classmethod
    def from_dict(cls, config_dict: dict) -> "FootnoteConfig":
        """Create FootnoteConfig from a dictionary.

        Unknown keys are silently ignored, so a site-wide settings mapping
        can be passed in as-is.

        Example:
            >>> FootnoteConfig.from_dict({"strict": True, "theme": "dark"}).strict
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


_DEFAULT_CONFIG: FootnoteConfig = FootnoteConfig()

_footnote_config: ContextVar[FootnoteConfig] = ContextVar(
    "footnote_config",
    default=_DEFAULT_CONFIG,
)


def get_config() -> FootnoteConfig:
    """Get the active configuration for this context."""
    return _footnote_config.get()


def set_config(config: FootnoteConfig) -> None:
    """Set the configuration for the current context."""
    _footnote_config.set(config)


def reset_config() -> None:
    """Reset to the module-level default configuration."""
    _footnote_config.set(_DEFAULT_CONFIG)


@contextmanager
def config_context(config: FootnoteConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with config_context(FootnoteConfig(placeholder="?")):
        ...     get_config().placeholder
        '?'

    """
    previous = _footnote_config.get()
    _footnote_config.set(config)
    try:
        yield
    finally:
        _footnote_config.set(previous)


__all__ = [
    "FootnoteConfig",
    "get_config",
    "set_config",
    "reset_config",
    "config_context",
]
