"""Site-generator hooks for deferred footnotes.

Deferred anchors can only be fixed once every page is written, so the
rewrite pass hangs off the generator's "build done" hook. The development
server never runs it: in watch mode deferred anchors keep showing the
placeholder. That is expected behaviour, not a bug.

Usage:
    integration = DeferredFootnotesIntegration()
    integration.build_done("dist")

"""

from __future__ import annotations

from pathlib import Path

from tallymark.config import FootnoteConfig, config_context, get_config
from tallymark.rewriter import RewriteReport, process_html_files
from tallymark.utils.logger import get_logger

logger = get_logger(__name__)


class DeferredFootnotesIntegration:
    """Build hooks that resolve deferred footnotes in generated output."""

    name = "deferred-footnotes"

    __slots__ = ("_config",)

    def __init__(self, config: FootnoteConfig | None = None) -> None:
        self._config = config

    @property
    def config(self) -> FootnoteConfig:
        return self._config or get_config()

    def build_done(self, output_dir: str | Path) -> RewriteReport:
        """Resolve deferred footnotes across a finished production build."""
        logger.info("Processing deferred footnotes for production build...")
        with config_context(self.config):
            report = process_html_files(output_dir)
        logger.info(
            "Deferred footnotes processed: %d of %d files updated",
            len(report.updated),
            report.scanned,
        )
        return report

    def server_start(self, address: str | None = None) -> None:
        """Explain the watch-mode behaviour when the dev server starts."""
        placeholder = self.config.placeholder
        logger.info(
            "Dev server started%s with deferred footnotes integration",
            f" at {address}" if address else "",
        )
        logger.info("In dev mode, deferred footnotes show as %s (this is expected)", placeholder)
        logger.info("Deferred footnotes are resolved during the build process")


__all__ = [
    "DeferredFootnotesIntegration",
]
