"""Resolve deferred footnotes in a generated site directory.

Usage:
    python examples/build/resolve_site.py dist/
"""

import logging
import sys

from tallymark import DeferredFootnotesIntegration

logging.basicConfig(level=logging.INFO, format="%(message)s")

report = DeferredFootnotesIntegration().build_done(sys.argv[1] if len(sys.argv) > 1 else "dist")
for path, identifiers in report.unresolved.items():
    print(f"{path}: unresolved {', '.join(identifiers)}")
