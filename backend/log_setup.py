"""Logging setup for the API process.

Call ``configure_logging`` once at startup. Every other module uses
``logging.getLogger(__name__)`` and never configures handlers itself.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Attach a stdout handler to the root logger at ``level``."""
    resolved = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    logging.basicConfig(level=resolved, handlers=[handler], force=True)

    # requests logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
