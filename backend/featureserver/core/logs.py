"""Logging setup for the feature server.

Modules log through ``logging.getLogger(__name__)``; this module only wires
the root handler and level once, when the application is created.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from featureserver.core import config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: config.Settings) -> None:
    """Apply the configured log level and format to the root logger.

    Args:
        settings: Application settings providing ``log_level``.
    """
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    logging.getLogger("featureserver").setLevel(settings.log_level)
