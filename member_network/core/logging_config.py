"""Logging setup shared by the API process and the scripts."""

import logging

from member_network.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None) -> None:
    """Configure the root logger once, using LOG_LEVEL from settings by default."""
    level = (level or get_settings().log_level).upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("member_network").setLevel(level)
