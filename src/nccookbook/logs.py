from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.WARNING), format=LOG_FORMAT)
    # httpx logs every request at INFO
    if level.upper() != "DEBUG":
        logging.getLogger("httpx").setLevel(logging.WARNING)
