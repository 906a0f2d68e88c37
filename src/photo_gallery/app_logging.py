"""Logging setup for the gallery service.

Store loads, recovered blob errors, missing files and captures all log under
the ``photo_gallery`` logger; the level comes from settings.
"""

import logging

GALLERY_LOGGER = "photo_gallery"


def configure_logging(level: str | int = logging.INFO) -> None:
    """Attach one stream handler to the gallery logger and set its level."""
    logger = logging.getLogger(GALLERY_LOGGER)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
