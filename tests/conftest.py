import logging

import pytest

from astrocore.config import get_settings


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch):
    for name in ("ASTRO_AYANAMSHA", "ASTRO_LOG_LEVEL", "ASTRO_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    logger = logging.getLogger("astrocore")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
