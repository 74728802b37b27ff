import logging

from shared.core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s]: %(message)s"


def setup_logging(level: str | None = None):
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT
    )
