import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s]: %(message)s"


def setup_logging(level: str = "INFO"):
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # requests logs every connection at DEBUG, including URLs with query tokens
    logging.getLogger("urllib3").setLevel(logging.WARNING)
