import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(environment: str = "development") -> None:
    level = logging.DEBUG if environment == "development" else logging.INFO

    root = logging.getLogger()
    # Replace handlers so repeated create_app() calls (tests, reload) don't duplicate output
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)

    # The SDKs are chatty at DEBUG
    logging.getLogger("stripe").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
