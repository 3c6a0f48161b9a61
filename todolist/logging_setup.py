import logging
import sys


def setup_logging(level: str | int = logging.INFO) -> None:
    """Configure the root logger with a single stderr handler.

    Safe to call more than once: previously installed root handlers are replaced.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
    logging.captureWarnings(True)
