import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "ruleweave"


def configure_logging(
    verbose: bool = False, silent: bool = False, console: Console | None = None
) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if verbose:
        level = logging.DEBUG
    elif silent:
        level = logging.ERROR
    else:
        level = logging.INFO

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=verbose,
        markup=False,
        rich_tracebacks=verbose,
    )
    handler.setLevel(level)
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
