import logging
from typing import Iterable, Union


LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    # getLevelName returns "Level X" for unknown names
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(
    level: Union[int, str] = logging.WARNING, loggers: Iterable[str] = ("timesheet",)
) -> None:
    lvl = _coerce_level(level)
    logging.basicConfig(level=lvl, format=LOG_FORMAT)
    for name in loggers:
        logging.getLogger(name).setLevel(lvl)
