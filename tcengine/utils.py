import logging
from pathlib import Path
from typing import Tuple

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def setup_logger(log_path: Path, level: int = logging.INFO):
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(filename=log_path, level=level, format=LOG_FORMAT)
    logging.getLogger().addHandler(logging.StreamHandler())


def trunc_div(a: int, b: int) -> int:
    """Integer division truncating toward zero (Python's // floors)."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def trunc_divmod(a: int, b: int) -> Tuple[int, int]:
    """divmod() truncating toward zero; the remainder carries the sign of `a`."""
    q = trunc_div(a, b)
    return q, a - q * b
