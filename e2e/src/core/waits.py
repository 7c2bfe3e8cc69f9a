import time
from typing import Callable, Tuple, TypeVar

T = TypeVar("T")


def poll_until(read: Callable[[], T], ok: Callable[[T], bool], timeout_sec: float, interval_sec: float = 0.2) -> Tuple[bool, T]:
    """
    Reads at least once, then keeps reading until ok() or the timeout.
    Returns (matched, last value read).
    """
    end = time.time() + timeout_sec
    cur = read()
    while not ok(cur):
        if time.time() >= end:
            return False, cur
        time.sleep(interval_sec)
        cur = read()
    return True, cur
