"""
Fixed-delay pacing between sequential requests.
"""

import time
from typing import Callable


class Pacer:
    """
    Sleeps for a fixed number of milliseconds between requests.

    The sleep function is injectable so tests can record delays instead
    of waiting.
    """

    def __init__(self, sleep: Callable[[float], None] = time.sleep):
        self._sleep = sleep

    def pause(self, milliseconds: int) -> None:
        if milliseconds > 0:
            self._sleep(milliseconds / 1000.0)
