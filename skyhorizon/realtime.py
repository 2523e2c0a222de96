"""
realtime_sky - re-render the sky on a fixed interval until stopped.
"""

from __future__ import annotations
import logging
import threading
from typing import Callable, Iterator, Optional

from .compute import compute_sky
from .core.astro_time import utc_now
from .core.types import SkyResult

log = logging.getLogger(__name__)


def realtime_sky(latitude: float, longitude: float,
                 interval: float = 60.0,
                 stop_event: Optional[threading.Event] = None,
                 clock: Callable = utc_now,
                 **options) -> Iterator[SkyResult]:
    """
    Yield compute_sky results for the current time every `interval` seconds.

    Setting `stop_event` ends the generator after the current wait; no
    exception is raised. Extra keyword arguments go to compute_sky.

    Usage:
        stop = threading.Event()
        for sky in realtime_sky(48.85, 2.35, interval=30, stop_event=stop):
            print(sky.gradient)
    """
    if interval < 0:
        raise ValueError(f"interval must be >= 0, got {interval}")
    if stop_event is None:
        stop_event = threading.Event()

    while not stop_event.is_set():
        yield compute_sky(clock(), latitude, longitude, **options)
        if stop_event.wait(interval):
            break
    log.debug("realtime_sky stopped")
