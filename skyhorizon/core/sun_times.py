"""
Sunrise/sunset lookup - provider contract, HTTP default provider, cache.

A provider is any callable taking a SunTimesRequest and returning a mapping
with 'sunrise' and 'sunset' (ISO-8601 strings or datetimes).

The cache is an explicit object (no module-level ambient state beyond one
default instance): keys are (rounded lat, rounded lon, local date,
provider id), values are Futures so concurrent callers of the same key share
a single provider call. Failed lookups are dropped before the error reaches
the caller.
"""

from __future__ import annotations
import logging
import threading
from collections import OrderedDict
from concurrent.futures import Future
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Hashable, Mapping, Optional, Tuple, Union

import requests

from .astro_time import as_utc
from .types import SunTimes

log = logging.getLogger(__name__)

SUNRISE_SUNSET_URL = "https://api.sunrise-sunset.org/json"
REQUEST_TIMEOUT_S  = 10.0


class SunTimesError(RuntimeError):
    """Raised when a sunrise/sunset provider cannot deliver times."""


@dataclass(frozen=True)
class SunTimesRequest:
    latitude:  float
    longitude: float
    date:      str      # YYYY-MM-DD, observer's approximate local date


SunTimesResponse = Mapping[str, Union[str, datetime]]
SunTimesProvider = Callable[[SunTimesRequest], SunTimesResponse]
CacheKey = Tuple[int, int, str, Hashable]


def default_sun_times_provider(request: SunTimesRequest) -> SunTimesResponse:
    """Query api.sunrise-sunset.org for one day."""
    params = {
        "lat": request.latitude,
        "lng": request.longitude,
        "date": request.date,
        "formatted": 0,
    }
    try:
        res = requests.get(SUNRISE_SUNSET_URL, params=params,
                           timeout=REQUEST_TIMEOUT_S)
    except requests.RequestException as e:
        raise SunTimesError(f"sunrise-sunset.org request failed: {e}") from e

    if not res.ok:
        raise SunTimesError(f"sunrise-sunset.org API error: {res.status_code}")
    body = res.json()
    if body.get("status") != "OK":
        raise SunTimesError(
            f"sunrise-sunset.org API returned status: {body.get('status')}")
    results = body["results"]
    return {"sunrise": results["sunrise"], "sunset": results["sunset"]}


def local_date_string(when: datetime, longitude: float) -> str:
    """Observer's calendar date, using a whole-hour zone from longitude."""
    offset_h = round(longitude / 15.0)
    local = as_utc(when) + timedelta(hours=offset_h)
    return local.strftime("%Y-%m-%d")


def provider_id(provider: SunTimesProvider) -> Hashable:
    if provider is default_sun_times_provider:
        return "default"
    name = getattr(provider, "__qualname__", None)
    module = getattr(provider, "__module__", None)
    if name is None:
        return provider
    return f"{module}.{name}"


def _parse_time(value: Union[str, datetime]) -> datetime:
    if isinstance(value, datetime):
        return as_utc(value)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(text))


def to_sun_times(response: SunTimesResponse) -> SunTimes:
    try:
        return SunTimes(sunrise=_parse_time(response["sunrise"]),
                        sunset=_parse_time(response["sunset"]))
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise SunTimesError(f"malformed sunrise/sunset response: {e!r}") from e


class SunTimesCache:
    """
    Bounded LRU cache of sunrise/sunset lookups.

    Usage:
        cache = SunTimesCache(max_entries=64)
        times = cache.get_or_fetch(key, lambda: provider(request))
        cache.invalidate(key)
        cache.clear()
    """

    def __init__(self, max_entries: int = 256):
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self.max_entries = max_entries
        self._entries: "OrderedDict[CacheKey, Future]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._entries

    def get_or_fetch(self, key: CacheKey,
                     fetch: Callable[[], SunTimes]) -> SunTimes:
        with self._lock:
            future = self._entries.get(key)
            owner = future is None
            if owner:
                future = Future()
                self._entries[key] = future
                self._evict_locked()
            else:
                self._entries.move_to_end(key)

        if not owner:
            log.debug("sun times cache hit: %s", key)
            return future.result()

        log.debug("sun times cache miss: %s", key)
        try:
            value = fetch()
        except BaseException as e:
            with self._lock:
                if self._entries.get(key) is future:
                    del self._entries[key]
            log.warning("sun times lookup failed for %s: %s", key, e)
            future.set_exception(e)
            raise
        future.set_result(value)
        return value

    def invalidate(self, key: CacheKey) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _evict_locked(self) -> None:
        while len(self._entries) > self.max_entries:
            old_key, _ = self._entries.popitem(last=False)
            log.debug("sun times cache evicted: %s", old_key)


_default_cache = SunTimesCache()


def default_cache() -> SunTimesCache:
    return _default_cache


def cache_key(latitude: float, longitude: float, date: str,
              provider: SunTimesProvider) -> CacheKey:
    # Rounded so a continuously moving coordinate does not flood the provider.
    return (round(latitude), round(longitude), date, provider_id(provider))


def fetch_sun_times(latitude: float, longitude: float, when: datetime,
                    provider: SunTimesProvider = default_sun_times_provider,
                    cache: Optional[SunTimesCache] = None) -> SunTimes:
    """Sunrise/sunset for the observer's local day containing `when`."""
    if cache is None:
        cache = _default_cache
    date = local_date_string(when, longitude)
    key = cache_key(latitude, longitude, date, provider)
    request = SunTimesRequest(latitude=latitude, longitude=longitude, date=date)
    return cache.get_or_fetch(key, lambda: to_sun_times(provider(request)))
