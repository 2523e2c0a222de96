"""
Command line: print the sky gradient for a place and time.

Usage examples:
  python -m skyhorizon --lat 48.85 --lon 2.35
  python -m skyhorizon --lat 48.85 --lon 2.35 --time 2024-06-21T20:30:00Z --bortle 7
  python -m skyhorizon --lat 48.85 --lon 2.35 --sun-times --strategy blend --png sky.png
  python -m skyhorizon --lat 48.85 --lon 2.35 --watch 60
"""
from __future__ import annotations

import argparse
import logging
import math
from datetime import datetime

from .atmosphere.correction import CorrectionStrategy
from .compute import compute_sky
from .core.astro_time import as_utc, utc_now
from .core.config import RenderConfig
from .core.sun_times import SunTimesError
from .realtime import realtime_sky


def _parse_time(text: str) -> datetime:
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return as_utc(datetime.fromisoformat(text))
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO-8601 timestamp: {text!r}")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="skyhorizon",
                                 description="Render a sky colour gradient from the sun's position.")
    ap.add_argument("--lat", type=float, required=True, help="Latitude in degrees [-90, 90]")
    ap.add_argument("--lon", type=float, required=True, help="Longitude in degrees [-180, 180]")
    ap.add_argument("--time", type=_parse_time, default=None, help="ISO-8601 timestamp (default: now, UTC)")
    ap.add_argument("--bortle", type=int, default=None, choices=range(1, 10), help="Light-pollution class 1-9")
    ap.add_argument("--sun-times", action="store_true", help="Correct altitude with sunrise-sunset.org times")
    ap.add_argument("--strategy", choices=[s.value for s in CorrectionStrategy],
                    default=CorrectionStrategy.TWILIGHT_RAMP.value, help="Rise/set correction strategy")
    ap.add_argument("--samples", type=int, default=32, help="Gradient stops (view samples)")
    ap.add_argument("--png", default=None, help="Write a preview image to this path")
    ap.add_argument("--watch", type=float, default=None, metavar="SECONDS",
                    help="Re-render every SECONDS until interrupted")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def _report(sky, png=None) -> None:
    print(f"altitude {math.degrees(sky.altitude):+.2f} deg | "
          f"azimuth {math.degrees(sky.azimuth):.2f} deg | "
          f"rendered {math.degrees(sky.render_altitude):+.2f} deg")
    if sky.sunrise is not None:
        print(f"sunrise {sky.sunrise.isoformat()} | sunset {sky.sunset.isoformat()}")
    print(f"top    {sky.top_color}")
    print(f"bottom {sky.bottom_color}")
    print(sky.gradient)
    if png:
        from .imaging.preview import save_gradient
        save_gradient(sky, png)
        print(f"Wrote {png}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        config = RenderConfig(samples=args.samples)
    except ValueError as e:
        raise SystemExit(f"error: {e}")

    options = dict(sun_times=True if args.sun_times else None,
                   bortle=args.bortle,
                   strategy=CorrectionStrategy(args.strategy),
                   config=config)

    try:
        if args.watch is not None:
            for sky in realtime_sky(args.lat, args.lon, interval=args.watch, **options):
                _report(sky, args.png)
                print("-" * 60)
        else:
            when = args.time if args.time is not None else utc_now()
            _report(compute_sky(when, args.lat, args.lon, **options), args.png)
    except KeyboardInterrupt:
        return 130
    except (ValueError, SunTimesError) as e:
        raise SystemExit(f"error: {e}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
