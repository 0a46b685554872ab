"""
focusctl — command-line client for a running focus daemon.

Usage:
    focusctl status
    focusctl pause 15
    focusctl override "Deep Focus" 45
    focusctl cancel pause
    focusctl configurations
    focusctl config-path
"""

from __future__ import annotations

import argparse
import json
import sys
import time
import urllib.error
import urllib.request
from datetime import datetime
from typing import Optional

from .config import config

# Durations offered by the command palette
PAUSE_CHOICES = (1, 5, 10, 15, 30)
OVERRIDE_CHOICES = (15, 30, 45, 60)


class DaemonUnreachable(RuntimeError):
    pass


def base_url(host: str = "localhost", port: Optional[int] = None) -> str:
    return f"http://{host}:{port or config.api_port}"


def minutes_from_now(minutes: int, now: Optional[float] = None) -> int:
    if now is None:
        now = time.time()
    return round(now) + minutes * 60


def clock_time(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp).strftime("%H:%M")


def summarize(status: dict) -> str:
    """One-line summary: pause beats override beats schedule."""
    pause = status.get("pause") or {}
    override = status.get("override") or {}
    schedule = status.get("schedule") or {}
    if pause.get("until") is not None:
        return f"Focus is paused until {clock_time(pause['until'])}"
    if override.get("until") is not None:
        return f"Focusing using '{override.get('name')}' until {clock_time(override['until'])}"
    if schedule.get("until") is not None:
        return f"Planned focus using '{schedule.get('name')}' until {clock_time(schedule['until'])}"
    return "No focus schedule is active"


# ---------------------------------------------------------------------------
# Low-level HTTP helper
# ---------------------------------------------------------------------------

def _request(url: str, method: str = "GET", body: Optional[dict] = None):
    data = json.dumps(body).encode() if body is not None else None
    req = urllib.request.Request(
        url,
        data=data,
        headers={"Content-Type": "application/json"},
        method=method,
    )
    try:
        with urllib.request.urlopen(req, timeout=3) as r:
            return json.loads(r.read())
    except (urllib.error.URLError, OSError) as e:
        raise DaemonUnreachable(f"focus daemon unreachable at {url}: {e}") from e


def _ack(result: dict, success: str) -> int:
    if result.get("status") == "error":
        print(f"Error: {result.get('message')}", file=sys.stderr)
        return 1
    print(success)
    return 0


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_status(url: str, args) -> int:
    print(summarize(_request(f"{url}/status")))
    return 0


def cmd_pause(url: str, args) -> int:
    result = _request(f"{url}/pause", "POST", {"until": minutes_from_now(args.minutes)})
    return _ack(result, f"Focus schedule paused for {args.minutes} minutes")


def cmd_override(url: str, args) -> int:
    result = _request(f"{url}/override", "POST", {
        "name": args.name,
        "until": minutes_from_now(args.minutes),
    })
    return _ack(result, f"Using schedule '{args.name}' for {args.minutes} minutes")


def cmd_cancel(url: str, args) -> int:
    result = _request(f"{url}/{args.slot}", "DELETE")
    return _ack(result, f"Cancelled {args.slot}")


def cmd_configurations(url: str, args) -> int:
    for name in _request(f"{url}/configurations"):
        print(name)
    return 0


def cmd_config_path(url: str, args) -> int:
    print(config.config_dir)
    return 0


def _positive(value: str) -> int:
    minutes = int(value)
    if minutes <= 0:
        raise argparse.ArgumentTypeError("minutes must be positive")
    return minutes


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="focusctl", description="Control the focus daemon")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=config.api_port)
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("status", help="Show what is active now").set_defaults(func=cmd_status)

    p = sub.add_parser("pause", help=f"Pause focus (UI offers {PAUSE_CHOICES} minutes)")
    p.add_argument("minutes", type=_positive)
    p.set_defaults(func=cmd_pause)

    p = sub.add_parser("override", help=f"Force a configuration (UI offers {OVERRIDE_CHOICES} minutes)")
    p.add_argument("name")
    p.add_argument("minutes", type=_positive)
    p.set_defaults(func=cmd_override)

    p = sub.add_parser("cancel", help="End a pause or override now")
    p.add_argument("slot", choices=["pause", "override"])
    p.set_defaults(func=cmd_cancel)

    sub.add_parser("configurations", help="List configuration names").set_defaults(
        func=cmd_configurations)
    sub.add_parser("config-path", help="Print the configuration directory").set_defaults(
        func=cmd_config_path)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(base_url(args.host, args.port), args)
    except DaemonUnreachable as e:
        print(e, file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
