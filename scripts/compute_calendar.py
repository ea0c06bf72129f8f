"""
Compute an offer calendar from a JSON payload file.

Usage:
    python scripts/compute_calendar.py payload.json
    cat payload.json | python scripts/compute_calendar.py -
"""

import argparse
import json
import sys
import pathlib

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from offer_calendar.logging_setup import configure_logging
from offer_calendar.services.availability import compute_available_days


def load_payload(source: str):
    if source == "-":
        return json.load(sys.stdin)
    with open(source, encoding="utf-8") as f:
        return json.load(f)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print available days for an offer payload.")
    parser.add_argument("payload", help="JSON file with timeslots/bookings/from/to, or - for stdin")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    try:
        payload = load_payload(args.payload)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Cannot read payload: {e}", file=sys.stderr)
        return 1

    report = compute_available_days(payload)
    print(json.dumps(report.to_payload(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
