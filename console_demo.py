"""
Offline console demo: runs slot and contact-privacy checks without the API.

Uses the real evaluators against sample bookings, or against a JSON file
of booking records exported from the bookings API.

Usage:
    python console_demo.py
    python console_demo.py --scenario privacy
    python console_demo.py --bookings bookings.json --date 2024-06-15 --time 10:30 --duration 1
    python console_demo.py --role PROVIDER --scheduled-date 2024-06-15 --now 2024-06-14
"""

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from carebook.config import settings
from carebook.privacy.redaction import redact_booking
from carebook.privacy.visibility import (
    check_contact_visibility,
    format_address,
    format_phone_number,
)
from carebook.scheduling.availability import bookings_for_day, get_availability_badge
from carebook.scheduling.overlap import find_conflicts
from carebook.utils import parse_date

GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

SAMPLE_BOOKINGS: list[dict[str, Any]] = [
    {
        "id": "BK-1001",
        "scheduledDate": "2024-06-15",
        "scheduledTime": "09:00",
        "duration": 1,
        "status": "CONFIRMED",
        "user": {
            "name": "Asha Verma",
            "email": "asha@example.com",
            "phone": "+91 98765 43210",
            "address": "12 Hazratganj, Lucknow",
        },
        "patient": {
            "name": "Ramesh Verma",
            "emergencyContactName": "Asha Verma",
            "emergencyContactRelation": "Daughter",
            "emergencyContactPhone": "+91 98765 43210",
        },
    },
    {
        "id": "BK-1002",
        "scheduledDate": "2024-06-15",
        "scheduledTime": "13:00",
        "duration": 2,
        "status": "IN_PROGRESS",
    },
    {
        "id": "BK-1003",
        "scheduledDate": "2024-06-15",
        "scheduledTime": "16:00",
        "duration": 1,
        "status": "PENDING",
    },
    {
        "id": "BK-1004",
        "scheduledDate": "2024-06-15",
        "scheduledTime": "not-a-time",
        "duration": 1,
        "status": "CONFIRMED",
    },
]


def header(title: str) -> None:
    print()
    print(f"{BOLD}{'=' * 60}{RESET}")
    print(f"{BOLD}  {title}{RESET}")
    print(f"{BOLD}{'=' * 60}{RESET}")


def show_slot(bookings: list[dict[str, Any]], on_date: str, at_time: str, hours: float) -> None:
    candidate = {"date": on_date, "start_time": at_time, "duration_hours": hours}
    badge = get_availability_badge("AVAILABLE", bookings, candidate)
    colour = GREEN if badge.status == "available" else YELLOW
    print(f"  {on_date} {at_time} for {hours:g}h -> {colour}{badge.text}{RESET}")
    for booking in find_conflicts(bookings, candidate):
        print(f"{DIM}    conflicts with {booking.id} at {booking.scheduled_time}{RESET}")


def show_visibility(scheduled_date: Any, role: str, now: Optional[date]) -> None:
    result = check_contact_visibility(scheduled_date, role, now)
    colour = GREEN if result.visible else RED
    print(f"  {role:<9} service {scheduled_date} today {now} -> {colour}{result.reason}{RESET}")
    print(f"{DIM}    phone:   {format_phone_number('+91 98765 43210', result.visible)}{RESET}")
    print(f"{DIM}    address: {format_address('12 Hazratganj, Lucknow', result.visible)}{RESET}")


def run_availability_scenario() -> None:
    header("Provider availability on 2024-06-15")
    for booking in bookings_for_day(SAMPLE_BOOKINGS, "2024-06-15"):
        print(f"{DIM}  {booking.scheduled_time:<10} {booking.duration_hours}h  {booking.status}{RESET}")
    print()
    show_slot(SAMPLE_BOOKINGS, "2024-06-15", "09:30", 1)
    show_slot(SAMPLE_BOOKINGS, "2024-06-15", "10:00", 1)
    show_slot(SAMPLE_BOOKINGS, "2024-06-15", "12:00", 2)
    show_slot(SAMPLE_BOOKINGS, "2024-06-15", "16:00", 1)
    show_slot(SAMPLE_BOOKINGS, "2024-06-16", "09:00", 1)


def run_privacy_scenario() -> None:
    header(
        "Contact privacy window "
        f"(-{settings.privacy.days_before}/+{settings.privacy.days_after} days)"
    )
    for today in ("2024-06-13", "2024-06-14", "2024-06-15", "2024-06-16", "2024-06-17"):
        show_visibility("2024-06-15", "PROVIDER", parse_date(today))
    show_visibility("2024-06-15", "ADMIN", parse_date("2030-01-01"))
    show_visibility("", "PROVIDER", parse_date("2024-06-15"))

    view = redact_booking(SAMPLE_BOOKINGS[0], "PROVIDER", parse_date("2024-06-20"))
    print()
    print(f"{DIM}  Provider view of {view.id}: {view.model_dump_json(exclude_none=True)}{RESET}")


SCENARIOS = {
    "availability": run_availability_scenario,
    "privacy": run_privacy_scenario,
}


def load_bookings(path: str) -> list[dict[str, Any]]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of booking records")
    return data


def main() -> None:
    parser = argparse.ArgumentParser(description="Slot conflict and contact privacy demo")
    parser.add_argument("--scenario", choices=sorted(SCENARIOS), default=None)
    parser.add_argument("--bookings", type=str, default=None, help="JSON file of booking records.")
    parser.add_argument("--date", type=str, default=None, help="Candidate date (YYYY-MM-DD).")
    parser.add_argument("--time", type=str, default=None, help="Candidate start time (HH:MM).")
    parser.add_argument("--duration", type=float, default=1.0, help="Candidate duration in hours.")
    parser.add_argument("--role", type=str, default=None, help="Viewer role for a privacy check.")
    parser.add_argument("--scheduled-date", type=str, default=None)
    parser.add_argument("--now", type=str, default=None, help="Override today (YYYY-MM-DD).")
    args = parser.parse_args()

    if args.bookings or args.date:
        if not (args.date and args.time):
            parser.error("--date and --time are required for a slot check")
        bookings = load_bookings(args.bookings) if args.bookings else SAMPLE_BOOKINGS
        header("Slot check")
        try:
            show_slot(bookings, args.date, args.time, args.duration)
        except ValidationError as exc:
            print(f"{RED}Invalid candidate slot: {exc.errors()[0]['msg']}{RESET}")
            sys.exit(2)

    if args.role:
        now = parse_date(args.now) if args.now else None
        header("Contact visibility")
        show_visibility(args.scheduled_date, args.role, now)

    if args.scenario:
        SCENARIOS[args.scenario]()
    elif not (args.bookings or args.date or args.role):
        for run in SCENARIOS.values():
            run()


if __name__ == "__main__":
    main()
