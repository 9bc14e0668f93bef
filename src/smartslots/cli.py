"""Command-line interface for the Smart Slots recommendation tool."""

import argparse
import json
import logging
import sys
from datetime import date
from typing import Optional

from smartslots.domain.models import (
    BusinessSettings,
    InvalidSchedulingInput,
    Location,
    Recommendations,
    ScheduleSnapshot,
    SchedulingContext,
    Session,
    SessionKind,
    SessionStatus,
    Student,
    StudentGroup,
)
from smartslots.domain.policies import MAX_SLOTS, SLOT_STEP_MINUTES
from smartslots.domain.snapshot import load_snapshot
from smartslots.output.debug_generator import DebugGenerator
from smartslots.output.pdf_generator import PDFGenerator
from smartslots.scheduling.conflicts import ConflictChecker
from smartslots.scheduling.recommender import SlotRecommender
from smartslots.scheduling.slot_scorer import SlotScorer
from smartslots.validation.validator import RecommendationValidator

logger = logging.getLogger(__name__)


def create_sample_snapshot(schedule_date: Optional[date] = None) -> ScheduleSnapshot:
    """Create a sample snapshot for trying the engine out.

    Args:
        schedule_date: Day the sample sessions fall on. If None, uses today.
    """
    if schedule_date is None:
        schedule_date = date.today()

    downtown = Location(lat=30.0444, lng=31.2357, name="Downtown")
    nearby = Location(lat=30.0561, lng=31.2394, name="Garden City")
    suburb = Location(lat=30.0131, lng=31.2089, name="Giza")

    # (name, kind, time, duration, location)
    plan = [
        ("Alice", SessionKind.IN_PERSON, "09:00", 60, downtown),
        ("Bob", SessionKind.REMOTE, "11:00", 45, None),
        ("Carol", SessionKind.IN_PERSON, "14:00", 60, suburb),
        ("David", SessionKind.REMOTE, "17:30", 60, None),
    ]

    students = []
    for i, (name, kind, start, duration, location) in enumerate(plan):
        students.append(
            Student(
                id=f"S{i + 1:03d}",
                name=name,
                session_kind=kind,
                session_time=start,
                session_duration=duration,
                location=location,
                sessions=[Session(id=f"B{i + 1:03d}", session_date=schedule_date)],
            )
        )

    # A cancelled session never blocks time
    students[0].sessions.append(
        Session(
            id="B099",
            session_date=schedule_date,
            time="19:00",
            status=SessionStatus.CANCELLED,
        )
    )

    groups = [
        StudentGroup(
            id="G001",
            name="Evening Group",
            session_kind=SessionKind.IN_PERSON,
            session_time="19:30",
            session_duration=90,
            location=nearby,
            sessions=[Session(id="B100", session_date=schedule_date)],
        )
    ]

    return ScheduleSnapshot(students=students, groups=groups, settings=BusinessSettings())


def _print_recommendations(result: Recommendations) -> None:
    if not result.slots:
        print("\n  No conflict-free slots in the working window.")
    for rank, slot in enumerate(result.slots, 1):
        print(
            f"  {rank}. {slot.time} ({slot.time_label}) "
            f"score {slot.score} [{slot.tier.value}]"
        )
        for reason in slot.reasons:
            print(f"       - {reason}")

    if result.tips:
        print("\n  Tips:")
        for tip in result.tips:
            print(f"    {tip.icon} {tip.text}")


def _build_location(args: argparse.Namespace) -> Optional[Location]:
    if args.lat is None and args.lng is None:
        return None
    if args.lat is None or args.lng is None:
        raise InvalidSchedulingInput("--lat and --lng must be given together")
    return Location(lat=args.lat, lng=args.lng)


def run_recommend(
    snapshot: ScheduleSnapshot,
    context: SchedulingContext,
    as_json: bool = False,
    output_path: Optional[str] = None,
    debug_path: Optional[str] = None,
    locale: Optional[str] = None,
    max_slots: int = MAX_SLOTS,
    step_minutes: int = SLOT_STEP_MINUTES,
) -> None:
    """Recommend slots for one day and print or export them."""
    recommender = SlotRecommender(
        max_slots=max_slots,
        step_minutes=step_minutes,
        locale=locale,
    )
    result, stats = recommender.recommend_with_stats(context, snapshot)

    if as_json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        target = stats.get("date", context.schedule_date)
        print(f"Recommendations for {target} ({context.duration_minutes} min)")
        print(
            f"  Booked: {stats.get('occupied_count', 0)}, "
            f"conflict-free candidates: {stats.get('conflict_free_count', 0)}"
        )
        _print_recommendations(result)

    if stats:
        validator = RecommendationValidator(
            buffer_policy=recommender.buffer_policy,
            tier_policy=recommender.tier_policy,
            max_slots=recommender.max_slots,
        )
        work_start, work_end = stats["work_start"], stats["work_end"]
        validation_context = SchedulingContext(
            schedule_date=stats["date"],
            duration_minutes=context.duration_minutes,
            new_session_kind=context.new_session_kind,
            work_start_minutes=work_start,
            work_end_minutes=work_end,
        )
        validation = validator.validate(result, validation_context, stats["occupied"])
        if not validation.is_valid:
            for error in validation.errors:
                logger.error("Validation failed: %s", error)

    if debug_path:
        scorer = SlotScorer(
            recommender.scoring_policy,
            recommender.buffer_policy,
            recommender.tier_policy,
        )
        DebugGenerator(scorer).generate(result, context, stats, debug_path)
        print(f"\nDebug output written to {debug_path}", file=sys.stderr)

    if output_path:
        PDFGenerator().generate(result, context, stats, output_path)
        print(f"PDF written to {output_path}", file=sys.stderr)


def run_check(
    snapshot: ScheduleSnapshot,
    schedule_date: date,
    start_time: str,
    duration: int,
    exclude_booking_id: Optional[str] = None,
) -> bool:
    """Check a proposed time and print any conflicts.

    Returns:
        True when the time is free of conflicts.
    """
    checker = ConflictChecker()
    result = checker.check_conflict(
        snapshot, schedule_date, start_time, duration, exclude_booking_id
    )

    if not result.has_conflict:
        print(f"{start_time} on {schedule_date} is free.")
        return True

    print(
        f"{start_time} on {schedule_date}: {result.conflict_type.value} "
        f"conflict ({result.severity.value})"
    )
    for detail in result.conflicts:
        print(f"  - {detail.message}")
    if result.suggestions:
        print("  Try instead:")
        for suggestion in result.suggestions:
            print(f"    {suggestion.time} ({suggestion.placement})")
    return False


def run_demo(output_path: Optional[str] = None, debug_path: Optional[str] = None) -> None:
    """Run a demo recommendation on the sample snapshot."""
    today = date.today()
    snapshot = create_sample_snapshot(today)
    print(f"Demo snapshot: {len(snapshot.students)} students, {len(snapshot.groups)} group\n")

    context = SchedulingContext(
        schedule_date=today,
        duration_minutes=60,
        new_session_kind=SessionKind.IN_PERSON,
        new_location=Location(lat=30.0500, lng=31.2400),
    )
    run_recommend(snapshot, context, output_path=output_path, debug_path=debug_path)


def _parse_date_arg(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date: {value!r} (expected YYYY-MM-DD)")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Smart Slots - Session Time Recommendations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s demo                                  Run demo on sample data
  %(prog)s demo --output slots.pdf               Generate PDF output

  %(prog)s recommend -s snap.json -d 2026-03-02  Recommend 60-minute slots
  %(prog)s recommend -s snap.json -d 2026-03-02 --kind onsite --lat 30.04 --lng 31.23
  %(prog)s recommend -s snap.json -d 2026-03-02 --json

  %(prog)s check -s snap.json -d 2026-03-02 -t 16:00
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Run demo on a sample snapshot")
    demo_parser.add_argument(
        "--output", "-o",
        type=str,
        help="Output PDF file path",
    )
    demo_parser.add_argument(
        "--debug",
        type=str,
        help="Output debug text file path",
    )

    # Recommend command
    recommend_parser = subparsers.add_parser(
        "recommend", help="Recommend start times for a new session"
    )
    recommend_parser.add_argument(
        "--snapshot", "-s",
        type=str,
        required=True,
        help="Snapshot JSON file",
    )
    recommend_parser.add_argument(
        "--date", "-d",
        type=_parse_date_arg,
        required=True,
        help="Target day (YYYY-MM-DD)",
    )
    recommend_parser.add_argument(
        "--duration", "-m",
        type=int,
        default=60,
        help="Session length in minutes (default: 60)",
    )
    recommend_parser.add_argument(
        "--kind", "-k",
        type=str,
        choices=["in_person", "onsite", "remote", "online"],
        help="Delivery kind of the new session",
    )
    recommend_parser.add_argument("--lat", type=float, help="Latitude of the new session")
    recommend_parser.add_argument("--lng", type=float, help="Longitude of the new session")
    recommend_parser.add_argument(
        "--exclude", "-x",
        type=str,
        help="Booking ID to ignore (the session being moved)",
    )
    recommend_parser.add_argument(
        "--locale", "-l",
        type=str,
        help="Language for reasons and tips (default: from snapshot settings)",
    )
    recommend_parser.add_argument(
        "--max-slots", "-n",
        type=int,
        default=MAX_SLOTS,
        help=f"Number of slots to return (default: {MAX_SLOTS})",
    )
    recommend_parser.add_argument(
        "--step",
        type=int,
        default=SLOT_STEP_MINUTES,
        help=f"Scan granularity in minutes (default: {SLOT_STEP_MINUTES})",
    )
    recommend_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )
    recommend_parser.add_argument(
        "--output", "-o",
        type=str,
        help="Output PDF file path",
    )
    recommend_parser.add_argument(
        "--debug",
        type=str,
        help="Output debug text file path",
    )

    # Check command
    check_parser = subparsers.add_parser("check", help="Check a proposed time for conflicts")
    check_parser.add_argument(
        "--snapshot", "-s",
        type=str,
        required=True,
        help="Snapshot JSON file",
    )
    check_parser.add_argument(
        "--date", "-d",
        type=_parse_date_arg,
        required=True,
        help="Day of the session (YYYY-MM-DD)",
    )
    check_parser.add_argument(
        "--time", "-t",
        type=str,
        required=True,
        help="Proposed start time (HH:MM)",
    )
    check_parser.add_argument(
        "--duration", "-m",
        type=int,
        default=60,
        help="Session length in minutes (default: 60)",
    )
    check_parser.add_argument(
        "--exclude", "-x",
        type=str,
        help="Booking ID to ignore (the session being moved)",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    try:
        if args.command == "demo":
            run_demo(args.output, args.debug)
            return 0
        elif args.command == "recommend":
            snapshot = load_snapshot(args.snapshot)
            context = SchedulingContext(
                schedule_date=args.date,
                duration_minutes=args.duration,
                new_session_kind=SessionKind.parse(args.kind) if args.kind else None,
                new_location=_build_location(args),
                exclude_booking_id=args.exclude,
            )
            run_recommend(
                snapshot,
                context,
                as_json=args.json,
                output_path=args.output,
                debug_path=args.debug,
                locale=args.locale,
                max_slots=args.max_slots,
                step_minutes=args.step,
            )
            return 0
        elif args.command == "check":
            snapshot = load_snapshot(args.snapshot)
            is_free = run_check(snapshot, args.date, args.time, args.duration, args.exclude)
            return 0 if is_free else 1
        else:
            parser.print_help()
            return 1
    except (ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
