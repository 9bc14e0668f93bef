"""Shared fixtures for building days, bookings and slots."""

from datetime import date

import pytest

from smartslots.domain.models import (
    CandidateSlot,
    OccupiedInterval,
    ScheduleSnapshot,
    Session,
    SessionKind,
    Student,
)
from smartslots.domain.policies import DefaultTierPolicy
from smartslots.domain.timeutils import get_time_period, time_to_minutes


@pytest.fixture
def target_date():
    """The day every test schedules on."""
    return date(2026, 3, 2)


@pytest.fixture
def make_interval():
    """Factory for occupied intervals given as "HH:MM" bounds."""

    def _make(start, end, kind=SessionKind.REMOTE, label="Student", location=None, booking_id=None):
        return OccupiedInterval(
            start=time_to_minutes(start),
            end=time_to_minutes(end),
            session_kind=kind,
            label=label,
            location=location,
            booking_id=booking_id,
        )

    return _make


@pytest.fixture
def make_snapshot(target_date):
    """Factory for a snapshot with one student per booking.

    Each booking is (name, kind, "HH:MM", duration) with an optional
    trailing location. Booking IDs are B1, B2, ... in argument order.
    """

    def _make(*bookings):
        students = []
        for i, booking in enumerate(bookings, 1):
            name, kind, start, duration = booking[:4]
            location = booking[4] if len(booking) > 4 else None
            students.append(
                Student(
                    id=f"S{i}",
                    name=name,
                    session_kind=kind,
                    location=location,
                    sessions=[
                        Session(
                            id=f"B{i}",
                            session_date=target_date,
                            time=start,
                            duration_minutes=duration,
                        )
                    ],
                )
            )
        return ScheduleSnapshot(students=students)

    return _make


@pytest.fixture
def make_slot():
    """Factory for candidate slots with a consistent tier and priority."""

    def _make(start, score=55, tier=None, priority=None, duration=60):
        tier = tier or DefaultTierPolicy().classify(score)
        return CandidateSlot(
            start_minutes=start,
            duration_minutes=duration,
            score=score,
            tier=tier,
            priority=priority or tier.priority,
            period=get_time_period(start),
        )

    return _make
