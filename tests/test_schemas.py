from datetime import time, timezone
import pytest
from pydantic import ValidationError
from course_planner.schemas import CourseSession, StartHourConstraint, EndHourConstraint
from conftest import make_session


@pytest.mark.parametrize("start,end", [
    ("09:00", "10:00:45"),
    ("10:00:30", "11:00"),
    ("09:00Z", "10:00"),
    ("09:00+05:00", "10:00+05:00"),
])
def test_session_times_must_be_plain_hours_and_minutes(start, end):
    with pytest.raises(ValidationError, match="HH:MM"):
        make_session("x", 0, start, end)


def test_session_rejects_time_objects_with_seconds_or_offset():
    with pytest.raises(ValidationError):
        CourseSession(session_id="x", day=0, start_time=time(9, 0, 30), end_time=time(10, 0), professor="X", room="Y")
    with pytest.raises(ValidationError):
        CourseSession(session_id="x", day=0, start_time=time(9, 0, tzinfo=timezone.utc), end_time=time(10, 0), professor="X", room="Y")


def test_session_accepts_hours_and_minutes():
    session = make_session("x", 0, "09:00", "10:30")
    assert session.start_time == time(9, 0)
    assert session.end_time == time(10, 30)


@pytest.mark.parametrize("constraint_type", [StartHourConstraint, EndHourConstraint])
@pytest.mark.parametrize("value", ["10:00:01", "10:00Z"])
def test_hour_constraints_reject_seconds_and_offsets(constraint_type, value):
    with pytest.raises(ValidationError):
        constraint_type(time=value)
