from typing import Dict, List, Sequence, Tuple
from datetime import time
from course_planner.schemas import (
    Course, CourseSession, Constraint, Priority,
    DayOffConstraint, StartHourConstraint, EndHourConstraint, PreferredProfConstraint,
    CONSTRAINT_TYPES
)

# --- Type Aliases ---
Combination = Tuple[CourseSession, ...]
ScoreItem = Tuple[str, int]

# --- Constants for Soft Constraint Scoring ---
BASE_SCORE = 100
DAY_OFF_BONUS = 10
START_HOUR_BONUS = 5
END_HOUR_BONUS = 5
PREFERRED_PROF_BONUS = 25
PENALTY_WEIGHTS: Dict[Priority, int] = {
    Priority.LOW: 5,
    Priority.MEDIUM: 15,
    Priority.HIGH: 30,
}

# --- Time Arithmetic ---

def time_to_minutes(value: time) -> int:
    """Minutes since midnight for a wall-clock time."""
    return value.hour * 60 + value.minute

def format_time(value: time) -> str:
    return value.strftime("%H:%M")

# --- Hard Constraint Checking ---

def has_clash(first: CourseSession, second: CourseSession) -> bool:
    """
    Two sessions clash when they share a day and their half-open
    [start, end) intervals overlap. Touching sessions do not clash.
    """
    if first.day != second.day:
        return False
    start1, end1 = time_to_minutes(first.start_time), time_to_minutes(first.end_time)
    start2, end2 = time_to_minutes(second.start_time), time_to_minutes(second.end_time)
    return start1 < end2 and start2 < end1

def is_consistent(session: CourseSession, chosen: Sequence[CourseSession]) -> bool:
    """True if the session clashes with none of the sessions chosen so far."""
    return not any(has_clash(session, existing) for existing in chosen)

# --- Soft Constraint Scoring ---

def calculate_schedule_score(
    sessions: Sequence[CourseSession],
    constraints: Sequence[Constraint],
    courses: Sequence[Course],
) -> Tuple[int, List[str]]:
    """
    The main orchestrator for scoring a complete combination.
    Constraints are evaluated in input order; the returned breakdown opens with
    the base score and then lists one entry per scored constraint.
    """
    score = BASE_SCORE
    breakdown = [f"Base score: {BASE_SCORE}"]

    for constraint in constraints:
        item = _score_constraint(constraint, sessions, courses)
        if item is None:
            continue
        reason, delta = item
        score += delta
        breakdown.append(f"{reason} ({delta:+d} pts)")

    return score, breakdown

def _score_constraint(constraint: Constraint, sessions: Sequence[CourseSession], courses: Sequence[Course]):
    if isinstance(constraint, DayOffConstraint):
        return _score_day_off(constraint, sessions)
    if isinstance(constraint, StartHourConstraint):
        return _score_start_hour(constraint, sessions)
    if isinstance(constraint, EndHourConstraint):
        return _score_end_hour(constraint, sessions)
    if isinstance(constraint, PreferredProfConstraint):
        return _score_preferred_prof(constraint, sessions, courses)
    raise TypeError(f"Unsupported constraint: {constraint!r}. Expected one of {[t.__name__ for t in CONSTRAINT_TYPES]}.")

def _score_day_off(constraint: DayOffConstraint, sessions: Sequence[CourseSession]) -> ScoreItem:
    day = constraint.day.short_name
    if any(s.day == constraint.day for s in sessions):
        return (f"Preference unmet: Class on requested day off ({day})", -PENALTY_WEIGHTS[constraint.priority])
    return (f"Preference met: Free day! ({day})", DAY_OFF_BONUS)

def _score_start_hour(constraint: StartHourConstraint, sessions: Sequence[CourseSession]) -> ScoreItem:
    target = time_to_minutes(constraint.time)
    earliest_start = min((time_to_minutes(s.start_time) for s in sessions), default=target)
    if earliest_start < target:
        return (f"Preference unmet: Starts earlier than {format_time(constraint.time)}", -PENALTY_WEIGHTS[constraint.priority])
    return ("Preference met: Morning sleep preserved!", START_HOUR_BONUS)

def _score_end_hour(constraint: EndHourConstraint, sessions: Sequence[CourseSession]) -> ScoreItem:
    target = time_to_minutes(constraint.time)
    latest_end = max((time_to_minutes(s.end_time) for s in sessions), default=target)
    if latest_end > target:
        return (f"Preference unmet: Ends later than {format_time(constraint.time)}", -PENALTY_WEIGHTS[constraint.priority])
    return ("Preference met: Evening schedule protected!", END_HOUR_BONUS)

def _score_preferred_prof(constraint: PreferredProfConstraint, sessions: Sequence[CourseSession], courses: Sequence[Course]):
    # A preference for a course outside the selection has no effect.
    target_course = next((c for c in courses if c.id == constraint.course_id), None)
    if target_course is None:
        return None
    chosen = next((s for s in sessions if target_course.offers(s)), None)
    if chosen is None:
        return None
    if chosen.professor == constraint.professor:
        return (f"Preference met: {target_course.code} with {constraint.professor}", PREFERRED_PROF_BONUS)
    return (f"Preference unmet: {target_course.code} not with {constraint.professor}", -PENALTY_WEIGHTS[constraint.priority])
