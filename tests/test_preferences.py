from course_planner.preferences import add_constraint, remove_constraint
from course_planner.schemas import (
    DayOffConstraint, StartHourConstraint, EndHourConstraint, PreferredProfConstraint
)


def test_new_constraints_get_an_id():
    constraints = add_constraint([], DayOffConstraint(day=0))
    assert len(constraints) == 1
    assert constraints[0].id


def test_repeated_day_off_is_ignored():
    constraints = add_constraint([], DayOffConstraint(day=0))
    constraints = add_constraint(constraints, DayOffConstraint(day=0, priority="high"))
    constraints = add_constraint(constraints, DayOffConstraint(day=3))
    assert [c.day for c in constraints] == [0, 3]
    assert constraints[0].priority == "medium"


def test_start_and_end_hour_are_replaced():
    constraints = add_constraint([], StartHourConstraint(time="08:00"))
    constraints = add_constraint(constraints, EndHourConstraint(time="16:00"))
    constraints = add_constraint(constraints, StartHourConstraint(time="10:00"))
    assert [c.type for c in constraints] == ["endHour", "startHour"]
    assert constraints[1].time.hour == 10


def test_preferred_professor_is_replaced_per_course():
    constraints = add_constraint([], PreferredProfConstraint(course_id="c1", professor="Dr. Smith"))
    constraints = add_constraint(constraints, PreferredProfConstraint(course_id="c2", professor="Dr. Data"))
    constraints = add_constraint(constraints, PreferredProfConstraint(course_id="c1", professor="Dr. Jones"))
    assert [(c.course_id, c.professor) for c in constraints] == [("c2", "Dr. Data"), ("c1", "Dr. Jones")]


def test_add_does_not_mutate_input():
    original = [DayOffConstraint(id="d0", day=0)]
    add_constraint(original, DayOffConstraint(day=1))
    assert len(original) == 1


def test_remove_constraint_by_id():
    constraints = [DayOffConstraint(id="d0", day=0), StartHourConstraint(id="s", time="09:00")]
    assert [c.id for c in remove_constraint(constraints, "d0")] == ["s"]
    assert remove_constraint(constraints, "missing") == constraints
