"""
Helpers for maintaining a user's constraint list.

The generator tolerates any list it is given; these helpers keep the list the
app builds tidy: a single start hour, a single end hour, one preferred
professor per course and no repeated day off.
"""
import uuid
from typing import List, Sequence
from course_planner.schemas import (
    Constraint, DayOffConstraint, StartHourConstraint, EndHourConstraint, PreferredProfConstraint
)

def new_constraint_id() -> str:
    return uuid.uuid4().hex[:9]

def _replaces(existing: Constraint, new: Constraint) -> bool:
    if isinstance(new, (StartHourConstraint, EndHourConstraint)):
        return type(existing) is type(new)
    if isinstance(new, PreferredProfConstraint):
        return isinstance(existing, PreferredProfConstraint) and existing.course_id == new.course_id
    return False

def add_constraint(constraints: Sequence[Constraint], new: Constraint) -> List[Constraint]:
    """
    Returns a new list with `new` appended. Existing constraints of the same
    singular kind are dropped first; a day off that is already present leaves
    the list unchanged. Constraints without an id are given one.
    """
    if isinstance(new, DayOffConstraint) and any(
        isinstance(c, DayOffConstraint) and c.day == new.day for c in constraints
    ):
        return list(constraints)

    if new.id is None:
        new = new.model_copy(update={"id": new_constraint_id()})

    kept = [c for c in constraints if not _replaces(c, new)]
    kept.append(new)
    return kept

def remove_constraint(constraints: Sequence[Constraint], constraint_id: str) -> List[Constraint]:
    return [c for c in constraints if c.id != constraint_id]
