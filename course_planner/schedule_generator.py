import logging
from typing import List, Sequence
from course_planner.schemas import (
    Course, CourseSession, Constraint, Schedule, CONSTRAINT_TYPES
)
from course_planner.constraints import (
    Combination,
    is_consistent,
    calculate_schedule_score,
)

logger = logging.getLogger(__name__)

MAX_RESULTS = 3

class ScheduleGenerator:
    """
    The engine that turns a course selection into ranked, conflict-free weekly schedules.
    """

    def __init__(self, courses: Sequence[Course], constraints: Sequence[Constraint]):
        """
        Validates the inputs once so that the search can assume well-formed data.
        """
        for course in courses:
            if not isinstance(course, Course):
                raise TypeError(f"Expected a Course, got {type(course).__name__}.")
        for constraint in constraints:
            if not isinstance(constraint, CONSTRAINT_TYPES):
                raise TypeError(f"Expected a constraint model, got {type(constraint).__name__}.")

        self.courses: List[Course] = list(courses)
        self.constraints: List[Constraint] = list(constraints)

    def solve(self) -> List[Schedule]:
        """
        The main public entry point. Returns at most MAX_RESULTS schedules, best first.
        An empty list means no conflict-free schedule exists for the selection.
        """
        combinations = self.find_combinations()
        logger.debug("Found %d conflict-free combinations for %d courses.", len(combinations), len(self.courses))

        scored = [self._format_schedule(index, combination) for index, combination in enumerate(combinations)]
        # sorted() is stable, so equal scores keep their discovery order.
        ranked = sorted(scored, key=lambda schedule: schedule.score, reverse=True)[:MAX_RESULTS]

        logger.info("Returning %d ranked schedule option(s).", len(ranked))
        return ranked

    def find_combinations(self) -> List[Combination]:
        """
        Enumerates every way to pick one session per course with no pairwise clash,
        in the order induced by course order and each course's session order.
        """
        results: List[Combination] = []
        self._backtrack(0, [], results)
        return results

    def _backtrack(self, index: int, current: List[CourseSession], results: List[Combination]) -> None:
        """
        The core recursive backtracking search. `current` is the partial selection
        owned by a single find_combinations() call.
        """
        if index == len(self.courses):
            results.append(tuple(current))
            return

        for session in self.courses[index].sessions:
            if not is_consistent(session, current):
                continue
            current.append(session)
            self._backtrack(index + 1, current, results)
            current.pop()

    def _format_schedule(self, index: int, combination: Combination) -> Schedule:
        """
        Scores a combination and wraps it in the Schedule model.
        """
        score, breakdown = calculate_schedule_score(combination, self.constraints, self.courses)
        return Schedule(
            id=f"sched-{index}",
            selected_sessions=list(combination),
            score=score,
            breakdown=breakdown,
        )

def generate_schedules(courses: Sequence[Course], constraints: Sequence[Constraint]) -> List[Schedule]:
    """Convenience wrapper: build a generator for one request and solve it."""
    return ScheduleGenerator(courses, constraints).solve()

if __name__ == '__main__':
    from course_planner.data_loader import load_sample_catalog
    from course_planner.schemas import DayOffConstraint, EndHourConstraint, DayOfWeek, Priority

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        catalog = load_sample_catalog()
        selected = catalog.select(['c1', 'c2', 'c5', 'c7'])
        preferences = [
            DayOffConstraint(day=DayOfWeek.FRIDAY, priority=Priority.HIGH),
            EndHourConstraint(time='16:00'),
        ]
        for schedule in generate_schedules(selected, preferences):
            logger.info("%s scored %d", schedule.id, schedule.score)
            for line in schedule.breakdown:
                logger.info("    %s", line)
    except (ValueError, KeyError) as e:
        logger.error(e)
