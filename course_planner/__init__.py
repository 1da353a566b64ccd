"""Course planning: conflict-free weekly schedules ranked against soft preferences"""
from .schemas import (
    DayOfWeek, Priority, Faculty, CourseSession, Course, CourseCatalog,
    Constraint, DayOffConstraint, StartHourConstraint, EndHourConstraint,
    PreferredProfConstraint, Schedule
)
from .schedule_generator import ScheduleGenerator, generate_schedules

__all__ = [
    'DayOfWeek', 'Priority', 'Faculty', 'CourseSession', 'Course', 'CourseCatalog',
    'Constraint', 'DayOffConstraint', 'StartHourConstraint', 'EndHourConstraint',
    'PreferredProfConstraint', 'Schedule', 'ScheduleGenerator', 'generate_schedules'
]
