from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from enum import Enum, IntEnum
from typing import Annotated, List, Literal, Optional, Sequence, Union
from datetime import datetime, time

def _check_wall_clock(value: time) -> time:
    """Times are whole minutes with no UTC offset, i.e. plain 'HH:MM'."""
    if value.second or value.microsecond or value.tzinfo is not None:
        raise ValueError(f"Expected a wall-clock time in 'HH:MM' form, got '{value.isoformat()}'.")
    return value

# Using Python's standard Enum for controlled vocabularies
class DayOfWeek(IntEnum):
    """Enumeration for the teaching days of the week, indexed from Monday."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5

    @property
    def short_name(self) -> str:
        return self.name[:3].title()

class Priority(str, Enum):
    """Enumeration for how strongly a user holds a preference."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class Faculty(str, Enum):
    """Enumeration for the faculty offering a course."""
    ENGINEERING = "Engineering"
    BUSINESS = "Business"
    SCIENCE = "Science"
    ARTS = "Arts"
    MEDICINE = "Medicine"

# --- Catalog Models ---

class CourseSession(BaseModel):
    """Represents a single fixed weekly time block offered by a course (one section)."""
    model_config = ConfigDict(frozen=True)

    session_id: str = Field(description="Unique, stable identifier for the session (e.g., 's1-1').")
    day: DayOfWeek = Field(description="Day of the week, 0 (Monday) to 5 (Saturday).")
    start_time: time = Field(description="Wall-clock start time, given as 'HH:MM'.")
    end_time: time = Field(description="Wall-clock end time, given as 'HH:MM'.")
    professor: str = Field(description="The name of the professor teaching this session.")
    room: str = Field(description="The room the session is held in.")

    @field_validator("start_time", "end_time")
    @classmethod
    def _check_times(cls, value: time) -> time:
        return _check_wall_clock(value)

    @model_validator(mode="after")
    def _check_time_range(self) -> "CourseSession":
        if self.end_time <= self.start_time:
            raise ValueError(
                f"Session '{self.session_id}' ends at {self.end_time:%H:%M}, "
                f"which is not after its start at {self.start_time:%H:%M}."
            )
        return self

class Course(BaseModel):
    """Represents a course and the alternative sessions a student can choose between."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(description="The unique identifier for the course (e.g., 'c1').")
    code: str = Field(description="The catalog code of the course (e.g., 'CS101').")
    name: str = Field(description="The display name of the course.")
    sessions: List[CourseSession] = Field(default_factory=list, description="Ordered session alternatives; exactly one is chosen per schedule.")
    faculty: Optional[Faculty] = Field(None, description="The faculty offering the course.")
    major: Optional[str] = Field(None, description="The major the course targets.")
    year_level: Optional[str] = Field(None, description="Freshman, Sophomore, etc.")
    semester: Optional[int] = Field(None, description="The semester the course runs in (1 or 2).")
    credits: Optional[int] = Field(None, description="Credit hours.")
    enrollment: Optional[int] = Field(None, description="Current number of enrolled students.")
    capacity: Optional[int] = Field(None, description="Maximum number of students.")

    def offers(self, session: CourseSession) -> bool:
        """True if the session is one of this course's alternatives."""
        return any(s.session_id == session.session_id for s in self.sessions)

# --- Constraint Models ---

class _ConstraintBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = Field(None, description="Opaque identifier used by callers to remove the constraint.")
    priority: Priority = Field(Priority.MEDIUM, description="Determines the penalty applied when the preference is unmet.")

class DayOffConstraint(_ConstraintBase):
    """Prefer no session scheduled on the given day."""
    type: Literal["dayOff"] = "dayOff"
    day: DayOfWeek

class StartHourConstraint(_ConstraintBase):
    """Prefer no session starting before the given time."""
    type: Literal["startHour"] = "startHour"
    time: time

    @field_validator("time")
    @classmethod
    def _check_time(cls, value: time) -> time:
        return _check_wall_clock(value)

class EndHourConstraint(_ConstraintBase):
    """Prefer no session ending after the given time."""
    type: Literal["endHour"] = "endHour"
    time: time

    @field_validator("time")
    @classmethod
    def _check_time(cls, value: time) -> time:
        return _check_wall_clock(value)

class PreferredProfConstraint(_ConstraintBase):
    """Prefer a specific professor for a specific course."""
    type: Literal["preferredProf"] = "preferredProf"
    course_id: str
    professor: str

Constraint = Annotated[
    Union[DayOffConstraint, StartHourConstraint, EndHourConstraint, PreferredProfConstraint],
    Field(discriminator="type"),
]

CONSTRAINT_TYPES = (DayOffConstraint, StartHourConstraint, EndHourConstraint, PreferredProfConstraint)

# --- A container model to hold the course catalog ---

class CourseCatalog(BaseModel):
    """A top-level model to hold all the parsed and validated courses."""
    courses: List[Course] = Field(default_factory=list)

    def get_course(self, course_id: str) -> Course:
        for course in self.courses:
            if course.id == course_id:
                return course
        raise KeyError(f"Unknown course id '{course_id}'.")

    def find_course_by_session_id(self, session_id: str) -> Optional[Course]:
        """Resolves the course that offers a session, for display purposes."""
        for course in self.courses:
            if any(s.session_id == session_id for s in course.sessions):
                return course
        return None

    def select(self, course_ids: Sequence[str]) -> List[Course]:
        """Returns the courses for the given ids, in the order the ids are given."""
        return [self.get_course(course_id) for course_id in course_ids]

    def filter(self, faculty: Optional[Faculty] = None, major: Optional[str] = None) -> "CourseCatalog":
        courses = [
            c for c in self.courses
            if (faculty is None or c.faculty == faculty) and (major is None or c.major == major)
        ]
        return CourseCatalog(courses=courses)

    def majors(self, faculty: Optional[Faculty] = None) -> List[str]:
        return sorted({c.major for c in self.filter(faculty=faculty).courses if c.major})

# --- Models for the Generator's Output ---

class Schedule(BaseModel):
    """One conflict-free choice of a session per selected course, with its score."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Identifier derived from the order the combination was discovered in.")
    selected_sessions: List[CourseSession] = Field(..., description="Exactly one session per selected course.")
    score: int = Field(..., description="Unbounded relative ranking score; starts at the base score.")
    breakdown: List[str] = Field(default_factory=list, description="Ordered trace of how the score was derived.")
    saved_at: Optional[datetime] = Field(None, description="Set by callers when the schedule is saved.")
