import pytest
from course_planner.schemas import Course, CourseSession, CourseCatalog

def make_session(session_id, day, start, end, professor="Dr. Smith", room="Hall A"):
    return CourseSession(
        session_id=session_id, day=day, start_time=start, end_time=end,
        professor=professor, room=room
    )

def make_course(course_id, *sessions, code=None):
    return Course(id=course_id, code=code or course_id.upper(), name=f"Course {course_id}", sessions=list(sessions))

@pytest.fixture
def course_a():
    # Mon 09:00-11:00 and Tue 09:00-11:00
    return make_course(
        "a",
        make_session("a-mon", 0, "09:00", "11:00", professor="Dr. Smith"),
        make_session("a-tue", 1, "09:00", "11:00", professor="Dr. Jones"),
    )

@pytest.fixture
def course_b():
    # Mon 10:00-12:00
    return make_course("b", make_session("b-mon", 0, "10:00", "12:00", professor="Prof. Miller"))

@pytest.fixture
def catalog(course_a, course_b):
    return CourseCatalog(courses=[course_a, course_b])
