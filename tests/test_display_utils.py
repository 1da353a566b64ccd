from course_planner.display_utils import (
    fit_score_percent, schedule_to_dataframe, schedule_to_csv, format_schedule_for_display, DAY_ORDER
)
from course_planner.schemas import Schedule
from conftest import make_session


def _schedule(*sessions, score=100):
    return Schedule(id="sched-0", selected_sessions=list(sessions), score=score, breakdown=["Base score: 100"])


def test_fit_score_percent_clamps_for_display():
    assert fit_score_percent(135) == 100
    assert fit_score_percent(-20) == 0
    assert fit_score_percent(85) == 85


def test_schedule_to_dataframe_sorted_by_day_and_time(catalog):
    schedule = _schedule(
        make_session("b-mon", 0, "10:00", "12:00", professor="Prof. Miller"),
        make_session("a-tue", 1, "09:00", "11:00", professor="Dr. Jones"),
    )
    df = schedule_to_dataframe(schedule, catalog)
    assert list(df["Course Code"]) == ["B", "A"]
    assert list(df["Day"]) == ["Mon", "Tue"]
    assert list(df["Start"]) == ["10:00", "09:00"]


def test_schedule_to_dataframe_handles_unknown_sessions(catalog):
    df = schedule_to_dataframe(_schedule(make_session("ghost", 3, "09:00", "10:00")), catalog)
    assert df.loc[0, "Course Code"] == "N/A"


def test_schedule_to_csv_has_header(catalog):
    csv_text = schedule_to_csv(_schedule(make_session("a-tue", 1, "09:00", "11:00", professor="Dr. Jones")), catalog)
    lines = csv_text.strip().splitlines()
    assert lines[0] == "Course Code,Course Name,Day,Start,End,Professor,Room"
    assert lines[1].startswith("A,Course a,Tue,09:00,11:00,Dr. Jones")


def test_grid_fills_every_overlapped_hour(catalog):
    grid = format_schedule_for_display(_schedule(make_session("a-tue", 1, "09:00", "11:00")), catalog)
    assert list(grid.columns) == DAY_ORDER
    assert grid.loc["09:00", "Tue"].startswith("A<br>")
    assert grid.loc["10:00", "Tue"].startswith("A<br>")
    assert grid.loc["11:00", "Tue"] == ""
    assert grid.loc["09:00", "Mon"] == ""


def test_grid_for_empty_schedule(catalog):
    grid = format_schedule_for_display(_schedule(), catalog)
    assert grid.shape == (14, 6)
    assert (grid == "").all().all()
