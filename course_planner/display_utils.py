import pandas as pd
from typing import List
from course_planner.schemas import Schedule, CourseCatalog, DayOfWeek
from course_planner.constraints import time_to_minutes, format_time

# The grid shows one row per hour from 08:00 to 21:00
GRID_FIRST_HOUR = 8
GRID_LAST_HOUR = 21

DAY_ORDER: List[str] = [day.short_name for day in DayOfWeek]

TABLE_COLUMNS = ["Course Code", "Course Name", "Day", "Start", "End", "Professor", "Room"]

def fit_score_percent(score: int) -> int:
    """
    Clamps a raw schedule score into 0-100 for display as a fit score.
    Ranking always uses the raw score.
    """
    return max(0, min(100, score))

def schedule_to_dataframe(schedule: Schedule, catalog: CourseCatalog) -> pd.DataFrame:
    """
    Flattens a schedule into one row per session, ordered by day then start time.
    Sessions the catalog cannot resolve are shown without course details.
    """
    records = []
    for session in schedule.selected_sessions:
        course = catalog.find_course_by_session_id(session.session_id)
        records.append({
            "Course Code": course.code if course else "N/A",
            "Course Name": course.name if course else "N/A",
            "Day": session.day.short_name,
            "Start": format_time(session.start_time),
            "End": format_time(session.end_time),
            "Professor": session.professor,
            "Room": session.room,
            "_day": int(session.day),
            "_start": time_to_minutes(session.start_time),
        })

    if not records:
        return pd.DataFrame(columns=TABLE_COLUMNS)

    df = pd.DataFrame(records).sort_values(["_day", "_start"], kind="stable")
    return df[TABLE_COLUMNS].reset_index(drop=True)

def schedule_to_csv(schedule: Schedule, catalog: CourseCatalog) -> str:
    return schedule_to_dataframe(schedule, catalog).to_csv(index=False)

def format_schedule_for_display(schedule: Schedule, catalog: CourseCatalog) -> pd.DataFrame:
    """
    Transforms a schedule into a weekly grid: one row per hour, one column per day.
    A session fills every hour row it overlaps.
    """
    hours = [f"{hour:02d}:00" for hour in range(GRID_FIRST_HOUR, GRID_LAST_HOUR + 1)]

    processed_data = []
    for session in schedule.selected_sessions:
        course = catalog.find_course_by_session_id(session.session_id)
        cell_content = (
            f"{course.code if course else 'N/A'}<br>"
            f"{session.professor}<br>"
            f"{session.room}<br>"
            f"{format_time(session.start_time)}-{format_time(session.end_time)}"
        )
        start = time_to_minutes(session.start_time)
        end = time_to_minutes(session.end_time)
        for hour in range(GRID_FIRST_HOUR, GRID_LAST_HOUR + 1):
            if start < (hour + 1) * 60 and hour * 60 < end:
                processed_data.append({
                    "time_str": f"{hour:02d}:00",
                    "day": session.day.short_name,
                    "content": cell_content,
                })

    if not processed_data:
        return pd.DataFrame("", index=pd.Index(hours, name="time_str"), columns=DAY_ORDER)

    df = pd.DataFrame(processed_data)
    pivot_table = df.pivot_table(
        index='time_str',
        columns='day',
        values='content',
        aggfunc='first'
    )
    pivot_table = pivot_table.reindex(index=hours, columns=DAY_ORDER).fillna('')
    pivot_table.index.name = 'time_str'
    pivot_table.columns.name = None
    return pivot_table
