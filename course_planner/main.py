import logging
from datetime import datetime, time
import streamlit as st
from course_planner.schemas import (
    DayOfWeek, Priority, Faculty,
    DayOffConstraint, StartHourConstraint, EndHourConstraint, PreferredProfConstraint
)
from course_planner.data_loader import load_catalog_from_excel, load_catalog_from_json, load_sample_catalog
from course_planner.preferences import add_constraint
from course_planner.schedule_generator import generate_schedules
from course_planner.display_utils import (
    format_schedule_for_display, schedule_to_dataframe, schedule_to_csv, fit_score_percent
)

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

START_HOUR_OPTIONS = {"Any": None, "08:00 AM": time(8, 0), "10:00 AM": time(10, 0)}
END_HOUR_OPTIONS = {"Any": None, "04:00 PM": time(16, 0), "06:00 PM": time(18, 0)}
PRIORITY_OPTIONS = [Priority.LOW, Priority.MEDIUM, Priority.HIGH]

st.set_page_config(
    page_title="Course Planner",
    page_icon="📅",
    layout="wide"
)

st.title("📅 Course Planner")
st.markdown("""
<style>
/* This makes all tables expand to the full width of their container */
table {
    width: 100% !important;
}
</style>
""", unsafe_allow_html=True)

st.session_state.setdefault('constraints', [])
st.session_state.setdefault('saved_schedules', [])

def _build_preferences(selected_courses):
    """Rebuilds the constraint list from the sidebar widgets on every rerun."""
    constraints = []
    day_off_priority = st.selectbox("Day off priority", PRIORITY_OPTIONS, index=1, format_func=lambda p: p.value)
    days_off = st.multiselect("Days off", list(DayOfWeek), format_func=lambda d: d.short_name)
    for day in days_off:
        constraints = add_constraint(constraints, DayOffConstraint(day=day, priority=day_off_priority))

    start_label = st.selectbox("Start hour", list(START_HOUR_OPTIONS))
    if START_HOUR_OPTIONS[start_label] is not None:
        constraints = add_constraint(constraints, StartHourConstraint(time=START_HOUR_OPTIONS[start_label]))

    end_label = st.selectbox("End hour", list(END_HOUR_OPTIONS))
    if END_HOUR_OPTIONS[end_label] is not None:
        constraints = add_constraint(constraints, EndHourConstraint(time=END_HOUR_OPTIONS[end_label]))

    for course in selected_courses:
        professors = sorted({s.professor for s in course.sessions})
        if len(professors) < 2:
            continue
        choice = st.selectbox(f"Preferred professor for {course.code}", ["Any"] + professors)
        if choice != "Any":
            constraints = add_constraint(constraints, PreferredProfConstraint(course_id=course.id, professor=choice))
    return constraints

with st.sidebar:
    st.header("⚙️ Catalog")

    uploaded_file = st.file_uploader(
        "Upload a course catalog",
        type=["xlsx", "json"],
        help="An Excel file with 'Courses' and 'Sessions' sheets, or a JSON catalog. Leave empty to use the sample catalog."
    )

    try:
        if uploaded_file is None:
            catalog = load_sample_catalog()
        elif uploaded_file.name.endswith(".json"):
            catalog = load_catalog_from_json(uploaded_file)
        else:
            catalog = load_catalog_from_excel(uploaded_file)
    except ValueError as e:
        st.error(f"Could not load the catalog: {e}")
        st.stop()

    faculty = st.selectbox("Faculty", [None] + list(Faculty), format_func=lambda f: "All" if f is None else f.value)
    major = st.selectbox("Major", [None] + catalog.majors(faculty), format_func=lambda m: "All" if m is None else m)
    browsable = catalog.filter(faculty=faculty, major=major)

    selected_ids = st.multiselect(
        "Courses",
        options=[c.id for c in browsable.courses],
        format_func=lambda cid: f"{catalog.get_course(cid).code} - {catalog.get_course(cid).name}"
    )
    selected_courses = catalog.select(selected_ids)

    st.header("🎯 Preferences")
    st.session_state['constraints'] = _build_preferences(selected_courses)

    generate_button = st.button("Generate Schedules", type="primary", disabled=not selected_courses)

if st.session_state['constraints']:
    with st.expander(f"Active preferences ({len(st.session_state['constraints'])})"):
        for constraint in st.session_state['constraints']:
            st.write(f"{constraint.type}: {constraint.model_dump(exclude={'id', 'type'}, mode='json')}")

if generate_button:
    with st.spinner("Searching conflict-free combinations..."):
        st.session_state['generated_constraints'] = list(st.session_state['constraints'])
        st.session_state['generated'] = generate_schedules(selected_courses, st.session_state['generated_constraints'])

def _render_schedule(schedule):
    st.dataframe(schedule_to_dataframe(schedule, catalog), hide_index=True, use_container_width=True)
    st.markdown(format_schedule_for_display(schedule, catalog).to_html(escape=False), unsafe_allow_html=True)

if 'generated' in st.session_state:
    generated = st.session_state['generated']
    st.header("🔍 Generated Options")
    st.caption(f"Based on {len(st.session_state['generated_constraints'])} preference(s)")

    if not generated:
        st.warning("No conflict-free schedule exists for these courses.")

    for rank, schedule in enumerate(generated, start=1):
        st.subheader(f"Option {rank} · Fit Score {fit_score_percent(schedule.score)}%")
        with st.expander("Score breakdown"):
            for line in schedule.breakdown:
                st.write(line)
        _render_schedule(schedule)

        col1, col2, col3 = st.columns(3)
        if col1.button("Save", key=f"save-{schedule.id}"):
            saved = schedule.model_copy(update={
                "id": f"saved-{int(datetime.now().timestamp() * 1000)}",
                "saved_at": datetime.now()
            })
            st.session_state['saved_schedules'] = [saved] + st.session_state['saved_schedules']
            st.success("Schedule saved.")
        col2.download_button(
            label="Download as JSON",
            data=schedule.model_dump_json(indent=2),
            file_name=f"{schedule.id}.json",
            mime="application/json",
            key=f"json-{schedule.id}"
        )
        col3.download_button(
            label="Download as CSV",
            data=schedule_to_csv(schedule, catalog),
            file_name=f"{schedule.id}.csv",
            mime="text/csv",
            key=f"csv-{schedule.id}"
        )
        st.write("---")

st.header("💾 Saved Schedules")
if not st.session_state['saved_schedules']:
    st.info("No saved plans.")
for schedule in st.session_state['saved_schedules']:
    st.subheader(f"Compiled {schedule.saved_at:%Y-%m-%d %H:%M}")
    _render_schedule(schedule)
    if st.button("Delete", key=f"delete-{schedule.id}"):
        st.session_state['saved_schedules'] = [s for s in st.session_state['saved_schedules'] if s.id != schedule.id]
        st.rerun()
