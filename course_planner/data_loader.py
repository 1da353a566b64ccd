import json
import logging
import pandas as pd
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional, Union, IO
from pydantic import TypeAdapter
from course_planner.schemas import CourseCatalog, Course, CourseSession, Constraint

logger = logging.getLogger(__name__)

Source = Union[str, Path, IO]

COURSE_COLUMNS = ['id', 'code', 'name']
SESSION_COLUMNS = ['session_id', 'course_id', 'day', 'start_time', 'end_time', 'professor', 'room']
OPTIONAL_COURSE_COLUMNS = ['faculty', 'major', 'year_level', 'semester', 'credits', 'enrollment', 'capacity']
INTEGER_COURSE_COLUMNS = {'semester', 'credits', 'enrollment', 'capacity'}

_constraint_list_adapter = TypeAdapter(List[Constraint])

def _resolve_source(source: Source) -> Source:
    """
    Paths are checked for existence up front; file-like objects (e.g. uploads) pass through.
    """
    if isinstance(source, (str, Path)):
        path = Path(source).expanduser()
        if not path.exists():
            raise FileNotFoundError(f'Fatal Error: provided file path {path} does not exist.')
        return path
    return source

def _optional_value(value: Any, as_int: bool = False) -> Optional[Any]:
    """
    Returns None for empty or NaN cells, so that optional fields are left unset.
    """
    if pd.isna(value):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return int(value) if as_int else value

def _format_time_cell(value: Any) -> Any:
    # Excel time cells arrive as datetime.time; text cells are passed through for validation.
    if hasattr(value, 'strftime'):
        return value.strftime('%H:%M')
    return str(value).strip()

def _check_columns(df: pd.DataFrame, required: List[str], sheet: str) -> None:
    missing = [column for column in required if column not in df.columns]
    if missing:
        raise ValueError(f"Sheet '{sheet}' is missing required column(s): {', '.join(missing)}.")

def _parse_sessions(df: pd.DataFrame) -> Dict[str, List[CourseSession]]:
    """
    Parses the sessions DataFrame and groups the sessions by course id, keeping sheet order.
    """
    _check_columns(df, SESSION_COLUMNS, 'Sessions')
    sessions_by_course: Dict[str, List[CourseSession]] = {}
    for _, row in df.iterrows():
        session = CourseSession(
            session_id=str(row['session_id']),
            day=int(row['day']),
            start_time=_format_time_cell(row['start_time']),
            end_time=_format_time_cell(row['end_time']),
            professor=str(row['professor']),
            room=str(row['room'])
        )
        sessions_by_course.setdefault(str(row['course_id']), []).append(session)
    return sessions_by_course

def _parse_courses(df: pd.DataFrame, sessions_by_course: Dict[str, List[CourseSession]]) -> List[Course]:
    """
    Parses the courses DataFrame, attaching each course's sessions.
    """
    _check_columns(df, COURSE_COLUMNS, 'Courses')
    courses: List[Course] = []
    for _, row in df.iterrows():
        course_id = str(row['id'])
        extra = {
            column: _optional_value(row[column], as_int=column in INTEGER_COURSE_COLUMNS)
            for column in OPTIONAL_COURSE_COLUMNS if column in df.columns
        }
        course = Course(
            id=course_id,
            code=str(row['code']),
            name=str(row['name']),
            sessions=sessions_by_course.pop(course_id, []),
            **{key: value for key, value in extra.items() if value is not None}
        )
        courses.append(course)

    if sessions_by_course:
        raise ValueError(f"Sessions reference unknown course id(s): {', '.join(sorted(sessions_by_course))}.")
    return courses

def load_catalog_from_excel(source: Source) -> CourseCatalog:
    """
    Main public function to read a course catalog from an Excel workbook with a
    'Courses' sheet and a 'Sessions' sheet, and return a validated CourseCatalog.
    """
    source = _resolve_source(source)
    try:
        sheets = pd.read_excel(source, sheet_name=None)

        for required_sheet in ['Courses', 'Sessions']:
            if required_sheet not in sheets:
                raise ValueError(f"Required sheet '{required_sheet}' not found in the Excel file.")

        sessions_by_course = _parse_sessions(sheets['Sessions'])
        courses = _parse_courses(sheets['Courses'], sessions_by_course)
        catalog = CourseCatalog(courses=courses)
    except Exception as e:
        logger.error("Could not load catalog workbook: %s", e)
        raise ValueError(f"Failed to load or parse the course catalog. Reason: {e}")

    _log_catalog(catalog)
    return catalog

def _read_json(source: Source) -> Any:
    if isinstance(source, Path):
        return json.loads(source.read_text(encoding='utf-8'))
    return json.load(source)

def load_catalog_from_json(source: Source) -> CourseCatalog:
    """Reads a catalog saved as {"courses": [...]} JSON."""
    source = _resolve_source(source)
    try:
        catalog = CourseCatalog.model_validate(_read_json(source))
    except Exception as e:
        logger.error("Could not load catalog JSON: %s", e)
        raise ValueError(f"Failed to load or parse the course catalog. Reason: {e}")

    _log_catalog(catalog)
    return catalog

def load_constraints_from_json(source: Source) -> List[Constraint]:
    """Reads a JSON list of constraints, each tagged by its 'type' field."""
    source = _resolve_source(source)
    try:
        constraints = _constraint_list_adapter.validate_python(_read_json(source))
    except Exception as e:
        logger.error("Could not load constraints JSON: %s", e)
        raise ValueError(f"Failed to load or parse the constraints. Reason: {e}")

    logger.info("Loaded %d constraint(s).", len(constraints))
    return constraints

def load_sample_catalog() -> CourseCatalog:
    """The demo catalog bundled with the package."""
    data = resources.files('course_planner').joinpath('data/sample_catalog.json').read_text(encoding='utf-8')
    return CourseCatalog.model_validate_json(data)

def _log_catalog(catalog: CourseCatalog) -> None:
    session_count = sum(len(course.sessions) for course in catalog.courses)
    logger.info("Loaded %d course(s) with %d session(s).", len(catalog.courses), session_count)

if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    try:
        data = load_catalog_from_excel('./Catalog.xlsx')
        logger.info("Successfully loaded catalog with %d course(s).", len(data.courses))
    except (ValueError, FileNotFoundError) as e:
        logger.error(e)
