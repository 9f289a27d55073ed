"""Letter grades on the GPA scale and their mapping from 0-20 scores."""

from prompt_refinery.errors import InvalidGradeError

MAX_RATING_SCALE = 20

GRADE_VALUES: dict[str, float] = {
    "A+": 4.3,
    "A": 4.0,
    "A-": 3.7,
    "B+": 3.3,
    "B": 3.0,
    "B-": 2.7,
    "C+": 2.3,
    "C": 2.0,
    "C-": 1.7,
    "D+": 1.3,
    "D": 1.0,
    "D-": 0.7,
    "F": 0.0,
}

# A- or better
MINIMUM_GOAL_GRADE_VALUE = GRADE_VALUES["A-"]

# Lowest 0-20 score earning each letter, highest first
SCORE_THRESHOLDS: list[tuple[float, str]] = [
    (19, "A+"),
    (17, "A"),
    (15, "A-"),
    (13, "B+"),
    (11, "B"),
    (9, "B-"),
    (7, "C+"),
    (5, "C"),
    (3, "C-"),
    (2, "D+"),
    (1, "D"),
]


def grade_for_score(score: float) -> str:
    """Convert a 0-20 score into a canonical letter grade."""
    for threshold, grade in SCORE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


def normalize_grade(grade: str | float) -> str:
    """
    Normalize a grade reported by the model into a canonical letter.

    Canonical letters are returned unchanged. Numeric values (or numeric
    strings) are read as 0-20 scores and converted with grade_for_score.

    Args:
        grade: Letter grade or numeric score

    Returns:
        One of the keys of GRADE_VALUES

    Raises:
        InvalidGradeError: If the grade is neither a letter nor a number
    """
    if isinstance(grade, bool):
        raise InvalidGradeError(f"invalid grade: {grade!r}")
    if isinstance(grade, int | float):
        numeric = float(grade)
    else:
        text = str(grade).strip().replace("−", "-").replace("–", "-")
        if text in GRADE_VALUES:
            return text
        try:
            numeric = float(text)
        except ValueError as e:
            raise InvalidGradeError(f"invalid grade: {grade!r}") from e

    if numeric != numeric:  # NaN
        raise InvalidGradeError(f"invalid grade: {grade!r}")
    return grade_for_score(numeric)


def grade_value(grade: str) -> float:
    """Return the GPA value of a canonical letter grade."""
    try:
        return GRADE_VALUES[grade]
    except KeyError as e:
        raise InvalidGradeError(f"invalid grade: {grade}") from e
