"""Test grade normalization and the score-to-grade table."""

import math

import pytest

from prompt_refinery.errors import InvalidGradeError
from prompt_refinery.grading import GRADE_VALUES, grade_for_score, grade_value, normalize_grade


@pytest.mark.parametrize(
    ("score", "grade"),
    [
        (20, "A+"),
        (19, "A+"),
        (18, "A"),
        (17, "A"),
        (16, "A-"),
        (15, "A-"),
        (13, "B+"),
        (11, "B"),
        (9, "B-"),
        (7, "C+"),
        (5, "C"),
        (3, "C-"),
        (2, "D+"),
        (1, "D"),
        (0.5, "F"),
        (0, "F"),
    ],
)
def test_score_table(score, grade):
    assert grade_for_score(score) == grade


def test_numeric_grades_are_mapped_through_the_table():
    """Models sometimes answer with the score instead of a letter."""
    assert normalize_grade(16) == "A-"
    assert normalize_grade(16.0) == "A-"
    assert normalize_grade("16") == "A-"
    assert normalize_grade(" 20 ") == "A+"


@pytest.mark.parametrize("grade", list(GRADE_VALUES))
def test_canonical_grades_are_idempotent(grade):
    """Normalizing a canonical grade returns it unchanged."""
    assert normalize_grade(grade) == grade
    assert normalize_grade(normalize_grade(grade)) == grade


def test_grade_order_is_monotonic_in_score():
    """A higher score never maps to a lower grade."""
    values = [grade_value(grade_for_score(s / 2)) for s in range(0, 41)]
    assert values == sorted(values)


def test_unicode_minus_is_accepted():
    assert normalize_grade("A−") == "A-"
    assert normalize_grade(" B– ") == "B-"


@pytest.mark.parametrize("bad", ["excellent", "", "Z", "A++", math.nan, "nan"])
def test_invalid_grades_are_rejected(bad):
    with pytest.raises(InvalidGradeError):
        normalize_grade(bad)


def test_booleans_are_not_scores():
    with pytest.raises(InvalidGradeError):
        normalize_grade(True)


def test_grade_value_rejects_unknown_grades():
    assert grade_value("A-") == pytest.approx(3.7)
    with pytest.raises(InvalidGradeError):
        grade_value("Q")
