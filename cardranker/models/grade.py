"""
Letter grades and the tier table.

A grade is a letter (A, B, C, D, F) with an optional + or - modifier.
F never takes a modifier, which leaves thirteen valid grades. Their order
is fixed and drives both grade sorting and tier grouping.
"""

from cardranker.models.failure import InvalidGradeError

GRADE_LETTERS: tuple[str, ...] = ("A", "B", "C", "D", "F")
GRADE_MODIFIERS: tuple[str, ...] = ("+", "-")

# Best first
VALID_GRADES: tuple[str, ...] = (
    "A+",
    "A",
    "A-",
    "B+",
    "B",
    "B-",
    "C+",
    "C",
    "C-",
    "D+",
    "D",
    "D-",
    "F",
)

GRADE_ORDER: dict[str, int] = {grade: rank for rank, grade in enumerate(VALID_GRADES, start=1)}

# Stored grades that are not in GRADE_ORDER (only reachable through import)
UNRECOGNIZED_GRADE_RANK = 99
UNGRADED_RANK = 100

UNRANKED_TIER = "Unranked"
TIER_ORDER: tuple[str, ...] = (*VALID_GRADES, UNRANKED_TIER)


def is_valid_grade(grade: str) -> bool:
    """Check whether a string is one of the thirteen valid grades."""
    return grade in GRADE_ORDER


def validate_grade(grade: str) -> str:
    """
    Return the grade unchanged if valid.

    Raises:
        InvalidGradeError: If the grade is not one of the valid values
    """
    if not is_valid_grade(grade):
        raise InvalidGradeError(grade)
    return grade


def grade_rank(grade: str | None) -> int:
    """
    Sort rank for a stored grade.

    Valid grades rank 1 (A+) to 13 (F). Unrecognized strings rank after
    every valid grade, and a missing grade ranks after everything.
    """
    if grade is None:
        return UNGRADED_RANK
    return GRADE_ORDER.get(grade, UNRECOGNIZED_GRADE_RANK)


def compose_grade(letter: str, modifier: str | None = None) -> str:
    """
    Build a grade from a letter and an optional modifier.

    Modifiers are dropped for F, which has no +/- tiers.

    Raises:
        InvalidGradeError: If the letter or modifier is not recognized
    """
    letter = letter.upper()
    if letter not in GRADE_LETTERS:
        raise InvalidGradeError(f"{letter}{modifier or ''}")
    if modifier is not None and modifier not in GRADE_MODIFIERS:
        raise InvalidGradeError(f"{letter}{modifier}")
    if letter == "F":
        return "F"
    return f"{letter}{modifier or ''}"
