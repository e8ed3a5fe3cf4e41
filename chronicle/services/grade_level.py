"""Grade band detection for free-text teaching standards."""

import re
from typing import List, Tuple

from chronicle.models.lesson import GradeClassification


ELEMENTARY = GradeClassification(grade_level="K-5", grade_range="Elementary (K-5)")
MIDDLE_SCHOOL = GradeClassification(grade_level="6-8", grade_range="Middle School (6-8)")
HIGH_SCHOOL = GradeClassification(grade_level="9-12", grade_range="High School (9-12)")
AP_ADVANCED = GradeClassification(grade_level="9-12", grade_range="AP/Advanced (9-12)")
COLLEGE = GradeClassification(grade_level="College", grade_range="College/University")

# Checked in order, first match wins. AP comes first so an AP standard that
# also mentions other bands ("elementary through high school ... AP World")
# stays AP; college comes before the generic high school words so that
# "freshman seminar" is not read as a high school freshman.
GRADE_PATTERNS: List[Tuple[GradeClassification, Tuple[str, ...]]] = [
    (AP_ADVANCED, (
        r"\bap\b",
        r"\badvanced placement\b",
        r"\bcollege board\b",
        r"\binternational baccalaureate\b",
        r"\bib (?:history|diploma)\b",
        r"\bhonors\b",
    )),
    (COLLEGE, (
        r"(?<!electoral )\bcollege\b",
        r"\buniversity\b",
        r"\bundergraduate\b",
        r"\bgraduate (?:course|seminar|level)\b",
        r"\bpost-?secondary\b",
        r"\bfreshman seminar\b",
    )),
    (ELEMENTARY, (
        r"\bkindergarten\b",
        r"\belementary\b",
        r"\bprimary school\b",
        r"\bk\s*-\s*\d{1,2}\b",
        r"\bgrades?\s*[1-5]\b",
        r"\b[1-5](?:st|nd|rd|th)\s+grade\b",
    )),
    (MIDDLE_SCHOOL, (
        r"\bmiddle school\b",
        r"\bjunior high\b",
        r"\bintermediate school\b",
        r"\b6\s*-\s*\d{1,2}\b",
        r"\bgrades?\s*[6-8]\b",
        r"\b[6-8]th\s+grade\b",
    )),
    (HIGH_SCHOOL, (
        r"\bhigh school\b",
        r"\bsecondary\b",
        r"\b9\s*-\s*12\b",
        r"\bgrades?\s*(?:9|1[0-2])\b",
        r"\b(?:9|1[0-2])th\s+grade\b",
        r"\bfreshman\b",
        r"\bsophomore\b",
        r"\bjunior\b",
        r"\bsenior\b",
    )),
]


def detect_grade_level(text: str) -> GradeClassification:
    """Classify a standard into a grade band, defaulting to high school."""
    lowered = (text or "").lower()
    for classification, patterns in GRADE_PATTERNS:
        if any(re.search(pattern, lowered) for pattern in patterns):
            return classification.model_copy()
    return HIGH_SCHOOL.model_copy()
