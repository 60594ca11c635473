"""Per-student or synthetic score extraction from a single upload."""

import logging
from dataclasses import dataclass, field
from typing import List

from models.records import Subject, UploadRecord

logger = logging.getLogger(__name__)


@dataclass
class SubjectScores:
    """Scores pulled out of one or more uploads, split by subject."""
    math: List[float] = field(default_factory=list)
    reading: List[float] = field(default_factory=list)
    other: List[float] = field(default_factory=list)

    def all_scores(self) -> List[float]:
        return self.math + self.reading + self.other

    def extend(self, other: "SubjectScores") -> None:
        self.math.extend(other.math)
        self.reading.extend(other.reading)
        self.other.extend(other.other)


def extract_subject_scores(upload: UploadRecord) -> SubjectScores:
    """
    Pull individual scores out of an upload.

    With per-student detail every identified, scored row is routed by
    its own subject. Without detail, a single-subject upload stands in as
    total_students copies of its average score; a combined upload without
    detail contributes nothing.
    """
    scores = SubjectScores()

    if upload.has_student_detail:
        for student in upload.scored_students():
            if student.subject == Subject.MATH.value:
                scores.math.append(student.score)
            elif student.subject == Subject.READING.value:
                scores.reading.append(student.score)
            else:
                scores.other.append(student.score)
        return scores

    synthetic = [upload.average_score] * max(upload.total_students, 0)
    if upload.subject == Subject.MATH.value:
        scores.math.extend(synthetic)
    elif upload.subject == Subject.READING.value:
        scores.reading.extend(synthetic)
    else:
        logger.debug(
            f"Upload {upload.id} ({upload.subject!r}) has no student detail; no scores extracted"
        )
    return scores


def extract_all(uploads) -> SubjectScores:
    """Concatenate extracted scores across uploads."""
    combined = SubjectScores()
    for upload in uploads:
        combined.extend(extract_subject_scores(upload))
    return combined
