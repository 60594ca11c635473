"""
Upload Dataset Management

Loads upload records exported by the ingestion layer and provides simple
filtering over them. Supported files:
- a JSON array of uploads
- a JSON object with an "uploads" array
- JSONL, one upload per line
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from pydantic import ValidationError

from models.records import UploadRecord

logger = logging.getLogger(__name__)


@dataclass
class UploadDataset:
    """Collection of upload records with filtering helpers."""

    uploads: List[UploadRecord] = field(default_factory=list)
    source: Optional[str] = None

    def __len__(self) -> int:
        return len(self.uploads)

    def __iter__(self) -> Iterator[UploadRecord]:
        return iter(self.uploads)

    def by_teacher(self, teacher_name: str) -> "UploadDataset":
        return UploadDataset([u for u in self.uploads if u.teacher_name == teacher_name], self.source)

    def by_grade(self, grade: str) -> "UploadDataset":
        return UploadDataset([u for u in self.uploads if u.grade == grade], self.source)

    def by_week(self, week_number: int) -> "UploadDataset":
        return UploadDataset([u for u in self.uploads if u.week_number == week_number], self.source)

    def by_assessment(self, assessment: str) -> "UploadDataset":
        return UploadDataset([u for u in self.uploads if u.assessment == assessment], self.source)

    def teachers(self) -> List[str]:
        """Distinct teacher names in first-seen order."""
        return list(dict.fromkeys(u.teacher_name for u in self.uploads if u.teacher_name))

    def weeks(self) -> List[int]:
        return sorted({u.week_number for u in self.uploads if u.week_number is not None})

    def assessments(self) -> List[str]:
        """Distinct assessment labels, most recently uploaded first."""
        latest: Dict[str, datetime] = {}
        for upload in self.uploads:
            label = upload.assessment
            if label is None:
                continue
            when = upload.upload_time or datetime.min.replace(tzinfo=timezone.utc)
            if label not in latest or when > latest[label]:
                latest[label] = when
        return sorted(latest, key=lambda label: latest[label], reverse=True)

    def get_statistics(self) -> Dict[str, Any]:
        return {
            'total_uploads': len(self.uploads),
            'teachers': len(self.teachers()),
            'weeks': self.weeks(),
            'with_student_detail': sum(1 for u in self.uploads if u.has_student_detail),
            'assessments': len(self.assessments()),
        }


def parse_uploads(items: List[Dict[str, Any]], source: str = "<memory>") -> UploadDataset:
    """Validate raw dictionaries into upload records, skipping invalid ones."""
    uploads = []
    for index, item in enumerate(items):
        try:
            uploads.append(UploadRecord.model_validate(item))
        except (ValidationError, TypeError) as e:
            logger.warning(f"Skipping invalid upload #{index} in {source}: {e}")
    return UploadDataset(uploads=uploads, source=source)


def load_uploads(filepath: Union[str, Path]) -> UploadDataset:
    """Load uploads from a JSON or JSONL file."""
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Uploads file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        content = f.read()

    items: List[Any]
    if path.suffix.lower() == ".jsonl":
        items = []
        for line_num, line in enumerate(content.splitlines(), 1):
            line = line.strip()
            if not line:
                continue
            try:
                items.append(json.loads(line))
            except json.JSONDecodeError as e:
                logger.warning(f"Skipping invalid JSON on line {line_num} of {path}: {e}")
    else:
        data = json.loads(content) if content.strip() else []
        if isinstance(data, dict):
            data = data.get("uploads", [])
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of uploads in {path}")
        items = data

    dataset = parse_uploads(items, source=str(path))
    logger.info(f"Loaded {len(dataset)} uploads from {path}")
    return dataset
