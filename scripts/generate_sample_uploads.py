#!/usr/bin/env python3
"""
Generate multi-week sample uploads for demos and manual testing.

Each teacher gets one combined Math & Reading upload per week. Scores drift
upward a little each week with random variation.

Usage:
    python scripts/generate_sample_uploads.py --output data/uploads.json
    python scripts/generate_sample_uploads.py --weeks 4 --start-week 35 --seed 7
"""

import argparse
import json
import logging
import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models import StudentScore, Subject, UploadRecord
from models.utils import safe_mean


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

CLASSES = [
    ("Ms.Kelly", "Kindergarten", "K-A"),
    ("Mr.Adams", "Grade 1", "1-A"),
    ("Ms.Rivera", "Grade 2", "2-A"),
    ("Mr.Okafor", "Grade 3", "3-A"),
]

FIRST_NAMES = ["Alice", "Bob", "Charlie", "Diana", "Ethan", "Fatima", "Gabriel", "Hana", "Isaac", "Jade"]
LAST_NAMES = ["Johnson", "Smith", "Brown", "Prince", "Nguyen", "Khan", "Lopez", "Sato", "Miller", "Osei"]


def drift(score: float, week_offset: int, rng: random.Random) -> float:
    """Vary a base score by -5..+10 plus a small weekly improvement."""
    value = score + rng.uniform(-5, 10) + week_offset * 2
    return float(round(max(0, min(100, value))))


def build_uploads(weeks: int, start_week: int, students_per_class: int, seed: int) -> list:
    rng = random.Random(seed)
    start_date = datetime(2025, 8, 25, tzinfo=timezone.utc)
    uploads = []
    next_id = 1

    for teacher, grade, class_name in CLASSES:
        roster = []
        for _ in range(students_per_class):
            name = f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"
            roster.append((str(next_id), name, rng.uniform(55, 92), rng.uniform(55, 92)))
            next_id += 1

        for offset in range(weeks):
            week_number = start_week + offset
            week_date = start_date + timedelta(days=7 * offset)
            rows = []
            for student_id, name, math_base, reading_base in roster:
                for subject, base in ((Subject.MATH, math_base), (Subject.READING, reading_base)):
                    rows.append(StudentScore(
                        student_id=student_id,
                        student_name=name,
                        subject=subject.value,
                        score=drift(base, offset, rng),
                        grade=grade,
                        class_name=class_name,
                        week_number=week_number,
                        upload_date=week_date.isoformat(),
                    ))

            uploads.append(UploadRecord(
                id=f"week{week_number}_{teacher.lower().replace('.', '')}",
                teacher_name=teacher,
                upload_time=week_date,
                week_number=week_number,
                week_label=f"Week {week_number} - {week_date.strftime('%b %d')}",
                total_students=len(roster),
                average_score=round(safe_mean([r.score for r in rows]), 1),
                grade=grade,
                class_name=class_name,
                subject=Subject.BOTH.value,
                students=rows,
            ))

    return uploads


def main():
    parser = argparse.ArgumentParser(description="Generate sample upload records")
    parser.add_argument("--output", type=Path, default=Path("data/uploads.json"), help="Destination JSON file")
    parser.add_argument("--weeks", type=int, default=3, help="Number of weeks per teacher")
    parser.add_argument("--start-week", type=int, default=35, help="First week number")
    parser.add_argument("--students", type=int, default=8, help="Students per class")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    args = parser.parse_args()

    uploads = build_uploads(args.weeks, args.start_week, args.students, args.seed)

    args.output.parent.mkdir(parents=True, exist_ok=True)
    payload = [u.model_dump(mode="json", by_alias=True) for u in uploads]
    with open(args.output, 'w', encoding='utf-8') as f:
        json.dump(payload, f, indent=2)

    logger.info(f"Wrote {len(uploads)} uploads to {args.output}")


if __name__ == "__main__":
    main()
