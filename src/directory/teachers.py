"""Teacher roster repository used by the presentation layer."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class Teacher(BaseModel):
    """A teacher on the school roster."""
    id: str
    name: str
    grade: Optional[str] = None
    class_name: Optional[str] = Field(None, alias="className")
    email: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return v if v is None else str(v)


class TeacherDirectory(ABC):
    """Abstract base class for teacher rosters."""

    @abstractmethod
    def list_teachers(self) -> List[Teacher]:
        """List every teacher on the roster."""
        pass

    def get_teacher(self, name: str) -> Optional[Teacher]:
        """Find a teacher by display name."""
        for teacher in self.list_teachers():
            if teacher.name == name:
                return teacher
        return None

    def teachers_for_grade(self, grade: str) -> List[Teacher]:
        return [t for t in self.list_teachers() if t.grade == grade]


class InMemoryTeacherDirectory(TeacherDirectory):
    """Roster held in memory."""

    def __init__(self, teachers: Optional[Iterable[Teacher]] = None):
        self._teachers: Dict[str, Teacher] = {}
        for teacher in teachers or []:
            self.add_teacher(teacher)

    def list_teachers(self) -> List[Teacher]:
        return list(self._teachers.values())

    def add_teacher(self, teacher: Teacher) -> None:
        if teacher.id in self._teachers:
            raise ValueError(f"Teacher id already exists: {teacher.id}")
        self._teachers[teacher.id] = teacher

    def remove_teacher(self, teacher_id: str) -> bool:
        return self._teachers.pop(teacher_id, None) is not None


class YamlTeacherDirectory(TeacherDirectory):
    """
    Roster loaded from a YAML file.

    Expected layout:

        teachers:
          - id: "1"
            name: Ms. Lee
            grade: Grade 3
            className: 3-A
    """

    def __init__(self, roster_path: Union[str, Path]):
        self.roster_path = Path(roster_path)
        if not self.roster_path.exists():
            raise FileNotFoundError(f"Roster file not found: {self.roster_path}")
        self._teachers: Optional[List[Teacher]] = None

    def list_teachers(self) -> List[Teacher]:
        if self._teachers is None:
            self._teachers = self._load()
        return list(self._teachers)

    def reload(self) -> List[Teacher]:
        self._teachers = None
        return self.list_teachers()

    def _load(self) -> List[Teacher]:
        with open(self.roster_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        entries = data.get("teachers", []) if isinstance(data, dict) else data
        teachers = []
        for index, entry in enumerate(entries or []):
            try:
                teachers.append(Teacher.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Skipping invalid roster entry #{index} in {self.roster_path}: {e}")

        logger.info(f"Loaded {len(teachers)} teachers from {self.roster_path}")
        return teachers
