"""Teacher roster repositories."""

from .teachers import Teacher, TeacherDirectory, InMemoryTeacherDirectory, YamlTeacherDirectory

__all__ = [
    "Teacher",
    "TeacherDirectory",
    "InMemoryTeacherDirectory",
    "YamlTeacherDirectory",
]
