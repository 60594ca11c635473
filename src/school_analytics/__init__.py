"""
School Analytics

Score aggregation and tier classification for school assessment uploads:
deduplication of teacher re-uploads, identity resolution of students,
weighted school averages, grade rollups and week-over-week trends.
"""

__version__ = "0.1.0"
