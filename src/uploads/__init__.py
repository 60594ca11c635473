"""
Upload record loading for school analytics.

Main components:
- UploadDataset: Collection of uploads with filtering helpers
- load_uploads: Read uploads from JSON or JSONL exports
"""

from .dataset import UploadDataset, load_uploads, parse_uploads

__all__ = [
    'UploadDataset',
    'load_uploads',
    'parse_uploads',
]
