"""
Repository implementations for data access layer.
"""
from .base_repository import BaseRepository
from .analysis_record_repository import AnalysisRecordRepository

__all__ = [
    'BaseRepository',
    'AnalysisRecordRepository',
]
