"""
Data management infrastructure for interviews, answers and resumes.
"""

from .records import ProfileRecord, InterviewRecord, AnswerRecord
from .store import InterviewStore
from .resumes import ResumeStorage

__all__ = [
    'ProfileRecord',
    'InterviewRecord',
    'AnswerRecord',
    'InterviewStore',
    'ResumeStorage',
]
