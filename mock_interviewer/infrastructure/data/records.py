"""
Persistent record structures.
Mirrors the profile / interview / answer tables the web front-end reads.
"""
from dataclasses import dataclass, field, asdict
from typing import Dict, Any, Optional


@dataclass
class ProfileRecord:
    """One profile per user."""
    user_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""


@dataclass
class InterviewRecord:
    """A single interview session as stored."""
    id: str
    user_id: str
    role: str
    overall_score: float = 0.0
    status: str = "in_progress"
    created_at: str = ""
    completed_at: Optional[str] = None


@dataclass
class AnswerRecord:
    """One evaluated answer, linked to its interview."""
    interview_id: str
    question: str
    answer: str = ""
    relevance_score: float = 0.0
    clarity_score: float = 0.0
    grammar_score: float = 0.0
    confidence_score: float = 0.0
    feedback: str = ""
    id: str = ""
    created_at: str = ""

    @property
    def scores(self) -> Dict[str, float]:
        return {
            "relevance": self.relevance_score,
            "clarity": self.clarity_score,
            "grammar": self.grammar_score,
            "confidence": self.confidence_score,
        }


def to_dict(record) -> Dict[str, Any]:
    return asdict(record)
