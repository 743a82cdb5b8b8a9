"""
Data models for the interview engine.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List

from ..config import TAB_SWITCH_PENALTY, DEVICE_WARNING_PENALTY


@dataclass
class Question:
    """A generated question and, once the candidate moves past it, their answer."""
    text: str
    answer: Optional[str] = None


@dataclass(frozen=True)
class Evaluation:
    """Oracle scores for one answer, each in [0, 100]."""
    relevance: float
    clarity: float
    grammar: float
    confidence: float
    feedback: str = ""


@dataclass
class PenaltyLedger:
    """Running total of proctoring deductions for one session."""
    tab_switch_count: int = 0
    device_warning_count: int = 0

    @property
    def total_penalty_percent(self) -> int:
        return TAB_SWITCH_PENALTY * self.tab_switch_count + DEVICE_WARNING_PENALTY * self.device_warning_count

    def record_tab_switch(self) -> int:
        self.tab_switch_count += 1
        return self.total_penalty_percent

    def record_device_warning(self) -> int:
        self.device_warning_count += 1
        return self.total_penalty_percent


@dataclass(frozen=True)
class DetectedDevice:
    """A suspicious object seen by the proctoring camera."""
    label: str
    score: float
    timestamp: int  # epoch milliseconds


class SessionStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass
class InterviewSession:
    """A candidate's interview from question generation to final score."""
    id: str
    role: str
    user_id: str = ""
    questions: List[Question] = field(default_factory=list)
    penalty_ledger: PenaltyLedger = field(default_factory=PenaltyLedger)
    overall_score: Optional[float] = None
    status: SessionStatus = SessionStatus.IN_PROGRESS
    evaluations: List[Evaluation] = field(default_factory=list)

    def complete(self, overall_score: float, evaluations: List[Evaluation]) -> None:
        if self.status == SessionStatus.COMPLETED:
            raise RuntimeError(f"Session {self.id} is already completed")
        self.overall_score = overall_score
        self.evaluations = list(evaluations)
        self.status = SessionStatus.COMPLETED

    @property
    def transcript(self) -> List[dict]:
        return [{"question": q.text, "answer": q.answer or ""} for q in self.questions]


@dataclass
class Coaching:
    """Summary coaching for a finished interview."""
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    focus_areas: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


@dataclass
class InterviewResult:
    """What submission hands back to the caller."""
    session_id: str
    overall_score: float
    score_before_penalty: float
    penalty_percent: int
    evaluations: List[Evaluation] = field(default_factory=list)
