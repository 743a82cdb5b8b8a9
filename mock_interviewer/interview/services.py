"""
Service classes around finished and upcoming interviews.
"""
import os
import time
import logging
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional

from .models import Coaching
from .oracle import InterviewOracle
from .scoring import skill_averages, average_overall, score_label
from ..config import RECENT_SCORES_LIMIT
from ..errors import OracleError, PersistenceError, ValidationError
from ..infrastructure.data import InterviewStore, ResumeStorage, AnswerRecord

logger = logging.getLogger("services")


class ResumeService:
    """Handles optional resume uploads before an interview."""

    def __init__(self, storage: ResumeStorage, clock=time.time):
        self.storage = storage
        self.clock = clock

    @staticmethod
    def validate(filename: str, content: bytes) -> None:
        """Only PDF resumes are accepted."""
        if not filename or not filename.lower().endswith(".pdf"):
            raise ValidationError("Please upload a PDF file.")
        if not content.startswith(b"%PDF"):
            raise ValidationError("Please upload a PDF file.")

    def upload(self, user_id: str, filename: str, content: bytes) -> Optional[str]:
        """
        Store the resume and return the hint passed to question generation.

        Returns:
            "Resume uploaded: <name>", or None if the upload failed
        """
        self.validate(filename, content)
        name = os.path.basename(filename)
        key = f"{int(self.clock() * 1000)}-{name}"
        try:
            self.storage.upload(user_id, key, content)
        except PersistenceError as e:
            logger.error("Resume upload error: %s", e)
            return None
        return f"Resume uploaded: {name}"

    def list(self, user_id: str) -> List[str]:
        return self.storage.list(user_id)

    def delete(self, user_id: str, name: str) -> bool:
        return self.storage.delete(user_id, name)


@dataclass
class FeedbackReport:
    """Everything the feedback page shows for one interview."""
    interview_id: str
    role: str
    overall_score: float
    label: str
    answers: List[Dict[str, Any]] = field(default_factory=list)
    coaching: Optional[Coaching] = None


def answer_to_dict(answer: AnswerRecord) -> Dict[str, Any]:
    return {"question": answer.question, "answer": answer.answer,
            "feedback": answer.feedback, **answer.scores}


class FeedbackService:
    """Builds feedback reports for completed interviews."""

    def __init__(self, store: InterviewStore, oracle: InterviewOracle):
        self.store = store
        self.oracle = oracle
        self._coaching_cache: Dict[str, Coaching] = {}

    def build_report(self, user_id: str, interview_id: str, with_coaching: bool = True) -> FeedbackReport:
        """
        Raises:
            ValidationError: interview not found for this user
        """
        interview = self.store.get_interview(interview_id, user_id=user_id)
        if interview is None:
            raise ValidationError("Interview not found")

        answers = [answer_to_dict(a) for a in self.store.list_answers(interview_id, user_id=user_id)]
        report = FeedbackReport(
            interview_id=interview.id,
            role=interview.role,
            overall_score=float(interview.overall_score or 0),
            label=score_label(float(interview.overall_score or 0)),
            answers=answers,
        )

        if with_coaching and answers:
            report.coaching = self._coaching_for(interview.id, interview.role, answers, report.overall_score)
        return report

    def _coaching_for(self, interview_id: str, role: str,
                      answers: List[Dict[str, Any]], overall_score: float) -> Optional[Coaching]:
        if interview_id in self._coaching_cache:
            return self._coaching_cache[interview_id]
        try:
            coaching = self.oracle.generate_coaching(role, answers, overall_score)
        except OracleError as e:
            logger.warning("Coaching unavailable for %s: %s", interview_id, e)
            return None
        self._coaching_cache[interview_id] = coaching
        return coaching


class DashboardService:
    """Progress statistics for a user compared with the whole platform."""

    def __init__(self, store: InterviewStore):
        self.store = store

    def summary(self, user_id: str) -> Dict[str, Any]:
        interviews = self.store.list_interviews(user_id)
        completed = [i for i in interviews if i.status == "completed"]

        user_skills = skill_averages(a.scores for a in self.store.list_user_answers(user_id))
        platform_skills = skill_averages(a.scores for a in self.store.list_all_answers())

        # list_interviews is newest first; charts read oldest to newest
        recent = completed[:RECENT_SCORES_LIMIT]
        recent_scores = [float(i.overall_score or 0) for i in reversed(recent)]

        return {
            "total_interviews": len(interviews),
            "completed_interviews": len(completed),
            "average_score": average_overall([float(i.overall_score or 0) for i in completed]),
            "skills": {
                metric: {"user": round(user_skills[metric]), "platform": round(platform_skills[metric])}
                for metric in user_skills
            },
            "recent_scores": recent_scores,
        }
