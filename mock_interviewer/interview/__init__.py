"""Interview engine components.

This module contains the business logic for proctored mock interviews:
the session state machine, the oracle adapter, proctoring and scoring.
"""

# Data models
from .models import (
    Question, Evaluation, PenaltyLedger, DetectedDevice,
    InterviewSession, SessionStatus, Coaching, InterviewResult,
)

# State machine
from .session import InterviewSessionMachine, Phase

# Oracle adapter and reply schemas
from .oracle import InterviewOracle
from .schemas import parse_questions, parse_evaluations, parse_coaching

# Proctoring
from .proctoring import ProctoringSampler, is_suspicious

# Scoring
from .scoring import aggregate_score, answer_average, skill_averages, score_label

# Services
from .services import ResumeService, FeedbackService, FeedbackReport, DashboardService

# Event system
from .events import (
    InterviewEventBus, EventLogger, InterviewMetrics, EventType, InterviewEvent,
)

__all__ = [
    # Data models
    "Question", "Evaluation", "PenaltyLedger", "DetectedDevice",
    "InterviewSession", "SessionStatus", "Coaching", "InterviewResult",

    # State machine
    "InterviewSessionMachine", "Phase",

    # Oracle
    "InterviewOracle", "parse_questions", "parse_evaluations", "parse_coaching",

    # Proctoring
    "ProctoringSampler", "is_suspicious",

    # Scoring
    "aggregate_score", "answer_average", "skill_averages", "score_label",

    # Services
    "ResumeService", "FeedbackService", "FeedbackReport", "DashboardService",

    # Events
    "InterviewEventBus", "EventLogger", "InterviewMetrics", "EventType", "InterviewEvent",
]
