"""
Mock Interviewer: proctored AI mock interviews.

Generates role-specific questions, watches the webcam for suspicious
devices, scores answers through an AI gateway and applies proctoring
penalties to the final score.
"""

__version__ = "1.0.0"

# Main entry points
from .interview.session import InterviewSessionMachine, Phase
from .interview.models import Question, Evaluation, InterviewResult

__all__ = ["InterviewSessionMachine", "Phase", "Question", "Evaluation", "InterviewResult"]
