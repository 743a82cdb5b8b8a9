"""
Testing infrastructure with mock collaborators for the interview engine.
"""
import json
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..errors import CameraAccessDenied, PersistenceError
from ..infrastructure.data import InterviewStore

ScriptedReply = Union[str, Exception]


class MockLLMClient:
    """Gateway stand-in returning scripted replies (or raising scripted errors) in order."""

    def __init__(self, replies: Sequence[ScriptedReply] = (), default_reply: str = ""):
        self.replies = list(replies)
        self.default_reply = default_reply
        self.request_history: List[Dict[str, Any]] = []

    def chat(self, messages: List[Dict[str, str]], temperature: float = 0.0,
             top_p: Optional[float] = None) -> str:
        self.request_history.append({
            "messages": messages,
            "temperature": temperature,
            "top_p": top_p,
        })
        if not self.replies:
            return self.default_reply
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class MockCamera:
    """Camera stand-in producing blank frames."""

    def __init__(self, deny: bool = False, frames_available: bool = True):
        self.deny = deny
        self.frames_available = frames_available
        self.open_calls = 0
        self.release_calls = 0
        self.is_open = False

    def open(self) -> None:
        self.open_calls += 1
        if self.deny:
            raise CameraAccessDenied("Camera access denied by test")
        self.is_open = True

    def read_frame(self) -> Optional[np.ndarray]:
        if not self.is_open or not self.frames_available:
            return None
        return np.zeros((240, 320, 3), dtype=np.uint8)

    def release(self) -> None:
        self.release_calls += 1
        self.is_open = False


class MockClassifier:
    """Classifier stand-in returning scripted predictions per frame."""

    def __init__(self, predictions: Sequence[Union[List[Tuple[str, float]], Exception]] = (),
                 fail_load: bool = False):
        self.predictions = list(predictions)
        self.fail_load = fail_load
        self.loaded = False
        self.calls = 0

    def load(self) -> None:
        if self.fail_load:
            raise RuntimeError("model download failed")
        self.loaded = True

    def classify(self, frame) -> List[Tuple[str, float]]:
        self.calls += 1
        if not self.predictions:
            return []
        result = self.predictions.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class ManualClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


class FlakyInterviewStore(InterviewStore):
    """InterviewStore whose writes can be made to fail a set number of times."""

    def __init__(self, data_dir: str, fail_inserts: int = 0, fail_completes: int = 0, fail_creates: int = 0):
        super().__init__(data_dir)
        self.fail_inserts = fail_inserts
        self.fail_completes = fail_completes
        self.fail_creates = fail_creates

    def create_interview(self, user_id, role):
        if self.fail_creates > 0:
            self.fail_creates -= 1
            raise PersistenceError("simulated create failure")
        return super().create_interview(user_id, role)

    def insert_answers(self, answers):
        if self.fail_inserts > 0:
            self.fail_inserts -= 1
            raise PersistenceError("simulated insert failure")
        return super().insert_answers(answers)

    def complete_interview(self, interview_id, overall_score):
        if self.fail_completes > 0:
            self.fail_completes -= 1
            raise PersistenceError("simulated update failure")
        return super().complete_interview(interview_id, overall_score)


def questions_reply(questions: Sequence[str]) -> str:
    return json.dumps(list(questions))


def evaluations_reply(scores: Sequence[Tuple[float, float, float, float]], feedback: str = "Nice answer.") -> str:
    return json.dumps([
        {"relevance": r, "clarity": c, "grammar": g, "confidence": conf, "feedback": feedback}
        for r, c, g, conf in scores
    ])


def create_test_questions() -> List[str]:
    return [
        "Walk me through how you would design a URL shortener.",
        "Tell me about a bug that took you days to find.",
        "How do you decide when code is ready for review?",
        "Describe a time you disagreed with a technical decision.",
        "How would you speed up a slow database query?",
    ]


def create_test_answers() -> List[str]:
    return [
        "I would start with a hash-based key generator and a key-value store.",
        "A race condition in our cache layer; I added tracing to find it.",
        "When tests pass and the change is small enough to review in one sitting.",
        "I wrote up the trade-offs and we agreed on a time-boxed prototype.",
        "Check the query plan, add the right index and avoid N+1 queries.",
    ]
