"""
Interview session state machine.

Drives one interview through role selection, the question loop and
submission, while collecting proctoring penalties.
"""
import logging
import threading
import time
from enum import Enum
from typing import List, Optional, Sequence

from .events import (
    InterviewEventBus, questions_generated, session_started, answer_recorded,
    tab_switch_detected, device_warning_raised, submission_failed, session_completed,
    error_occurred,
)
from .models import Question, Evaluation, InterviewSession, InterviewResult, PenaltyLedger
from .oracle import InterviewOracle
from .proctoring import ProctoringSampler
from .scoring import aggregate_score
from ..errors import MockInterviewError, ValidationError, CameraAccessDenied
from ..infrastructure.data import InterviewStore, AnswerRecord

logger = logging.getLogger("session")


class Phase(str, Enum):
    ROLE_SELECTION = "role_selection"
    QUESTION_LOOP = "question_loop"
    SUBMITTING = "submitting"
    COMPLETED = "completed"


class InterviewSessionMachine:
    """
    One candidate's interview, from role selection to a persisted score.

    Tab-switch and device-warning notifications only count while the
    candidate is in the question loop. A failed submission puts the
    candidate back on the last question with every answer kept, and
    submit() can be called again from there.
    """

    def __init__(self,
                 oracle: InterviewOracle,
                 store: InterviewStore,
                 user_id: str,
                 sampler: Optional[ProctoringSampler] = None,
                 event_bus: Optional[InterviewEventBus] = None,
                 clock=time.time):
        self.oracle = oracle
        self.store = store
        self.user_id = user_id
        self.sampler = sampler
        self.event_bus = event_bus or InterviewEventBus()
        self.clock = clock

        self.phase = Phase.ROLE_SELECTION
        self.session: Optional[InterviewSession] = None
        self.current_index = 0
        self.current_answer = ""
        self.proctoring_enabled = False
        self.result: Optional[InterviewResult] = None

        self._awaiting_retry = False
        self._submitting = False
        self._pending_evaluations: Optional[List[Evaluation]] = None
        self._answers_saved = False
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def session_id(self) -> str:
        return self.session.id if self.session else "unknown"

    @property
    def penalty_ledger(self) -> PenaltyLedger:
        return self.session.penalty_ledger if self.session else PenaltyLedger()

    @property
    def questions(self) -> List[Question]:
        return self.session.questions if self.session else []

    @property
    def current_question(self) -> Optional[Question]:
        if self.phase != Phase.QUESTION_LOOP or not self.session:
            return None
        return self.session.questions[self.current_index]

    @property
    def is_last_question(self) -> bool:
        return bool(self.session) and self.current_index == len(self.session.questions) - 1

    @property
    def awaiting_retry(self) -> bool:
        return self._awaiting_retry

    # ------------------------------------------------------------------
    # Role selection
    # ------------------------------------------------------------------

    def begin(self, role: str, resume_hint: str = "", exclude: Sequence[str] = ()) -> InterviewSession:
        """
        Generate questions for the role, persist the new interview and start proctoring.

        Oracle and persistence errors propagate with the machine still in
        ROLE_SELECTION and nothing stored.
        """
        if self.phase != Phase.ROLE_SELECTION:
            raise ValidationError("An interview is already in progress")
        if not role or not role.strip():
            raise ValidationError("Please select a role")
        role = role.strip()

        try:
            texts = self.oracle.generate_questions(role, resume_hint=resume_hint, exclude=exclude)
            record = self.store.create_interview(self.user_id, role)
        except MockInterviewError as e:
            logger.error("Failed to start %s interview: %s", role, e)
            self.event_bus.emit(error_occurred("unknown", self.clock(), type(e).__name__, str(e), "begin"))
            raise

        with self._lock:
            self.session = InterviewSession(
                id=record.id,
                role=role,
                user_id=self.user_id,
                questions=[Question(text=t) for t in texts],
            )
            self.current_index = 0
            self.current_answer = ""
            self.result = None
            self._awaiting_retry = False
            self._pending_evaluations = None
            self._answers_saved = False
            self.phase = Phase.QUESTION_LOOP

        self.event_bus.emit(questions_generated(record.id, self.clock(), role, texts))
        self._start_proctoring()
        self.event_bus.emit(session_started(record.id, self.clock(), role, self.proctoring_enabled))
        return self.session

    def _start_proctoring(self) -> None:
        if self.sampler is None:
            self.proctoring_enabled = False
            return
        self.sampler.subscribe(self.on_device_warning)
        try:
            self.sampler.start()
            self.proctoring_enabled = True
        except CameraAccessDenied as e:
            self.sampler.unsubscribe(self.on_device_warning)
            self.proctoring_enabled = False
            logger.warning("Proctoring disabled: %s", e)
            self.event_bus.emit(error_occurred(self.session_id, self.clock(), type(e).__name__,
                                               e.user_message, "proctoring"))

    def _stop_proctoring(self) -> None:
        if self.sampler is None:
            return
        self.sampler.unsubscribe(self.on_device_warning)
        self.sampler.stop()
        self.proctoring_enabled = False

    # ------------------------------------------------------------------
    # Question loop
    # ------------------------------------------------------------------

    def record_answer(self, text: str) -> None:
        """Update the draft answer for the current question (e.g. live transcription)."""
        with self._lock:
            if self.phase != Phase.QUESTION_LOOP:
                raise ValidationError("No question is awaiting an answer")
            self.current_answer = text or ""

    def advance(self, answer: Optional[str] = None) -> Optional[InterviewResult]:
        """
        Save the answer and move on. On the last question this submits.

        Returns:
            The InterviewResult when the interview was submitted, else None

        Raises:
            ValidationError: empty answer, or not in the question loop
        """
        with self._lock:
            if self.phase != Phase.QUESTION_LOOP or not self.session:
                raise ValidationError("No question is awaiting an answer")
            if answer is not None:
                self.current_answer = answer

            question = self.session.questions[self.current_index]
            if question.answer is None:
                text = (self.current_answer or "").strip()
                if not text:
                    raise ValidationError("Please provide an answer before continuing")
                question.answer = text
                self.event_bus.emit(answer_recorded(self.session.id, self.clock(),
                                                    self.current_index, len(text)))

            if not self.is_last_question:
                self.current_index += 1
                self.current_answer = ""
                return None

            self.phase = Phase.SUBMITTING

        return self._submit()

    def on_visibility_change(self, hidden: bool) -> Optional[int]:
        """
        Page visibility notification. Every hidden transition during the
        question loop costs a flat tab-switch penalty.

        Returns:
            The new total penalty, or None if the event was ignored
        """
        with self._lock:
            if not hidden or self.phase != Phase.QUESTION_LOOP or not self.session:
                return None
            ledger = self.session.penalty_ledger
            total = ledger.record_tab_switch()
            count = ledger.tab_switch_count
        logger.warning("Tab switch detected (%d total, penalty %d%%)", count, total)
        self.event_bus.emit(tab_switch_detected(self.session_id, self.clock(), count, total))
        return total

    def on_device_warning(self, labels: Sequence[str]) -> Optional[int]:
        """Device-warning notification from the proctoring sampler."""
        with self._lock:
            if self.phase != Phase.QUESTION_LOOP or not self.session:
                return None
            ledger = self.session.penalty_ledger
            total = ledger.record_device_warning()
            count = ledger.device_warning_count
        logger.warning("Device warning %d: %s (penalty %d%%)", count, ", ".join(labels), total)
        self.event_bus.emit(device_warning_raised(self.session_id, self.clock(), labels, count, total))
        return total

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit(self) -> Optional[InterviewResult]:
        """
        Submit (or resubmit after a failure) the finished interview.

        Ignored, returning None, unless every question is answered and no
        submission is already running.
        """
        with self._lock:
            if self._submitting or not self.session:
                return None
            if self.phase == Phase.QUESTION_LOOP and self._awaiting_retry:
                self.phase = Phase.SUBMITTING
            elif self.phase != Phase.SUBMITTING:
                logger.info("Ignoring submit in phase %s", self.phase.value)
                return None
        return self._submit()

    retry_submit = submit

    def _submit(self) -> Optional[InterviewResult]:
        with self._lock:
            if self._submitting:
                return None
            self._submitting = True
            session = self.session

        self._stop_proctoring()
        penalty = session.penalty_ledger.total_penalty_percent

        try:
            if self._pending_evaluations is None:
                self._pending_evaluations = self.oracle.evaluate_answers(session.role, session.transcript)
            evaluations = self._pending_evaluations
            overall, before = aggregate_score(evaluations, penalty)

            if not self._answers_saved:
                self.store.insert_answers(self._answer_records(session, evaluations))
                self._answers_saved = True
            self.store.complete_interview(session.id, overall)
        except Exception as e:
            with self._lock:
                self.phase = Phase.QUESTION_LOOP
                self.current_index = len(session.questions) - 1
                self.current_answer = session.questions[-1].answer or ""
                self._awaiting_retry = True
                self._submitting = False
            logger.error("Submission of %s failed: %s", session.id, e)
            self.event_bus.emit(submission_failed(session.id, self.clock(), type(e).__name__, str(e)))
            raise

        with self._lock:
            session.complete(overall, evaluations)
            self.phase = Phase.COMPLETED
            self._awaiting_retry = False
            self._submitting = False
            self.result = InterviewResult(
                session_id=session.id,
                overall_score=overall,
                score_before_penalty=before,
                penalty_percent=penalty,
                evaluations=list(evaluations),
            )

        logger.info("Interview %s completed: %.1f (penalty %d%%)", session.id, overall, penalty)
        self.event_bus.emit(session_completed(session.id, self.clock(), overall, penalty))
        return self.result

    @staticmethod
    def _answer_records(session: InterviewSession, evaluations: Sequence[Evaluation]) -> List[AnswerRecord]:
        return [
            AnswerRecord(
                interview_id=session.id,
                question=question.text,
                answer=question.answer or "",
                relevance_score=evaluation.relevance,
                clarity_score=evaluation.clarity,
                grammar_score=evaluation.grammar,
                confidence_score=evaluation.confidence,
                feedback=evaluation.feedback,
            )
            for question, evaluation in zip(session.questions, evaluations)
        ]

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def teardown(self) -> None:
        """Release the camera. Idempotent."""
        self._stop_proctoring()

    def reset(self) -> None:
        """Return to role selection for a fresh interview with a fresh ledger."""
        with self._lock:
            if self.phase in (Phase.QUESTION_LOOP, Phase.SUBMITTING) and not self._awaiting_retry:
                raise ValidationError("Finish the current interview first")
        self.teardown()
        with self._lock:
            self.phase = Phase.ROLE_SELECTION
            self.session = None
            self.current_index = 0
            self.current_answer = ""
            self.result = None
            self._awaiting_retry = False
            self._pending_evaluations = None
            self._answers_saved = False
