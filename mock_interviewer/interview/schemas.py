"""
Structured schemas for oracle replies.

Every parser here is total: a reply that cannot be decoded is replaced by
fully-specified fallback content, never by partial state.
"""
import logging
import math
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, field_validator

from .models import Evaluation, Coaching
from .prompts import InterviewPrompts
from ..infrastructure.llm import extract_json_span, parse_json_span
from ..config import (
    QUESTIONS_PER_SESSION, FILLER_QUESTION, MIN_LINE_QUESTION_LENGTH,
    FALLBACK_SCORES, FALLBACK_FEEDBACK, PADDING_FEEDBACK, MISSING_FEEDBACK,
)

logger = logging.getLogger("schemas")


# =============================================================================
# Questions
# =============================================================================

def _strip_list_marker(line: str) -> str:
    line = line.strip()
    # "1. ", "2) " style numbering
    head = line.split(" ", 1)
    if len(head) == 2 and head[0].rstrip(".)").isdigit() and head[0][-1] in ".)":
        line = head[1]
    if line[:2] in ("- ", "* "):
        line = line[2:]
    return line.strip()


def _questions_from_lines(content: str) -> List[str]:
    lines = [line for line in content.split("\n") if len(line.strip()) > MIN_LINE_QUESTION_LENGTH]
    return [_strip_list_marker(line) for line in lines[:QUESTIONS_PER_SESSION]]


def parse_questions(content: str, seed: int) -> List[str]:
    """
    Decode a question-generation reply into exactly QUESTIONS_PER_SESSION strings.

    A JSON array is preferred; prose without an array is split into lines;
    an array that does not decode selects a canned set by seed.
    """
    span = extract_json_span(content, "[", "]")
    if span is None:
        questions = _questions_from_lines(content or "")
        logger.info("No JSON array in reply, recovered %d questions from lines", len(questions))
    else:
        try:
            decoded = parse_json_span(span, "[", "]")
            if not isinstance(decoded, list):
                raise ValueError("question reply is not a list")
            questions = [q for q in decoded if isinstance(q, str)]
        except ValueError as e:
            fallback_sets = InterviewPrompts.fallback_question_sets()
            questions = list(fallback_sets[seed % len(fallback_sets)])
            logger.warning("Question reply unparseable (%s); using fallback set %d",
                           e, seed % len(fallback_sets))

    questions = [q.strip() for q in questions if q and q.strip()]
    while len(questions) < QUESTIONS_PER_SESSION:
        questions.append(FILLER_QUESTION)
    return questions[:QUESTIONS_PER_SESSION]


# =============================================================================
# Evaluations
# =============================================================================

class EvaluationPayload(BaseModel):
    """One scored answer as the oracle returns it."""
    model_config = ConfigDict(extra="ignore")

    relevance: float = FALLBACK_SCORES["relevance"]
    clarity: float = FALLBACK_SCORES["clarity"]
    grammar: float = FALLBACK_SCORES["grammar"]
    confidence: float = FALLBACK_SCORES["confidence"]
    feedback: str = MISSING_FEEDBACK

    @field_validator("relevance", "clarity", "grammar", "confidence", mode="before")
    @classmethod
    def _coerce_score(cls, value: Any, info) -> float:
        fallback = FALLBACK_SCORES[info.field_name]
        if value is None or isinstance(value, bool):
            return fallback
        try:
            score = float(value)
        except (TypeError, ValueError):
            return fallback
        if math.isnan(score):
            return fallback
        return max(0.0, min(100.0, score))

    @field_validator("feedback", mode="before")
    @classmethod
    def _coerce_feedback(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            return MISSING_FEEDBACK
        return value.strip()

    def to_evaluation(self) -> Evaluation:
        return Evaluation(
            relevance=self.relevance,
            clarity=self.clarity,
            grammar=self.grammar,
            confidence=self.confidence,
            feedback=self.feedback,
        )


def fallback_evaluation(feedback: str = FALLBACK_FEEDBACK) -> Evaluation:
    return Evaluation(feedback=feedback, **FALLBACK_SCORES)


def _decode_evaluation(item: Any) -> Evaluation:
    if not isinstance(item, dict):
        return fallback_evaluation(PADDING_FEEDBACK)
    try:
        return EvaluationPayload.model_validate(item).to_evaluation()
    except PydanticValidationError as e:
        logger.warning("Evaluation item rejected: %s", e)
        return fallback_evaluation(PADDING_FEEDBACK)


def parse_evaluations(content: str, expected: int) -> List[Evaluation]:
    """
    Decode an evaluation reply into exactly `expected` evaluations,
    aligned with the submitted answers.
    """
    try:
        decoded = parse_json_span(content, "[", "]")
        if not isinstance(decoded, list):
            raise ValueError("evaluation reply is not a list")
    except ValueError as e:
        logger.warning("Evaluation reply unparseable (%s); using fallback scores", e)
        return [fallback_evaluation() for _ in range(expected)]

    evaluations = [_decode_evaluation(item) for item in decoded[:expected]]
    if len(evaluations) < expected:
        logger.info("Oracle returned %d of %d evaluations; padding", len(evaluations), expected)
    while len(evaluations) < expected:
        evaluations.append(fallback_evaluation(PADDING_FEEDBACK))
    return evaluations


# =============================================================================
# Coaching
# =============================================================================

class CoachingPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    strengths: Optional[List[str]] = None
    weaknesses: Optional[List[str]] = None
    focus_areas: Optional[List[str]] = Field(default=None, alias="focusAreas")
    recommendations: Optional[List[str]] = None

    @field_validator("strengths", "weaknesses", "focus_areas", "recommendations", mode="before")
    @classmethod
    def _string_items(cls, value: Any) -> Optional[List[str]]:
        if not isinstance(value, list):
            return None
        items = [str(v).strip() for v in value if isinstance(v, (str, int, float)) and str(v).strip()]
        return items or None


def fallback_coaching() -> Coaching:
    data = InterviewPrompts.fallback_coaching()
    return Coaching(
        strengths=data["strengths"],
        weaknesses=data["weaknesses"],
        focus_areas=data["focusAreas"],
        recommendations=data["recommendations"],
    )


def parse_coaching(content: str) -> Coaching:
    """Decode a coaching reply; missing sections come from the fallback."""
    default = fallback_coaching()
    try:
        decoded = parse_json_span(content, "{", "}")
        if not isinstance(decoded, dict):
            raise ValueError("coaching reply is not an object")
        payload = CoachingPayload.model_validate(decoded)
    except (ValueError, PydanticValidationError) as e:
        logger.warning("Coaching reply unparseable (%s); using fallback coaching", e)
        return default

    return Coaching(
        strengths=payload.strengths or default.strengths,
        weaknesses=payload.weaknesses or default.weaknesses,
        focus_areas=payload.focus_areas or default.focus_areas,
        recommendations=payload.recommendations or default.recommendations,
    )
