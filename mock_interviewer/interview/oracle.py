"""
Oracle adapter: question generation, answer evaluation and coaching.
"""
import logging
import random
import time
from typing import Dict, List, Optional, Sequence

from .models import Evaluation, Coaching
from .prompts import InterviewPrompts
from .schemas import parse_questions, parse_evaluations, parse_coaching
from .scoring import skill_averages
from ..config import (
    QUESTION_VARIANTS, VARIETY_SEED_MODULUS,
    QUESTION_TEMPERATURE, QUESTION_TOP_P, EVALUATION_TEMPERATURE, COACHING_TEMPERATURE,
)
from ..infrastructure.llm import GatewayClient

logger = logging.getLogger("oracle")


class InterviewOracle:
    """
    Wraps the AI gateway with strict decode-with-fallback semantics.

    Gateway errors (RateLimited, QuotaExhausted, OracleError) propagate to the
    caller unchanged; unparseable replies never do.
    """

    def __init__(self, llm_client: GatewayClient, rng: Optional[random.Random] = None, clock=time.time):
        self.llm_client = llm_client
        self.rng = rng or random.Random()
        self.clock = clock

    def generate_questions(self,
                           role: str,
                           resume_hint: str = "",
                           exclude: Sequence[str] = ()) -> List[str]:
        """
        Ask for five fresh questions for the role.

        Returns:
            Exactly five non-empty question strings
        """
        seed = self.rng.randrange(VARIETY_SEED_MODULUS)
        variants = self.rng.sample(list(QUESTION_VARIANTS), 3)
        timestamp_ms = int(self.clock() * 1000)

        messages = [
            {"role": "system", "content": InterviewPrompts.question_system_prompt(
                role, variants, seed, resume_hint=resume_hint, exclude=list(exclude))},
            {"role": "user", "content": InterviewPrompts.question_user_prompt(role, timestamp_ms)},
        ]

        logger.info("Generating questions for %s (seed=%d, variants=%s)", role, seed, variants)
        content = self.llm_client.chat(messages, temperature=QUESTION_TEMPERATURE, top_p=QUESTION_TOP_P)
        questions = parse_questions(content, seed)
        logger.info("Generated questions: %s", questions)
        return questions

    def evaluate_answers(self, role: str, qa_pairs: Sequence[Dict[str, str]]) -> List[Evaluation]:
        """
        Score every answer. Output is aligned with qa_pairs.
        """
        pairs = [{"question": qa["question"], "answer": qa.get("answer") or ""} for qa in qa_pairs]
        if not pairs:
            return []

        messages = [
            {"role": "system", "content": InterviewPrompts.evaluation_system_prompt(role)},
            {"role": "user", "content": InterviewPrompts.evaluation_user_prompt(pairs)},
        ]

        logger.info("Evaluating %d answers for %s", len(pairs), role)
        content = self.llm_client.chat(messages, temperature=EVALUATION_TEMPERATURE)
        return parse_evaluations(content, len(pairs))

    def generate_coaching(self,
                          role: str,
                          answers: Sequence[Dict[str, object]],
                          overall_score: float) -> Coaching:
        """
        Summarize strengths, weaknesses and next steps for a finished interview.

        Args:
            answers: dicts with question, answer and the four metric scores
        """
        averages = skill_averages(answers)
        messages = [
            {"role": "system", "content": InterviewPrompts.coaching_system_prompt(role)},
            {"role": "user", "content": InterviewPrompts.coaching_user_prompt(
                overall_score, averages, list(answers))},
        ]

        logger.info("Generating coaching for %s (score %s)", role, overall_score)
        content = self.llm_client.chat(messages, temperature=COACHING_TEMPERATURE)
        return parse_coaching(content)
