"""
Interview prompt templates.

This module contains all the prompt templates sent to the AI gateway,
keeping them separate from the business logic for easier maintenance and editing.
"""

from typing import Dict, Any, List, Sequence
import json

from ..config import ROLE_CONTEXTS, DEFAULT_ROLE_CONTEXT


def role_title(role: str) -> str:
    """'software-engineer' -> 'software engineer'."""
    return role.replace("-", " ")


def role_context(role: str) -> str:
    return ROLE_CONTEXTS.get(role, DEFAULT_ROLE_CONTEXT)


class InterviewPrompts:
    """Collection of all oracle prompts."""

    @staticmethod
    def question_system_prompt(
        role: str,
        variants: Sequence[str],
        seed: int,
        resume_hint: str = "",
        exclude: Sequence[str] = (),
    ) -> str:
        """System prompt for generating five fresh questions."""
        resume_context = ""
        if resume_hint and resume_hint.strip():
            resume_context = (
                f"\n\nCandidate's Resume/Skills:\n{resume_hint}\n\n"
                "Tailor questions to specifically test skills mentioned in the resume."
            )

        exclusion_context = ""
        if exclude:
            joined = "\n".join(exclude)
            exclusion_context = (
                "\n\nIMPORTANT: Do NOT repeat or ask similar questions to these previously asked ones:\n"
                f"{joined}\n\nGenerate completely different questions."
            )

        return f"""
You are an expert interviewer for {role_context(role)}. Generate exactly 5 UNIQUE interview questions.

REQUIREMENTS:
- Maximum 20 words per question
- Conversational and friendly tone
- Focus on: {", ".join(variants)} questions
- Progressively more challenging
- Each question MUST be completely different from others
- Random seed for variety: {seed}{resume_context}{exclusion_context}

Return ONLY a JSON array of strings with exactly 5 questions. No other text or explanation.
        """.strip()

    @staticmethod
    def question_user_prompt(role: str, timestamp_ms: int) -> str:
        return (
            f"Generate 5 unique, fresh interview questions for a {role_title(role)} position. "
            f"Make them different from typical questions. Timestamp: {timestamp_ms}"
        )

    @staticmethod
    def evaluation_system_prompt(role: str) -> str:
        """System prompt for scoring every answer in one call."""
        return f"""
You are an expert interview coach evaluating answers for a {role_title(role)} position.
For each answer, provide scores (0-100) for:
- relevance: How well does the answer address the question?
- clarity: How clear and well-structured is the response?
- grammar: Quality of language and grammar used
- confidence: How confident and assertive does the answer sound?

Also provide a brief, constructive feedback tip (max 30 words).

Return ONLY a JSON array with objects containing: relevance, clarity, grammar, confidence, feedback.
        """.strip()

    @staticmethod
    def evaluation_user_prompt(qa_pairs: List[Dict[str, str]]) -> str:
        return json.dumps(qa_pairs, ensure_ascii=False)

    @staticmethod
    def coaching_system_prompt(role: str) -> str:
        return f"""
You are an expert career coach providing actionable interview feedback. Based on the candidate's performance in a {role_title(role)} interview, provide coaching insights.

Return ONLY a JSON object with:
- strengths: array of 2-3 specific things they did well
- weaknesses: array of 2-3 areas to improve
- focusAreas: array of 2 key focus areas for next interview
- recommendations: array of 3 specific courses or resources to study

Keep each item concise (max 15 words). Be encouraging but honest.
        """.strip()

    @staticmethod
    def coaching_user_prompt(
        overall_score: float,
        averages: Dict[str, float],
        qa_pairs: List[Dict[str, Any]],
    ) -> str:
        transcript = "\n\n".join(
            f"Q{i + 1}: {qa['question']}\nA: {qa['answer']}" for i, qa in enumerate(qa_pairs)
        )
        return f"""
Interview performance:
- Overall score: {overall_score}%
- Relevance: {round(averages['relevance'])}%
- Clarity: {round(averages['clarity'])}%
- Grammar: {round(averages['grammar'])}%
- Confidence: {round(averages['confidence'])}%

Questions and answers:
{transcript}
        """.strip()

    @staticmethod
    def fallback_question_sets() -> List[List[str]]:
        """Canned question sets used when the oracle reply cannot be parsed."""
        return [
            [
                "What drew you to this career path?",
                "Describe your approach to solving complex problems.",
                "How do you prioritize competing deadlines?",
                "Tell me about a time you led a team.",
                "What's your biggest professional achievement?",
            ],
            [
                "What excites you most about this role?",
                "How do you handle constructive criticism?",
                "Describe a project that challenged you.",
                "How do you stay updated with industry trends?",
                "What would you change about your last project?",
            ],
            [
                "Why are you passionate about this field?",
                "How do you approach learning new skills?",
                "Tell me about a failure and what you learned.",
                "How do you collaborate with remote teams?",
                "What metrics do you use to measure success?",
            ],
        ]

    @staticmethod
    def fallback_coaching() -> Dict[str, List[str]]:
        return {
            "strengths": [
                "Good communication of ideas",
                "Structured approach to answering",
            ],
            "weaknesses": [
                "Could provide more specific examples",
                "Consider elaborating on technical details",
            ],
            "focusAreas": [
                "Practice with real scenarios",
                "Improve confidence in delivery",
            ],
            "recommendations": [
                "Take a course on effective communication",
                "Practice mock interviews with peers",
                "Study common behavioral question patterns",
            ],
        }
