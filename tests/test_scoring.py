import math
import random

import pytest

from mock_interviewer.errors import InvalidInput
from mock_interviewer.interview.models import Evaluation
from mock_interviewer.interview.scoring import (
    aggregate_score, answer_average, skill_averages, average_overall, score_label,
)


def test_all_eighties_with_twenty_point_penalty():
    evaluations = [Evaluation(80, 80, 80, 80)] * 5
    overall, before = aggregate_score(evaluations, 20)
    assert before == 80
    assert overall == 60.0


def test_answer_average_clamps_out_of_range_subscores():
    assert answer_average(Evaluation(150, -20, 100, 50)) == 62.5


def test_penalty_larger_than_score_floors_at_zero():
    overall, _ = aggregate_score([Evaluation(10, 10, 10, 10)], 35)
    assert overall == 0.0


def test_result_rounded_to_one_decimal():
    overall, before = aggregate_score([Evaluation(70, 70, 75, 65), Evaluation(81, 77, 90, 67)], 5)
    assert before == pytest.approx(74.375)
    assert overall == 69.4


def test_ties_round_half_up():
    overall, before = aggregate_score([Evaluation(62, 62, 63, 62)], 0)
    assert before == 62.25
    assert overall == 62.3

    overall, _ = aggregate_score([Evaluation(80, 80, 80, 81)], 10)
    assert overall == 70.3


def test_empty_evaluations_rejected():
    with pytest.raises(InvalidInput):
        aggregate_score([], 0)


def test_negative_penalty_rejected():
    with pytest.raises(InvalidInput):
        aggregate_score([Evaluation(50, 50, 50, 50)], -5)


def test_matches_reference_formula_for_random_inputs():
    rng = random.Random(42)
    for _ in range(200):
        evaluations = [
            Evaluation(*(rng.uniform(0, 100) for _ in range(4)))
            for _ in range(rng.randint(1, 8))
        ]
        penalty = rng.choice([0, 5, 10, 15, 20, 35, 60, 150])
        overall, _ = aggregate_score(evaluations, penalty)

        mean = sum(sum((e.relevance, e.clarity, e.grammar, e.confidence)) / 4 for e in evaluations) / len(evaluations)
        assert overall == math.floor(max(0, mean - penalty) * 10 + 0.5) / 10
        assert 0 <= overall <= 100


def test_skill_averages():
    rows = [
        {"relevance": 80, "clarity": 60, "grammar": 90, "confidence": 70},
        {"relevance": 60, "clarity": 80, "grammar": 70, "confidence": 50},
    ]
    assert skill_averages(rows) == {"relevance": 70, "clarity": 70, "grammar": 80, "confidence": 60}
    assert skill_averages([]) == {"relevance": 0, "clarity": 0, "grammar": 0, "confidence": 0}


def test_average_overall():
    assert average_overall([]) == 0.0
    assert average_overall([60, 75.6]) == 67.8


@pytest.mark.parametrize("score,label", [
    (95, "Excellent"),
    (80, "Excellent"),
    (79.9, "Good"),
    (60, "Good"),
    (40, "Fair"),
    (12, "Needs Improvement"),
])
def test_score_label(score, label):
    assert score_label(score) == label
