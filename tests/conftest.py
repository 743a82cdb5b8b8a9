import random

import pytest

from mock_interviewer.infrastructure.data import InterviewStore
from mock_interviewer.interview import InterviewOracle, ProctoringSampler, InterviewSessionMachine
from mock_interviewer.interview.testing import (
    MockLLMClient, MockCamera, MockClassifier, ManualClock,
    questions_reply, evaluations_reply, create_test_questions,
)


@pytest.fixture
def store(tmp_path):
    return InterviewStore(str(tmp_path / "data"))


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def camera():
    return MockCamera()


@pytest.fixture
def classifier():
    return MockClassifier()


@pytest.fixture
def sampler(camera, classifier, clock):
    # Long interval: tests drive sample_once() by hand
    s = ProctoringSampler(camera=camera, classifier=classifier, interval=3600, clock=clock)
    s.load_model()
    yield s
    s.stop()


@pytest.fixture
def llm_client():
    return MockLLMClient([
        questions_reply(create_test_questions()),
        evaluations_reply([(80, 80, 80, 80)] * 5),
    ])


@pytest.fixture
def oracle(llm_client):
    return InterviewOracle(llm_client, rng=random.Random(1))


@pytest.fixture
def machine(oracle, store, sampler):
    m = InterviewSessionMachine(oracle, store, "user-1", sampler=sampler)
    yield m
    m.teardown()
