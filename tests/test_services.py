import json

import pytest

from mock_interviewer.errors import OracleError, ValidationError, PersistenceError
from mock_interviewer.infrastructure.data import ResumeStorage, AnswerRecord
from mock_interviewer.interview import InterviewOracle, ResumeService, FeedbackService, DashboardService
from mock_interviewer.interview.testing import MockLLMClient


COACHING_REPLY = json.dumps({
    "strengths": ["Structured answers"],
    "weaknesses": ["Short on detail"],
    "focusAreas": ["Depth"],
    "recommendations": ["System design primer"],
})


def _completed_interview(store, user_id, score, metric=80):
    interview = store.create_interview(user_id, "software-engineer")
    store.insert_answers([
        AnswerRecord(interview_id=interview.id, question=f"Q{i}", answer=f"A{i}",
                     relevance_score=metric, clarity_score=metric, grammar_score=metric,
                     confidence_score=metric, feedback="Good.")
        for i in range(2)
    ])
    store.complete_interview(interview.id, score)
    return interview


class TestResumeService:
    def test_upload_returns_hint(self, tmp_path):
        storage = ResumeStorage(str(tmp_path))
        service = ResumeService(storage, clock=lambda: 1700000000.0)

        hint = service.upload("user-1", "/home/sam/cv.pdf", b"%PDF-1.7 body")

        assert hint == "Resume uploaded: cv.pdf"
        assert service.list("user-1") == ["1700000000000-cv.pdf"]
        assert service.delete("user-1", "1700000000000-cv.pdf")

    @pytest.mark.parametrize("name,content", [
        ("cv.docx", b"%PDF-1.7"),
        ("cv.pdf", b"PK\x03\x04"),
        ("", b"%PDF"),
    ])
    def test_rejects_non_pdf(self, tmp_path, name, content):
        service = ResumeService(ResumeStorage(str(tmp_path)))
        with pytest.raises(ValidationError):
            service.upload("user-1", name, content)

    def test_storage_failure_returns_none(self, tmp_path):
        class BrokenStorage(ResumeStorage):
            def upload(self, user_id, name, content):
                raise PersistenceError("disk full")

        service = ResumeService(BrokenStorage(str(tmp_path)))
        assert service.upload("user-1", "cv.pdf", b"%PDF") is None


class TestFeedbackService:
    def test_report_with_coaching(self, store):
        interview = _completed_interview(store, "user-1", 72.5)
        client = MockLLMClient([COACHING_REPLY])
        service = FeedbackService(store, InterviewOracle(client))

        report = service.build_report("user-1", interview.id)

        assert report.overall_score == 72.5
        assert report.label == "Good"
        assert [a["question"] for a in report.answers] == ["Q0", "Q1"]
        assert report.answers[0]["relevance"] == 80
        assert report.coaching.strengths == ["Structured answers"]

        service.build_report("user-1", interview.id)
        assert len(client.request_history) == 1

    def test_other_user_cannot_read_report(self, store):
        interview = _completed_interview(store, "user-1", 50)
        service = FeedbackService(store, InterviewOracle(MockLLMClient()))
        with pytest.raises(ValidationError):
            service.build_report("user-2", interview.id)

    def test_coaching_failure_still_returns_report(self, store):
        interview = _completed_interview(store, "user-1", 85)
        service = FeedbackService(store, InterviewOracle(MockLLMClient([OracleError("down")])))

        report = service.build_report("user-1", interview.id)

        assert report.label == "Excellent"
        assert report.coaching is None

    def test_without_coaching(self, store):
        interview = _completed_interview(store, "user-1", 30)
        client = MockLLMClient()
        report = FeedbackService(store, InterviewOracle(client)).build_report(
            "user-1", interview.id, with_coaching=False)
        assert report.label == "Needs Improvement"
        assert client.request_history == []


class TestDashboardService:
    def test_summary(self, store):
        _completed_interview(store, "user-1", 60.0, metric=60)
        _completed_interview(store, "user-1", 80.0, metric=80)
        store.create_interview("user-1", "software-engineer")
        _completed_interview(store, "user-2", 95.0, metric=100)

        summary = DashboardService(store).summary("user-1")

        assert summary["total_interviews"] == 3
        assert summary["completed_interviews"] == 2
        assert summary["average_score"] == 70.0
        assert summary["skills"]["relevance"] == {"user": 70, "platform": 80}
        assert sorted(summary["recent_scores"]) == [60.0, 80.0]

    def test_empty_user(self, store):
        summary = DashboardService(store).summary("new-user")
        assert summary["total_interviews"] == 0
        assert summary["average_score"] == 0.0
        assert summary["skills"]["clarity"] == {"user": 0, "platform": 0}
        assert summary["recent_scores"] == []
