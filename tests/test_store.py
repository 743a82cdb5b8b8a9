import pytest

from mock_interviewer.errors import PersistenceError, ValidationError
from mock_interviewer.infrastructure.data import InterviewStore, ResumeStorage, AnswerRecord


def _answer(interview_id, score=75.0, question="Why this role?"):
    return AnswerRecord(
        interview_id=interview_id,
        question=question,
        answer="Because I enjoy it.",
        relevance_score=score,
        clarity_score=score,
        grammar_score=score,
        confidence_score=score,
        feedback="Fine.",
    )


class TestInterviewStore:
    def test_interview_lifecycle_survives_reload(self, tmp_path):
        store = InterviewStore(str(tmp_path))
        interview = store.create_interview("user-1", "software-engineer")
        store.insert_answers([_answer(interview.id)])
        store.complete_interview(interview.id, 61.5)

        reloaded = InterviewStore(str(tmp_path))
        record = reloaded.get_interview(interview.id)
        assert record.status == "completed"
        assert record.overall_score == 61.5
        assert record.completed_at
        assert [a.answer for a in reloaded.list_answers(interview.id)] == ["Because I enjoy it."]

    def test_other_users_interviews_are_invisible(self, store):
        interview = store.create_interview("owner", "ux-designer")
        store.insert_answers([_answer(interview.id)])

        assert store.get_interview(interview.id, user_id="intruder") is None
        assert store.list_answers(interview.id, user_id="intruder") == []
        assert store.list_interviews("intruder") == []
        assert len(store.list_answers(interview.id, user_id="owner")) == 1

    def test_insert_for_unknown_interview_writes_nothing(self, store):
        interview = store.create_interview("user-1", "software-engineer")
        with pytest.raises(PersistenceError):
            store.insert_answers([_answer(interview.id), _answer("missing")])
        assert store.list_all_answers() == []

    def test_complete_unknown_interview(self, store):
        with pytest.raises(PersistenceError):
            store.complete_interview("missing", 50.0)

    def test_answer_scores(self, store):
        interview = store.create_interview("user-1", "software-engineer")
        (saved,) = store.insert_answers([_answer(interview.id, score=88)])
        assert saved.id
        assert saved.scores == {"relevance": 88, "clarity": 88, "grammar": 88, "confidence": 88}

    def test_list_user_answers(self, store):
        mine = store.create_interview("user-1", "software-engineer")
        theirs = store.create_interview("user-2", "software-engineer")
        store.insert_answers([_answer(mine.id), _answer(theirs.id), _answer(theirs.id)])

        assert len(store.list_user_answers("user-1")) == 1
        assert len(store.list_all_answers()) == 3

    def test_profile_upsert(self, store):
        store.upsert_profile("user-1", name="Sam")
        store.upsert_profile("user-1", email="sam@example.com")

        profile = store.get_profile("user-1")
        assert profile.name == "Sam"
        assert profile.email == "sam@example.com"
        assert store.get_profile("nobody") is None

    def test_corrupt_table_raises(self, tmp_path):
        (tmp_path / "interviews.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(PersistenceError):
            InterviewStore(str(tmp_path))


class TestResumeStorage:
    def test_upload_list_delete(self, tmp_path):
        storage = ResumeStorage(str(tmp_path))
        key = storage.upload("user-1", "cv.pdf", b"%PDF-1.4")

        assert key == "user-1/cv.pdf"
        assert storage.list("user-1") == ["cv.pdf"]
        assert storage.list("user-2") == []
        assert storage.delete("user-1", "cv.pdf")
        assert not storage.delete("user-1", "cv.pdf")
        assert storage.list("user-1") == []

    @pytest.mark.parametrize("user_id,name", [
        ("user-1", "../user-2/cv.pdf"),
        ("../user-2", "cv.pdf"),
        ("", "cv.pdf"),
    ])
    def test_paths_stay_in_user_folder(self, tmp_path, user_id, name):
        storage = ResumeStorage(str(tmp_path))
        with pytest.raises(ValidationError):
            storage.upload(user_id, name, b"%PDF")
