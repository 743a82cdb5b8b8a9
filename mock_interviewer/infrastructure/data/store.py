"""
JSON-file persistence for profiles, interviews and answers.
"""
import os
import json
import uuid
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Any

from .records import ProfileRecord, InterviewRecord, AnswerRecord, to_dict
from ...errors import PersistenceError

logger = logging.getLogger("interview_store")


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class InterviewStore:
    """
    Stores each table as a JSON file under data_dir.

    Reads filter by owning user wherever a user id is supplied; interviews
    belonging to someone else behave as if they did not exist.
    """

    TABLES = ("profiles", "interviews", "answers")

    def __init__(self, data_dir: str):
        self.data_dir = data_dir
        os.makedirs(self.data_dir, exist_ok=True)
        self._tables: Dict[str, List[Dict[str, Any]]] = {}
        for table in self.TABLES:
            self._tables[table] = self._load_table(table)
        logger.info("Loaded %d interviews from %s", len(self._tables["interviews"]), data_dir)

    def _table_path(self, table: str) -> str:
        return os.path.join(self.data_dir, f"{table}.json")

    def _load_table(self, table: str) -> List[Dict[str, Any]]:
        path = self._table_path(table)
        if not os.path.exists(path):
            return []
        try:
            with open(path, 'r', encoding='utf-8') as f:
                rows = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load %s: %s", path, e)
            raise PersistenceError(f"Could not read {table}") from e
        return rows if isinstance(rows, list) else []

    def _save_table(self, table: str, rows: List[Dict[str, Any]]) -> None:
        path = self._table_path(table)
        tmp_path = path + ".tmp"
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(rows, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to write %s: %s", path, e)
            raise PersistenceError(f"Could not write {table}") from e
        self._tables[table] = rows

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    def upsert_profile(self, user_id: str, name: Optional[str] = None,
                       email: Optional[str] = None) -> ProfileRecord:
        """Create the profile or update its name/email."""
        now = utc_now()
        rows = [dict(r) for r in self._tables["profiles"]]
        for row in rows:
            if row["user_id"] == user_id:
                if name is not None:
                    row["name"] = name
                if email is not None:
                    row["email"] = email
                row["updated_at"] = now
                self._save_table("profiles", rows)
                return ProfileRecord(**row)

        profile = ProfileRecord(user_id=user_id, name=name, email=email,
                                created_at=now, updated_at=now)
        rows.append(to_dict(profile))
        self._save_table("profiles", rows)
        return profile

    def get_profile(self, user_id: str) -> Optional[ProfileRecord]:
        for row in self._tables["profiles"]:
            if row["user_id"] == user_id:
                return ProfileRecord(**row)
        return None

    # ------------------------------------------------------------------
    # Interviews
    # ------------------------------------------------------------------

    def create_interview(self, user_id: str, role: str) -> InterviewRecord:
        record = InterviewRecord(
            id=str(uuid.uuid4()),
            user_id=user_id,
            role=role,
            status="in_progress",
            created_at=utc_now(),
        )
        self._save_table("interviews", self._tables["interviews"] + [to_dict(record)])
        logger.info("Created interview %s for %s (%s)", record.id, user_id, role)
        return record

    def complete_interview(self, interview_id: str, overall_score: float) -> InterviewRecord:
        """Write the final score and mark the interview completed."""
        rows = [dict(r) for r in self._tables["interviews"]]
        for row in rows:
            if row["id"] == interview_id:
                row["overall_score"] = overall_score
                row["status"] = "completed"
                row["completed_at"] = utc_now()
                self._save_table("interviews", rows)
                return InterviewRecord(**row)
        raise PersistenceError(f"Interview {interview_id} not found")

    def get_interview(self, interview_id: str, user_id: Optional[str] = None) -> Optional[InterviewRecord]:
        for row in self._tables["interviews"]:
            if row["id"] == interview_id:
                if user_id is not None and row["user_id"] != user_id:
                    return None
                return InterviewRecord(**row)
        return None

    def list_interviews(self, user_id: Optional[str] = None) -> List[InterviewRecord]:
        """Interviews newest first."""
        rows = [r for r in self._tables["interviews"] if user_id is None or r["user_id"] == user_id]
        rows.sort(key=lambda r: r.get("created_at", ""), reverse=True)
        return [InterviewRecord(**r) for r in rows]

    # ------------------------------------------------------------------
    # Answers
    # ------------------------------------------------------------------

    def insert_answers(self, answers: List[AnswerRecord]) -> List[AnswerRecord]:
        """Bulk insert; all rows are written or none are."""
        known_ids = {r["id"] for r in self._tables["interviews"]}
        now = utc_now()
        new_rows = []
        for answer in answers:
            if answer.interview_id not in known_ids:
                raise PersistenceError(f"Interview {answer.interview_id} not found")
            answer.id = answer.id or str(uuid.uuid4())
            answer.created_at = answer.created_at or now
            new_rows.append(to_dict(answer))

        self._save_table("answers", self._tables["answers"] + new_rows)
        logger.info("Inserted %d answers", len(new_rows))
        return answers

    def list_answers(self, interview_id: str, user_id: Optional[str] = None) -> List[AnswerRecord]:
        if user_id is not None and self.get_interview(interview_id, user_id) is None:
            return []
        return [AnswerRecord(**r) for r in self._tables["answers"] if r["interview_id"] == interview_id]

    def list_user_answers(self, user_id: str) -> List[AnswerRecord]:
        owned = {r["id"] for r in self._tables["interviews"] if r["user_id"] == user_id}
        return [AnswerRecord(**r) for r in self._tables["answers"] if r["interview_id"] in owned]

    def list_all_answers(self) -> List[AnswerRecord]:
        """Every answer on the platform, used for platform-wide averages."""
        return [AnswerRecord(**r) for r in self._tables["answers"]]
