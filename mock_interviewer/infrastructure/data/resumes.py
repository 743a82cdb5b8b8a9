"""
Per-user resume file storage.
"""
import os
import logging
from typing import List

from ...errors import PersistenceError, ValidationError

logger = logging.getLogger("resume_storage")


class ResumeStorage:
    """Directory-backed blob store; every path lives under '<user_id>/'."""

    def __init__(self, root_dir: str):
        self.root_dir = os.path.abspath(root_dir)
        os.makedirs(self.root_dir, exist_ok=True)

    def _resolve(self, user_id: str, name: str = "") -> str:
        if not user_id or "/" in user_id or "\\" in user_id or user_id in (".", ".."):
            raise ValidationError(f"Invalid user id: {user_id!r}")
        user_dir = os.path.join(self.root_dir, user_id)
        path = os.path.abspath(os.path.join(user_dir, name)) if name else user_dir
        if os.path.commonpath([path, user_dir]) != user_dir:
            raise ValidationError(f"Path escapes user folder: {name!r}")
        return path

    def upload(self, user_id: str, name: str, content: bytes) -> str:
        """Store content and return its '<user_id>/<name>' key."""
        path = self._resolve(user_id, name)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, 'wb') as f:
                f.write(content)
        except OSError as e:
            logger.error("Resume upload failed for %s: %s", user_id, e)
            raise PersistenceError("Resume upload failed") from e
        logger.info("Stored resume %s for %s (%d bytes)", name, user_id, len(content))
        return f"{user_id}/{name}"

    def list(self, user_id: str) -> List[str]:
        user_dir = self._resolve(user_id)
        if not os.path.isdir(user_dir):
            return []
        return sorted(f for f in os.listdir(user_dir) if os.path.isfile(os.path.join(user_dir, f)))

    def delete(self, user_id: str, name: str) -> bool:
        path = self._resolve(user_id, name)
        if not os.path.isfile(path):
            return False
        try:
            os.remove(path)
        except OSError as e:
            raise PersistenceError("Resume delete failed") from e
        logger.info("Deleted resume %s for %s", name, user_id)
        return True
