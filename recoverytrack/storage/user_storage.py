"""
User Storage - Persistent storage for user accounts and profiles using StorageInterface.
"""

import json
import logging
from typing import Optional, Dict, List
from datetime import datetime, timezone
from .interface import StorageInterface
from .local_storage import LocalStorage

logger = logging.getLogger(__name__)


class UserStorage:
    """
    Manages persistent storage of user data.
    Uses one JSON file per user in the users/ directory plus an email index.
    """

    def __init__(self, storage: StorageInterface):
        """
        Initialize user storage.

        Args:
            storage: StorageInterface implementation (typically LocalStorage)
        """
        self.storage = storage
        self.users_dir = "users"
        self._email_index_path = f"{self.users_dir}/email_index.json"

    def _user_path(self, user_id: str) -> str:
        return f"{self.users_dir}/{user_id}.json"

    @staticmethod
    def _decode(content: bytes) -> Dict:
        user_data = json.loads(content.decode('utf-8'))
        if 'created_at' in user_data:
            user_data['created_at'] = datetime.fromisoformat(user_data['created_at'])
        return user_data

    async def _load_email_index(self) -> Dict[str, str]:
        """Load email to user_id index mapping."""
        content = await self.storage.load(self._email_index_path)
        if content is None:
            return {}
        try:
            return json.loads(content.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error(f"Corrupt email index, starting empty: {e}")
            return {}

    async def _save_email_index(self, index: Dict[str, str]) -> bool:
        """Save email to user_id index mapping."""
        return await self.storage.save(self._email_index_path, json.dumps(index, indent=2))

    async def get_user(self, user_id: str) -> Optional[Dict]:
        """
        Get user by id.

        Returns:
            Optional[Dict]: User data (including hashed_password) or None if not found
        """
        content = await self.storage.load(self._user_path(user_id))
        if content is None:
            return None

        try:
            return self._decode(content)
        except (UnicodeDecodeError, ValueError) as e:
            logger.error(f"Error loading user {user_id}: {e}")
            return None

    async def get_user_by_email(self, email: str) -> Optional[Dict]:
        """Get user by email (case-insensitive)."""
        index = await self._load_email_index()
        user_id = index.get(email.lower())
        if user_id is None:
            return None
        return await self.get_user(user_id)

    async def create_user(
        self,
        user_id: str,
        email: str,
        hashed_password: str,
        role: str,
        full_name: str,
        age: int,
        team_id: Optional[int] = None,
    ) -> Dict:
        """
        Create a new user with its profile.

        Returns:
            Dict: Created user data
        """
        now = datetime.now(timezone.utc)

        user_data = {
            "id": user_id,
            "email": email,
            "hashed_password": hashed_password,
            "role": role,
            "full_name": full_name,
            "age": age,
            "team_id": team_id,
            "created_at": now.isoformat(),
        }

        content = json.dumps(user_data, indent=2, ensure_ascii=False)
        if not await self.storage.save(self._user_path(user_id), content):
            raise RuntimeError(f"Failed to persist user {user_id}")

        index = await self._load_email_index()
        index[email.lower()] = user_id
        await self._save_email_index(index)

        user_data['created_at'] = now
        logger.info(f"User created: {user_id}", extra={"extra_fields": {"user_id": user_id, "role": role}})
        return user_data

    async def list_users(self, role: Optional[str] = None) -> List[Dict]:
        """
        List users, optionally only those with the given role.

        Returns:
            List[Dict]: Users ordered by full name
        """
        files = await self.storage.list(self.users_dir, pattern="*.json", recursive=False)
        users = []

        for file_path in files:
            if file_path == self._email_index_path:
                continue

            content = await self.storage.load(file_path)
            if not content:
                continue
            try:
                user_data = self._decode(content)
            except (UnicodeDecodeError, ValueError) as e:
                logger.warning(f"Skipping unreadable user file {file_path}: {e}")
                continue
            if role is None or user_data.get("role") == role:
                users.append(user_data)

        return sorted(users, key=lambda user: (user.get("full_name") or "").lower())


# Global user storage instance
_user_storage: Optional[UserStorage] = None


def init_user_storage(storage: Optional[StorageInterface] = None) -> UserStorage:
    """
    Initialize the global user storage instance.

    Args:
        storage: Optional StorageInterface implementation. If None, creates LocalStorage.
    """
    global _user_storage
    if storage is None:
        storage = LocalStorage()
    _user_storage = UserStorage(storage)
    return _user_storage


def get_user_storage() -> UserStorage:
    """
    Get the global user storage instance.

    Raises:
        RuntimeError: If user storage has not been initialized
    """
    if _user_storage is None:
        raise RuntimeError("User storage not initialized. Call init_user_storage() first.")
    return _user_storage
