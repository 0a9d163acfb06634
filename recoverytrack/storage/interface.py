"""
Storage Interface - Abstract base class for all storage implementations.
This interface enables switching between local disk and object stores.
"""

from abc import ABC, abstractmethod
from typing import Optional, List


class StorageInterface(ABC):
    """
    Contract shared by every storage backend.
    Paths are relative, slash-separated keys such as "logs/<player_id>/<log_id>.json".
    Records are write-once from the caller's point of view; there is no delete.
    """

    @abstractmethod
    async def save(self, path: str, content: bytes | str) -> bool:
        """
        Save content to the specified path, replacing any existing content.

        Args:
            path: Relative path where content should be saved
            content: Content to save (bytes for binary files, str for text)

        Returns:
            bool: True if save was successful, False otherwise
        """
        pass

    @abstractmethod
    async def load(self, path: str) -> Optional[bytes]:
        """Raw content at path, or None if there is no such file."""
        pass

    @abstractmethod
    async def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    async def list(
        self,
        path: str,
        pattern: Optional[str] = None,
        recursive: bool = False
    ) -> List[str]:
        """
        List files under a directory.

        Args:
            path: Directory path to list
            pattern: Optional glob pattern (e.g., "*.json")
            recursive: Descend into subdirectories

        Returns:
            List[str]: Sorted relative file paths
        """
        pass
