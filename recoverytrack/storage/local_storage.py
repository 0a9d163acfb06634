"""
Local Filesystem Storage Implementation.
Stores all data under a base directory on the server.
"""

import logging
import aiofiles
from pathlib import Path
from typing import Optional, List
from .interface import StorageInterface

logger = logging.getLogger(__name__)


class LocalStorage(StorageInterface):
    """Filesystem storage rooted at base_dir; paths may not escape it."""

    def __init__(self, base_dir: str = "./data"):
        self.base_dir = Path(base_dir).resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, path: str) -> Path:
        """Convert relative path to full absolute path within base directory."""
        full_path = (self.base_dir / path).resolve()

        if full_path != self.base_dir and self.base_dir not in full_path.parents:
            raise ValueError(f"Invalid path: {path} - path traversal detected")

        return full_path

    async def save(self, path: str, content: bytes | str) -> bool:
        try:
            full_path = self._get_full_path(path)
            full_path.parent.mkdir(parents=True, exist_ok=True)

            if isinstance(content, str):
                async with aiofiles.open(full_path, 'w', encoding='utf-8') as f:
                    await f.write(content)
            else:
                async with aiofiles.open(full_path, 'wb') as f:
                    await f.write(content)
            return True
        except (OSError, ValueError) as e:
            logger.error(f"Error saving file {path}: {e}", exc_info=True)
            return False

    async def load(self, path: str) -> Optional[bytes]:
        try:
            full_path = self._get_full_path(path)
            if not full_path.is_file():
                return None

            async with aiofiles.open(full_path, 'rb') as f:
                return await f.read()
        except (OSError, ValueError) as e:
            logger.error(f"Error loading file {path}: {e}", exc_info=True)
            return None

    async def exists(self, path: str) -> bool:
        try:
            return self._get_full_path(path).is_file()
        except ValueError:
            return False

    async def list(
        self,
        path: str,
        pattern: Optional[str] = None,
        recursive: bool = False
    ) -> List[str]:
        try:
            full_path = self._get_full_path(path)
            if not full_path.is_dir():
                return []

            glob_pattern = pattern or "*"
            candidates = full_path.rglob(glob_pattern) if recursive else full_path.glob(glob_pattern)
            return sorted(
                candidate.relative_to(self.base_dir).as_posix()
                for candidate in candidates
                if candidate.is_file()
            )
        except (OSError, ValueError) as e:
            logger.error(f"Error listing files in {path}: {e}", exc_info=True)
            return []
