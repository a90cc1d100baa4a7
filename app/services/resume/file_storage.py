"""
File Storage Module

Keeps uploaded resume files on local disk. Callers only ever see the opaque
reference returned by `save`; it is what a ResumeReview stores and what
`delete` takes back when the review is removed.

Dependencies:
- pathlib: For filesystem paths.
- loguru: For logging operations.
- dotenv: For environment variable loading.
"""

import os
import time
import uuid
from pathlib import Path
from typing import Protocol, Union
from dotenv import load_dotenv
from loguru import logger

load_dotenv()

DEFAULT_UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")


class FileStorage(Protocol):
    def save(self, content: bytes, original_filename: str) -> str: ...

    def delete(self, file_ref: str) -> bool: ...


class LocalFileStorage:
    """FileStorage writing into a single upload directory."""

    def __init__(self, upload_dir: Union[str, Path] = DEFAULT_UPLOAD_DIR):
        self.upload_dir = Path(upload_dir)
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def _path_for(self, file_ref: str) -> Path:
        # References are bare file names; anything else would escape upload_dir
        if not file_ref or Path(file_ref).name != file_ref:
            raise ValueError(f"Invalid file reference: {file_ref!r}")
        return self.upload_dir / file_ref

    def save(self, content: bytes, original_filename: str) -> str:
        """
        Store an uploaded file under a unique name.

        Args:
            content (bytes): File contents
            original_filename (str): Name supplied by the client, used only
                for its extension

        Returns:
            str: Opaque reference to the stored file
        """
        extension = Path(original_filename or "").suffix.lower()
        file_ref = f"{time.time_ns()}-{uuid.uuid4().hex[:9]}{extension}"
        self._path_for(file_ref).write_bytes(content)
        logger.info(f"Stored upload {original_filename!r} as {file_ref} ({len(content)} bytes)")
        return file_ref

    def delete(self, file_ref: str) -> bool:
        """
        Delete a stored file.

        Returns:
            bool: True if a file was removed, False if it was already gone
        """
        path = self._path_for(file_ref)
        if not path.exists():
            logger.warning(f"Stored file {file_ref} already missing")
            return False
        path.unlink()
        logger.info(f"Deleted resume file: {path}")
        return True
