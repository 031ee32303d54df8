"""Directory-scoped persistence for recipe text files.

Every operation is best-effort: I/O failures are logged and surface as an
empty/default return value instead of an exception.
"""

from __future__ import annotations

import logging
import os
import tempfile
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from src.codec.markdown import encode
from src.models.templates import SAMPLE_FILE_NAME, new_recipe_document, sample_document
from src.settings import settings

logger = logging.getLogger(__name__)

RECIPE_SUFFIX = ".md"


class RecipeFileStore:
    def __init__(self, directory: str | os.PathLike | None = None):
        base = directory if directory is not None else settings.RECIPES_DIR
        self.directory = Path(base).expanduser()

    def ensure_directory(self) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError:
            logger.warning("Could not create recipe directory %s", self.directory, exc_info=True)

    def file_path(self, name: str) -> Path:
        return self.directory / name

    def list_files(self) -> List[str]:
        """Names of recipe files in the directory (unordered)."""
        try:
            entries = list(self.directory.iterdir())
        except OSError:
            logger.debug("Recipe directory %s not readable; listing nothing", self.directory)
            return []
        return [p.name for p in entries if p.suffix.lower() == RECIPE_SUFFIX and p.is_file()]

    def read(self, name: str) -> str:
        path = self.file_path(name)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.debug("read: %s unavailable; returning empty text", path)
            return ""

    def write(self, name: str, text: str) -> bool:
        """Atomically replace `name` with `text` (temp file + rename)."""
        path = self.file_path(name)
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.directory,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as fh:
                tmp_name = fh.name
                fh.write(text)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, path)
        except (OSError, UnicodeError):
            logger.exception("Failed to write recipe %s", path)
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            return False
        logger.debug("Wrote %d chars to %s", len(text), path)
        return True

    def modification_time(self, name: str) -> Optional[datetime]:
        try:
            mtime = self.file_path(name).stat().st_mtime
        except OSError:
            return None
        return datetime.fromtimestamp(mtime, tz=timezone.utc)

    def create_new(self, title: str) -> str:
        """Write a scaffold recipe titled `title` under a fresh unique name."""
        self.ensure_directory()
        name = f"recipe-{uuid.uuid4()}{RECIPE_SUFFIX}"
        self.write(name, encode(new_recipe_document(title)))
        logger.info("Created recipe %s (%s)", name, title)
        return name

    def bootstrap_sample_if_needed(self) -> Optional[str]:
        """Write the sample recipe only when the directory holds no recipes."""
        self.ensure_directory()
        if self.list_files():
            return None
        self.write(SAMPLE_FILE_NAME, encode(sample_document()))
        logger.info("Bootstrapped sample recipe in %s", self.directory)
        return SAMPLE_FILE_NAME
