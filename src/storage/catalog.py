"""Catalog of recipes on disk: file name, decoded title, last modification."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel

from src.codec.markdown import decode
from src.storage.file_store import RecipeFileStore

logger = logging.getLogger(__name__)


class RecipeRecord(BaseModel):
    file_name: str
    title: str
    updated_at: datetime


def scan_recipes(store: RecipeFileStore) -> List[RecipeRecord]:
    records: List[RecipeRecord] = []
    for name in sorted(store.list_files()):
        document = decode(store.read(name))
        updated = store.modification_time(name) or datetime.now(timezone.utc)
        records.append(RecipeRecord(file_name=name, title=document.title, updated_at=updated))
    logger.debug("scan_recipes: %d records in %s", len(records), store.directory)
    return records
