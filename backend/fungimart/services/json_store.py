"""
JSON Document Store
===================

A tiny "database": a dict of documents kept in memory and mirrored to a
JSON file so they survive restarts.

- Load = read the file once at startup
- Every change = rewrite the whole file (atomic: temp file + rename)
- Last write wins. There are no transactions and no indexes.

Datetimes are stored as ISO strings and turned back into datetimes on load
for the fields listed in DATETIME_FIELDS.

Author: FungiMart Backend Team
"""

import json
import logging
import shutil
import threading
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


class JsonDocumentStore:
    """Base class for the listing store and user directory."""

    # Subclasses list the fields that hold datetimes
    DATETIME_FIELDS: tuple[str, ...] = ()

    # Used in log messages
    COLLECTION_NAME = "documents"

    def __init__(self, db_file: Path):
        self.db_file = Path(db_file)
        self._documents: dict[str, dict] = {}
        # Guards _documents and the shared temp file across threads
        self._lock = threading.RLock()
        self._load_from_file()

    # =========================================================================
    # DATABASE PERSISTENCE
    # =========================================================================

    def _load_from_file(self):
        """Load documents from the JSON file."""
        if not self.db_file.exists():
            logger.info(f"No existing {self.COLLECTION_NAME} database found at {self.db_file}")
            return

        try:
            with open(self.db_file, 'r', encoding='utf-8') as f:
                data = json.load(f)

            for doc_id, doc in data.items():
                try:
                    for field in self.DATETIME_FIELDS:
                        if doc.get(field):
                            doc[field] = datetime.fromisoformat(doc[field])
                    self._documents[doc_id] = doc
                except (ValueError, TypeError, AttributeError) as e:
                    logger.error(f"Error loading {self.COLLECTION_NAME} document {doc_id}: {e}, skipping")
                    continue

            logger.info(f"Loaded {len(self._documents)} {self.COLLECTION_NAME} from {self.db_file}")
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing {self.COLLECTION_NAME} database JSON: {e}")
            # Backup corrupted file
            backup_path = self.db_file.with_suffix('.json.backup')
            try:
                shutil.copy2(self.db_file, backup_path)
                logger.warning(f"Corrupted database backed up to {backup_path}")
            except OSError as backup_err:
                logger.error(f"Failed to backup corrupted database: {backup_err}")
        except OSError as e:
            logger.error(f"Error reading {self.COLLECTION_NAME} database: {e}", exc_info=True)

    def _save_to_file(self):
        """Save documents to the JSON file (atomic write)."""
        with self._lock:
            snapshot = list(self._documents.items())

        data = {}
        for doc_id, doc in snapshot:
            doc_copy = doc.copy()
            for field in self.DATETIME_FIELDS:
                if isinstance(doc_copy.get(field), datetime):
                    doc_copy[field] = doc_copy[field].isoformat()
            data[doc_id] = doc_copy

        try:
            self.db_file.parent.mkdir(parents=True, exist_ok=True)

            # Atomic write: write to temp file first, then rename
            temp_file = self.db_file.with_suffix('.json.tmp')
            with self._lock:
                with open(temp_file, 'w', encoding='utf-8') as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                temp_file.replace(self.db_file)
            logger.debug(f"Saved {len(data)} {self.COLLECTION_NAME} to {self.db_file}")

        except PermissionError as e:
            logger.error(f"Permission denied saving {self.COLLECTION_NAME} database: {e}")
        except OSError as e:
            logger.error(f"OS error saving {self.COLLECTION_NAME} database: {e}")

    # =========================================================================
    # RAW ACCESS
    # =========================================================================

    def _get(self, doc_id: str) -> Optional[dict]:
        return self._documents.get(doc_id)

    def _put(self, doc_id: str, doc: dict):
        with self._lock:
            self._documents[doc_id] = doc
            self._save_to_file()

    def _delete(self, doc_id: str) -> bool:
        with self._lock:
            if doc_id not in self._documents:
                return False
            del self._documents[doc_id]
            self._save_to_file()
        return True

    def _iter(self) -> Iterator[dict]:
        with self._lock:
            return iter(list(self._documents.values()))

    def __len__(self) -> int:
        return len(self._documents)
