"""
Import History

Stores import records, newest first, capped at a fixed number of entries.
"""
import json
from pathlib import Path
from typing import List, Optional

from ledger_import.common.logging_config import get_logger
from ledger_import.common.models import ImportRecord

logger = get_logger(__name__)

MAX_RECORDS = 100
HISTORY_FILE_NAME = "import_history.json"


class ImportHistory:
    """
    Import history backed by a JSON file (or memory when no path is given).

    Unreadable or corrupted storage reads as an empty history; history is
    metadata, so it never fails an import.
    """

    def __init__(self, path: Optional[Path] = None, max_records: int = MAX_RECORDS):
        self.path = Path(path) if path is not None else None
        self.max_records = max_records
        self._memory: List[dict] = []

    def _load(self) -> List[dict]:
        if self.path is None:
            return list(self._memory)
        if not self.path.exists():
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read import history: {e}", path=str(self.path))
            return []
        if not isinstance(data, list):
            logger.warning("Import history is not a list, ignoring", path=str(self.path))
            return []
        return data

    def _save(self, entries: List[dict]) -> None:
        trimmed = entries[:self.max_records]
        if self.path is None:
            self._memory = trimmed
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(trimmed, f, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Failed to save import history: {e}", path=str(self.path))

    def list(self, account_id: Optional[str] = None) -> List[ImportRecord]:
        """Records, most recent first; optionally only those of one account."""
        records = []
        for entry in self._load():
            try:
                record = ImportRecord.from_dict(entry)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed import record: {e}")
                continue
            if account_id is None or record.account_id == account_id:
                records.append(record)
        return records

    def get(self, import_id: str) -> Optional[ImportRecord]:
        for record in self.list():
            if record.id == import_id:
                return record
        return None

    def add(self, record: ImportRecord) -> None:
        entries = self._load()
        entries.insert(0, record.to_dict())
        self._save(entries)

    def remove(self, import_id: str) -> bool:
        entries = self._load()
        kept = [e for e in entries if not (isinstance(e, dict) and e.get('id') == import_id)]
        self._save(kept)
        return len(kept) != len(entries)

    def clear(self) -> None:
        if self.path is None:
            self._memory = []
            return
        try:
            if self.path.exists():
                self.path.unlink()
        except OSError as e:
            logger.error(f"Failed to clear import history: {e}", path=str(self.path))
