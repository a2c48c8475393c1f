import re
from datetime import datetime, timedelta
from typing import Dict
import threading

from ledger_import.common.config import get_settings
from ledger_import.common.logging_config import get_logger
from ledger_import.core.history import ImportHistory
from ledger_import.core.importer import StatementImporter
from ledger_import.core.ledger import AccountDirectory, TransactionStore

logger = get_logger("api.state")

DEFAULT_SESSION_ID = "default"


# Session-Based State Management
# Each session gets its own ledger, accounts and import history
class AppState:
    def __init__(self, session_id: str):
        self.session_id = session_id
        self.ledger = TransactionStore()
        self.accounts = AccountDirectory()
        self.history = ImportHistory(self._history_path(session_id), get_settings().history_max)
        self.importer = StatementImporter(self.ledger, self.accounts, self.history)
        self.last_accessed = datetime.now()

    @staticmethod
    def _history_path(session_id: str):
        history_dir = get_settings().history_dir
        if history_dir is None:
            return None
        safe_id = re.sub(r"[^A-Za-z0-9_-]", "_", session_id)
        return history_dir / f"{safe_id}.json"

    def touch(self):
        """Update last accessed time"""
        self.last_accessed = datetime.now()


class SessionManager:
    """Manages multiple sessions; idle sessions are dropped on the next access"""

    def __init__(self, session_timeout_hours: int = 4):
        self._sessions: Dict[str, AppState] = {}
        self._lock = threading.Lock()
        self.session_timeout = timedelta(hours=session_timeout_hours)

    def get_or_create_session(self, session_id: str) -> AppState:
        """Get existing session or create a new one"""
        with self._lock:
            self._cleanup_inactive_sessions()
            if session_id not in self._sessions:
                self._sessions[session_id] = AppState(session_id)

            state = self._sessions[session_id]
            state.touch()
            return state

    def _cleanup_inactive_sessions(self) -> int:
        """Remove sessions not accessed within the timeout. Caller holds the lock."""
        now = datetime.now()
        inactive_sessions = [
            sid for sid, state in self._sessions.items()
            if now - state.last_accessed > self.session_timeout
        ]

        for sid in inactive_sessions:
            del self._sessions[sid]
            logger.info("Session expired", session_id=sid)

        return len(inactive_sessions)


session_manager = SessionManager(get_settings().session_timeout_hours)


def get_session_state(request) -> AppState:
    """
    Session state for a request. The middleware stores the session id in
    ``request.state``; requests without one share the default session.
    """
    session_id = getattr(request.state, "session_id", None)
    if not session_id:
        logger.warning("No session_id found in request.state, using default session")
        session_id = DEFAULT_SESSION_ID

    return session_manager.get_or_create_session(session_id)
