"""JSON-file session store so interrupted sessions survive a process restart."""
import hashlib
import json
import os
import tempfile
import threading

from ..core.logging_utils import log_event
from ..questionnaire.state import SessionState
from .base import BaseSessionStore


class JSONFileSessionStore(BaseSessionStore):
    """One ``<sha256(session_id)>.json`` file per session under ``directory``."""

    def __init__(self, directory: str) -> None:
        self.directory = directory
        os.makedirs(directory, exist_ok=True)
        self._lock = threading.Lock()

    def _path(self, session_id: str) -> str:
        digest = hashlib.sha256(session_id.encode("utf-8")).hexdigest()
        return os.path.join(self.directory, f"{digest}.json")

    def load(self, session_id: str) -> SessionState | None:
        path = self._path(session_id)
        with self._lock:
            try:
                with open(path, "r", encoding="utf-8") as fh:
                    payload = json.load(fh)
                return SessionState.from_dict(payload)
            except FileNotFoundError:
                return None
            except ValueError as err:
                # Covers JSONDecodeError and payloads the sequencer could not have written.
                log_event(
                    component="session_store",
                    event="session_file_corrupt",
                    level="WARNING",
                    session_id=session_id,
                    details={"path": path, "error": str(err)},
                )
                return None

    def save(self, session_id: str, state: SessionState) -> None:
        path = self._path(session_id)
        payload = state.to_dict()
        payload["session_id"] = session_id
        with self._lock:
            fd, tmp_path = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(payload, fh, ensure_ascii=True)
                os.replace(tmp_path, path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise

    def delete(self, session_id: str) -> bool:
        path = self._path(session_id)
        with self._lock:
            try:
                os.remove(path)
            except FileNotFoundError:
                return False
        return True
