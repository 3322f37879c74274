"""Session controller: the single entry point for one inbound screening turn."""
from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

from ..core.errors import IncompleteAnswerSet, SessionBusyError, ValidationRejected
from ..core.logging_utils import log_event, log_latency_event, set_session_id, set_turn_id
from .decision import TriageDecision, evaluate_outcome
from .sequencer import Prompt, StepSequencer
from .state import SequencerStatus

if TYPE_CHECKING:
    from ..storage.base import BaseSessionStore

_COMPONENT = "session_controller"


@dataclass(frozen=True)
class InboundEvent:
    session_id: str
    value: str
    event_id: str | None = None


@dataclass(frozen=True)
class TurnResult:
    """What one turn produced.

    While the interview is running ``prompt`` is set. On completion
    ``decision`` is set; its outcome may be NONE, in which case nothing is
    emitted to the user.
    """

    session_id: str
    status: SequencerStatus
    prompt: Prompt | None = None
    decision: TriageDecision | None = None
    rejected: ValidationRejected | None = None
    started: bool = False
    duplicate: bool = False


@dataclass
class _LockEntry:
    lock: threading.Lock
    users: int = 0


class SessionController:
    """Serialises turns per session and wires sequencer, store and decision engine."""

    def __init__(
        self,
        store: "BaseSessionStore",
        sequencer: StepSequencer | None = None,
        lock_timeout_s: float = 5.0,
    ) -> None:
        self.store = store
        self.sequencer = sequencer or StepSequencer()
        self.lock_timeout_s = lock_timeout_s
        self._locks: dict[str, _LockEntry] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _session_turn(self, session_id: str) -> Iterator[None]:
        with self._locks_guard:
            entry = self._locks.get(session_id)
            if entry is None:
                entry = _LockEntry(lock=threading.Lock())
                self._locks[session_id] = entry
            entry.users += 1
        try:
            if not entry.lock.acquire(timeout=self.lock_timeout_s):
                raise SessionBusyError(session_id, self.lock_timeout_s)
            try:
                yield
            finally:
                entry.lock.release()
        finally:
            with self._locks_guard:
                entry.users -= 1
                if entry.users == 0:
                    self._locks.pop(session_id, None)

    def handle_turn(self, event: InboundEvent) -> TurnResult:
        """Process one inbound message for its session."""
        started_at = time.perf_counter()
        set_session_id(event.session_id)
        set_turn_id(None)
        status = "failed"
        try:
            with self._session_turn(event.session_id):
                result = self._run_turn(event)
            status = "rejected" if result.rejected else result.status.value
            return result
        finally:
            log_latency_event(
                component=_COMPONENT,
                event="turn_processed",
                duration_s=time.perf_counter() - started_at,
                status=status,
            )

    def _run_turn(self, event: InboundEvent) -> TurnResult:
        state = self.store.load(event.session_id)

        if state is None:
            result = self.sequencer.start()
            result.state.last_event_id = event.event_id
            self.store.save(event.session_id, result.state)
            log_event(component=_COMPONENT, event="session_started")
            return TurnResult(
                session_id=event.session_id,
                status=result.status,
                prompt=result.prompt,
                started=True,
            )

        set_turn_id(state.index + 1)

        if event.event_id is not None and event.event_id == state.last_event_id:
            log_event(
                component=_COMPONENT,
                event="duplicate_event_ignored",
                details={"event_id": event.event_id},
            )
            return TurnResult(
                session_id=event.session_id,
                status=state.status,
                prompt=self.sequencer.current_prompt(state),
                duplicate=True,
            )

        result = self.sequencer.resume(state, event.value)

        if result.rejected is not None:
            log_event(
                component=_COMPONENT,
                event="answer_rejected",
                level="WARNING",
                details={
                    "question_key": result.rejected.question_key,
                    "value": result.rejected.value,
                },
            )
            return TurnResult(
                session_id=event.session_id,
                status=result.status,
                prompt=result.prompt,
                rejected=result.rejected,
            )

        state = result.state
        state.last_event_id = event.event_id
        answered_key = list(state.answers)[-1]
        log_event(
            component=_COMPONENT,
            event="answer_recorded",
            details={"question_key": answered_key, "value": state.answers[answered_key]},
        )

        if result.status is not SequencerStatus.COMPLETE:
            self.store.save(event.session_id, state)
            return TurnResult(
                session_id=event.session_id,
                status=result.status,
                prompt=result.prompt,
            )

        try:
            decision = evaluate_outcome(result.answers)
        except IncompleteAnswerSet as err:
            log_event(
                component=_COMPONENT,
                event="contract_violation",
                level="ERROR",
                details={
                    "error": str(err),
                    "missing": list(err.missing),
                    "invalid": list(err.invalid),
                },
            )
            raise

        self.store.delete(event.session_id)
        log_event(
            component=_COMPONENT,
            event="outcome_emitted" if decision.emits_message else "outcome_silent",
            details={"outcome": decision.outcome.value, "rule_id": decision.rule_id},
        )
        log_event(component=_COMPONENT, event="session_ended")
        return TurnResult(
            session_id=event.session_id,
            status=SequencerStatus.COMPLETE,
            decision=decision,
        )

    def reset(self, session_id: str) -> bool:
        """Abandon a session. Returns True if one was active."""
        with self._session_turn(session_id):
            removed = self.store.delete(session_id)
        if removed:
            log_event(component=_COMPONENT, event="session_reset", session_id=session_id)
        return removed
