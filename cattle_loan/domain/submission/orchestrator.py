"""
Submission orchestrator for the loan application form.

This module sequences validate -> store -> reset-or-report and guards
against a second submission starting while one is in flight.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional

from cattle_loan.config.logging_config import get_logger
from cattle_loan.data.base_repository import ApplicationRepository
from cattle_loan.data.models import SERVER_TIMESTAMP, ApplicationStatus, SubmissionRecord
from cattle_loan.domain.application.form_state import FormState
from cattle_loan.domain.application.validator import ValidationResult, validate
from cattle_loan.events.event_interface import Event, EventEmitter, EventType
from cattle_loan.utils.error_handling import PersistenceError

logger = get_logger(__name__)

SUCCESS_MESSAGE = "Application submitted successfully!"
FAILURE_MESSAGE = "Failed to submit application. Please try again."


class SubmissionState(Enum):
    """Possible states of the submission workflow."""
    
    IDLE = auto()
    VALIDATING = auto()
    SUBMITTING = auto()


@dataclass(frozen=True)
class SubmissionOutcome:
    """Result of one submission attempt."""
    
    ok: bool
    message: str
    document_id: Optional[str] = None
    error: Optional[PersistenceError] = None
    validation: Optional[ValidationResult] = None
    
    @property
    def validation_failed(self) -> bool:
        return self.validation is not None


class SubmissionOrchestrator:
    """
    Coordinates validating and storing the form's application.
    
    This class is responsible for:
    - Running the validator on a snapshot of the form
    - Writing valid applications through the repository
    - Resetting the form after a successful write, keeping it otherwise
    - Ignoring ``submit`` calls while an attempt is in flight
    """
    
    def __init__(
        self,
        form: FormState,
        repository: ApplicationRepository,
        emitter: Optional[EventEmitter] = None,
    ):
        """
        Initialize the orchestrator.
        
        Args:
            form: Form whose application is submitted
            repository: Storage the application is written to
            emitter: Event emitter for outcomes, defaults to one private to this orchestrator
        """
        self.form = form
        self.repository = repository
        self.emitter = emitter if emitter is not None else EventEmitter()
        self._state = SubmissionState.IDLE
    
    @property
    def state(self) -> SubmissionState:
        return self._state
    
    @property
    def is_busy(self) -> bool:
        """Whether a submission is in flight; the submit control is disabled while True."""
        return self._state is not SubmissionState.IDLE
    
    def on_validation_error(self, handler: Callable[[str], None]) -> None:
        """
        Register a handler receiving the reason a submission was rejected.
        
        Args:
            handler: Called with the user-facing reason
        """
        self.emitter.on(EventType.VALIDATION_FAILED, lambda event: handler(event.data["reason"]))
    
    def on_submit_result(self, handler: Callable[[bool], None]) -> None:
        """
        Register a handler receiving whether a storage write succeeded.
        
        Args:
            handler: Called with True on success, False on failure
        """
        self.emitter.on(EventType.SUBMISSION_COMPLETED, lambda event: handler(event.data["ok"]))
    
    async def submit(self) -> Optional[SubmissionOutcome]:
        """
        Validate the current application and store it.
        
        Outcome notifications are emitted after the workflow is back in
        ``IDLE``.
        
        Returns:
            Optional[SubmissionOutcome]: The outcome, or None if the call was
            ignored because a submission is already in flight
        """
        if self.is_busy:
            logger.warning(f"Ignoring submit while {self._state.name}")
            return None
        
        try:
            outcome = await self._attempt()
        finally:
            self._set_state(SubmissionState.IDLE)
        
        self._notify(outcome)
        return outcome
    
    async def _attempt(self) -> SubmissionOutcome:
        self._set_state(SubmissionState.VALIDATING)
        application = self.form.application
        result = validate(application)
        if not result.is_valid:
            logger.info(f"Application rejected: {result.reason}")
            return SubmissionOutcome(ok=False, message=result.reason, validation=result)
        
        self._set_state(SubmissionState.SUBMITTING)
        record = SubmissionRecord(
            application=application,
            status=ApplicationStatus.PENDING,
            created_at=SERVER_TIMESTAMP
        )
        try:
            document_id = await self.repository.create(record)
        except Exception as e:
            error = PersistenceError("Failed to store application", cause=e)
            logger.error(f"Submission failed: {error}")
            return SubmissionOutcome(ok=False, message=FAILURE_MESSAGE, error=error)
        
        logger.info(f"Application stored as {document_id}")
        self.form.reset()
        return SubmissionOutcome(ok=True, message=SUCCESS_MESSAGE, document_id=document_id)
    
    def _notify(self, outcome: SubmissionOutcome) -> None:
        if outcome.validation is not None:
            self.emitter.emit(Event(
                type=EventType.VALIDATION_FAILED,
                data={
                    "reason": outcome.message,
                    "rule": outcome.validation.rule,
                    "cattle_index": outcome.validation.cattle_index,
                }
            ))
            return
        
        if outcome.ok:
            self.emitter.emit(Event(type=EventType.FORM_RESET))
        self.emitter.emit(Event(
            type=EventType.SUBMISSION_COMPLETED,
            data={"ok": outcome.ok, "document_id": outcome.document_id, "message": outcome.message}
        ))
    
    def _set_state(self, state: SubmissionState) -> None:
        if state is self._state:
            return
        logger.debug(f"Submission state {self._state.name} -> {state.name}")
        self._state = state
        self.emitter.emit(Event(type=EventType.SUBMISSION_STATE_CHANGED, data={"state": state}))
