"""Tracking of in-flight AI requests."""

import logging
from dataclasses import dataclass, field

from kitchen_wiz.domain.requests import AIOperation, RequestState, RequestStatus

_logger = logging.getLogger(__name__)


@dataclass
class RequestTracker:
    """Per-operation request state with monotonically increasing tokens.

    ``begin`` issues a new token and marks the operation pending. A resolution
    carrying a token older than the latest one issued for the same operation is
    stale: its status update is ignored and callers must not apply its data.
    """

    _states: dict[AIOperation, RequestState] = field(default_factory=dict)
    _counter: int = 0

    def begin(self, operation: AIOperation) -> int:
        """Mark an operation pending and return its request token."""
        self._counter += 1
        self._states[operation] = RequestState(
            status=RequestStatus.PENDING, token=self._counter
        )
        return self._counter

    def is_current(self, operation: AIOperation, token: int) -> bool:
        """Return True when token belongs to the latest request of operation."""
        return self.state(operation).token == token

    def succeed(self, operation: AIOperation, token: int) -> bool:
        """Record success; return False when the resolution is stale."""
        return self._resolve(operation, token, RequestStatus.SUCCEEDED, None)

    def fail(self, operation: AIOperation, token: int, error: str) -> bool:
        """Record failure; return False when the resolution is stale."""
        return self._resolve(operation, token, RequestStatus.FAILED, error)

    def state(self, operation: AIOperation) -> RequestState:
        """Return the current state of an operation."""
        return self._states.get(operation, RequestState())

    def snapshot(self) -> dict[str, RequestState]:
        """Return the state of every operation."""
        return {operation.value: self.state(operation) for operation in AIOperation}

    def _resolve(
        self,
        operation: AIOperation,
        token: int,
        status: RequestStatus,
        error: str | None,
    ) -> bool:
        if not self.is_current(operation, token):
            _logger.info(
                "Discarding stale %s result: token=%s latest=%s",
                operation.value,
                token,
                self.state(operation).token,
            )
            return False
        self._states[operation] = RequestState(status=status, token=token, error=error)
        return True
