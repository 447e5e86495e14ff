import threading


class OperationCancelledError(Exception):
    """Cooperative abort; not an error from the caller's point of view."""


class CancellationToken:
    @property
    def is_cancellation_requested(self) -> bool:
        raise NotImplementedError

    def throw_if_cancellation_requested(self) -> None:
        if self.is_cancellation_requested:
            raise OperationCancelledError("The operation was cancelled.")


class ManualCancellationToken(CancellationToken):
    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancellation_requested(self) -> bool:
        return self._event.is_set()
