from dataclasses import dataclass


@dataclass
class ImportRowError:
    row: int
    raw_row: str
    error: str


class UnknownDataTypeError(ValueError):
    def __init__(self, data_type: str):
        self.data_type = data_type
        super().__init__(f"Not allowed argument value in field data_type: {data_type!r}")


class ImportErrorsContext:
    """Errors collected while one page is processed, at most one per row.

    Drained after every page: the orchestrator writes ``ordered()`` to the
    report and calls ``clear()``.
    """

    def __init__(self):
        self._errors: dict[int, ImportRowError] = {}

    @property
    def errors(self) -> list[ImportRowError]:
        return list(self._errors.values())

    def contains_row(self, row: int) -> bool:
        return row in self._errors

    def add(self, error: ImportRowError) -> bool:
        """Store ``error``; merge into the existing entry for its row. True if the row is new."""
        existing = self._errors.get(error.row)
        if existing is not None:
            existing.error = f"{existing.error} {error.error}"
            return False
        self._errors[error.row] = error
        return True

    def ordered(self) -> list[ImportRowError]:
        return sorted(self._errors.values(), key=lambda e: e.row)

    def clear(self) -> None:
        self._errors.clear()

    def __len__(self) -> int:
        return len(self._errors)
