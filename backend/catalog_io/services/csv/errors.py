from catalog_io.core.constants import (
    BAD_DATA_MESSAGE,
    INVALID_ENCODING_MESSAGE,
    MISSED_COLUMNS_MESSAGE,
    REQUIRED_VALUES_MESSAGE,
    VALIDATION_MESSAGES,
    ValidationErrors,
)


class CsvFormatError(Exception):
    """The stream cannot be read as a delimited file with a header."""


class HeaderValidationError(CsvFormatError):
    def __init__(self, missing_columns: list[str]):
        self.missing_columns = missing_columns
        names = ", ".join(f"'{c}'" for c in missing_columns)
        super().__init__(f"Header with name(s) {names} was not found.")


class RowDecodeError(Exception):
    """A single row could not be decoded; never fatal for the import."""

    def __init__(self, row: int, raw_record: str):
        self.row = row
        self.raw_record = raw_record
        super().__init__(self.message)

    @property
    def message(self) -> str:
        raise NotImplementedError


class BadDataError(RowDecodeError):
    @property
    def message(self) -> str:
        return BAD_DATA_MESSAGE


class InvalidEncodingError(RowDecodeError):
    def __init__(self, row: int, raw_record: str, encoding: str):
        self.encoding = encoding
        super().__init__(row, raw_record)

    @property
    def message(self) -> str:
        return INVALID_ENCODING_MESSAGE.format(self.encoding)


class MissingFieldError(RowDecodeError):
    def __init__(self, row: int, raw_record: str, columns: list[str]):
        self.columns = columns
        super().__init__(row, raw_record)

    @property
    def message(self) -> str:
        return MISSED_COLUMNS_MESSAGE.format(", ".join(self.columns))


class RequiredValueError(RowDecodeError):
    def __init__(self, row: int, raw_record: str, columns: list[str]):
        self.columns = columns
        super().__init__(row, raw_record)

    @property
    def message(self) -> str:
        if len(self.columns) > 1:
            return REQUIRED_VALUES_MESSAGE.format(", ".join(self.columns))
        return VALIDATION_MESSAGES[ValidationErrors.MISSING_REQUIRED_VALUES].format(self.columns[0])


class InvalidValueError(RowDecodeError):
    def __init__(self, row: int, raw_record: str, column: str):
        self.column = column
        super().__init__(row, raw_record)

    @property
    def message(self) -> str:
        return VALIDATION_MESSAGES[ValidationErrors.INVALID_VALUE].format(self.column)
