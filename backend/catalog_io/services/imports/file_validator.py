from catalog_io.core.config import Settings, settings
from catalog_io.core.constants import MBYTE, ValidationErrors
from catalog_io.schemas.imports import ImportValidationError
from catalog_io.services.csv.configuration import ImportConfiguration
from catalog_io.services.csv.errors import CsvFormatError
from catalog_io.services.csv.reader import CsvRecordReader
from catalog_io.services.files import LocalBlobStorage
from catalog_io.services.imports.importers import Importer


def _error(code: str, **parameters) -> ImportValidationError:
    return ImportValidationError(error_code=code, parameters={k: str(v) for k, v in parameters.items()})


def validate_import_file(
    blob_storage: LocalBlobStorage,
    file_path: str,
    importer: Importer,
    configuration: ImportConfiguration | None = None,
    limits: Settings = settings,
) -> list[ImportValidationError]:
    """Checks run before an import is queued. Empty list means the file is acceptable."""
    configuration = configuration or ImportConfiguration.from_settings(limits)

    if not blob_storage.exists(file_path):
        return [_error(ValidationErrors.FILE_NOT_EXISTED)]

    max_size = limits.IMPORT_FILE_MAX_SIZE_MB * MBYTE
    if blob_storage.get_size(file_path) > max_size:
        return [_error(ValidationErrors.EXCEEDING_FILE_MAX_SIZE, max_size=max_size)]

    column_map = importer.column_map()
    with blob_storage.open_read(file_path) as stream:
        reader = CsvRecordReader(stream, column_map, configuration)
        try:
            has_header = reader.read_header()
        except CsvFormatError:
            return [_error(ValidationErrors.WRONG_DELIMITER)]
        if not has_header:
            return [_error(ValidationErrors.NO_DATA)]

        if configuration.delimiter not in reader.header_raw:
            return [_error(ValidationErrors.WRONG_DELIMITER)]

        errors = []
        missing = column_map.missing_columns(reader.header)
        if missing:
            errors.append(_error(ValidationErrors.MISSING_REQUIRED_COLUMNS, columns=", ".join(missing)))

        lines = 0
        while reader.read():
            lines += 1

    if lines == 0:
        errors.append(_error(ValidationErrors.NO_DATA))
    elif lines > limits.IMPORT_LIMIT_OF_LINES:
        errors.append(
            _error(
                ValidationErrors.EXCEEDING_LINE_LIMITS,
                max_lines_number=limits.IMPORT_LIMIT_OF_LINES,
                lines_number=lines,
            )
        )
    return errors
