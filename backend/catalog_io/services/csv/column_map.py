from dataclasses import dataclass

from catalog_io.schemas.records import CsvRecord


@dataclass(frozen=True)
class ColumnSpec:
    field: str
    header: str
    required: bool


class ColumnMap:
    """Binds CSV header names to record fields.

    Built from the record model (alias = header, no default = required);
    ``overrides`` renames the header expected for a field.
    """

    def __init__(self, record_type: type[CsvRecord], columns: list[ColumnSpec]):
        self.record_type = record_type
        self.columns = columns

    @classmethod
    def for_record(cls, record_type: type[CsvRecord], overrides: dict[str, str] | None = None) -> "ColumnMap":
        overrides = overrides or {}
        columns = []
        for name, field in record_type.model_fields.items():
            header = overrides.get(name) or field.alias or name
            columns.append(ColumnSpec(field=name, header=header, required=field.is_required()))
        return cls(record_type, columns)

    def required_columns(self) -> list[ColumnSpec]:
        return [c for c in self.columns if c.required]

    def missing_columns(self, header: list[str]) -> list[str]:
        names = {h.strip().lower() for h in header}
        return [c.header for c in self.required_columns() if c.header.lower() not in names]

    def positions(self, header: list[str]) -> dict[str, int]:
        """Field name -> index in ``header`` for every mapped column present."""
        index = {}
        for i, h in enumerate(header):
            index.setdefault(h.strip().lower(), i)
        return {c.field: index[c.header.lower()] for c in self.columns if c.header.lower() in index}
