from dataclasses import dataclass

from catalog_io.core.config import Settings, settings


@dataclass(frozen=True)
class ImportConfiguration:
    delimiter: str = ";"
    encoding: str = "utf-8"
    page_size: int = 50

    @classmethod
    def from_settings(cls, s: Settings = settings) -> "ImportConfiguration":
        return cls(delimiter=s.IMPORT_DELIMITER, encoding=s.IMPORT_ENCODING, page_size=s.IMPORT_PAGE_SIZE)
