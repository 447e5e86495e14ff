import datetime as dt
from pydantic import BaseModel, Field


class ImportDataRequest(BaseModel):
    file_path: str
    data_type: str


class ImportProgressInfo(BaseModel):
    total_count: int = 0
    processed_count: int = 0
    error_count: int = 0
    created_count: int = 0
    updated_count: int = 0
    description: str | None = None
    errors: list[str] = Field(default_factory=list)
    report_url: str | None = None


class ImportValidationError(BaseModel):
    error_code: str
    parameters: dict[str, str] = Field(default_factory=dict)


class ImportValidationResult(BaseModel):
    file_path: str
    errors: list[ImportValidationError]


class ImportRunCreate(BaseModel):
    file_path: str
    data_type: str


class ImportRunOut(BaseModel):
    id: int
    file_path: str
    data_type: str
    status: str
    description: str | None
    total_count: int
    processed_count: int
    error_count: int
    created_count: int
    updated_count: int
    errors: list[str]
    report_url: str | None
    started_at: dt.datetime | None
    finished_at: dt.datetime | None


class UploadOut(BaseModel):
    file_path: str
    size: int
