from pydantic import BaseModel, Field


class ExportDataRequest(BaseModel):
    data_type: str
    object_ids: list[str] | None = None


class ExportProgressInfo(BaseModel):
    total_count: int = 0
    processed_count: int = 0
    description: str | None = None
    errors: list[str] = Field(default_factory=list)
    file_url: str | None = None
