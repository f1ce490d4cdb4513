"""文件相关请求/响应模型。"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from app.packages.catalog.api.v1.schemas.common import ResponseEnvelope


class FileOut(BaseModel):
    id: int
    path: str
    type: str
    parent_id: Optional[int] = None
    size: Optional[int] = None
    last_modified: Optional[str] = None
    subtype: str
    name: Optional[str] = None


class MoveBody(BaseModel):
    fileId: int
    newFolder: str = Field(..., min_length=1)


class MoveMultipleBody(BaseModel):
    fileIds: list[int] = Field(default_factory=list)
    newFolder: str = Field(..., min_length=1)


class MoveResult(BaseModel):
    fileId: int
    status: str
    newPath: Optional[str] = None
    message: Optional[str] = None


class ScanSummaryOut(BaseModel):
    full_sync: bool
    indexed: int
    updated: int
    errors: int
    quarantined: list[str]
    stale_removed: int
    orphans_removed: int
    duration_ms: int
    ok: bool


FileListResponse = ResponseEnvelope[list[FileOut]]
FileDetailResponse = ResponseEnvelope[FileOut]
MoveMultipleResponse = ResponseEnvelope[list[MoveResult]]
ScanResponse = ResponseEnvelope[ScanSummaryOut]
StatusResponse = ResponseEnvelope[dict[str, Any]]
