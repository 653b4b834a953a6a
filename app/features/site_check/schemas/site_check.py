from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

CheckStatus = Literal["success", "warning", "error"]


def utc_timestamp() -> str:
    """ISO-8601 UTC instant with millisecond precision, e.g. 2025-01-01T00:00:00.000Z"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SiteCheckIn(BaseModel):
    url: Optional[str] = None


class SiteCheckReport(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str
    status: CheckStatus
    status_code: Optional[int] = Field(default=None, alias="statusCode")
    response_time: Optional[int] = Field(default=None, alias="responseTime", ge=0)
    issues: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    seo_score: Optional[int] = Field(default=None, alias="seoScore", ge=0, le=100)
    performance_score: Optional[int] = Field(default=None, alias="performanceScore", ge=0, le=100)
    security_score: Optional[int] = Field(default=None, alias="securityScore", ge=0, le=100)
    timestamp: str = Field(default_factory=utc_timestamp)

    def to_response(self) -> Dict[str, Any]:
        """JSON body for the API: camelCase keys, absent optionals omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)
