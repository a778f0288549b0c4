"""
Pydantic schemas for API request/response models
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import datetime, timezone
from models.base import SourceType, RunStatus


def _utcnow():
    return datetime.now(timezone.utc)


# ============================================================================
# Health Check Schemas
# ============================================================================

class IngestionRunSummary(BaseModel):
    """Latest recorded run for one source"""
    run_id: str
    source_type: SourceType
    status: RunStatus
    started_at: datetime
    completed_at: Optional[datetime] = None
    duration_seconds: Optional[float] = None
    units_discovered: int = 0
    rows_written: int = 0
    rows_failed: int = 0
    batches_failed: int = 0
    error_message: Optional[str] = None

    @classmethod
    def from_run(cls, run):
        return cls(
            run_id=str(run.run_id),
            source_type=run.source_type,
            status=run.status,
            started_at=run.started_at,
            completed_at=run.completed_at,
            duration_seconds=run.duration_seconds,
            units_discovered=run.units_discovered or 0,
            rows_written=run.rows_written or 0,
            rows_failed=run.rows_failed or 0,
            batches_failed=run.batches_failed or 0,
            error_message=run.error_message,
        )

    class Config:
        use_enum_values = True


class HealthCheckResponse(BaseModel):
    """Health check response model"""
    status: str = Field(default="healthy", description="Overall system status: healthy, degraded, unhealthy")
    timestamp: datetime = Field(default_factory=_utcnow)
    database_connected: bool
    latest_runs: List[IngestionRunSummary] = Field(default_factory=list)

    @model_validator(mode="after")
    def determine_status(self):
        """Derive overall status from DB connectivity and the latest runs"""
        if not self.database_connected:
            self.status = "unhealthy"
        elif any(run.status == RunStatus.FAILED.value for run in self.latest_runs):
            self.status = "degraded"
        else:
            self.status = "healthy"
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "timestamp": "2024-01-15T10:30:00Z",
                "database_connected": True,
                "latest_runs": [
                    {
                        "run_id": "550e8400-e29b-41d4-a716-446655440000",
                        "source_type": "games",
                        "status": "success",
                        "started_at": "2024-01-15T10:00:00Z",
                        "completed_at": "2024-01-15T10:04:12Z",
                        "duration_seconds": 252.1,
                        "units_discovered": 16,
                        "rows_written": 184233,
                        "rows_failed": 0,
                        "batches_failed": 0
                    }
                ]
            }
        }
