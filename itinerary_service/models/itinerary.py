"""Itinerary job database model"""
from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, Field

from ..schemas.response import DayPlan


class JobStatus(str, Enum):
    """Job lifecycle states. processing moves to exactly one terminal state."""
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class ItineraryJob(BaseModel):
    """Itinerary job matching Supabase itineraries table schema"""
    job_id: UUID
    status: JobStatus
    destination: str = Field(..., min_length=1)
    duration_days: int = Field(..., ge=1, le=14)
    created_at: datetime
    completed_at: Optional[datetime] = None
    itinerary: Optional[List[DayPlan]] = None
    error: Optional[str] = None

    class Config:
        from_attributes = True
