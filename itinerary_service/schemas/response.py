"""Response schemas for API endpoints"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class Activity(BaseModel):
    """Activity for a specific time slot"""
    model_config = {"extra": "allow"}

    time: str = Field(..., min_length=1, description="Time of activity (e.g., 'Morning', 'Afternoon', 'Evening')")
    description: str = Field(..., min_length=1, description="What to do, with practical details")
    location: str = Field(..., min_length=1, description="Exact location name")


class DayPlan(BaseModel):
    """Plan for a single day"""
    model_config = {"extra": "allow"}

    day: int = Field(..., ge=1, description="Day number (1, 2, 3, etc.)")
    theme: str = Field(..., min_length=1, description="Theme of the day")
    activities: List[Activity] = Field(..., description="Activities scheduled for this day, in order")


class JobCreatedResponse(BaseModel):
    """Response for job creation"""
    jobId: str = Field(..., description="Identifier used to poll /status")


class HealthResponse(BaseModel):
    """Response for /health"""
    status: str = Field(..., description="Always 'healthy' when the process is serving")
    timestamp: datetime = Field(..., description="Server time (UTC)")
    version: str = Field(..., description="Application version")


class ErrorResponse(BaseModel):
    """Error response"""
    error: str = Field(..., description="Error message")
    details: Optional[List[str]] = Field(None, description="Individual validation violations")
