"""Supabase database utility functions"""
import asyncio
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List
from supabase import create_client, Client
from ..config import settings
from ..models.itinerary import JobStatus

JOB_COLUMNS = "job_id, status, destination, duration_days, created_at, completed_at, itinerary, error"


class DatabaseError(Exception):
    """Raised when a write is not acknowledged by the database"""


class SupabaseClient:
    """
    Singleton Supabase client wrapper.

    Two clients are kept: the anon key for public reads and the
    service key for job writes. Row level security decides what each may do.
    """
    _read_instance: Optional[Client] = None
    _write_instance: Optional[Client] = None

    @classmethod
    def get_read_client(cls) -> Client:
        """Get or create the read-level Supabase client"""
        if cls._read_instance is None:
            cls._read_instance = create_client(
                supabase_url=settings.supabase_url,
                supabase_key=settings.supabase_anon_key
            )
        return cls._read_instance

    @classmethod
    def get_write_client(cls) -> Client:
        """Get or create the write-level Supabase client"""
        if cls._write_instance is None:
            cls._write_instance = create_client(
                supabase_url=settings.supabase_url,
                supabase_key=settings.supabase_service_key
            )
        return cls._write_instance


def utc_now() -> str:
    """Current time as an ISO 8601 UTC timestamp"""
    return datetime.now(timezone.utc).isoformat()


class ItineraryStore:
    """
    Job record operations on the itineraries table.

    The Supabase client is synchronous, so every query runs in a worker
    thread. No timeout is imposed on store calls.
    """

    def __init__(self, table: Optional[str] = None):
        self.table = table or settings.itineraries_table

    async def insert_job(self, job_id: str, destination: str, duration_days: int) -> Dict[str, Any]:
        """
        Create a new job record in processing state

        Args:
            job_id: Job UUID
            destination: Trip destination
            duration_days: Trip length in days

        Returns:
            Created job record

        Raises:
            Exception: If the insert fails
        """
        client = SupabaseClient.get_write_client()
        query = client.table(self.table).insert({
            'job_id': job_id,
            'status': JobStatus.PROCESSING.value,
            'destination': destination,
            'duration_days': duration_days,
            'created_at': utc_now()
        })
        result = await asyncio.to_thread(query.execute)

        if not result.data:
            raise DatabaseError(f"Failed to create job {job_id}")

        return result.data[0]

    async def get_job(self, job_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a job record by ID

        Args:
            job_id: Job UUID

        Returns:
            Job record if found, None otherwise
        """
        client = SupabaseClient.get_read_client()
        query = client.table(self.table)\
            .select(JOB_COLUMNS)\
            .eq('job_id', job_id)\
            .limit(1)
        result = await asyncio.to_thread(query.execute)

        if result.data:
            return result.data[0]
        return None

    async def _finalize_job(self, job_id: str, values: Dict[str, Any]) -> Dict[str, Any]:
        # Only a processing job may move to a terminal state
        client = SupabaseClient.get_write_client()
        query = client.table(self.table)\
            .update(values)\
            .eq('job_id', job_id)\
            .eq('status', JobStatus.PROCESSING.value)
        result = await asyncio.to_thread(query.execute)

        if not result.data:
            raise DatabaseError(f"No processing job {job_id} to update")

        return result.data[0]

    async def mark_job_completed(self, job_id: str, itinerary: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Store the generated itinerary and mark the job completed

        Args:
            job_id: Job UUID
            itinerary: Validated day plans, in display order

        Returns:
            Updated job record

        Raises:
            Exception: If the update fails or the job is not processing
        """
        return await self._finalize_job(job_id, {
            'status': JobStatus.COMPLETED.value,
            'itinerary': itinerary,
            'completed_at': utc_now()
        })

    async def mark_job_failed(self, job_id: str, error: str) -> Dict[str, Any]:
        """
        Record the failure reason and mark the job failed

        Args:
            job_id: Job UUID
            error: Message of the error that stopped generation

        Returns:
            Updated job record

        Raises:
            Exception: If the update fails or the job is not processing
        """
        return await self._finalize_job(job_id, {
            'status': JobStatus.FAILED.value,
            'error': error,
            'completed_at': utc_now()
        })
