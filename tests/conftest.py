"""Shared fixtures: environment, in-memory job store and a fake completion API."""

from __future__ import annotations

import copy
import json
import os

# Settings are read at import time
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("OPENAI_API_KEY", "sk-test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from itinerary_service.agents.itinerary_agent import ItineraryJobProcessor  # noqa: E402
from itinerary_service.main import app, get_job_processor, get_store, rate_limiter  # noqa: E402
from itinerary_service.utils.database import DatabaseError, utc_now  # noqa: E402


class FakeStore:
  """In-memory stand-in for ItineraryStore with the same update rules."""

  def __init__(self) -> None:
    self.records: dict[str, dict] = {}
    self.fail_insert = False
    self.fail_finalize = False
    self.fail_reads = False

  async def insert_job(self, job_id: str, destination: str, duration_days: int) -> dict:
    if self.fail_insert:
      raise DatabaseError(f"Failed to create job {job_id}")
    record = {"job_id": job_id, "status": "processing", "destination": destination, "duration_days": duration_days, "created_at": utc_now(), "completed_at": None, "itinerary": None, "error": None}
    self.records[job_id] = record
    return copy.deepcopy(record)

  async def get_job(self, job_id: str) -> dict | None:
    if self.fail_reads:
      raise DatabaseError("connection reset")
    record = self.records.get(job_id)
    return copy.deepcopy(record) if record else None

  async def _finalize(self, job_id: str, values: dict) -> dict:
    record = self.records.get(job_id)
    if self.fail_finalize or record is None or record["status"] != "processing":
      raise DatabaseError(f"No processing job {job_id} to update")
    record.update(values)
    return copy.deepcopy(record)

  async def mark_job_completed(self, job_id: str, itinerary: list) -> dict:
    return await self._finalize(job_id, {"status": "completed", "itinerary": itinerary, "completed_at": utc_now()})

  async def mark_job_failed(self, job_id: str, error: str) -> dict:
    return await self._finalize(job_id, {"status": "failed", "error": error, "completed_at": utc_now()})


class FakeCompletion:
  """Completion API double returning canned text or raising a canned error."""

  def __init__(self) -> None:
    self.response = ""
    self.error: Exception | None = None
    self.prompts: list[str] = []
    self.closed = 0
    self.on_complete = None

  async def complete(self, prompt: str, timeout_seconds: float | None = None) -> str:
    self.prompts.append(prompt)
    if self.on_complete is not None:
      await self.on_complete()
    if self.error is not None:
      raise self.error
    return self.response

  async def close(self) -> None:
    self.closed += 1


def build_itinerary(days: int, activities_per_day: int = 3) -> dict:
  slots = ["Morning", "Afternoon", "Evening"]
  return {
    "itinerary": [
      {
        "day": day,
        "theme": f"Theme for day {day}",
        "activities": [{"time": slots[i % 3], "description": f"Activity {i + 1} on day {day}", "location": f"Place {day}-{i + 1}"} for i in range(activities_per_day)],
      }
      for day in range(1, days + 1)
    ]
  }


@pytest.fixture
def anyio_backend():
  return "asyncio"


@pytest.fixture
def itinerary_factory():
  return build_itinerary


@pytest.fixture
def fake_store() -> FakeStore:
  return FakeStore()


@pytest.fixture
def fake_completion() -> FakeCompletion:
  completion = FakeCompletion()
  completion.response = json.dumps(build_itinerary(5))
  return completion


@pytest.fixture
def processor(fake_store, fake_completion) -> ItineraryJobProcessor:
  return ItineraryJobProcessor(store=fake_store, completion_factory=lambda: fake_completion)


@pytest.fixture
def client(fake_store, processor):
  app.dependency_overrides[get_store] = lambda: fake_store
  app.dependency_overrides[get_job_processor] = lambda: processor
  rate_limiter.reset()
  try:
    with TestClient(app) as test_client:
      yield test_client
  finally:
    app.dependency_overrides.clear()
    rate_limiter.reset()
