"""
Itinerary job processor - runs one generation job in the background

Sequence per job: insert record -> build prompt -> completion call -> parse
-> update record (completed or failed). Nothing is retried. The terminal
update is attempted once; if it fails the job stays "processing".
"""
import logging
from typing import Callable, Optional

from ..tools.completion_api import CompletionAPI
from ..utils.database import ItineraryStore
from .prompts import build_itinerary_prompt
from .response_parser import parse_itinerary_response

logger = logging.getLogger(__name__)


class ItineraryJobProcessor:
    """Drives a job from creation to a terminal state"""

    def __init__(
        self,
        store: ItineraryStore,
        completion_factory: Optional[Callable[[], CompletionAPI]] = None
    ):
        self.store = store
        self.completion_factory = completion_factory or CompletionAPI

    async def _generate(self, destination: str, duration_days: int) -> list:
        """Ask the LLM for an itinerary and return it as plain dicts"""
        prompt = build_itinerary_prompt(destination, duration_days)

        completion = self.completion_factory()
        try:
            raw_text = await completion.complete(prompt)
        finally:
            await completion.close()

        day_plans = parse_itinerary_response(raw_text)
        return [plan.model_dump() for plan in day_plans]

    async def process(self, job_id: str, destination: str, duration_days: int) -> None:
        """
        Run a job end to end. Never raises; every outcome is logged.

        Args:
            job_id: Job UUID minted by the API
            destination: Validated destination
            duration_days: Validated trip length
        """
        try:
            await self.store.insert_job(job_id, destination, duration_days)
        except Exception as e:
            # No record exists, so there is nowhere to report the failure
            logger.error(f"❌ Insert error for job {job_id}: {type(e).__name__}: {e}")
            return

        logger.info(f"Started processing itinerary for {destination}, {duration_days} days (job {job_id})")

        try:
            itinerary = await self._generate(destination, duration_days)
        except Exception as e:
            logger.error(f"❌ Job {job_id} failed: {type(e).__name__}: {e}")
            try:
                await self.store.mark_job_failed(job_id, str(e))
            except Exception:
                logger.exception(f"Could not record failure for job {job_id}; job left processing")
            return

        try:
            await self.store.mark_job_completed(job_id, itinerary)
        except Exception:
            logger.exception(f"Failed to save completed itinerary for job {job_id}; job left processing")
            return

        logger.info(f"✅ Job {job_id} completed successfully ({len(itinerary)} days)")
