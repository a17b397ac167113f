"""
Itinerary Job Service - asynchronous AI travel itinerary generator

ARCHITECTURE:
- POST / validates, rate limits and returns a job ID immediately (202)
- Generation runs as a background task after the response is sent
- GET /status reads the job record straight from Supabase
- In-memory rate limiting (10 requests/minute per client, single instance)
- Pydantic validation on all LLM outputs
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, Depends, BackgroundTasks, Query
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .agents.itinerary_agent import ItineraryJobProcessor
from .config import settings
from .middleware.cors import CORSHeadersMiddleware
from .models.itinerary import ItineraryJob
from .schemas.response import JobCreatedResponse, HealthResponse, ErrorResponse
from .utils.database import ItineraryStore
from .utils.rate_limiter import FixedWindowRateLimiter
from .validators.input_validator import validate_create_request

# Configure logging
log_handlers = [logging.StreamHandler()]
if settings.log_file:
    log_handlers.append(logging.FileHandler(settings.log_file, mode='a'))
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=log_handlers
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Itinerary Job Service",
    description="Asynchronous AI-powered travel itinerary generator",
    version=settings.app_version
)

# Process-local limiter: counters are not shared between instances
rate_limiter = FixedWindowRateLimiter(
    max_requests=settings.rate_limit_requests,
    window_seconds=settings.rate_limit_window_seconds
)

# CORS headers on every response, OPTIONS answered directly
app.add_middleware(CORSHeadersMiddleware)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render errors as a top-level JSON body instead of {"detail": ...}"""
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


def get_store() -> ItineraryStore:
    """Dependency providing the job record store"""
    return ItineraryStore()


def get_job_processor(store: ItineraryStore = Depends(get_store)) -> ItineraryJobProcessor:
    """Dependency providing the background job processor"""
    return ItineraryJobProcessor(store=store)


def get_client_key(request: Request) -> str:
    """
    Identify the client for rate limiting

    Prefers proxy-supplied client IP headers, then the socket peer.
    """
    cf_ip = request.headers.get("cf-connecting-ip")
    if cf_ip:
        return cf_ip.strip()

    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    if request.client and request.client.host:
        return request.client.host
    return "unknown"


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint"""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=settings.app_version
    )


@app.get(
    "/status",
    response_model=ItineraryJob,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse}
    }
)
async def get_job_status(
    job_id: Optional[str] = Query(None, alias="jobId"),
    store: ItineraryStore = Depends(get_store)
):
    """
    Get the current state of an itinerary job

    Reads never modify the record, so repeated calls return the same data.

    Args:
        job_id: Job UUID returned by POST /
        store: Job record store

    Returns:
        Full job record

    Raises:
        HTTPException: 400 if jobId is missing, 404 if unknown, 500 on store errors
    """
    if not job_id:
        raise HTTPException(status_code=400, detail={"error": "jobId parameter required"})

    try:
        uuid.UUID(job_id)
    except ValueError:
        # Not a UUID, so it cannot name a job
        raise HTTPException(status_code=404, detail={"error": "Job not found"})

    try:
        record = await store.get_job(job_id)

        if not record:
            raise HTTPException(status_code=404, detail={"error": "Job not found"})

        return ItineraryJob.model_validate(record)

    except HTTPException:
        raise

    except Exception as e:
        logger.error(f"Status lookup failed for job {job_id}: {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail={"error": "Internal server error"})


@app.post(
    "/",
    response_model=JobCreatedResponse,
    status_code=202,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        429: {"model": ErrorResponse}
    }
)
async def create_itinerary_job(
    request: Request,
    background_tasks: BackgroundTasks,
    processor: ItineraryJobProcessor = Depends(get_job_processor)
):
    """
    Start generating an itinerary

    Body: {"destination": str, "durationDays": number}. The job ID is returned
    before generation starts; poll GET /status for the outcome.

    Args:
        request: FastAPI Request object (raw body and client IP)
        background_tasks: Runs the job processor after the response is sent
        processor: Job processor for this request

    Returns:
        JobCreatedResponse with the new job ID

    Raises:
        HTTPException: 413 too large, 429 rate limited, 400 invalid JSON or input
    """
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > settings.max_request_bytes:
        raise HTTPException(status_code=413, detail={"error": "Request too large"})

    body = await request.body()
    if len(body) > settings.max_request_bytes:
        raise HTTPException(status_code=413, detail={"error": "Request too large"})

    client_key = get_client_key(request)
    if not rate_limiter.allow(client_key):
        logger.warning(f"Rate limit exceeded for client {client_key}")
        raise HTTPException(status_code=429, detail={"error": "Rate limit exceeded. Try again later."})

    try:
        request_data = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail={"error": "Invalid JSON"})

    validation_errors = validate_create_request(request_data)
    if validation_errors:
        raise HTTPException(
            status_code=400,
            detail={"error": "Validation failed", "details": validation_errors}
        )

    destination = request_data["destination"].strip()
    duration_days = int(request_data["durationDays"])
    job_id = str(uuid.uuid4())

    background_tasks.add_task(processor.process, job_id, destination, duration_days)
    logger.info(f"Accepted job {job_id} for {destination}, {duration_days} days")

    return JobCreatedResponse(jobId=job_id)
