import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import CORS_ORIGINS
from database import init_db
from logging_config import setup_logging
from routes.calendar_routes import router as calendar_router
from routes.flashcard_routes import router as flashcard_router
from routes.preference_routes import router as preference_router
from routes.study_routes import router as study_router
from routes.subject_routes import router as subject_router
from routes.task_routes import router as task_router
from services.tutor_service import log_configuration_status

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_db()
    # A missing provider key is reported here; chat requests fail until it is set
    log_configuration_status()
    yield


app = FastAPI(title="Student Planner API", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"detail": "Invalid request data"})


@app.get("/api/health-check")
async def health():
    return {"status": "ok", "message": "Backend is alive!"}


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(subject_router)
app.include_router(calendar_router)
app.include_router(task_router)
app.include_router(study_router)
app.include_router(preference_router)
app.include_router(flashcard_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
