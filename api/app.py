"""Main FastAPI application with modularized routes."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.config import LOG_LEVEL, SEED_SAMPLE_DATA
from api.database import SessionLocal, init_db
from api.errors import register_exception_handlers
from api.routes import categories, questions, sessions, tests
from api.services.seed_service import seed_sample_data
from api.services.session_service import registry
from core.logging_setup import setup_console_logging

setup_console_logging(LOG_LEVEL)

app = FastAPI(title="Quiz API")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


# Startup events
@app.on_event("startup")
def startup_events() -> None:
    """Initialize database and load sample content on startup."""
    init_db()
    if SEED_SAMPLE_DATA:
        db = SessionLocal()
        try:
            seed_sample_data(db)
        finally:
            db.close()


@app.on_event("shutdown")
async def shutdown_events() -> None:
    """Stop every live session timer."""
    registry.close_all()


# Include routers
app.include_router(categories.router)
app.include_router(tests.router)
app.include_router(questions.router)
app.include_router(sessions.router)
