from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from timesheet_generator.core.config import settings
from timesheet_generator.core.logging_config import setup_logging
from timesheet_generator.db.session import Base, engine
from timesheet_generator import models  # noqa: F401  registers tables
from timesheet_generator.api.endpoints import reference, calendar, leaves, timesheets, exports

setup_logging(settings.LOG_LEVEL)

# Session store lives in memory; the schema is created on startup
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Timesheet Generator",
    description="API for generating randomised team timesheets, marking leave and exporting CSV/Excel files",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
app.include_router(reference.router)
app.include_router(calendar.router)
app.include_router(leaves.router)
app.include_router(timesheets.router)
app.include_router(exports.router)


@app.get("/")
def root():
    return {
        "message": "Timesheet Generator API",
        "docs": "/docs",
        "version": "1.0.0"
    }


@app.get("/health")
def health_check():
    return {"status": "healthy"}
