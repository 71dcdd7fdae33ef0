"""Main FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from triage_desk import __version__
from triage_desk.api.endpoints import router
from triage_desk.utils.logging import setup_logging

setup_logging()

app = FastAPI(
    title="Triage Desk",
    description=(
        "Outpatient scheduling desk with per-doctor routine queues, "
        "an emergency triage heap and single-step undo."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Patients", "description": "Register, update and delete patients."},
        {"name": "Doctors", "description": "Doctors, their slots and their routine queues."},
        {
            "name": "Queue",
            "description": "Book routine visits, triage emergencies, serve the next patient and undo.",
        },
        {"name": "Reports", "description": "Read-only load and visit reports."},
        {"name": "Health", "description": "Service health monitoring and status checks."},
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("triage_desk.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
