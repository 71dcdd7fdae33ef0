"""Process-wide scheduling engine."""

from triage_desk.config import DeskConfig
from triage_desk.services.scheduling import SchedulingEngine
from triage_desk.utils.logging import get_logger

logger = get_logger(__name__)


def seed_demo_data(engine: SchedulingEngine) -> None:
    """Load two demo doctors and a few slots."""
    engine.add_doctor(11, "Arjun", "Cardio")
    engine.add_doctor(12, "Leela", "Ortho")
    engine.add_slot(11, 1, "10:00", "10:30")
    engine.add_slot(11, 2, "10:30", "11:00")
    engine.add_slot(12, 1, "09:00", "09:30")
    logger.info("Demo data seeded")


def build_engine(config: DeskConfig | None = None) -> SchedulingEngine:
    """Create an engine, seeding demo data when the config asks for it."""
    if config is None:
        config = DeskConfig.from_env()

    engine = SchedulingEngine(config=config)
    if config.seed_demo:
        seed_demo_data(engine)
    return engine


_engine: SchedulingEngine | None = None


def get_engine() -> SchedulingEngine:
    """Get or create the desk engine instance."""
    global _engine

    if _engine is None:
        _engine = build_engine()

    return _engine
