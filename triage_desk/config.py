"""Desk configuration."""

import os

from pydantic import BaseModel, Field


class DeskConfig(BaseModel):
    """Capacities and constants for a scheduling desk."""

    routine_queue_capacity: int = Field(default=50, gt=0)
    emergency_heap_capacity: int = Field(default=200, gt=0)
    # Severity used when an emergency serve is undone; the original is not retained.
    fallback_severity: int = 5
    top_k_default: int = Field(default=3, gt=0)
    seed_demo: bool = False

    @classmethod
    def from_env(cls) -> "DeskConfig":
        """Build a config from DESK_* environment variables, falling back to defaults."""
        values: dict[str, object] = {}
        env_map = {
            "routine_queue_capacity": "DESK_ROUTINE_QUEUE_CAPACITY",
            "emergency_heap_capacity": "DESK_EMERGENCY_HEAP_CAPACITY",
            "fallback_severity": "DESK_FALLBACK_SEVERITY",
            "top_k_default": "DESK_TOP_K",
            "seed_demo": "DESK_SEED_DEMO",
        }
        for field_name, env_name in env_map.items():
            raw = os.getenv(env_name)
            if raw is not None and raw != "":
                values[field_name] = raw

        return cls.model_validate(values)
