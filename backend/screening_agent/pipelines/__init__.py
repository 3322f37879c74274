"""Pipeline orchestration for screening conversations."""
from .interview_pipeline import screening_pipeline, turn_events

__all__ = ["screening_pipeline", "turn_events"]
