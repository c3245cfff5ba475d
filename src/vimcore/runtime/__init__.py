"""Runtime services: configuration and telemetry."""

from .config import EngineConfig
from . import telemetry

__all__ = ["EngineConfig", "telemetry"]
