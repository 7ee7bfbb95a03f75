"""Parameter resolution, reward calculation and monthly aggregation for Pocket servicers."""

from .orchestrator import MonitoringService

__all__ = ["MonitoringService"]
