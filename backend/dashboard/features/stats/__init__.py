"""Stats feature module.

Orchestrates the live and synthetic data sources behind one service.
"""

from .service import DeadlockStatsService
from .sources import LiveDataSource, SyntheticDataSource

__all__ = ["DeadlockStatsService", "LiveDataSource", "SyntheticDataSource"]
