"""
Dependency injection for FastAPI endpoints.

Provides shared instances of Config, the backend API client and the
DashboardAggregator to be used across all API routes.
"""

from functools import lru_cache
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from procrastinot.core.config import Config
from procrastinot.dashboard.aggregator import DashboardAggregator
from procrastinot.integrations.api_client import ProcrastinotClient


@lru_cache()
def get_config() -> Config:
    """
    Get cached Config instance.

    lru_cache ensures we only create one Config instance
    for the lifetime of the application.
    """
    return Config()


@lru_cache()
def get_api_client() -> ProcrastinotClient:
    """Get cached client for the Procrastinot backend."""
    return ProcrastinotClient(get_config())


def get_dashboard_aggregator() -> DashboardAggregator:
    """Get DashboardAggregator for dashboard data."""
    return DashboardAggregator(get_api_client(), get_config())
