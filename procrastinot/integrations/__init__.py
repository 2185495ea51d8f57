"""
Integrations with the Procrastinot backend services.
"""

from .api_client import ProcrastinotClient, RecordFetchError

__all__ = ['ProcrastinotClient', 'RecordFetchError']
