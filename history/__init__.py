"""
Analysis history

SQLite-backed store of past document analyses.
"""

from .store import AnalysisStore, StoreError

__all__ = ['AnalysisStore', 'StoreError']
