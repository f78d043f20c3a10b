# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import make_series, make_one_year_flat
"""

from .utils import CountingObjective, make_flows_payload, make_one_year_flat, make_series

__all__ = ["make_series", "make_one_year_flat", "make_flows_payload", "CountingObjective"]
