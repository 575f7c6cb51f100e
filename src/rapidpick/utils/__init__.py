"""
Utility modules for rapidpick.

This module provides:
- System resource detection
- Parallelization policy
"""

from .parallel import (
    ParallelMode,
    SystemResources,
    get_system_resources,
)

__all__ = [
    "ParallelMode",
    "SystemResources",
    "get_system_resources",
]
