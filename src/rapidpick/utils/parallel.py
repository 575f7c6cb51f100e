"""
Worker-count policy for spectrum-level parallel picking.

Picking one spectrum never depends on another, so a run can be split
across processes. This module decides how many.
"""

import os
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Optional


class ParallelMode(Enum):
    """Parallelization intensity modes."""
    NONE = auto()      # Single process
    LIGHT = auto()     # 25% of physical cores
    HEAVY = auto()     # 75% of physical cores
    MAX = auto()       # All physical cores
    CUSTOM = auto()    # User-specified number of workers

    @classmethod
    def from_name(cls, name: str) -> 'ParallelMode':
        """Look up a mode by case-insensitive name."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            choices = ", ".join(m.name.lower() for m in cls)
            raise ValueError(f"Unknown parallel mode {name!r}. Expected one of: {choices}") from None


@dataclass(frozen=True)
class SystemResources:
    """CPU information used to size the worker pool."""
    cpu_count: int
    cpu_count_physical: int

    def get_workers(self, mode: ParallelMode, custom_workers: Optional[int] = None) -> int:
        """
        Calculate number of workers based on parallel mode.

        Args:
            mode: Parallelization mode.
            custom_workers: Number of workers for CUSTOM mode.

        Returns:
            Number of worker processes to use (at least 1).
        """
        if mode == ParallelMode.NONE:
            return 1
        elif mode == ParallelMode.LIGHT:
            return max(1, self.cpu_count_physical // 4)
        elif mode == ParallelMode.HEAVY:
            return max(1, int(self.cpu_count_physical * 0.75))
        elif mode == ParallelMode.MAX:
            return max(1, self.cpu_count_physical)
        elif mode == ParallelMode.CUSTOM:
            if custom_workers is None:
                raise ValueError("custom_workers must be specified for CUSTOM mode")
            return max(1, min(custom_workers, self.cpu_count_physical))
        else:
            return 1


def _count_physical_cores(cpuinfo: str) -> int:
    """Count unique (physical id, core id) pairs in /proc/cpuinfo text."""
    cores = set()
    current_physical = None
    for line in cpuinfo.split('\n'):
        if line.startswith('physical id'):
            current_physical = line.split(':')[1].strip()
        elif line.startswith('core id') and current_physical is not None:
            cores.add((current_physical, line.split(':')[1].strip()))
    return len(cores)


def get_system_resources() -> SystemResources:
    """
    Detect available CPU resources.

    Falls back to the logical CPU count where physical cores cannot be
    determined (non-Linux systems, containers hiding /proc/cpuinfo).
    """
    cpu_count = os.cpu_count() or 1
    cpu_count_physical = cpu_count

    cpuinfo = Path('/proc/cpuinfo')
    if cpuinfo.exists():
        try:
            physical = _count_physical_cores(cpuinfo.read_text())
        except OSError:
            physical = 0
        if physical:
            cpu_count_physical = physical

    return SystemResources(cpu_count=cpu_count, cpu_count_physical=cpu_count_physical)
