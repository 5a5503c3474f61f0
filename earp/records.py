from dataclasses import dataclass


@dataclass(frozen=True)
class AccessRecord:
    """One memory access of a workload trace."""
    address: int
    is_write: bool = False
    size: int = 8
