import math
from dataclasses import dataclass, fields
from typing import Any, Mapping

from earp.errors import ConfigurationError


@dataclass(frozen=True)
class PolicyConfig:
    """Fixed parameters of the energy-aware cost function.

    Attributes:
        frequency_bits: Width of the per-line access frequency counter
        write_bits: Width of the per-line write counter
        recency_weight: Weight of the time-since-last-touch term
        frequency_weight: Weight of the (inverted) access frequency term
        write_weight: Weight of the write intensity term
        dirty_weight: Weight of the dirty bit term
        utilization_weight: Weight of the (inverted) byte utilization term
        pcm_read_cost: Energy multiplier of one PCM read
        pcm_write_cost: Energy multiplier of one PCM write
        block_size: Bytes per cache line
    """
    frequency_bits: int = 4
    write_bits: int = 4
    recency_weight: float = 0.3
    frequency_weight: float = 0.2
    write_weight: float = 0.2
    dirty_weight: float = 0.2
    utilization_weight: float = 0.1
    pcm_read_cost: float = 1.0
    pcm_write_cost: float = 5.0
    block_size: int = 64

    def __post_init__(self):
        # zero widths would make max_freq / max_writes zero in the cost formula
        if self.frequency_bits <= 0:
            raise ConfigurationError(f"frequency_bits must be positive, got {self.frequency_bits}")
        if self.write_bits <= 0:
            raise ConfigurationError(f"write_bits must be positive, got {self.write_bits}")
        if self.block_size <= 0:
            raise ConfigurationError(f"block_size must be positive, got {self.block_size}")
        for name in ('recency_weight', 'frequency_weight', 'write_weight', 'dirty_weight',
                     'utilization_weight', 'pcm_read_cost', 'pcm_write_cost'):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigurationError(f"{name} must be finite, got {value}")

    @property
    def max_frequency(self) -> int:
        return (1 << self.frequency_bits) - 1

    @property
    def max_writes(self) -> int:
        return (1 << self.write_bits) - 1

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> 'PolicyConfig':
        """Build a configuration from a flat parameter dict, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(params) - known)
        if unknown:
            raise ConfigurationError(f"Unknown policy parameters: {', '.join(unknown)}")
        return cls(**dict(params))

    @classmethod
    def pcm_default(cls) -> 'PolicyConfig':
        """Weights used for the PCM main-memory experiments."""
        return cls(
            frequency_bits=4,
            write_bits=4,
            recency_weight=0.3,
            frequency_weight=0.2,
            write_weight=0.2,
            dirty_weight=0.2,
            utilization_weight=0.1,
            pcm_read_cost=1.0,
            pcm_write_cost=5.0,
            block_size=64,
        )


class Config:
    # Cache geometry for the simulation harness
    cache_size = 256           # total number of blocks the cache can hold
    associativity = 4          # number of ways per set
    block_size = 64            # bytes per block

    # Synthetic trace options
    synthetic_length = 2000    # number of accesses in the trace
    synthetic_pattern = 'mixed'
    write_ratio = 0.3          # fraction of accesses that are writes
    seed = 42

    # Trace file, used when synthetic is False
    synthetic = True
    trace_path = 'traces/sample_trace.txt'

    policy = PolicyConfig.pcm_default()
