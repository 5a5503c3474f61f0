"""Energy-aware eviction cost for PCM-backed cache lines.

Higher cost means a better eviction candidate. The function combines five
normalized factors:

1. Recency: time since the last touch, normalized by the current tick
2. Frequency: inverted access frequency
3. Write intensity: write count relative to the counter range
4. Dirtiness: pending write-back
5. Utilization: inverted fraction of the line's bytes in use

plus a projected PCM energy term (future read and write traffic pulls the
score up, the write-back an eviction would trigger pulls it down).
"""

from dataclasses import dataclass

from earp.config import PolicyConfig
from earp.policy.metadata import LineMetadata

FUTURE_COST_WEIGHT = 0.1
WRITE_BACK_WEIGHT = 0.2


@dataclass(frozen=True)
class CostBreakdown:
    """Weighted contribution of every term of the cost function."""
    recency: float
    frequency: float
    write_intensity: float
    dirty: float
    utilization: float
    future_access: float
    write_back: float

    @property
    def raw_total(self) -> float:
        return (self.recency + self.frequency + self.write_intensity + self.dirty
                + self.utilization + self.future_access - self.write_back)

    @property
    def total(self) -> float:
        return max(0.0, self.raw_total)


def cost_breakdown(metadata: LineMetadata, now: int, config: PolicyConfig) -> CostBreakdown:
    """Evaluate each weighted term of the cost function for one line.

    Args:
        metadata: Replacement state of the line
        now: Current tick
        config: Policy weights and PCM energy multipliers

    Returns:
        Per-term contributions; write_back is reported as a positive penalty
    """
    # recency is normalized by the absolute tick, so it shrinks as a run gets longer
    recency_factor = 0.0
    if now > metadata.last_touch_time:
        recency_factor = (now - metadata.last_touch_time) / now

    accesses = metadata.access_frequency.read()
    writes = metadata.write_count.read()

    frequency_factor = 1.0 - accesses / config.max_frequency
    write_intensity = writes / config.max_writes
    dirty_factor = 1.0 if metadata.dirty else 0.0
    utilization_factor = 1.0 - metadata.bytes_used / config.block_size

    future_read_cost = accesses * config.pcm_read_cost
    future_write_cost = writes * config.pcm_write_cost
    write_back_cost = config.pcm_write_cost if metadata.dirty else 0.0

    return CostBreakdown(
        recency=config.recency_weight * recency_factor,
        frequency=config.frequency_weight * frequency_factor,
        write_intensity=config.write_weight * write_intensity,
        dirty=config.dirty_weight * dirty_factor,
        utilization=config.utilization_weight * utilization_factor,
        future_access=FUTURE_COST_WEIGHT * (future_read_cost + future_write_cost),
        write_back=WRITE_BACK_WEIGHT * write_back_cost,
    )


def energy_cost(metadata: LineMetadata, now: int, config: PolicyConfig) -> float:
    """Return the non-negative eviction cost of a line at tick `now`."""
    return cost_breakdown(metadata, now, config).total
