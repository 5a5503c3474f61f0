import logging
from typing import Optional, Sequence, TypeVar, Union

from earp.config import PolicyConfig
from earp.errors import EmptyCandidateSetError
from earp.policy.cost import energy_cost
from earp.policy.metadata import LineMetadata, LineState, ReplaceableEntry

logger = logging.getLogger(__name__)

Candidate = TypeVar('Candidate', ReplaceableEntry, LineMetadata)


def _metadata_of(candidate: Union[ReplaceableEntry, LineMetadata]) -> LineMetadata:
    if isinstance(candidate, LineMetadata):
        return candidate
    return candidate.metadata


class EnergyAwareRP:
    """Energy-aware replacement policy for PCM-based main memory.

    Every mutator recomputes the line's cached cost eagerly, and victim
    selection recomputes all candidate costs against the tick it is given,
    so a cost read never lags behind the metadata it was derived from.

    Time is passed in explicitly; the policy never owns or advances a clock.
    """

    def __init__(self, config: Optional[PolicyConfig] = None):
        self.config = config or PolicyConfig()

    def instantiate(self) -> LineMetadata:
        """Create the zeroed, INVALID metadata record for a new line slot."""
        return LineMetadata(self.config.frequency_bits, self.config.write_bits)

    def cost(self, metadata: LineMetadata, now: int) -> float:
        return energy_cost(metadata, now, self.config)

    def _refresh(self, metadata: LineMetadata, now: int) -> float:
        metadata.cached_cost = self.cost(metadata, now)
        return metadata.cached_cost

    def reset(self, metadata: LineMetadata, now: int) -> None:
        """Initialize a line for a newly inserted block."""
        metadata.last_touch_time = now
        # the fill counts as the first access
        metadata.access_frequency.increment()
        metadata.write_count.reset()
        # full utilization until observed otherwise
        metadata.bytes_used = self.config.block_size
        metadata.dirty = False
        metadata.predicted_reuse = 1
        metadata.state = LineState.VALID
        self._refresh(metadata, now)

    def touch(self, metadata: LineMetadata, now: int) -> None:
        """Record a hit on the line."""
        metadata.last_touch_time = now
        metadata.access_frequency.increment()
        self._refresh(metadata, now)

    def invalidate(self, metadata: LineMetadata) -> None:
        """Clear all tracking so the slot is the next probable victim."""
        metadata.clear()

    def update_write_stats(self, metadata: LineMetadata, now: int) -> None:
        metadata.write_count.increment()
        self._refresh(metadata, now)

    def update_utilization(self, metadata: LineMetadata, bytes_accessed: int,
                           now: int) -> None:
        """Raise the line's high-water mark of bytes used; it never decreases."""
        bytes_accessed = min(bytes_accessed, self.config.block_size)
        metadata.bytes_used = max(metadata.bytes_used, bytes_accessed)
        self._refresh(metadata, now)

    def set_dirty_status(self, metadata: LineMetadata, is_dirty: bool,
                         now: int) -> None:
        metadata.dirty = is_dirty
        self._refresh(metadata, now)

    def get_victim(self, candidates: Sequence[Candidate], now: int) -> Candidate:
        """Select the candidate with the highest eviction cost at tick `now`.

        Args:
            candidates: Replacement candidates chosen by the indexing policy,
                either ReplaceableEntry objects or bare LineMetadata records
            now: Current tick

        Returns:
            The first candidate, in the given order, with the maximal cost

        Raises:
            EmptyCandidateSetError: If candidates is empty
        """
        if len(candidates) == 0:
            raise EmptyCandidateSetError("get_victim requires at least one replacement candidate")

        victim = candidates[0]
        max_cost = self._refresh(_metadata_of(victim), now)

        for candidate in candidates[1:]:
            # always recomputed; cached values may predate `now`
            cost = self._refresh(_metadata_of(candidate), now)
            if cost > max_cost:
                victim = candidate
                max_cost = cost

        logger.debug("Victim %r selected among %d candidates (cost=%.4f)",
                     victim, len(candidates), max_cost)
        return victim
