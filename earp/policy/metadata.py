from enum import Enum
from typing import Iterator, List

from earp.policy.counter import SaturatingCounter


class LineState(Enum):
    INVALID = "invalid"
    VALID = "valid"


class LineMetadata:
    """Replacement state kept for one cache-line slot.

    A record is created once per slot and cycles between INVALID and VALID
    as the policy fills, touches and invalidates the line. Fields are only
    mutated through EnergyAwareRP so that cached_cost always reflects them.
    """

    def __init__(self, frequency_bits: int, write_bits: int):
        self.last_touch_time: int = 0
        self.access_frequency = SaturatingCounter(frequency_bits)
        self.write_count = SaturatingCounter(write_bits)
        self.bytes_used: int = 0
        self.dirty: bool = False
        # reserved, not read by the cost function
        self.predicted_reuse: int = 0
        self.cached_cost: float = 0.0
        self.state = LineState.INVALID

    def is_valid(self) -> bool:
        return self.state == LineState.VALID

    def clear(self) -> None:
        self.last_touch_time = 0
        self.access_frequency.reset()
        self.write_count.reset()
        self.bytes_used = 0
        self.dirty = False
        self.predicted_reuse = 0
        self.cached_cost = 0.0
        self.state = LineState.INVALID

    def get_statistics(self) -> dict:
        return {
            'state': self.state.value,
            'last_touch_time': self.last_touch_time,
            'access_frequency': self.access_frequency.read(),
            'write_count': self.write_count.read(),
            'bytes_used': self.bytes_used,
            'dirty': self.dirty,
            'cached_cost': self.cached_cost,
        }

    def __repr__(self) -> str:
        return (f"LineMetadata(state={self.state.value}, touched={self.last_touch_time}, "
                f"freq={self.access_frequency.read()}, writes={self.write_count.read()}, "
                f"bytes={self.bytes_used}, dirty={self.dirty}, cost={self.cached_cost:.4f})")


class ReplaceableEntry:
    """A cache-line slot as seen by victim selection: a handle plus its metadata."""

    def __init__(self, slot: int, metadata: LineMetadata):
        self.slot = slot
        self.metadata = metadata

    def __repr__(self) -> str:
        return f"ReplaceableEntry(slot={self.slot}, {self.metadata!r})"


class MetadataTable:
    """Arena of per-slot metadata records indexed by a stable slot handle.

    Each record lives exactly as long as its slot; slots are never removed.
    """

    def __init__(self, policy):
        self.policy = policy
        self._entries: List[ReplaceableEntry] = []

    def allocate(self) -> int:
        """Create the record for a new slot and return its handle."""
        slot = len(self._entries)
        self._entries.append(ReplaceableEntry(slot, self.policy.instantiate()))
        return slot

    def entry(self, slot: int) -> ReplaceableEntry:
        return self._entries[slot]

    def __getitem__(self, slot: int) -> LineMetadata:
        return self._entries[slot].metadata

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ReplaceableEntry]:
        return iter(self._entries)
