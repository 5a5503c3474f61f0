import logging
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from earp.clock import SimClock
from earp.policy.energy_aware import EnergyAwareRP
from earp.policy.metadata import MetadataTable, ReplaceableEntry
from earp.records import AccessRecord

logger = logging.getLogger(__name__)


class PCMCacheEnvironment:
    """Set-associative cache in front of PCM main memory.

    The environment plays the part of the memory-access pipeline: it owns the
    tag array and the clock, produces the candidate list for each eviction,
    and reports fills, hits, writes and dirty transitions to the policy.

    - cache_size: number of blocks total (used to derive number of sets)
    - ways: associativity (number of ways per set)
    - block_size: in bytes (must match the policy configuration)
    """

    def __init__(self, cache_size: int = 256, ways: int = 4, block_size: int = 64,
                 policy: Optional[EnergyAwareRP] = None, clock: Optional[SimClock] = None):
        self.cache_size = cache_size
        self.ways = ways
        self.block_size = block_size
        self.policy = policy or EnergyAwareRP()
        if self.policy.config.block_size != block_size:
            raise ValueError(f"Policy block size {self.policy.config.block_size} "
                             f"does not match cache block size {block_size}")
        self.clock = clock or SimClock()

        self.num_sets = max(1, cache_size // ways)
        self.table = MetadataTable(self.policy)
        for _ in range(self.num_sets * self.ways):
            self.table.allocate()
        self.reset()

    def reset(self):
        # tag per slot, None for an empty way
        self.tags: List[Optional[int]] = [None] * len(self.table)
        for entry in self.table:
            self.policy.invalidate(entry.metadata)
        self.hits = 0
        self.misses = 0
        self.accesses = 0
        self.writebacks = 0
        self.energy_consumed = 0.0

    def _addr_to_set_tag(self, addr: int) -> Tuple[int, int]:
        block = addr // self.block_size
        set_idx = block % self.num_sets
        tag = block // self.num_sets
        return set_idx, tag

    def _set_entries(self, set_idx: int) -> List[ReplaceableEntry]:
        base = set_idx * self.ways
        return [self.table.entry(base + way) for way in range(self.ways)]

    def is_hit(self, addr: int) -> bool:
        """Return True if the given address would hit in the current cache state."""
        set_idx, tag = self._addr_to_set_tag(addr)
        return any(self.tags[entry.slot] == tag for entry in self._set_entries(set_idx))

    def access(self, addr: int, is_write: bool = False, size: int = 8) -> dict:
        """Run one memory access through the cache.

        Args:
            addr: Byte address
            is_write: True for a store
            size: Bytes touched by the access

        Returns:
            Info dict with 'hit', 'slot' and, on a replacement, 'evicted' and 'writeback'
        """
        now = self.clock.advance()
        self.accesses += 1
        set_idx, tag = self._addr_to_set_tag(addr)
        entries = self._set_entries(set_idx)
        offset = addr % self.block_size
        touched = min(self.block_size, offset + size)

        for entry in entries:
            if self.tags[entry.slot] == tag:
                self.hits += 1
                self.policy.touch(entry.metadata, now)
                self._record_use(entry, touched, is_write, now)
                return {'hit': True, 'slot': entry.slot}

        self.misses += 1
        info = {'hit': False}
        target = next((e for e in entries if not e.metadata.is_valid()), None)
        if target is None:
            target = self.policy.get_victim(entries, now)
            was_dirty = target.metadata.dirty
            if was_dirty:
                self.writebacks += 1
                self.energy_consumed += self.policy.config.pcm_write_cost
            info['evicted'] = self.tags[target.slot] * self.num_sets + set_idx
            info['writeback'] = was_dirty
            logger.debug("Evicting block %d from slot %d (dirty=%s)",
                         info['evicted'], target.slot, was_dirty)
            self.policy.invalidate(target.metadata)

        # fill from PCM
        self.energy_consumed += self.policy.config.pcm_read_cost
        self.tags[target.slot] = tag
        self.policy.reset(target.metadata, now)
        self._record_use(target, touched, is_write, now)
        info['slot'] = target.slot
        return info

    def _record_use(self, entry: ReplaceableEntry, touched: int, is_write: bool, now: int):
        self.policy.update_utilization(entry.metadata, touched, now)
        if is_write:
            self.policy.update_write_stats(entry.metadata, now)
            if not entry.metadata.dirty:
                self.policy.set_dirty_status(entry.metadata, True, now)

    def run(self, trace: Iterable[AccessRecord]) -> Dict[str, float]:
        for record in trace:
            self.access(int(record.address), bool(record.is_write), int(record.size))
        return self.get_metrics()

    def flush(self) -> int:
        """Write back every dirty line and invalidate the cache; returns lines written."""
        written = 0
        for entry in self.table:
            if entry.metadata.is_valid() and entry.metadata.dirty:
                written += 1
                self.energy_consumed += self.policy.config.pcm_write_cost
            self.policy.invalidate(entry.metadata)
            self.tags[entry.slot] = None
        self.writebacks += written
        return written

    def get_metrics(self) -> Dict[str, float]:
        """Return current performance metrics."""
        return {
            'hit_rate': self.hits / max(1, self.accesses),
            'hits': self.hits,
            'misses': self.misses,
            'accesses': self.accesses,
            'writebacks': self.writebacks,
            'energy_consumed': self.energy_consumed,
        }

    def cost_snapshot(self, set_idx: int) -> np.ndarray:
        """Cached eviction costs of one set's ways, in way order."""
        return np.array([e.metadata.cached_cost for e in self._set_entries(set_idx)],
                        dtype=np.float64)

    # Baseline policy for comparison
    def simulate_lru(self, trace: Iterable[AccessRecord]) -> Dict[str, float]:
        """Simulate LRU with write-back on the same geometry and energy model."""
        # each set is a list of [tag, dirty], front = most recent
        sets: List[List[list]] = [[] for _ in range(self.num_sets)]
        hits = misses = writebacks = 0
        energy = 0.0
        config = self.policy.config
        for record in trace:
            set_idx, tag = self._addr_to_set_tag(int(record.address))
            s = sets[set_idx]
            line = next((entry for entry in s if entry[0] == tag), None)
            if line is not None:
                s.remove(line)
                hits += 1
            else:
                misses += 1
                energy += config.pcm_read_cost
                line = [tag, False]
                if len(s) >= self.ways:
                    _, dirty = s.pop()
                    if dirty:
                        writebacks += 1
                        energy += config.pcm_write_cost
            if record.is_write:
                line[1] = True
            s.insert(0, line)
        total = hits + misses
        return {
            'hit_rate': hits / max(1, total),
            'hits': hits,
            'misses': misses,
            'accesses': total,
            'writebacks': writebacks,
            'energy_consumed': energy,
        }
