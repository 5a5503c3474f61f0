from typing import List, Optional

import numpy as np

from earp.records import AccessRecord

TRACE_DTYPE = np.dtype([('address', np.int64), ('is_write', np.bool_), ('size', np.int32)])


def _addresses(size, pattern_type, rng):
    if pattern_type == 'sequential':
        # Sequential access pattern
        return np.arange(size) * 64  # 64-byte blocks

    elif pattern_type == 'random':
        return rng.integers(0, size * 64, size)

    elif pattern_type == 'mixed':
        # Mix of sequential and random, shuffled together
        trace = np.concatenate([np.arange(size // 2) * 64,
                                rng.integers(0, size * 64, size - size // 2)])
        rng.shuffle(trace)
        return trace

    elif pattern_type == 'loop':
        # Loop pattern (simulating program loops)
        base_pattern = np.arange(100) * 64
        repeats = -(-size // 100)
        return np.tile(base_pattern, repeats)[:size]

    else:
        raise ValueError(f"Unknown pattern type: {pattern_type}")


def generate_sample_trace(size=10000, pattern_type='mixed', write_ratio=0.3,
                          seed: Optional[int] = None) -> List[AccessRecord]:
    """Generate a synthetic read/write access trace for testing"""
    if not 0.0 <= write_ratio <= 1.0:
        raise ValueError(f"write_ratio must be in [0, 1], got {write_ratio}")
    rng = np.random.default_rng(seed)
    addresses = _addresses(size, pattern_type, rng)
    writes = rng.random(len(addresses)) < write_ratio
    sizes = rng.choice([4, 8, 16, 32], size=len(addresses))
    return [AccessRecord(int(a), bool(w), int(s)) for a, w, s in zip(addresses, writes, sizes)]


def save_trace(trace, filename):
    """Save trace to a .npy file"""
    records = np.array([(r.address, r.is_write, r.size) for r in trace], dtype=TRACE_DTYPE)
    np.save(filename, records)


def load_trace(filename) -> List[AccessRecord]:
    """Load trace from a .npy file"""
    records = np.load(filename)
    return [AccessRecord(int(r['address']), bool(r['is_write']), int(r['size'])) for r in records]
