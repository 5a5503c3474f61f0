"""Quick CLI demo to compare LRU vs the energy-aware policy without plots.

Run from project root:
    python compare_demo.py
"""
import logging

from earp.config import PolicyConfig
from earp.environment.cache_env import PCMCacheEnvironment
from earp.policy.energy_aware import EnergyAwareRP
from earp.utils.trace_generator import generate_sample_trace


def run_demo(trace_size=2000, cache_size=256, ways=4, block_size=64, write_ratio=0.3, seed=42):
    trace = generate_sample_trace(size=trace_size, pattern_type='mixed',
                                  write_ratio=write_ratio, seed=seed)
    policy = EnergyAwareRP(PolicyConfig(block_size=block_size))
    env = PCMCacheEnvironment(cache_size=cache_size, ways=ways, block_size=block_size, policy=policy)

    energy_aware = env.run(trace)
    lru = env.simulate_lru(trace)

    total = len(trace)
    print(f"Trace size: {total}")
    for label, m in (('LRU', lru), ('Energy-aware', energy_aware)):
        print(f"{label}: hit rate {m['hit_rate']*100:.2f}%, "
              f"write-backs {m['writebacks']}, energy {m['energy_consumed']:.1f}")
    return {'LRU': lru, 'Energy-aware': energy_aware}


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='[%(levelname)s] %(message)s')
    run_demo()
