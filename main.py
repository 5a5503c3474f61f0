"""Run the energy-aware policy and the LRU baseline over a workload and plot both.

Set Config.synthetic = False and point Config.trace_path at a text trace to
replay a recorded workload.
"""

import logging

from earp.config import Config
from earp.environment.cache_env import PCMCacheEnvironment
from earp.policy.energy_aware import EnergyAwareRP
from earp.utils.plotter import Plotter
from earp.utils.trace_generator import generate_sample_trace
from earp.utils.workload_loader import WorkloadLoader

logger = logging.getLogger(__name__)


def run(cfg=Config):
    if cfg.synthetic:
        trace = generate_sample_trace(size=cfg.synthetic_length,
                                      pattern_type=cfg.synthetic_pattern,
                                      write_ratio=cfg.write_ratio,
                                      seed=cfg.seed)
        logger.info("Using synthetic %s trace: length=%d, write_ratio=%.2f",
                    cfg.synthetic_pattern, len(trace), cfg.write_ratio)
    else:
        trace = WorkloadLoader().load_trace(cfg.trace_path)
        logger.info("Loaded %d accesses from %s", len(trace), cfg.trace_path)

    env = PCMCacheEnvironment(cache_size=cfg.cache_size,
                              ways=cfg.associativity,
                              block_size=cfg.block_size,
                              policy=EnergyAwareRP(cfg.policy))
    energy_aware = env.run(trace)
    lru = env.simulate_lru(trace)

    print(f"Energy-aware: hit rate {energy_aware['hit_rate']:.3f}, "
          f"write-backs {energy_aware['writebacks']}, "
          f"energy {energy_aware['energy_consumed']:.1f}")
    print(f"LRU (set-assoc): hit rate {lru['hit_rate']:.3f}, "
          f"write-backs {lru['writebacks']}, energy {lru['energy_consumed']:.1f}")

    results = {'Energy-aware': energy_aware, 'LRU': lru}
    Plotter().plot_comparison(results, title="Energy-aware vs LRU on PCM")
    return results


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='[%(levelname)s] %(message)s')
    run()
