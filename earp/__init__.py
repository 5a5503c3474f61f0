"""Energy-aware cache replacement for phase-change main memory."""

from earp.config import Config, PolicyConfig
from earp.errors import ConfigurationError, EmptyCandidateSetError, PolicyError
from earp.policy.energy_aware import EnergyAwareRP

__all__ = [
    'Config',
    'ConfigurationError',
    'EmptyCandidateSetError',
    'EnergyAwareRP',
    'PolicyConfig',
    'PolicyError',
]
