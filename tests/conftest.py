import matplotlib

matplotlib.use('Agg')

import pytest

from earp.config import PolicyConfig
from earp.policy.energy_aware import EnergyAwareRP


@pytest.fixture
def config():
    return PolicyConfig.pcm_default()


@pytest.fixture
def policy(config):
    return EnergyAwareRP(config)


@pytest.fixture
def line(policy):
    return policy.instantiate()
