from earp.policy.cost import CostBreakdown, cost_breakdown, energy_cost
from earp.policy.counter import SaturatingCounter
from earp.policy.energy_aware import EnergyAwareRP
from earp.policy.metadata import LineMetadata, LineState, MetadataTable, ReplaceableEntry

__all__ = [
    'CostBreakdown',
    'EnergyAwareRP',
    'LineMetadata',
    'LineState',
    'MetadataTable',
    'ReplaceableEntry',
    'SaturatingCounter',
    'cost_breakdown',
    'energy_cost',
]
