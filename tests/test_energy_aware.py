"""
Tests for the energy-aware replacement policy.

Covers:
- Metadata lifecycle (instantiate / reset / touch / invalidate)
- Write, utilization and dirty-state mutators
- Victim selection ordering, tie-breaking and cost refresh
- The slot arena
"""

import pytest

from earp.errors import EmptyCandidateSetError
from earp.policy.cost import cost_breakdown, energy_cost
from earp.policy.metadata import LineState, MetadataTable, ReplaceableEntry


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


def test_instantiate_is_invalid_and_zeroed(line):
    assert line.state == LineState.INVALID
    assert not line.is_valid()
    assert line.last_touch_time == 0
    assert line.access_frequency.read() == 0
    assert line.write_count.read() == 0
    assert line.bytes_used == 0
    assert line.dirty is False
    assert line.predicted_reuse == 0
    assert line.cached_cost == 0.0


def test_reset_fills_line(policy, line):
    policy.reset(line, 100)
    assert line.is_valid()
    assert line.last_touch_time == 100
    assert line.access_frequency.read() == 1
    assert line.write_count.read() == 0
    assert line.bytes_used == 64
    assert line.dirty is False
    assert line.predicted_reuse == 1
    assert line.cached_cost == pytest.approx(0.28667, abs=1e-4)


def test_reset_clears_previous_writes(policy, line):
    policy.reset(line, 1)
    policy.update_write_stats(line, 2)
    policy.set_dirty_status(line, True, 2)
    policy.invalidate(line)
    policy.reset(line, 3)
    assert line.write_count.read() == 0
    assert line.dirty is False


def test_touch_updates_recency_and_frequency_only(policy, line):
    policy.reset(line, 100)
    policy.update_write_stats(line, 100)
    policy.update_utilization(line, 32, 100)
    policy.set_dirty_status(line, True, 100)
    before = line.get_statistics()

    policy.touch(line, 200)

    assert line.last_touch_time == 200
    assert line.access_frequency.read() == before['access_frequency'] + 1
    assert line.write_count.read() == before['write_count']
    assert line.bytes_used == before['bytes_used']
    assert line.dirty == before['dirty']


def test_touch_after_fill_recomputes_cost_at_touch_time(policy, line):
    policy.reset(line, 100)
    policy.touch(line, 200)
    assert line.access_frequency.read() == 2
    # just touched, so the recency term is zero
    assert line.cached_cost == pytest.approx(0.2 * (1 - 2 / 15) + 0.2)


def test_touch_saturates_frequency(policy, line):
    policy.reset(line, 1)
    for now in range(2, 40):
        policy.touch(line, now)
    assert line.access_frequency.read() == 15


def test_invalidate_zeroes_everything(policy, line):
    policy.reset(line, 10)
    policy.touch(line, 20)
    policy.update_write_stats(line, 20)
    policy.set_dirty_status(line, True, 20)
    policy.invalidate(line)
    assert line.state == LineState.INVALID
    assert line.last_touch_time == 0
    assert line.access_frequency.read() == 0
    assert line.write_count.read() == 0
    assert line.bytes_used == 0
    assert line.dirty is False
    assert line.predicted_reuse == 0
    assert line.cached_cost == 0.0


# ---------------------------------------------------------------------------
# Mutators
# ---------------------------------------------------------------------------


def test_write_stats_saturate(policy, line):
    policy.reset(line, 1)
    for _ in range(50):
        policy.update_write_stats(line, 1)
    assert line.write_count.read() == 15


def test_utilization_is_monotone(policy, line):
    seen = []
    for nbytes in (8, 4, 32, 16, 0, 48, 8):
        policy.update_utilization(line, nbytes, 0)
        seen.append(line.bytes_used)
    assert seen == sorted(seen)
    assert seen[-1] == 48


def test_utilization_capped_at_block_size(policy, line):
    policy.update_utilization(line, 4096, 0)
    assert line.bytes_used == 64


@pytest.mark.parametrize("mutate", [
    lambda policy, line, now: policy.update_write_stats(line, now),
    lambda policy, line, now: policy.update_utilization(line, 16, now),
    lambda policy, line, now: policy.set_dirty_status(line, True, now),
])
def test_mutators_score_at_current_tick(policy, line, config, mutate):
    policy.reset(line, 100)
    mutate(policy, line, 500)
    # recency is measured against the host tick, not the last touch
    assert cost_breakdown(line, 500, config).recency == pytest.approx(0.3 * 400 / 500)
    assert line.cached_cost == pytest.approx(energy_cost(line, 500, config))


def test_mutators_require_current_tick(policy, line):
    policy.reset(line, 1)
    with pytest.raises(TypeError):
        policy.update_write_stats(line)
    with pytest.raises(TypeError):
        policy.update_utilization(line, 8)
    with pytest.raises(TypeError):
        policy.set_dirty_status(line, True)


def test_set_dirty_status_roundtrip(policy, line):
    policy.reset(line, 10)
    clean = line.cached_cost
    policy.set_dirty_status(line, True, 10)
    assert line.dirty is True
    policy.set_dirty_status(line, False, 10)
    assert line.dirty is False
    assert line.cached_cost == pytest.approx(clean)


# ---------------------------------------------------------------------------
# Victim selection
# ---------------------------------------------------------------------------


def _entries(policy, count):
    return [ReplaceableEntry(slot, policy.instantiate()) for slot in range(count)]


def test_empty_candidates_rejected(policy):
    with pytest.raises(EmptyCandidateSetError):
        policy.get_victim([], 10)


def test_single_candidate(policy):
    (entry,) = _entries(policy, 1)
    policy.reset(entry.metadata, 5)
    assert policy.get_victim([entry], 10) is entry


def test_all_equal_costs_pick_first(policy):
    entries = _entries(policy, 4)
    for entry in entries:
        policy.reset(entry.metadata, 7)
    assert policy.get_victim(entries, 7) is entries[0]
    assert policy.get_victim(list(reversed(entries)), 7) is entries[-1]


def test_stale_line_is_evicted(policy):
    entries = _entries(policy, 3)
    for entry in entries:
        policy.reset(entry.metadata, 10)
    policy.touch(entries[0].metadata, 90)
    policy.touch(entries[2].metadata, 90)
    assert policy.get_victim(entries, 100) is entries[1]


def test_victim_costs_are_refreshed(policy):
    entries = _entries(policy, 2)
    policy.reset(entries[0].metadata, 10)
    policy.reset(entries[1].metadata, 50)
    # cached costs were computed at fill time with no recency component
    policy.get_victim(entries, 100)
    assert entries[0].metadata.cached_cost == pytest.approx(policy.cost(entries[0].metadata, 100))
    assert entries[1].metadata.cached_cost == pytest.approx(policy.cost(entries[1].metadata, 100))
    assert entries[0].metadata.cached_cost > entries[1].metadata.cached_cost


def test_victim_is_strict_maximum(policy):
    entries = _entries(policy, 5)
    for i, entry in enumerate(entries):
        policy.reset(entry.metadata, 1)
        for _ in range(i):
            policy.update_write_stats(entry.metadata, 1)
    victim = policy.get_victim(entries, 20)
    costs = [e.metadata.cached_cost for e in entries]
    assert victim is entries[costs.index(max(costs))]


def test_get_victim_accepts_bare_metadata(policy):
    lines = [policy.instantiate() for _ in range(2)]
    policy.reset(lines[0], 1)
    policy.reset(lines[1], 1)
    policy.update_write_stats(lines[1], 1)
    assert policy.get_victim(lines, 5) is lines[1]


def test_get_victim_only_touches_cached_cost(policy):
    entries = _entries(policy, 2)
    for entry in entries:
        policy.reset(entry.metadata, 3)
    before = [e.metadata.get_statistics() for e in entries]
    policy.get_victim(entries, 30)
    after = [e.metadata.get_statistics() for e in entries]
    for b, a in zip(before, after):
        b.pop('cached_cost')
        a.pop('cached_cost')
        assert a == b


# ---------------------------------------------------------------------------
# Slot arena
# ---------------------------------------------------------------------------


def test_metadata_table_handles_are_stable(policy):
    table = MetadataTable(policy)
    slots = [table.allocate() for _ in range(4)]
    assert slots == [0, 1, 2, 3]
    assert len(table) == 4
    policy.reset(table[2], 8)
    assert table.entry(2).metadata is table[2]
    assert table[2].is_valid()
    assert not table[1].is_valid()
    assert [e.slot for e in table] == slots
