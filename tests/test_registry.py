"""Tests for the AgentRegistry."""

import threading

import pytest

from core.errors import InsufficientFunds, InvalidInput, NotFound
from core.registry import AgentRegistry
from tests.conftest import START, FakeClock, sequence


class TestCreate:
    def test_create_populates_record(self, registry):
        agent = registry.create("alpha", ["trade", "quote"], 1.5)

        assert agent.id == "agent-1"
        assert agent.name == "alpha"
        assert agent.capabilities == ["trade", "quote"]
        assert agent.balance == 1.5
        assert agent.display_address == "addr-1"
        assert agent.created_at == START
        assert agent.updated_at == agent.created_at

    def test_capabilities_keep_order_and_duplicates(self, registry):
        agent = registry.create("alpha", ["b", "a", "b"], 0)
        assert agent.capabilities == ["b", "a", "b"]

    def test_capabilities_are_copied(self, registry):
        caps = ["trade"]
        agent = registry.create("alpha", caps, 0)
        caps.append("later")
        assert registry.get(agent.id).capabilities == ["trade"]

    def test_ids_are_distinct(self, registry):
        ids = {registry.create(f"a{i}", ["x"], 0).id for i in range(20)}
        assert len(ids) == 20

    def test_default_generators(self):
        registry = AgentRegistry()
        first = registry.create("a", ["x"], 0)
        second = registry.create("b", ["x"], 0)
        assert first.id != second.id
        assert len(first.display_address) == 44
        assert first.display_address != second.display_address
        assert first.created_at.tzinfo is not None

    def test_id_collision_rejected(self, clock):
        registry = AgentRegistry(id_source=lambda: "same", address_source=sequence("addr"), clock=clock)
        original = registry.create("first", ["x"], 1.0)
        with pytest.raises(ValueError):
            registry.create("second", ["y"], 2.0)
        assert registry.get("same") == original
        assert len(registry) == 1


class TestLookup:
    def test_get_missing_returns_none(self, registry):
        assert registry.get("nope") is None

    def test_list_all_in_insertion_order(self, registry):
        for name in ("c", "a", "b"):
            registry.create(name, ["x"], 0)
        assert [a.name for a in registry.list_all()] == ["c", "a", "b"]
        assert len(registry.list_all()) == len(registry) == 3

    def test_list_all_empty(self, registry):
        assert registry.list_all() == []

    def test_returned_records_are_snapshots(self, registry):
        agent = registry.create("alpha", ["x"], 1.0)
        agent.balance = 999
        agent.capabilities.append("hacked")
        stored = registry.get(agent.id)
        assert stored.balance == 1.0
        assert stored.capabilities == ["x"]


class TestSetBalance:
    def test_overwrites_and_refreshes(self, registry):
        agent = registry.create("alpha", ["x"], 1.0)
        assert registry.set_balance(agent.id, 7.25) is True
        stored = registry.get(agent.id)
        assert stored.balance == 7.25
        assert stored.updated_at > stored.created_at

    def test_missing_agent_is_noop(self, registry):
        assert registry.set_balance("missing", 1.0) is False
        assert len(registry) == 0

    def test_is_permissive_about_negative_values(self, registry):
        # Low-level setter; only transfer() enforces non-negative balances.
        agent = registry.create("alpha", ["x"], 1.0)
        assert registry.set_balance(agent.id, -3.0) is True
        assert registry.get(agent.id).balance == -3.0


class TestTransfer:
    def test_moves_exact_amount(self, registry):
        a = registry.create("A", ["x"], 1.0)
        b = registry.create("B", ["x"], 0.0)

        assert registry.transfer(a.id, b.id, 0.4) is True
        assert registry.get(a.id).balance == 0.6
        assert registry.get(b.id).balance == 0.4

    def test_both_sides_share_one_timestamp(self, registry):
        a = registry.create("A", ["x"], 1.0)
        b = registry.create("B", ["x"], 0.0)
        registry.transfer(a.id, b.id, 0.5)
        after_a, after_b = registry.get(a.id), registry.get(b.id)
        assert after_a.updated_at == after_b.updated_at
        assert after_a.updated_at > after_a.created_at

    def test_exact_balance_leaves_zero(self, registry):
        a = registry.create("A", ["x"], 2.5)
        b = registry.create("B", ["x"], 0.0)
        assert registry.transfer(a.id, b.id, 2.5) is True
        assert registry.get(a.id).balance == 0
        assert registry.get(b.id).balance == 2.5

    def test_insufficient_funds_changes_nothing(self, registry):
        a = registry.create("A", ["x"], 1.0)
        b = registry.create("B", ["x"], 1.0)
        before_a, before_b = registry.get(a.id), registry.get(b.id)

        assert registry.transfer(a.id, b.id, 5.0) is False
        assert registry.get(a.id) == before_a
        assert registry.get(b.id) == before_b

    @pytest.mark.parametrize("missing", ["from", "to"])
    def test_missing_agent_changes_nothing(self, registry, missing):
        a = registry.create("A", ["x"], 1.0)
        from_id, to_id = ("ghost", a.id) if missing == "from" else (a.id, "ghost")
        before = registry.get(a.id)
        assert registry.transfer(from_id, to_id, 0.5) is False
        assert registry.get(a.id) == before

    @pytest.mark.parametrize("amount", [0, -1.0])
    def test_non_positive_amount_rejected(self, registry, amount):
        a = registry.create("A", ["x"], 1.0)
        b = registry.create("B", ["x"], 1.0)
        assert registry.transfer(a.id, b.id, amount) is False
        assert registry.get(a.id).balance == 1.0
        assert registry.get(b.id).balance == 1.0

    def test_self_transfer_keeps_balance_and_refreshes_once(self):
        clock = FakeClock()
        registry = AgentRegistry(id_source=sequence("agent"), address_source=sequence("addr"), clock=clock)
        a = registry.create("A", ["x"], 0.3)

        assert registry.transfer(a.id, a.id, 0.1) is True
        stored = registry.get(a.id)
        assert stored.balance == 0.3
        # create() consumed one tick and the transfer exactly one more.
        assert clock.now == START.replace(second=2)
        assert stored.updated_at == START.replace(second=1)

    def test_self_transfer_over_balance_rejected(self, registry):
        a = registry.create("A", ["x"], 0.3)
        before = registry.get(a.id)
        assert registry.transfer(a.id, a.id, 1.0) is False
        assert registry.get(a.id) == before


class TestExecuteTransfer:
    def test_returns_post_transfer_copies(self, registry):
        a = registry.create("A", ["x"], 1.0)
        b = registry.create("B", ["x"], 0.0)

        source, destination = registry.execute_transfer(a.id, b.id, 0.4)

        assert (source.id, source.balance) == (a.id, 0.6)
        assert (destination.id, destination.balance) == (b.id, 0.4)
        source.balance = 999
        assert registry.get(a.id).balance == 0.6

    def test_self_transfer_returns_the_same_record_twice(self, registry):
        a = registry.create("A", ["x"], 1.0)
        source, destination = registry.execute_transfer(a.id, a.id, 0.5)
        assert source == destination
        assert source.balance == 1.0

    def test_missing_source_reported_first(self, registry):
        with pytest.raises(NotFound) as excinfo:
            registry.execute_transfer("ghost-from", "ghost-to", 1.0)
        assert excinfo.value.agent_id == "ghost-from"

    def test_missing_destination(self, registry):
        a = registry.create("A", ["x"], 1.0)
        with pytest.raises(NotFound) as excinfo:
            registry.execute_transfer(a.id, "ghost", 0.5)
        assert excinfo.value.agent_id == "ghost"
        assert registry.get(a.id).balance == 1.0

    def test_insufficient_funds_carries_balance_at_refusal(self, registry):
        a = registry.create("A", ["x"], 0.5)
        b = registry.create("B", ["x"], 0.0)

        with pytest.raises(InsufficientFunds) as excinfo:
            registry.execute_transfer(a.id, b.id, 1.0)

        assert excinfo.value.balance == 0.5
        assert excinfo.value.requested == 1.0
        assert excinfo.value.message == (
            "Insufficient balance: agent 'A' (agent-1) has 0.5 SOL, transfer requires 1 SOL."
        )

    @pytest.mark.parametrize("amount", [0, -1.0, float("nan")])
    def test_non_positive_amount(self, registry, amount):
        a = registry.create("A", ["x"], 1.0)
        b = registry.create("B", ["x"], 0.0)
        with pytest.raises(InvalidInput):
            registry.execute_transfer(a.id, b.id, amount)
        assert registry.get(a.id).balance == 1.0


class TestStats:
    def test_empty_registry(self, registry):
        stats = registry.stats()
        assert stats.count == 0
        assert stats.total_balance == 0
        assert stats.average_balance == 0

    def test_average_is_total_over_count(self, registry):
        registry.create("A", ["x"], 1.0)
        registry.create("B", ["x"], 2.0)
        registry.create("C", ["x"], 4.5)
        stats = registry.stats()
        assert stats.count == 3
        assert stats.total_balance == 7.5
        assert stats.average_balance == 7.5 / 3


class TestConcurrency:
    def test_parallel_transfers_conserve_total(self):
        registry = AgentRegistry()
        agents = [registry.create(f"a{i}", ["x"], 100.0) for i in range(4)]
        ids = [a.id for a in agents]

        def worker(offset: int):
            for step in range(500):
                src = ids[(offset + step) % len(ids)]
                dst = ids[(offset + step + 1) % len(ids)]
                registry.transfer(src, dst, 1.0)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        balances = [a.balance for a in registry.list_all()]
        assert sum(balances) == 400.0
        assert all(b >= 0 for b in balances)

    def test_parallel_creates_are_all_kept(self):
        registry = AgentRegistry()

        def worker():
            for _ in range(100):
                registry.create("a", ["x"], 0)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(registry) == 800
        assert len({a.id for a in registry.list_all()}) == 800
