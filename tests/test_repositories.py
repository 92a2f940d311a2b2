"""Tests for the in-memory repositories."""

from __future__ import annotations

import threading

import pytest
from pydantic import ValidationError

from portfolio_dash.core.exceptions import StorageNotFoundError
from portfolio_dash.dto.portfolio import HoldingCreate
from portfolio_dash.entities import InstrumentType
from tests.conftest import holding_data


# =============================================================================
# Users and Portfolios
# =============================================================================


def test_create_and_lookup_user(user_repo):
    user = user_repo.create("alice", "secret")

    assert user.id == 1
    assert user_repo.get_by_id(user.id) == user
    assert user_repo.get_by_username("alice") == user
    assert user_repo.get_by_username("bob") is None
    assert user_repo.get_by_id(99) is None


def test_get_or_create_user_is_idempotent(user_repo, db):
    first = user_repo.get_or_create("default", "password")
    second = user_repo.get_or_create("default", "password")

    assert first.id == second.id
    assert len(db.tables["users"]) == 1


def test_portfolios_filtered_by_owner(user_repo, portfolio_repo):
    alice = user_repo.create("alice", "x")
    bob = user_repo.create("bob", "x")
    portfolio_repo.create(alice.id, "Main")
    portfolio_repo.create(bob.id, "Other")
    portfolio_repo.create(alice.id, "Second")

    names = sorted(p.name for p in portfolio_repo.get_by_user_id(alice.id))

    assert names == ["Main", "Second"]
    assert portfolio_repo.get_by_user_id(999) == []


def test_get_or_create_portfolio_is_idempotent(portfolio_repo, db):
    first = portfolio_repo.get_or_create_for_user(1, "My Portfolio")
    second = portfolio_repo.get_or_create_for_user(1, "Ignored")

    assert first.id == second.id
    assert second.name == "My Portfolio"
    assert first.created_at is not None
    assert len(db.tables["portfolios"]) == 1


def test_counters_are_independent(user_repo, portfolio_repo, holding_repo):
    user = user_repo.create("alice", "x")
    portfolio = portfolio_repo.create(user.id, "Main")
    holding = holding_repo.create(holding_data(portfolio.id))

    assert (user.id, portfolio.id, holding.id) == (1, 1, 1)


# =============================================================================
# Holdings
# =============================================================================


def test_create_holding_accepts_dto_or_dict(holding_repo):
    from_dict = holding_repo.create(holding_data(instrument="TCS"))
    from_dto = holding_repo.create(HoldingCreate(**holding_data(instrument="INFY")))

    assert from_dict.instrument == "TCS"
    assert from_dto.instrument == "INFY"
    assert from_dto.instrument_type == InstrumentType.STOCK
    assert holding_repo.get_by_id(from_dto.id) == from_dto


def test_create_many_preserves_order(holding_repo):
    names = ["TCS", "INFY", "ITC", "RELIANCE"]

    created = holding_repo.create_many([holding_data(instrument=name) for name in names])

    assert [h.instrument for h in created] == names
    assert [h.id for h in created] == [1, 2, 3, 4]


def test_create_many_is_all_or_nothing(holding_repo, db):
    batch = [
        holding_data(instrument="TCS"),
        holding_data(instrument="INFY"),
        holding_data(instrument="BAD", quantity="-5"),
        holding_data(instrument="ITC"),
    ]

    with pytest.raises(ValidationError):
        holding_repo.create_many(batch)

    assert db.tables["holdings"] == {}


def test_decimal_strings_round_trip_unchanged(holding_repo):
    created = holding_repo.create(holding_data(avg_cost="2400.50", pnl_percent="4.1450"))

    stored = holding_repo.get_by_id(created.id)

    assert stored.avg_cost == "2400.50"
    assert stored.pnl_percent == "4.1450"


def test_holdings_filtered_by_portfolio(holding_repo):
    holding_repo.create_many([holding_data(1, "TCS"), holding_data(2, "INFY"), holding_data(1, "ITC")])

    assert sorted(h.instrument for h in holding_repo.get_by_portfolio_id(1)) == ["ITC", "TCS"]
    assert holding_repo.get_by_portfolio_id(3) == []


def test_update_merges_partial_changes(holding_repo):
    holding = holding_repo.create(holding_data(instrument="TCS"))

    updated = holding_repo.update(holding.id, {"ltp": "120", "sector": "IT", "id": 42, "unknown": 1})

    assert updated.id == holding.id
    assert updated.ltp == "120"
    assert updated.sector == "IT"
    assert updated.quantity == holding.quantity
    assert holding_repo.get_by_id(holding.id) == updated


def test_update_missing_returns_none(holding_repo):
    assert holding_repo.update(404, {"ltp": "1"}) is None


def test_delete(holding_repo):
    holding = holding_repo.create(holding_data())

    assert holding_repo.delete(holding.id) is True
    assert holding_repo.get_by_id(holding.id) is None
    assert holding_repo.delete(holding.id) is False


def test_ids_never_reused_after_delete(holding_repo):
    first = holding_repo.create(holding_data())
    holding_repo.delete(first.id)

    second = holding_repo.create(holding_data())

    assert second.id == first.id + 1


def test_clear_portfolio(holding_repo):
    holding_repo.create_many([holding_data(1, "TCS"), holding_data(1, "INFY"), holding_data(2, "ITC")])

    assert holding_repo.clear_portfolio(1) == 2
    assert holding_repo.get_by_portfolio_id(1) == []
    assert len(holding_repo.get_by_portfolio_id(2)) == 1


def test_replace_portfolio(holding_repo):
    holding_repo.create_many([holding_data(1, "TCS"), holding_data(1, "INFY"), holding_data(2, "ITC")])

    created = holding_repo.replace_portfolio(1, [holding_data(1, "HDFCBANK")])

    assert [h.instrument for h in holding_repo.get_by_portfolio_id(1)] == ["HDFCBANK"]
    assert created[0].id == 4
    assert len(holding_repo.get_by_portfolio_id(2)) == 1


def test_replace_portfolio_restores_on_failure(holding_repo):
    original = holding_repo.create_many([holding_data(1, "TCS"), holding_data(1, "INFY")])

    with pytest.raises(ValidationError):
        holding_repo.replace_portfolio(1, [holding_data(1, "OK"), holding_data(1, "BAD", ltp="oops")])

    remaining = sorted(holding_repo.get_by_portfolio_id(1), key=lambda h: h.id)
    assert remaining == original


def _instruments(holding_repo, portfolio_id):
    return [h.instrument for h in holding_repo.get_by_portfolio_id(portfolio_id)]


def test_replace_portfolio_waits_for_portfolio_lock(holding_repo, db):
    holding_repo.create(holding_data(1, "TCS"))
    finished = threading.Event()

    def replace():
        holding_repo.replace_portfolio(1, [holding_data(1, "INFY")])
        finished.set()

    worker = threading.Thread(target=replace, daemon=True)
    with db.portfolio_lock(1):
        worker.start()
        assert not finished.wait(0.2)
        assert _instruments(holding_repo, 1) == ["TCS"]

    worker.join(timeout=5)
    assert finished.is_set()
    assert _instruments(holding_repo, 1) == ["INFY"]


def test_portfolio_lock_does_not_block_other_portfolios(holding_repo, db):
    worker = threading.Thread(
        target=holding_repo.replace_portfolio,
        args=(2, [holding_data(2, "ITC")]),
        daemon=True,
    )

    with db.portfolio_lock(1):
        worker.start()
        worker.join(timeout=5)
        assert not worker.is_alive()

    assert _instruments(holding_repo, 2) == ["ITC"]


def test_portfolio_lock_released_after_failed_replace(holding_repo, db):
    with pytest.raises(ValidationError):
        holding_repo.replace_portfolio(1, [holding_data(1, "BAD", ltp="oops")])

    acquired = threading.Event()

    def take_lock():
        with db.portfolio_lock(1):
            acquired.set()

    worker = threading.Thread(target=take_lock, daemon=True)
    worker.start()

    assert acquired.wait(5)
    worker.join(timeout=5)


def test_update_cannot_move_holding_between_portfolios(holding_repo):
    holding = holding_repo.create(holding_data(1, "TCS"))

    updated = holding_repo.update(holding.id, {"portfolio_id": 2, "ltp": "120"})

    assert updated.portfolio_id == 1
    assert updated.ltp == "120"
    assert holding_repo.get_by_portfolio_id(2) == []


def test_database_get_raises_not_found(db):
    with pytest.raises(StorageNotFoundError):
        db.get("holdings", 1)
