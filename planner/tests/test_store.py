from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from planner.core.contribution_math import ContributionKind, ContributionSelection
from planner.core.store import DEFAULT_STATE, ContributionStore


def test_store_starts_from_mock_account():
    state = ContributionStore().get()

    assert state == DEFAULT_STATE
    assert state.user_id == "mock-user-123"
    assert state.contribution_type == ContributionKind.PERCENT
    assert state.contribution_value == 10


def test_save_replaces_selection_and_given_fields_only():
    store = ContributionStore()
    selection = ContributionSelection(kind=ContributionKind.DOLLAR, value=300)

    state = store.save(selection, salary=90000)

    assert state.contribution_type == ContributionKind.DOLLAR
    assert state.contribution_value == 300
    assert state.salary == 90000
    assert state.age == DEFAULT_STATE.age
    assert store.get() == state
    # previously returned states are never mutated
    assert DEFAULT_STATE.salary == 120000


def test_save_rejects_unknown_fields():
    store = ContributionStore()
    selection = ContributionSelection(kind=ContributionKind.PERCENT, value=5)

    with pytest.raises(TypeError):
        store.save(selection, user_id="someone-else")


def test_stores_are_independent():
    first, second = ContributionStore(), ContributionStore()
    first.save(ContributionSelection(kind=ContributionKind.PERCENT, value=20))

    assert second.get().contribution_value == 10


def test_reset_restores_default():
    store = ContributionStore()
    store.save(ContributionSelection(kind=ContributionKind.PERCENT, value=20), age=45)

    assert store.reset() == DEFAULT_STATE


def test_concurrent_saves_leave_a_consistent_state():
    store = ContributionStore()

    def save(i: int) -> None:
        store.save(ContributionSelection(kind=ContributionKind.DOLLAR, value=i), salary=i * 1000)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(save, range(1, 101)))

    state = store.get()
    assert state.salary == state.contribution_value * 1000
