from dataview.models import SortDirection, SortState
from dataview.services import sort_cycle
from tests.factories import default_columns, email_column, score_column


def test_same_column_cycles_through_three_states():
    col = score_column()
    s1 = sort_cycle.toggle(SortState(), col)
    assert s1.column is col and s1.direction is SortDirection.ASCENDING
    s2 = sort_cycle.toggle(s1, col)
    assert s2.column is col and s2.direction is SortDirection.DESCENDING
    s3 = sort_cycle.toggle(s2, col)
    assert s3 == SortState()
    assert s3.column is None and s3.direction_index == 0


def test_other_column_always_starts_ascending():
    a, b = email_column(), score_column()
    descending = sort_cycle.toggle(sort_cycle.toggle(SortState(), a), a)
    assert descending.direction is SortDirection.DESCENDING
    switched = sort_cycle.toggle(descending, b)
    assert switched.column is b
    assert switched.direction is SortDirection.ASCENDING


def test_toggle_by_id_ignores_unknown_and_non_orderable_columns():
    cols = default_columns()
    state = SortState()
    assert sort_cycle.toggle_by_id(state, cols, "role") is state
    assert sort_cycle.toggle_by_id(state, cols, "nope") is state
    assert sort_cycle.toggle_by_id(state, cols, "score").column is cols[2]


def test_reconcile_clears_removed_sort_column():
    state = SortState(column=score_column(), direction=SortDirection.DESCENDING)
    assert sort_cycle.reconcile(state, [email_column()]) == SortState()


def test_reconcile_rebinds_surviving_sort_column():
    replacement = score_column()
    state = SortState(column=score_column(), direction=SortDirection.DESCENDING)
    rebound = sort_cycle.reconcile(state, [replacement])
    assert rebound.column is replacement
    assert rebound.direction is SortDirection.DESCENDING


def test_indicator_for_columns():
    cols = default_columns()
    state = SortState(column=cols[2], direction=SortDirection.DESCENDING)
    active = sort_cycle.indicator_for(state, cols, "score")
    assert (active.active, active.direction, active.orderable) == (True, "desc", True)
    idle = sort_cycle.indicator_for(state, cols, "email")
    assert (idle.active, idle.direction, idle.orderable) == (False, "none", True)
    plain = sort_cycle.indicator_for(state, cols, "role")
    assert (plain.active, plain.direction, plain.orderable) == (False, "none", False)
