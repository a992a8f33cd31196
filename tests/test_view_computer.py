from dataview.models import ColumnDescriptor, FilterState, OrderingCapability, SortDirection, SortState
from dataview.services.view_computer import compute_view
from tests.factories import Account, email_column, make_accounts, name_column, score_column

ASC = SortDirection.ASCENDING
DESC = SortDirection.DESCENDING


def _emails(view):
    return [r.email for r in view]


def test_no_filter_no_sort_is_an_ordered_copy():
    src = make_accounts(5)
    view = compute_view(src, FilterState(), SortState())
    assert list(view) == src
    assert isinstance(view, tuple)


def test_source_is_not_mutated_by_sorting():
    src = make_accounts(5)
    before = list(src)
    compute_view(src, FilterState(), SortState(column=score_column(), direction=ASC))
    assert src == before


def test_filter_keeps_exactly_matching_records():
    src = [Account(email=e) for e in ["a1", "", "b12", "c2", "1"]]
    st = FilterState(column=email_column(), text="1")
    view = compute_view(src, st, SortState())
    assert view == tuple(r for r in src if r.email and "1" in str(r.email))
    assert _emails(view) == ["a1", "b12", "1"]


def test_empty_strings_excluded_even_with_empty_text():
    src = [Account(email=f"e{i}", name="" if i in (2, 5, 7) else f"N{i}") for i in range(10)]
    view = compute_view(src, FilterState(column=name_column(), text=""), SortState())
    assert len(view) == 7
    assert "e2" not in _emails(view)


def test_sort_ascending_and_descending():
    src = make_accounts(5)  # scores 5..1
    asc = compute_view(src, FilterState(), SortState(column=score_column(), direction=ASC))
    desc = compute_view(src, FilterState(), SortState(column=score_column(), direction=DESC))
    assert [r.score for r in asc] == [1, 2, 3, 4, 5]
    assert [r.score for r in desc] == [5, 4, 3, 2, 1]


def test_sort_is_stable_in_both_directions():
    rows = [Account(email=f"e{i}", score=s) for i, s in enumerate([2, 1, 2, 1, 2])]
    asc = compute_view(rows, FilterState(), SortState(column=score_column(), direction=ASC))
    desc = compute_view(rows, FilterState(), SortState(column=score_column(), direction=DESC))
    assert _emails(asc) == ["e1", "e3", "e0", "e2", "e4"]
    assert _emails(desc) == ["e0", "e2", "e4", "e1", "e3"]


def test_unordered_direction_passes_filter_order_through():
    src = make_accounts(4)
    view = compute_view(src, FilterState(), SortState(column=score_column()))
    assert list(view) == src


def test_filter_applies_before_sort():
    src = make_accounts(12)  # user00..user11, scores 12..1
    st = FilterState(column=email_column(), text="user1")
    view = compute_view(src, st, SortState(column=score_column(), direction=ASC))
    assert _emails(view) == ["user11@example.com", "user10@example.com"]


def test_mixed_key_types_sort_without_raising():
    rows = [Account(email=f"e{i}", score=s) for i, s in enumerate([3, "b", None, 1, "a"])]
    view = compute_view(rows, FilterState(), SortState(column=score_column(), direction=ASC))
    assert [r.score for r in view] == [None, 1, 3, "a", "b"]


def test_failing_iteratee_sorts_last_ascending_first_descending():
    def key(a):
        if a.email == "bad":
            raise ValueError("no key")
        return a.score

    col = ColumnDescriptor(id="k", title="K", ordering=OrderingCapability(key))
    rows = [Account(email="bad"), Account(email="a", score=2), Account(email="b", score=1)]
    asc = compute_view(rows, FilterState(), SortState(column=col, direction=ASC))
    desc = compute_view(rows, FilterState(), SortState(column=col, direction=DESC))
    assert _emails(asc) == ["b", "a", "bad"]
    assert _emails(desc) == ["bad", "a", "b"]


def test_recompute_is_idempotent():
    src = make_accounts(8)
    fs = FilterState(column=email_column(), text="user0")
    ss = SortState(column=score_column(), direction=DESC)
    assert compute_view(src, fs, ss) == compute_view(src, fs, ss)
