"""Tests for the collision-free identifier source."""
from recordform import IdentifierSource


def test_ids_increase_monotonically():
    source = IdentifierSource()
    issued = [source.next_id() for _ in range(5)]
    assert issued == [1, 2, 3, 4, 5]


def test_skips_past_existing_ids():
    source = IdentifierSource()
    assert source.next_id([10, 3]) == 11
    assert source.next_id() == 12


def test_ids_never_reused_after_delete():
    source = IdentifierSource()
    first = source.next_id()
    second = source.next_id([first])
    # first is gone from the list; it must still not come back
    third = source.next_id([second])
    assert len({first, second, third}) == 3
    assert third > second > first


def test_custom_start():
    source = IdentifierSource(start=100)
    assert source.peek == 100
    assert source.next_id() == 100
    assert source.peek == 101
