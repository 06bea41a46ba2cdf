"""Tests for Record / CastMember dataclasses and the shallow merge."""
import dataclasses

import pytest

from recordform import CastMember, DEFAULT_RECORD_VALUES, Record, merge_delta


class TestDefaults:
    """Test the initial record state."""

    def test_default_values(self):
        record = Record()
        assert record.title == ""
        assert record.rating == 0
        assert record.year is None
        assert record.description == ""
        assert record.upcoming is True
        assert record.cast == ()

    def test_default_mapping_matches_record(self):
        assert dict(DEFAULT_RECORD_VALUES) == Record().to_dict()

    def test_field_names(self):
        assert Record.field_names() == ('title', 'rating', 'year', 'description', 'upcoming', 'cast')

    def test_record_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Record().title = "x"


class TestMergeDelta:
    """Test shallow-merge semantics."""

    def test_only_named_keys_change(self):
        before = Record(title="A", rating=3, description="d")
        after = merge_delta(before, {'title': 'B'})
        assert after.title == 'B'
        assert after.rating == 3
        assert after.description == 'd'
        assert after.upcoming is True

    def test_merge_returns_new_record(self):
        before = Record()
        after = merge_delta(before, {'title': 'Inception'})
        assert after is not before
        assert before.title == ""

    def test_disjoint_deltas_commute(self):
        d1 = {'title': 'Heat'}
        d2 = {'year': 1995}
        assert merge_delta(merge_delta(Record(), d1), d2) == merge_delta(merge_delta(Record(), d2), d1)

    def test_overlapping_deltas_later_wins(self):
        merged = merge_delta(merge_delta(Record(), {'title': 'first'}), {'title': 'second'})
        assert merged.title == 'second'

    def test_unknown_key_is_ignored(self, caplog):
        before = Record(title="kept")
        after = merge_delta(before, {'director': 'Mann'})
        assert after == before
        assert not hasattr(after, 'director')
        assert "director" in caplog.text

    def test_cast_replaced_wholesale(self):
        before = Record(cast=(CastMember(1, {'name': 'Al'}), CastMember(2, {'name': 'Bob'})))
        after = merge_delta(before, {'cast': [{'id': 3, 'name': 'Val'}]})
        assert after.cast == (CastMember(3, {'name': 'Val'}),)

    def test_empty_delta_returns_same_record(self):
        record = Record(title="x")
        assert merge_delta(record, {}) is record


class TestCastMember:
    """Test CastMember conversions."""

    def test_from_dict_splits_identifier(self):
        member = CastMember.from_dict({'id': 7, 'name': 'Alice', 'role': 'Lead'})
        assert member.id == 7
        assert dict(member.attributes) == {'name': 'Alice', 'role': 'Lead'}

    def test_to_dict_includes_identifier(self):
        assert CastMember(7, {'name': 'Alice'}).to_dict() == {'name': 'Alice', 'id': 7}

    def test_item_access(self):
        member = CastMember(7, {'name': 'Alice'})
        assert member['id'] == 7
        assert member['name'] == 'Alice'
        assert member.get('role') is None

    def test_from_dict_requires_identifier(self):
        with pytest.raises(ValueError):
            CastMember.from_dict({'name': 'Alice'})

    def test_attributes_are_read_only(self):
        member = CastMember(1, {'name': 'Alice'})
        with pytest.raises(TypeError):
            member.attributes['name'] = 'Eve'

    def test_source_mapping_is_copied(self):
        source = {'name': 'Alice'}
        member = CastMember(1, source)
        source['name'] = 'Eve'
        assert member['name'] == 'Alice'


class TestSerialization:
    """Test Record to_dict / from_dict."""

    def test_to_dict(self):
        record = Record(title="Inception", year=2010, cast=(CastMember(1, {'name': 'Leo'}),))
        assert record.to_dict() == {
            'title': 'Inception',
            'rating': 0,
            'year': 2010,
            'description': '',
            'upcoming': True,
            'cast': [{'name': 'Leo', 'id': 1}],
        }

    def test_from_dict_fills_defaults(self):
        record = Record.from_dict({'title': 'Heat', 'cast': [{'id': 4, 'name': 'Al'}]})
        assert record.title == 'Heat'
        assert record.upcoming is True
        assert record.cast == (CastMember(4, {'name': 'Al'}),)


class TestHashing:
    """Test hashing with unhashable attribute values."""

    def test_cast_member_with_list_attribute_is_hashable(self):
        member = CastMember(1, {'name': 'Alice', 'roles': ['Lead', 'Narrator']})
        assert hash(member) == hash(CastMember(1, {'name': 'Alice', 'roles': ['Lead', 'Narrator']}))
        assert len({member, CastMember(1, {'name': 'Alice', 'roles': ['Lead', 'Narrator']})}) == 1

    def test_record_with_such_cast_is_hashable(self):
        record = Record(cast=(CastMember(1, {'roles': ['Lead']}),))
        assert hash(record) == hash(Record(cast=({'id': 1, 'roles': ['Lead']},)))

    def test_equal_ids_with_different_attributes_are_not_equal(self):
        assert CastMember(1, {'name': 'A'}) != CastMember(1, {'name': 'B'})
