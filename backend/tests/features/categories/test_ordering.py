"""
Tests for CategoryOrderingModel.

Ordinals must always be a dense 1..N over the selection order.
"""

import pytest

from outline_admin.features.categories import Category, CategoryOrderingModel


def _assert_dense(ids, ordinals):
    assert sorted(ordinals.values()) == list(range(1, len(ids) + 1))
    assert [ordinals[i] for i in ids] == list(range(1, len(ids) + 1))


@pytest.fixture
def model():
    return CategoryOrderingModel()


class TestSelect:
    """Tests for seeding from a stored category."""

    def test_ordinals_follow_stored_order(self, model):
        ids, ordinals = model.select(Category(course_id_list=["c", "a", "b"]))
        assert ids == ["c", "a", "b"]
        assert ordinals == {"c": 1, "a": 2, "b": 3}

    def test_empty_category(self, model):
        assert model.select(Category()) == ([], {})

    def test_duplicate_ids_collapsed(self, model):
        ids, ordinals = model.select(Category(course_id_list=["a", "b", "a"]))
        assert ids == ["a", "b"]
        _assert_dense(ids, ordinals)

    def test_reselect_replaces_selection(self, model):
        model.select(Category(course_id_list=["a", "b"]))
        ids, _ = model.select(Category(course_id_list=["z"]))
        assert ids == ["z"]

    def test_select_does_not_alias_category(self, model):
        category = Category(course_id_list=["a"])
        model.select(category)
        model.toggle("b")
        assert category.course_id_list == ["a"]


class TestToggle:
    """Tests for toggling courses in and out."""

    def test_append_gets_next_ordinal(self, model):
        model.select(Category(course_id_list=["a", "b"]))
        ids, ordinals = model.toggle("c")
        assert ids == ["a", "b", "c"]
        assert ordinals["c"] == 3

    def test_three_on_in_order(self, model):
        model.select(Category())
        model.toggle("X")
        model.toggle("Y")
        ids, ordinals = model.toggle("Z")
        assert ordinals == {"X": 1, "Y": 2, "Z": 3}

    def test_remove_middle_closes_gap(self, model):
        model.select(Category())
        for course_id in ("X", "Y", "Z"):
            model.toggle(course_id)
        ids, ordinals = model.toggle("Y")
        assert ids == ["X", "Z"]
        assert ordinals == {"X": 1, "Z": 2}

    def test_on_then_off_round_trip(self, model):
        category = Category(course_id_list=["a", "b", "c"])
        before = model.select(category)
        model.toggle("d")
        after = model.toggle("d")
        assert after == before

    def test_off_then_on_moves_to_end(self, model):
        model.select(Category(course_id_list=["a", "b", "c"]))
        model.toggle("a")
        ids, ordinals = model.toggle("a")
        assert ids == ["b", "c", "a"]
        assert ordinals == {"b": 1, "c": 2, "a": 3}

    def test_ordinals_dense_after_every_toggle(self, model):
        model.select(Category(course_id_list=["a", "b", "c", "d"]))
        for course_id in ["b", "e", "a", "b", "d", "f", "e", "c"]:
            ids, ordinals = model.toggle(course_id)
            assert len(set(ids)) == len(ids)
            _assert_dense(ids, ordinals)

    def test_course_id_list_is_selection(self, model):
        model.select(Category(course_id_list=["a"]))
        model.toggle("b")
        assert model.course_id_list() == ["a", "b"]
        assert model.is_selected("b")
        assert not model.is_selected("z")
