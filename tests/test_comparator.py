"""Tests for the ordered merge comparator."""

from dataclasses import dataclass

from pgreconcile.comparator import Action, Classification, classify


@dataclass(frozen=True)
class Item:
    name: str
    body: str = ""

    @property
    def key(self):
        return (self.name,)


def _summary(results):
    return [(r.action, r.object.name) for r in results]


class TestClassify:
    """Two-pointer classification of sorted sequences."""

    def test_mixed_collections(self):
        source = [Item("a"), Item("b", "1"), Item("c")]
        target = [Item("b", "2"), Item("c"), Item("d")]

        results = list(classify(source, target))

        assert _summary(results) == [
            (Action.REMOVE, "a"),
            (Action.MODIFY, "b"),
            (Action.NONE, "c"),
            (Action.ADD, "d"),
        ]

    def test_partition_covers_union_once(self):
        source = [Item("a"), Item("c"), Item("e"), Item("g")]
        target = [Item("b"), Item("c"), Item("f"), Item("g", "x")]

        results = list(classify(source, target))
        names = [r.object.name for r in results]

        assert names == sorted({"a", "b", "c", "e", "f", "g"})
        assert len(names) == len(set(names))

    def test_identical_inputs_are_all_unchanged(self):
        items = [Item("a"), Item("b"), Item("c")]

        results = list(classify(items, list(items)))

        assert all(r.action == Action.NONE for r in results)
        assert len(results) == 3

    def test_empty_source_adds_everything(self):
        target = [Item("a"), Item("b")]
        assert _summary(classify([], target)) == [(Action.ADD, "a"), (Action.ADD, "b")]

    def test_empty_target_removes_everything(self):
        source = [Item("a"), Item("b")]
        assert _summary(classify(source, [])) == [(Action.REMOVE, "a"), (Action.REMOVE, "b")]

    def test_both_empty(self):
        assert list(classify([], [])) == []

    def test_custom_key_and_content_comparison(self):
        source = [("x", 1), ("y", 2)]
        target = [("x", 3), ("y", 3)]

        results = list(
            classify(source, target, key=lambda t: t[0], same=lambda a, b: a[1] % 2 == b[1] % 2)
        )

        assert [r.action for r in results] == [Action.NONE, Action.MODIFY]

    def test_classification_carries_both_sides(self):
        (result,) = classify([Item("a", "old")], [Item("a", "new")])

        assert result == Classification(Action.MODIFY, Item("a", "old"), Item("a", "new"))
        assert result.object == Item("a", "new")

    def test_multi_part_keys_order_like_tuples(self):
        @dataclass(frozen=True)
        class Qualified:
            schema: str
            name: str

            @property
            def key(self):
                return (self.schema, self.name)

        source = [Qualified("public", "t1"), Qualified("public", "t2")]
        target = [Qualified("app", "t9"), Qualified("public", "t2")]

        results = [(r.action, r.object.key) for r in classify(source, target)]

        assert results == [
            (Action.ADD, ("app", "t9")),
            (Action.REMOVE, ("public", "t1")),
            (Action.NONE, ("public", "t2")),
        ]
