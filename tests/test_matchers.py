"""Tests for the matcher variants and tree helpers."""

import pytest

from cmdcomplete.matchers import (
    AnyLevelMatcher,
    CompletionMatcher,
    MatcherCollection,
    NodeNameMatcher,
    alternatives,
    any_level,
    check_acyclic,
    describe,
    dynamic_alternatives,
    dynamic_name_matcher,
    multi_part_matcher,
    name_matcher,
    walk,
)
from cmdcomplete.models import MatcherTreeError


@pytest.fixture
def highlight():
    return multi_part_matcher(
        "+",
        [alternatives(name_matcher("red"), name_matcher("blue")), alternatives(name_matcher("bold"), name_matcher("b"))],
        name_matcher("now"),
    )


class TestNodeNameMatcher:
    """Literal token matching."""

    def test_completions(self):
        node = name_matcher("central")
        assert node.completions_for("") == ["central"]
        assert node.completions_for("cen") == ["central"]
        assert node.completions_for("central") == ["central"]
        assert node.completions_for("x") == []
        assert node.completions_for("centrals") == []

    def test_partially_matches_needs_a_separator(self):
        node = name_matcher("grab")
        assert node.partially_matches("grab ")
        assert node.partially_matches("grab central")
        assert not node.partially_matches("grab")
        assert not node.partially_matches("grabs ")

    def test_argument_fully_matched(self):
        node = name_matcher("grab")
        assert node.argument_fully_matched("grab")
        assert not node.argument_fully_matched("gra")

    def test_children(self):
        child = name_matcher("central")
        assert name_matcher("grab", child).children() == (child,)
        assert name_matcher("grab").children() == ()

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name(self, name):
        with pytest.raises(MatcherTreeError):
            name_matcher(name)

    def test_blank_name_is_a_value_error(self):
        with pytest.raises(ValueError, match="non-empty"):
            NodeNameMatcher("")

    def test_children_list_is_copied(self):
        children = [name_matcher("a")]
        node = NodeNameMatcher("x", children)
        children.append(name_matcher("b"))
        assert len(node.children()) == 1

    def test_protocol(self):
        assert isinstance(name_matcher("grab"), CompletionMatcher)


class TestDynamicChildren:
    """Children computed on demand."""

    def test_evaluated_on_each_call(self):
        names = ["a"]
        node = dynamic_name_matcher("cmd", lambda: [name_matcher(n) for n in names])
        assert [c.name for c in node.children()] == ["a"]
        names.append("b")
        assert [c.name for c in node.children()] == ["a", "b"]

    def test_self_reference(self):
        holder = []
        node = dynamic_name_matcher("loop", lambda: holder)
        holder.append(node)
        with pytest.raises(MatcherTreeError, match="itself"):
            node.children()

    def test_dynamic_alternatives(self):
        names = ["red"]
        colors = dynamic_alternatives(lambda: [name_matcher(n) for n in names])
        assert colors.completions_for("") == ["red"]
        names.append("blue")
        assert colors.completions_for("") == ["red", "blue"]


class TestAnyLevelMatcher:
    """Wildcard matchers."""

    def test_delegates_completions(self):
        wildcard = any_level(name_matcher("--help"))
        assert wildcard.completions_for("--") == ["--help"]
        assert wildcard.completions_for("x") == []

    def test_always_matches(self):
        wildcard = any_level(name_matcher("--help"))
        assert wildcard.partially_matches("anything")
        assert wildcard.argument_fully_matched("anything")

    def test_same_completions_at_any_depth(self):
        help_matcher = any_level(name_matcher("help"))
        root = name_matcher("cmd", name_matcher("a", name_matcher("b")), help_matcher)
        node = root
        for _ in range(3):
            assert help_matcher.completions_for("h") == ["help"]
            node = node.children()[-1]
            assert node is help_matcher

    def test_own_child(self):
        wildcard = any_level(name_matcher("--help"))
        assert wildcard.children() == (wildcard,)
        assert wildcard.children()[0] is wildcard


class TestMatcherCollection:
    """Alternatives handled as one matcher."""

    def test_completions_concatenated(self):
        colors = alternatives(name_matcher("red"), name_matcher("blue"), name_matcher("brown"))
        assert colors.completions_for("") == ["red", "blue", "brown"]
        assert colors.completions_for("b") == ["blue", "brown"]

    def test_fully_matched(self):
        colors = alternatives(name_matcher("red"), name_matcher("blue"))
        assert colors.argument_fully_matched("red")
        assert not colors.argument_fully_matched("re")

    def test_partially_matches(self):
        colors = alternatives(name_matcher("red"), name_matcher("blue"))
        assert colors.partially_matches("blue x")
        assert not colors.partially_matches("green x")

    def test_children_are_members_children(self):
        a, b = name_matcher("a"), name_matcher("b")
        collection = alternatives(name_matcher("x", a), name_matcher("y", b))
        assert collection.children() == (a, b)
        assert list(collection) == list(collection.members())

    def test_empty(self):
        collection = MatcherCollection()
        assert collection.completions_for("") == []
        assert not collection.partially_matches("a")


class TestMultiPartMatcher:
    """Tokens made of several parts."""

    def test_first_part(self, highlight):
        assert highlight.completions_for("") == ["red", "blue"]
        assert highlight.completions_for("r") == ["red"]

    def test_next_part(self, highlight):
        assert highlight.completions_for("red") == ["red+bold", "red+b"]
        assert highlight.completions_for("red+") == ["red+bold", "red+b"]
        assert highlight.completions_for("blue+bo") == ["blue+bold"]

    def test_all_parts_typed(self, highlight):
        assert highlight.completions_for("red+b") == ["red+bold", "red+b"]
        assert highlight.completions_for("red+bold") == ["red+bold"]

    def test_wrong_parts(self, highlight):
        assert highlight.completions_for("green") == []
        assert highlight.completions_for("green+b") == []
        assert highlight.completions_for("red+bold+x") == []
        assert highlight.completions_for("red+x") == []

    def test_fully_matched(self, highlight):
        assert highlight.argument_fully_matched("red+bold")
        assert highlight.argument_fully_matched("blue+b")
        assert not highlight.argument_fully_matched("red")
        assert not highlight.argument_fully_matched("red+")
        assert not highlight.argument_fully_matched("red+bo")
        assert not highlight.argument_fully_matched("red+bold+b")
        assert not highlight.argument_fully_matched("red+bold+x")

    def test_never_partially_matches(self, highlight):
        assert not highlight.partially_matches("red+bold now")

    def test_children(self, highlight):
        assert [describe(child) for child in highlight.children()] == ["now"]

    def test_blank_separator(self):
        with pytest.raises(MatcherTreeError, match="Separator"):
            multi_part_matcher(" ", [name_matcher("a"), name_matcher("b")])

    def test_not_enough_parts(self):
        with pytest.raises(MatcherTreeError, match="at least 2 parts"):
            multi_part_matcher("+", [name_matcher("a")])

    def test_parts_with_children(self):
        with pytest.raises(MatcherTreeError, match="children"):
            multi_part_matcher("+", [name_matcher("a", name_matcher("x")), name_matcher("b")])


class TestTree:
    """Walking and describing trees."""

    def test_walk(self):
        root = name_matcher("grab", name_matcher("central", name_matcher("now")), any_level(name_matcher("--help")))
        assert [(depth, describe(m)) for depth, m in walk(root)] == [
            (0, "grab"),
            (1, "central"),
            (2, "now"),
            (1, "*--help"),
        ]

    def test_walk_shared_subtree(self):
        """A matcher used at several places is not a cycle."""
        target = name_matcher("text")
        root = name_matcher("color", name_matcher("red", target), name_matcher("blue", target))
        check_acyclic(root)
        assert len(list(walk(root))) == 5

    def test_cycle_detected(self):
        children = []
        root = dynamic_name_matcher("a", lambda: children)
        children.append(name_matcher("b", root))
        with pytest.raises(MatcherTreeError, match="Cycle"):
            check_acyclic(root)

    def test_describe(self, highlight):
        assert describe(highlight) == "{red|blue}+{bold|b}"
        assert describe(AnyLevelMatcher(name_matcher("-v"))) == "*-v"
        assert describe(alternatives(name_matcher("a"), name_matcher("b"))) == "a|b"
