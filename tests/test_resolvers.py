import pytest

from flagdriver import Computed, InvalidFlagResolver, Lookup, Membership, computed, lookup, one_of
from flagdriver.core.resolvers import as_resolver, build_resolvers
from flagdriver.core.state import select_active


def test_shape_dispatch():
    assert isinstance(as_resolver("f", ["a"]), Membership)
    assert isinstance(as_resolver("f", ("a", "b")), Membership)
    assert isinstance(as_resolver("f", {"a", "b"}), Membership)
    assert isinstance(as_resolver("f", {"a": 1}), Lookup)
    assert isinstance(as_resolver("f", len), Computed)


def test_empty_list_and_empty_mapping_are_distinct():
    selection = select_active({"a": True})
    assert as_resolver("f", []).resolve(selection) is False
    assert as_resolver("f", {}).resolve(selection) is None


def test_explicit_resolver_passes_through():
    resolver = one_of("a")
    assert as_resolver("f", resolver) is resolver


@pytest.mark.parametrize("value", [42, 1.5, None, True, "a", b"a", object()])
def test_unrecognised_shapes_are_rejected(value):
    with pytest.raises(InvalidFlagResolver):
        as_resolver("f", value)


def test_invalid_flag_resolver_is_a_type_error():
    with pytest.raises(TypeError):
        as_resolver("f", 42)


def test_membership_entries_must_be_names():
    with pytest.raises(InvalidFlagResolver, match="membership entries"):
        as_resolver("f", ["a", 1])


def test_lookup_keys_must_be_names():
    with pytest.raises(InvalidFlagResolver, match="lookup keys"):
        as_resolver("f", {1: "one"})


def test_one_of_accepts_an_iterable():
    assert one_of(["a", "b"]) == one_of("a", "b") == Membership(("a", "b"))


def test_lookup_helper_merges_keywords():
    resolver = lookup({"a": 1}, b=2)
    assert dict(resolver.values) == {"a": 1, "b": 2}


def test_helpers_reject_bad_input():
    with pytest.raises(InvalidFlagResolver, match="callable"):
        computed("not callable")
    with pytest.raises(InvalidFlagResolver, match="state names"):
        one_of("a", 2)
    with pytest.raises(InvalidFlagResolver, match="state names"):
        lookup({3: "x"})


@pytest.mark.parametrize(
    ("resolver", "reason"),
    [
        (Membership("abc"), "must be a tuple"),
        (Membership(("a", 1)), "membership entries"),
        (Computed(5), "needs a callable"),
        (Lookup(["a"]), "must be a mapping"),
        (Lookup({2: "b"}), "lookup keys"),
    ],
)
def test_hand_built_resolvers_are_validated(resolver, reason):
    with pytest.raises(InvalidFlagResolver, match=reason) as excinfo:
        as_resolver("f", resolver)
    assert excinfo.value.flag == "f"


def test_build_resolvers_requires_mapping():
    with pytest.raises(InvalidFlagResolver):
        build_resolvers([("f", ["a"])])


def test_build_resolvers_checks_known_states():
    with pytest.raises(InvalidFlagResolver, match="unknown states"):
        build_resolvers({"text": {"a": "A", "zz": "Z"}}, known_states={"a", "b"})
    table = build_resolvers({"f": lambda *a: 1}, known_states=set())
    assert isinstance(table["f"], Computed)
