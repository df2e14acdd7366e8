from types import SimpleNamespace

import pytest

from namely import (
    ExtensionCapabilityError,
    ExtensionCycleError,
    NotFoundError,
    Registry,
    Resolver,
)


class NoDeps:
    pass


class DictResolver:
    """A resolver backed by a plain dictionary."""

    def __init__(self, values):
        self.values = values

    def get_injectable(self, name):
        return self.values[name]

    def contains_injectable(self, name):
        return name in self.values


@pytest.fixture
def chain():
    a, b, c = Registry(name="a"), Registry(name="b"), Registry(name="c")
    b.extend(a)
    c.extend(b)
    return a, b, c


def test_values_are_visible_through_extended_registries(chain):
    a, _, c = chain
    a.put_constant("a", "A")

    assert c.get_injectable("a") == "A"


def test_contains_looks_through_extended_registries(chain):
    a, _, c = chain
    a.put_constant("a", "A")
    c.put_singleton("c", NoDeps)

    assert c.contains_injectable("a")
    assert c.contains_injectable("c")
    assert not a.contains_injectable("c")


def test_unknown_names_are_not_found_through_the_chain(chain):
    _, _, c = chain

    with pytest.raises(NotFoundError, match="'x' is not registered in registry <c>"):
        c.get_injectable("x")


def test_last_extended_registry_wins():
    a, b, c = Registry(), Registry(), Registry()
    a.put_constant("x", 1)
    b.put_constant("x", 2)
    c.extend(a)
    c.extend(b)

    assert c.get_injectable("x") == 2
    assert c.extended == (a, b)


def test_local_bindings_win_over_extended_registries():
    a, b = Registry(), Registry()
    a.put_constant("x", 1)
    b.put_constant("x", 2)
    b.extend(a)

    assert b.get_injectable("x") == 2


def test_extended_registry_resolves_with_its_own_bindings():
    class Greeter:
        def inject(self, hello):
            self.hello = hello

    base, child = Registry(), Registry()
    base.put_constant("hello", "world")
    base.put_class("greeter", Greeter)
    child.put_constant("hello", "elsewhere")
    child.extend(base)

    assert child.get_injectable("greeter").hello == "world"


def test_singletons_of_extended_registries_are_shared():
    base, first, second = Registry(), Registry(), Registry()
    base.put_singleton("shared", NoDeps)
    first.extend(base)
    second.extend(base)

    assert first.get_injectable("shared") is second.get_injectable("shared")


def test_diamond_extension_is_allowed():
    a, b, c, d = Registry(), Registry(), Registry(), Registry()
    a.put_constant("root", "value")
    b.extend(a)
    c.extend(a)
    d.extend(b)
    d.extend(c)

    assert d.get_injectable("root") == "value"


def test_any_resolver_can_be_extended():
    registry = Registry()
    registry.extend(DictResolver({"hello": "world"}))

    assert isinstance(DictResolver({}), Resolver)
    assert registry.contains_injectable("hello")
    assert registry.get_injectable("hello") == "world"


@pytest.mark.parametrize(
    "other, missing",
    [
        (object(), ["get_injectable", "contains_injectable"]),
        (SimpleNamespace(get_injectable=lambda name: None), ["contains_injectable"]),
        (
            SimpleNamespace(get_injectable="non-function", contains_injectable="non-function"),
            ["get_injectable", "contains_injectable"],
        ),
    ],
)
def test_extension_requires_resolver_capability(other, missing):
    registry = Registry()

    with pytest.raises(ExtensionCapabilityError) as exc:
        registry.extend(other)

    assert exc.value.missing == missing
    assert isinstance(exc.value, TypeError)
    assert registry.extended == ()


def test_registry_cannot_extend_itself():
    registry = Registry()

    with pytest.raises(ExtensionCycleError):
        registry.extend(registry)


def test_extension_cycles_are_rejected():
    a, b, c = Registry(), Registry(), Registry()
    a.extend(b)
    b.extend(c)

    with pytest.raises(ExtensionCycleError, match="would extend itself"):
        c.extend(a)

    assert c.extended == ()
