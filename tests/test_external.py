import json
import os.path

import pytest

from namely import ExternalReferenceError, Ref, Registry, RelativeReferenceError
from namely.external import unquote


def is_number(value):
    return isinstance(value, (int, float))


@pytest.fixture
def registry() -> Registry:
    return Registry(external_source={"is-number": is_number}.__getitem__)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("'json'", "json"),
        ('"os.path"', "os.path"),
        ("''", ""),
        ("json", None),
        ("'json\"", None),
        ("'", None),
    ],
)
def test_unquote(name, expected):
    assert unquote(name) == expected


def test_quoted_names_are_loaded_from_the_external_source(registry):
    assert registry.get_injectable("'is-number'") is is_number
    assert registry.get_injectable('"is-number"') is is_number


def test_quoted_names_are_imported_by_default():
    registry = Registry()

    assert registry.get_injectable("'json'") is json
    assert registry.get_injectable('"os.path"') is os.path


def test_quoted_names_can_be_injected(registry):
    class MyClass:
        def inject(self, check=Ref("'is-number'")):
            self.is_number = check

    assert registry.inject(MyClass).is_number is is_number


@pytest.mark.parametrize("name", ["'./some-relative-path'", "'.json'", '"..parent"'])
def test_relative_references_are_rejected(registry, name):
    with pytest.raises(RelativeReferenceError, match="relative path") as exc:
        registry.get_injectable(name)

    assert exc.value.reference == name[1:-1]


def test_missing_external_values_are_reported(registry):
    with pytest.raises(ExternalReferenceError, match="Cannot load external reference 'missing'"):
        registry.get_injectable("'missing'")


def test_missing_modules_are_reported():
    with pytest.raises(ExternalReferenceError, match="/some-absolute-path"):
        Registry().get_injectable("'/some-absolute-path'")


def test_quoted_names_bypass_the_registry(registry):
    registry.put_constant("json", "local")

    assert not registry.contains_injectable("'is-number'")
    assert registry.get_injectable("json") == "local"
