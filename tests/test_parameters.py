from typing import Annotated, Optional

from namely import ParamDescriptor, Ref, describe_parameters


def test_parameters_are_described_in_declaration_order():
    def func(a, b):
        pass

    assert describe_parameters(func) == [ParamDescriptor(0, "a"), ParamDescriptor(1, "b")]


def test_ref_default_binds_parameter():
    def func(message=Ref("helloMessage")):
        pass

    assert describe_parameters(func) == [ParamDescriptor(0, "message", "helloMessage")]


def test_plain_default_does_not_bind_parameter():
    def func(retries=5):
        pass

    assert describe_parameters(func)[0].bound_name is None


def test_annotated_string_metadata_binds_parameter():
    def func(name: Annotated[str, "userName"], count: int):
        pass

    assert describe_parameters(func) == [
        ParamDescriptor(0, "name", "userName"),
        ParamDescriptor(1, "count"),
    ]


def test_first_string_metadata_item_is_used():
    def func(a: Annotated[int, 5, "first", "second"], b: Annotated[int, 5]):
        pass

    assert [d.bound_name for d in describe_parameters(func)] == ["first", None]


def test_ref_default_takes_precedence_over_annotation():
    def func(a: Annotated[str, "fromAnnotation"] = Ref("fromDefault")):
        pass

    assert describe_parameters(func)[0].bound_name == "fromDefault"


def test_class_is_described_by_its_constructor():
    class Service:
        def __init__(self, db, cache=Ref("redis")):
            pass

    assert describe_parameters(Service) == [
        ParamDescriptor(0, "db"),
        ParamDescriptor(1, "cache", "redis"),
    ]


def test_class_constructor_annotations_are_read():
    class Service:
        def __init__(self, db: Annotated[object, "database"]):
            pass

    assert describe_parameters(Service) == [ParamDescriptor(0, "db", "database")]


def test_class_without_constructor_has_no_parameters():
    class NoDeps:
        pass

    assert describe_parameters(NoDeps) == []


def test_bound_method_omits_receiver():
    class Greeter:
        def inject(self, greeting):
            pass

    assert describe_parameters(Greeter().inject) == [ParamDescriptor(0, "greeting")]


def test_variadic_parameters_are_skipped():
    def func(a, *args, b, **kwargs):
        pass

    assert describe_parameters(func) == [
        ParamDescriptor(0, "a"),
        ParamDescriptor(2, "b", None, keyword_only=True),
    ]


def test_lambdas_are_described():
    assert describe_parameters(lambda hello, x=Ref("world"): None) == [
        ParamDescriptor(0, "hello"),
        ParamDescriptor(1, "x", "world"),
    ]


def test_unresolvable_forward_references_are_tolerated():
    def func(a: "DoesNotExist"):  # noqa: F821
        pass

    assert describe_parameters(func) == [ParamDescriptor(0, "a")]


def test_annotated_binding_survives_none_default():
    def func(conn: Annotated[str, "db"] = None):
        pass

    assert describe_parameters(func) == [ParamDescriptor(0, "conn", "db")]


def test_optional_annotated_binding_is_unwrapped():
    def func(conn: Optional[Annotated[str, "db"]]):
        pass

    assert describe_parameters(func)[0].bound_name == "db"
