import pytest

from varquantity.core.dimensions import DIM_0, RESISTANCE
from varquantity.core.errors import DeserializationError, DimensionMismatchError, InvalidRangeError
from varquantity.core.quantity import DynQuantity
from varquantity.functions import (
    DEFAULT_FUNCTION_REGISTRY,
    Clamped,
    Exponential,
    FirstOrderTaylor,
    Linear,
    Polynomial,
    QuantityFunction,
    function_from_payload,
    register_function,
)


class Doubling(QuantityFunction):
    __slots__ = ("_base_value",)
    _eq_fields = ("_base_value",)

    def __init__(self, base_value):
        self._base_value = DynQuantity.from_payload(base_value)

    def call(self, influencing_factors):
        return self._base_value * 2

    def to_fields(self):
        return {"base_value": self._base_value.to_payload()}


def test_builtin_tags_registered():
    for tag, cls in [
        ("Linear", Linear),
        ("Polynomial", Polynomial),
        ("FirstOrderTaylor", FirstOrderTaylor),
        ("Exponential", Exponential),
        ("Clamped", Clamped),
    ]:
        assert DEFAULT_FUNCTION_REGISTRY.get(tag) is cls
        assert tag in DEFAULT_FUNCTION_REGISTRY

def test_register_custom_function(fn_registry):
    register_function("Doubling", registry=fn_registry)(Doubling)
    assert fn_registry.get("Doubling") is Doubling
    fn = function_from_payload({"Doubling": {"base_value": "2 ohm"}}, fn_registry)
    assert fn([]) == DynQuantity(4.0, RESISTANCE)
    assert fn.to_payload() == {"Doubling": {"base_value": "2.0 kg*m^2*s^-3*A^-2"}}

def test_duplicate_tag_rejected(fn_registry):
    fn_registry.register(Linear, "Shared")
    with pytest.raises(ValueError):
        fn_registry.register(Polynomial, "Shared")
    fn_registry.register(Polynomial, "Shared", replace=True)
    assert fn_registry.get("Shared") is Polynomial

def test_register_requires_quantity_function(fn_registry):
    with pytest.raises(TypeError):
        fn_registry.register(dict, "dict")

def test_unknown_tag(fn_registry):
    with pytest.raises(ValueError):
        fn_registry.get("Nope")
    with pytest.raises(DeserializationError):
        function_from_payload({"Nope": {}}, fn_registry)

def test_unregistered_function_cannot_be_persisted():
    class Anonymous(QuantityFunction):
        __slots__ = ()

        def call(self, influencing_factors):
            return DynQuantity(1.0)

        def to_fields(self):
            return {}

    with pytest.raises(TypeError):
        Anonymous().to_payload()

def test_subclass_does_not_inherit_tag():
    class MyLinear(Linear):
        __slots__ = ()

    with pytest.raises(TypeError):
        MyLinear(1.0, 0.0).to_payload()

def test_default_to_fields_not_implemented():
    class Bare(QuantityFunction):
        __slots__ = ()

        def call(self, influencing_factors):
            return DynQuantity(1.0)

    with pytest.raises(NotImplementedError):
        Bare().to_fields()
    assert Bare()([]) == DynQuantity(1.0)

@pytest.mark.parametrize("payload", [
    None,
    "Linear",
    [],
    {},
    {"Linear": {}, "Polynomial": {}},
    {"Linear": [1.0, 2.0]},
])
def test_malformed_payloads(payload):
    with pytest.raises(DeserializationError):
        function_from_payload(payload)

def test_construction_errors_are_wrapped():
    with pytest.raises(DeserializationError) as ei:
        function_from_payload({"Polynomial": {"coefficients": ["1 m", "2 s", "3 m"]}})
    assert isinstance(ei.value.__cause__, DimensionMismatchError)

    with pytest.raises(DeserializationError) as ei:
        function_from_payload({
            "Clamped": {
                "lower_limit": 1.0,
                "upper_limit": 0.0,
                "function": {"Linear": {"slope": 1.0, "base_value": 0.0}},
            }
        })
    assert isinstance(ei.value.__cause__, InvalidRangeError)

def test_nested_unknown_tag_reports_inner_error():
    with pytest.raises(DeserializationError, match="Nope"):
        function_from_payload({
            "Clamped": {"lower_limit": 0.0, "upper_limit": 1.0, "function": {"Nope": {}}}
        })

def test_bad_unit_string_is_wrapped():
    with pytest.raises(DeserializationError):
        function_from_payload({"Linear": {"slope": "2 blorp", "base_value": 0.0}})

def test_none_fields_mean_empty():
    fn = function_from_payload({"Polynomial": {"coefficients": []}})
    assert fn([]) == DynQuantity(0.0, DIM_0)
    with pytest.raises(DeserializationError):
        function_from_payload({"Linear": None})
