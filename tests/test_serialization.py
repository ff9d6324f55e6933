import math

import pytest
import yaml

from varquantity.core.errors import DeserializationError
from varquantity.core.kinds import ElectricCurrent, MagneticFluxDensity, Power
from varquantity.core.quantity import DynQuantity
from varquantity.functions.clamped import Clamped
from varquantity.functions.exponential import Exponential, ExpTerm
from varquantity.functions.first_order_taylor import FirstOrderTaylor
from varquantity.functions.linear import Linear
from varquantity.functions.polynomial import Polynomial
from varquantity.serialization import (
    dump_function,
    dump_var_quantity,
    load_function,
    load_var_quantity,
)
from varquantity.variable import Constant, Function, VarQuantity

# -------------------------------
# functions
# -------------------------------

@pytest.mark.parametrize("fn", [
    Linear(0.5, -3.0),
    Polynomial([-1.0, 3.0, 2.0]),
    Exponential([ExpTerm(2.0, 2.0), ExpTerm(-3.0, 0.0)]),
    FirstOrderTaylor("2 ohm*m", "0.5 / K", "30 K"),
    Clamped(Linear(0.5, -3.0), 0.0, 1.5),
])
def test_function_round_trip(fn):
    text = dump_function(fn)
    assert load_function(text) == fn

def test_dump_function_is_tagged_yaml():
    data = yaml.safe_load(dump_function(Linear(0.5, -3.0)))
    assert data == {"Linear": {"slope": 0.5, "base_value": -3.0}}

def test_clamped_nests_inner_payload():
    data = yaml.safe_load(dump_function(Clamped(Linear(0.5, -3.0), 0.0, 1.5)))
    assert data == {
        "Clamped": {
            "lower_limit": 0.0,
            "upper_limit": 1.5,
            "function": {"Linear": {"slope": 0.5, "base_value": -3.0}},
        }
    }

def test_load_function_from_handwritten_yaml():
    text = (
        "Exponential:\n"
        "  terms:\n"
        "  - {amplitude: 2.0, exponent: 2.0}\n"
        "  - {amplitude: -3.0, exponent: 0.0}\n"
    )
    fn = load_function(text)
    assert isinstance(fn, Exponential)
    assert fn([DynQuantity(1.0)]).value == pytest.approx(2.0 * math.exp(2.0) - 3.0)

@pytest.mark.parametrize("text", [
    "Linear: {slope: 0.5",
    "- 1\n- 2\n",
    "Unknown: {}\n",
    "Linear: {slope: 0.5}\n",
])
def test_load_function_errors(text):
    with pytest.raises(DeserializationError):
        load_function(text)

# -------------------------------
# variable quantities
# -------------------------------

def test_bare_number_is_si_value_of_kind():
    vq = load_var_quantity("0.001", MagneticFluxDensity)
    assert isinstance(vq, Constant)
    assert vq.get().get("T") == pytest.approx(0.001)
    assert vq.get().get("mT") == pytest.approx(1.0)

@pytest.mark.parametrize("text", ["1 mT", "1e-3 T"])
def test_unit_strings(text):
    vq = load_var_quantity(text, MagneticFluxDensity)
    assert vq.get().get("T") == pytest.approx(0.001)

def test_wrong_unit_for_kind():
    with pytest.raises(DeserializationError):
        load_var_quantity("1 mT", Power)

def test_constant_round_trip():
    vq = Constant(MagneticFluxDensity.new(1.0, "mT"))
    again = load_var_quantity(dump_var_quantity(vq), MagneticFluxDensity)
    assert again == vq

def test_function_round_trip_keeps_value():
    vq = VarQuantity.from_function(Power, FirstOrderTaylor("2.5 W", "2 / A", "0.5 A"))
    text = dump_var_quantity(vq)
    again = load_var_quantity(text, Power)
    assert isinstance(again, Function)
    assert again == vq
    assert again.get().get("W") == pytest.approx(2.5)
    i = ElectricCurrent.new(1.0, "A").to_dyn()
    assert again.get([i]).get("W") == pytest.approx(vq.get([i]).get("W"))

@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
def test_non_finite_constant_round_trip(value):
    vq = Constant(Power(value))
    again = load_var_quantity(dump_var_quantity(vq), Power)
    assert isinstance(again, Constant)
    if math.isnan(value):
        assert math.isnan(again.get().value)
    else:
        assert again == vq

def test_non_finite_coefficient_round_trip():
    fn = Linear("inf W/A", "-inf W")
    again = load_function(dump_function(fn))
    assert again == fn

def test_invalid_yaml_is_deserialization_error():
    with pytest.raises(DeserializationError) as ei:
        load_var_quantity("Linear: [", Power)
    assert isinstance(ei.value.__cause__, yaml.YAMLError)
