import pytest

from utils import assert_quantity
from varquantity.core.dimensions import DIM_0, POWER, TEMPERATURE, VOLTAGE
from varquantity.core.errors import DimensionMismatchError
from varquantity.core.quantity import DynQuantity
from varquantity.functions.exponential import Exponential, ExpTerm


@pytest.fixture()
def exp_fn():
    return Exponential([ExpTerm(2.0, 2.0), ExpTerm(-3.0, 0.0)])


@pytest.mark.parametrize("x, expected", [(0.0, -1.0), (1.0, 11.77811), (2.0, 106.1963)])
def test_no_units(exp_fn, x, expected):
    assert_quantity(exp_fn([DynQuantity(x)]), expected, DIM_0, rel=1e-6)

def test_no_match_sums_amplitudes(exp_fn):
    assert_quantity(exp_fn([]), -1.0, DIM_0)
    unrelated = [DynQuantity(2.0, TEMPERATURE), DynQuantity(1.0, VOLTAGE)]
    assert_quantity(exp_fn(unrelated), -1.0, DIM_0)

def test_first_matching_factor_is_used():
    fn = Exponential([ExpTerm("2 W", "0.01 / K"), ExpTerm("1 W", "0 / K")])
    factors = [DynQuantity.parse("5 V"), DynQuantity.parse("100 K"), DynQuantity.parse("0 K")]
    assert_quantity(fn(factors), 2.0 * 2.718281828459045 + 1.0, POWER)

def test_with_units():
    fn = Exponential([ExpTerm("2 W", "0.01 / K"), ExpTerm("1 W", "0 / K")])
    assert fn.influencing_factor_dim == TEMPERATURE
    assert fn.output_dim == POWER
    assert_quantity(fn([DynQuantity.parse("100 K")]), 2.0 * 2.718281828459045 + 1.0, POWER)
    assert_quantity(fn([DynQuantity.parse("100 V")]), 3.0, POWER)

def test_amplitude_mismatch():
    with pytest.raises(DimensionMismatchError) as ei:
        Exponential([ExpTerm("1 W", "1 / K"), ExpTerm("1 V", "1 / K")])
    assert ei.value.expected == POWER
    assert ei.value.found == VOLTAGE

def test_exponent_mismatch():
    with pytest.raises(DimensionMismatchError):
        Exponential([ExpTerm("1 W", "1 / K"), ExpTerm("1 W", "1 / s")])

def test_mismatch_detected_between_later_terms():
    with pytest.raises(DimensionMismatchError):
        Exponential([ExpTerm("1 W", "1 / K"), ExpTerm("2 W", "1 / K"), ExpTerm("3 V", "1 / K")])

def test_zero_and_one_term_never_fail():
    empty = Exponential([])
    assert empty.output_dim == DIM_0
    assert empty.influencing_factor_dim == DIM_0
    assert_quantity(empty([]), 0.0, DIM_0)

    single = Exponential([ExpTerm("1 W", "1 / K")])
    assert single.output_dim == POWER

def test_terms_must_be_exp_terms():
    with pytest.raises(TypeError):
        Exponential([(1.0, 2.0)])

def test_payload(exp_fn):
    assert exp_fn.to_payload() == {
        "Exponential": {
            "terms": [
                {"amplitude": 2.0, "exponent": 2.0},
                {"amplitude": -3.0, "exponent": 0.0},
            ]
        }
    }
    assert Exponential.from_fields(exp_fn.to_fields()) == exp_fn

@pytest.mark.parametrize("fields", [{}, {"terms": {"amplitude": 1.0}}, {"terms": [1.0]}, {"terms": [{"amplitude": 1.0}]}])
def test_from_fields_malformed(fields):
    with pytest.raises((KeyError, TypeError)):
        Exponential.from_fields(fields)
