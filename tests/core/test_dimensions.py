import pytest

from varquantity.core.dimensions import (
    AMOUNT,
    CURRENT,
    DIM_0,
    FLUX_DENSITY,
    LENGTH,
    LUMINOUS,
    MASS,
    POWER,
    RESISTANCE,
    TEMPERATURE,
    TIME,
    VOLTAGE,
    Dimension,
)

# --- Basic structure & base vectors -------------------------------------------------

def test_base_vectors_shape_and_types():
    bases = [DIM_0, LENGTH, MASS, TIME, CURRENT, TEMPERATURE, AMOUNT, LUMINOUS]
    for b in bases:
        assert isinstance(b, Dimension)
        assert isinstance(b, tuple)
        assert len(b) == 7
        assert all(type(x) is int for x in b)

def test_dimensional_basis():
    assert LENGTH      == (1,0,0,0,0,0,0)
    assert MASS        == (0,1,0,0,0,0,0)
    assert TIME        == (0,0,1,0,0,0,0)
    assert CURRENT     == (0,0,0,1,0,0,0)
    assert TEMPERATURE == (0,0,0,0,1,0,0)
    assert AMOUNT      == (0,0,0,0,0,1,0)
    assert LUMINOUS    == (0,0,0,0,0,0,1)
    assert DIM_0 == Dimension()

# --- Algebra: multiplication, division, power --------------------------------------

@pytest.mark.parametrize("a,b,expected", [
    (LENGTH, TIME ** -1, (1,0,-1,0,0,0,0)),
    (LENGTH, LENGTH, (2,0,0,0,0,0,0)),
    (MASS, TIME, (0,1,1,0,0,0,0)),
    (DIM_0, LENGTH, LENGTH),
])
def test_mul(a, b, expected):
    assert a * b == expected

def test_div_inverts_mul():
    assert (MASS * LENGTH) / LENGTH == MASS
    assert (VOLTAGE * CURRENT) / CURRENT == VOLTAGE

def test_derived_electrical_dimensions():
    assert VOLTAGE * CURRENT == POWER
    assert RESISTANCE == VOLTAGE / CURRENT
    assert FLUX_DENSITY == (0,1,-2,-1,0,0,0)

def test_pow_with_int():
    assert LENGTH ** 3 == (3,0,0,0,0,0,0)
    assert TIME ** -2 == (0,0,-2,0,0,0,0)
    assert LENGTH ** 0 == DIM_0

@pytest.mark.parametrize("bad", [0.5, 1.0, "2", True])
def test_pow_rejects_non_int(bad):
    with pytest.raises(TypeError):
        LENGTH ** bad

def test_pow_rejects_modulo():
    with pytest.raises(TypeError):
        pow(LENGTH, 2, 3)

def test_rtruediv_with_plain_tuple():
    assert (0,0,0,0,0,0,0) / TIME == (0,0,-1,0,0,0,0)

# --- Construction --------------------------------------------------------------------

def test_integral_floats_are_accepted():
    d = Dimension((1.0, 0, 0, 0, 0, 0, 0))
    assert d == LENGTH
    assert type(d[0]) is int

@pytest.mark.parametrize("data", [
    (0.5, 0, 0, 0, 0, 0, 0),
    (True, 0, 0, 0, 0, 0, 0),
    (1, 0, 0),
    (0,) * 8,
])
def test_invalid_construction(data):
    with pytest.raises(ValueError):
        Dimension(data)

def test_mul_with_non_iterable_fails():
    with pytest.raises(TypeError):
        LENGTH * 2

# --- Helpers -------------------------------------------------------------------------

def test_is_dimensionless():
    assert DIM_0.is_dimensionless
    assert not LENGTH.is_dimensionless
    assert (LENGTH / LENGTH).is_dimensionless

def test_repr():
    assert repr(DIM_0) == "[1]"
    assert repr(LENGTH / TIME) == "[L^1][T^-1]"

def test_hashable():
    d = {LENGTH: "m", MASS: "kg"}
    assert d[Dimension((1, 0, 0, 0, 0, 0, 0))] == "m"
