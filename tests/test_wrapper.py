import logging

import pytest

from varquantity.core.dimensions import DIM_0, LENGTH, POWER
from varquantity.core.errors import (
    ContractViolationError,
    DeserializationError,
    DimensionMismatchError,
)
from varquantity.core.kinds import ElectricCurrent, Power
from varquantity.core.quantity import DynQuantity
from varquantity.functions.base import QuantityFunction
from varquantity.functions.clamped import Clamped
from varquantity.functions.linear import Linear
from varquantity.wrapper import FunctionWrapper


class Flaky(QuantityFunction):
    """Dimensionless for an empty input list, a length otherwise."""

    __slots__ = ()

    def call(self, influencing_factors):
        if influencing_factors:
            return DynQuantity(1.0, LENGTH)
        return DynQuantity(1.0)


def test_call_converts_to_kind():
    w = FunctionWrapper(Power, Linear("2 V", "0.5 W"))
    current = ElectricCurrent.new(2.5, "A").to_dyn()
    assert w.call([current]) == Power(5.5)
    assert w([current]) == Power(5.5)
    assert w.call() == Power(0.5)

def test_float_kind():
    w = FunctionWrapper(float, Linear(0.5, -3.0))
    assert w([DynQuantity(2.0)]) == -2.0
    assert isinstance(w([]), float)

def test_self_test_rejects_wrong_kind():
    with pytest.raises(DimensionMismatchError) as ei:
        FunctionWrapper(Power, Linear(0.5, -3.0))
    assert ei.value.expected == POWER
    assert ei.value.found == DIM_0

def test_self_test_accepts_clamped():
    w = FunctionWrapper(Power, Clamped(Linear("2 V", "0.5 W"), 0.0, 1.0))
    assert w([DynQuantity.parse("10 A")]) == Power(1.0)

def test_requires_quantity_function():
    with pytest.raises(TypeError):
        FunctionWrapper(Power, lambda factors: DynQuantity(1.0, POWER))

def test_contract_violation_is_loud(caplog):
    w = FunctionWrapper(float, Flaky())
    assert w([]) == 1.0
    with caplog.at_level(logging.CRITICAL, logger="varquantity"):
        with pytest.raises(ContractViolationError) as ei:
            w([DynQuantity(3.0)])
    assert isinstance(ei.value, AssertionError)
    assert not isinstance(ei.value, ValueError)
    assert isinstance(ei.value.__cause__, DimensionMismatchError)
    assert any(r.levelno == logging.CRITICAL for r in caplog.records)

def test_contract_violation_not_caught_by_value_error_handlers():
    w = FunctionWrapper(float, Flaky())
    with pytest.raises(ContractViolationError):
        try:
            w([DynQuantity(3.0)])
        except (ValueError, TypeError):
            pytest.fail("contract violation must not look like a recoverable error")

def test_accessors_and_clone():
    inner = Linear("2 V", "0.5 W")
    w = FunctionWrapper(Power, inner)
    assert w.inner is inner
    assert w.kind is Power
    c = w.clone()
    assert c == w
    assert c.inner is not inner
    assert c.kind is Power

def test_payload_round_trip():
    w = FunctionWrapper(Power, Linear("2 V", "0.5 W"))
    payload = w.to_payload()
    assert list(payload) == ["Linear"]
    again = FunctionWrapper.from_payload(Power, payload)
    assert again == w
    current = DynQuantity.parse("1 A")
    assert again([current]) == w([current])

def test_from_payload_runs_self_test():
    with pytest.raises(DeserializationError) as ei:
        FunctionWrapper.from_payload(Power, {"Linear": {"slope": 0.5, "base_value": -3.0}})
    assert isinstance(ei.value.__cause__, DimensionMismatchError)

def test_repr():
    w = FunctionWrapper(float, Linear(0.5, -3.0))
    assert repr(w).startswith("FunctionWrapper(float, Linear(")
