# tests/utils.py
import math

from varquantity.core.quantity import DynQuantity


def assert_quantity(actual: DynQuantity, value: float, dim, rel: float = 1e-9) -> None:
    assert actual.dim == dim, f"{actual!r} has dimension {actual.dim!r}, expected {dim!r}"
    assert math.isclose(actual.value, value, rel_tol=rel, abs_tol=1e-12), (
        f"{actual.value!r} != {value!r}"
    )
