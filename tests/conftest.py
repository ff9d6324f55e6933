# tests/conftest.py
import logging

import pytest

from varquantity.core.quantity import DynQuantity
from varquantity.functions.base import FunctionRegistry
from varquantity.units.registry import DEFAULT_REGISTRY as _ureg
from varquantity.units.registry import _bootstrap_default_registry


@pytest.fixture(scope="session")
def ureg():
    return _ureg


@pytest.fixture()
def reg():
    """Fresh, fully-bootstrapped UnitsRegistry for isolation per test."""
    return _bootstrap_default_registry()


@pytest.fixture()
def q():
    """Shorthand for DynQuantity.parse."""
    return DynQuantity.parse


@pytest.fixture()
def fn_registry():
    """Empty function registry so custom tags do not leak between tests."""
    return FunctionRegistry()


@pytest.fixture()
def clean_varquantity_logger():
    logger = logging.getLogger("varquantity")
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    logger.handlers = [h for h in saved_handlers if isinstance(h, logging.NullHandler)]
    yield logger
    for h in logger.handlers:
        if h not in saved_handlers:
            h.close()
    logger.handlers = saved_handlers
    logger.setLevel(saved_level)
