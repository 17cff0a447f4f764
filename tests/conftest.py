# tests/conftest.py
import pytest

from deal_builders import duplex_inputs, flat_assumptions, good_assessment, market_assumptions


@pytest.fixture
def inputs():
    return duplex_inputs()


@pytest.fixture
def flat():
    return flat_assumptions()


@pytest.fixture
def market():
    return market_assumptions()


@pytest.fixture
def assessment():
    return good_assessment()
