# type: ignore
import pytest

from unit_utils import load_program, make_engine


@pytest.fixture
def square_source():
    yield load_program('square')


@pytest.fixture
def factorial_source():
    yield load_program('factorial')


@pytest.fixture
def engine():
    engine, _ = make_engine()
    yield engine
