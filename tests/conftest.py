import sys
from pathlib import Path

import pytest

TESTS = Path(__file__).resolve().parent

# Test modules in sub-directories import the shared fakes.
if str(TESTS) not in sys.path:
    sys.path.insert(0, str(TESTS))

from fakes import InMemoryNookRepository, RecordingPreferenceSink, make_nook  # noqa: E402


@pytest.fixture
def alpha():
    return make_nook("1", "Alpha")


@pytest.fixture
def beta():
    return make_nook("2", "Beta")


@pytest.fixture
def gamma():
    return make_nook("3", "Gamma")


@pytest.fixture
def repository(alpha, beta, gamma) -> InMemoryNookRepository:
    # Deliberately unsorted.
    return InMemoryNookRepository([gamma, alpha, beta])


@pytest.fixture
def preferences() -> RecordingPreferenceSink:
    return RecordingPreferenceSink()
