import pytest

from survey_scoring.engine import ScoringEngine
from survey_scoring.reference import ReferenceStore


@pytest.fixture(scope="session")
def store():
    """Load the packaged ReferenceStore once for the entire test session."""
    s = ReferenceStore()
    s.load()
    return s


@pytest.fixture
def engine(store):
    """Patient-facing ScoringEngine over the packaged reference data."""
    return ScoringEngine(store)
