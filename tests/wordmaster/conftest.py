import pytest
from sqlalchemy import create_engine

from wordmaster import db_engine
from wordmaster.orm_models import Base


@pytest.fixture
def temp_db():
    """Create a temporary in-memory database for testing."""
    test_engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(test_engine)
    db_engine.set_engine(test_engine)
    yield test_engine
    db_engine.reset_engine()


@pytest.fixture
def isolated_data_dir(tmp_path, monkeypatch):
    """Point the data directory at a temporary path."""
    data_dir = tmp_path / "wordmaster_data"
    monkeypatch.setenv("WORDMASTER_DATA_DIR", str(data_dir))
    return data_dir
