import tempfile
from pathlib import Path

import pytest

from filekeeper.db.database import create_engine
from filekeeper.db.gateway import StorageGateway


@pytest.fixture
def db_path():
    """Path of an isolated SQLite file, removed after the test."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = Path(f.name)
    path.unlink()

    yield path

    path.unlink(missing_ok=True)


@pytest.fixture
async def gateway(db_path):
    """Create an isolated store for one test."""
    gateway = StorageGateway(create_engine(f"sqlite:///{db_path}", echo=False))

    yield gateway

    await gateway.close()
