from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garantiza que el paquete conceptos sea importable durante los tests locales
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from conceptos.core import config as core_config
from conceptos.core.config import Settings
from conceptos.db import session as db_session
from conceptos.repositories.json_storage import JsonConceptRepository
from conceptos.repositories.sql_repository import SQLConceptRepository


@pytest.fixture(autouse=True)
def _clear_caches():
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


@pytest.fixture()
def data_file(tmp_path):
    return tmp_path / "data" / "conceptos.json"


@pytest.fixture()
def sqlite_url(tmp_path):
    """Temporary SQLite file; the engine is disposed so the file is not left locked on Windows."""
    db_file = tmp_path / "test.db"
    url = f"sqlite:///{db_file.as_posix()}"
    yield url
    db_session.dispose_engine(url)


@pytest.fixture()
def json_repo(data_file):
    repo = JsonConceptRepository(data_file)
    repo.init()
    yield repo
    repo.close()


@pytest.fixture()
def sql_repo(sqlite_url):
    repo = SQLConceptRepository(sqlite_url)
    repo.init()
    yield repo
    repo.close()


@pytest.fixture(params=["json", "sql"])
def backend(request):
    return request.param


@pytest.fixture()
def repository(backend, request):
    """The same contract suite runs against both storage backends."""
    return request.getfixturevalue(f"{backend}_repo")


@pytest.fixture()
def settings(backend, data_file, sqlite_url):
    return Settings(
        app_env="test",
        storage_backend=backend,
        data_file=data_file,
        database_url=sqlite_url,
        log_level="WARNING",
        host="127.0.0.1",
        port=3000,
    )


@pytest.fixture()
def uninitialized_repository(backend, data_file, sqlite_url):
    """A backend whose file/table was never created (``init`` not called)."""
    if backend == "json":
        return JsonConceptRepository(data_file)
    return SQLConceptRepository(sqlite_url)
