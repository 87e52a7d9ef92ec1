from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

import pytest

# Make the package importable when running tests from a plain checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from drivepark.core import config as core_config  # noqa: E402
from drivepark.core.rate_limiter import reset_rate_limits  # noqa: E402
from drivepark.db import models  # noqa: E402
from drivepark.db import session as db_session  # noqa: E402

BACKEND_URL = "http://backend.test"


def make_settings(**overrides) -> core_config.Settings:
    return replace(core_config.get_settings(), **overrides)


def make_listing(slug: str, listing_type: str, **extra) -> dict:
    data = {
        "id": f"id-{slug}",
        "slug": slug,
        "type": listing_type,
        "title": slug.replace("-", " ").title(),
        "city": None,
        "currency": "EUR",
    }
    data.update(extra)
    return data


@pytest.fixture()
def db_env(tmp_path, monkeypatch):
    """Temporary SQLite database with settings/engine caches reset, torn down completely afterwards."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]
    reset_rate_limits()

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    models.Base.metadata.drop_all(bind=engine)
    engine.dispose()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]
    core_config.get_settings.cache_clear()
