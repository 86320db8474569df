from __future__ import annotations

from app.core.config import Settings
from app.core.database import engine_options


def test_asyncpg_sessions_run_in_utc() -> None:
    options = engine_options(Settings(_env_file=None))

    assert options["connect_args"] == {"server_settings": {"timezone": "UTC"}}
    assert options["pool_pre_ping"] is True
    assert options["echo"] is False


def test_other_drivers_get_no_asyncpg_settings() -> None:
    options = engine_options(Settings(_env_file=None, database_url="sqlite+aiosqlite:///salon.db", debug=True))

    assert "connect_args" not in options
    assert options["echo"] is True
