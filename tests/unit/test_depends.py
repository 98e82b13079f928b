from config import ApplicationConfig
from src.depends import engine_connect_args


def test_sqlite_engine_waits_for_the_write_lock():
    connect_args = engine_connect_args("sqlite+aiosqlite:///./studio.db")

    assert connect_args == {"timeout": ApplicationConfig.DB_BUSY_TIMEOUT_SECONDS}


def test_other_databases_get_no_sqlite_options():
    assert engine_connect_args("postgresql+asyncpg://studio@localhost/studio") == {}
