from sqlalchemy import text

from invento.db.database import build_engine


def test_sqlite_engine_enforces_foreign_keys():
    engine = build_engine("sqlite://")
    with engine.connect() as conn:
        assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
    engine.dispose()
