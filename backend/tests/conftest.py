from __future__ import annotations

import asyncio
from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient


# Ensure `import mall_api.*` works when pytest chooses an import mode that
# doesn't automatically add the project root to sys.path.
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))


@pytest.fixture()
def settings_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    # Isolated sqlite DB per test.
    db_path = tmp_path / "test.db"
    monkeypatch.setenv("MALL_DB_URL", f"sqlite+aiosqlite:///{db_path.as_posix()}")

    # Deterministic JWT key config for tests.
    monkeypatch.setenv("MALL_JWT_SIGNING_KEYS_JSON", '{"test-kid":"test-secret"}')
    monkeypatch.setenv("MALL_JWT_KID_CURRENT", "test-kid")

    from mall_api.core.settings import get_settings

    get_settings.cache_clear()

    from mall_api.db import session as db_session

    db_session._engine = None  # noqa: SLF001
    db_session._sessionmaker = None  # noqa: SLF001
    return db_path


@pytest.fixture()
def client(settings_env: Path) -> TestClient:
    from mall_api.db import session as db_session

    # Import models so Base.metadata is fully populated.
    import mall_api.models  # noqa: F401

    from mall_api.db.base import Base

    async def _init_schema() -> None:
        engine = db_session.get_engine()
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_init_schema())

    from mall_api.main import create_app

    app = create_app()
    return TestClient(app)
