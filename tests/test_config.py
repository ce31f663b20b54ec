from company_manager import load_secrets, main


class TestConfig:
    """Settings read from the environment and the server entry point."""

    def test_database_url_password_is_masked(self, monkeypatch):
        monkeypatch.setattr(load_secrets, "database_url", "postgresql+asyncpg://game:s3cret@db:5432/company")

        masked = load_secrets.masked_database_url()

        assert "s3cret" not in masked
        assert masked == "postgresql+asyncpg://game:***@db:5432/company"

    def test_sqlite_url_is_unchanged(self, monkeypatch):
        monkeypatch.setattr(load_secrets, "database_url", "sqlite+aiosqlite:///company_manager.sqlite3")

        assert load_secrets.masked_database_url() == "sqlite+aiosqlite:///company_manager.sqlite3"

    def test_run_serves_app_with_uvicorn(self, monkeypatch):
        calls = []
        monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

        main.run()

        assert calls == [(main.app, {"host": load_secrets.server_host, "port": load_secrets.server_port})]
