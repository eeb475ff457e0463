# =============================================================================
# tests/test_health.py - Health, Root and Hello World Tests
# =============================================================================


class TestHealth:

    def test_health(self, client):
        body = client.get("/api/v1/health").json()

        assert body["status"] == "healthy"
        assert body["environment"] == "development"

    def test_liveness(self, client):
        assert client.get("/api/v1/health/live").json()["status"] == "alive"

    def test_ready_when_everything_is_up(self, client):
        body = client.get("/api/v1/health/ready").json()

        assert body["status"] == "ready"
        assert body["checks"] == {"database": "healthy", "cache": "healthy"}

    def test_degraded_when_cache_is_down(self, client, redis_client):
        redis_client.broken = True

        body = client.get("/api/v1/health/ready").json()

        assert body["status"] == "degraded"
        assert body["checks"]["cache"] == "unhealthy"

    def test_degraded_when_database_is_down(self, client, supabase_client):
        supabase_client.fail_with = ConnectionError("connection refused")

        body = client.get("/api/v1/health/ready").json()

        assert body["status"] == "degraded"
        assert body["checks"]["database"] == "unhealthy"


class TestRouting:

    def test_root(self, client):
        assert client.get("/").json()["message"] == "app-root"

    def test_hello_world(self, client):
        assert client.get("/hello-world/").json() == {"message": "Hello, World!"}
        assert client.get("/hello-world/", params={"name": "Ada"}).json() == {"message": "Hello, Ada!"}

    def test_unknown_path_is_json_404(self, client):
        response = client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"detail": "Not Found"}


class TestEntryPoint:

    def test_run_binds_configured_host_and_port(self, monkeypatch):
        from app import main
        from app.config import settings

        calls = []
        monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
        monkeypatch.setattr(settings, "API_HOST", "127.0.0.1")
        monkeypatch.setattr(settings, "API_PORT", 8123)

        main.run()

        assert len(calls) == 1
        served, options = calls[0]
        assert served is main.app
        assert options["host"] == "127.0.0.1"
        assert options["port"] == 8123
