from fastapi.testclient import TestClient

from infrastructure.platform import AsgiPlatformCore
from main import create_app


MISSING_DB_NAME_BODY = "Missing required environment variable: DB_NAME\n"


def _core() -> AsgiPlatformCore:
    return AsgiPlatformCore.from_import_string("tests.fixtures.core_app:app")


def test_requests_are_handed_to_core(settings, site_env):
    app = create_app(settings=settings, environ=site_env, core=_core())
    with TestClient(app) as client:
        resp = client.get("/wp-admin/network/")

    assert resp.status_code == 200
    assert resp.json()["home"] == "https://example.com"
    assert resp.headers["X-Request-ID"]


def test_missing_key_answers_every_request_with_500(settings, site_env):
    del site_env["DB_NAME"]
    app = create_app(settings=settings, environ=site_env, core=_core())
    with TestClient(app) as client:
        for path in ("/", "/wp-login.php"):
            resp = client.get(path)
            assert resp.status_code == 500
            assert resp.headers["content-type"] == "text/plain; charset=utf-8"
            assert resp.text == MISSING_DB_NAME_BODY


def test_missing_key_does_not_boot_core(settings, site_env):
    site_env["REDIS_PASSWORD"] = ""
    core = _core()
    app = create_app(settings=settings, environ=site_env, core=core)
    with TestClient(app) as client:
        client.get("/")
    assert not core.booted


def test_env_file_is_not_read_in_server_mode(settings, env_file, site_env):
    del site_env["DB_NAME"]
    env_file.write_text("DB_NAME=from-file\n", encoding="utf-8")
    app = create_app(settings=settings, environ=site_env, core=_core())
    with TestClient(app) as client:
        assert client.get("/").status_code == 500


def test_health_is_independent_of_configuration(settings):
    app = create_app(settings=settings, environ={}, core=_core())
    with TestClient(app) as client:
        resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["data"] == {"status": "healthy"}


def test_readiness_reports_published_constants(settings, site_env):
    site_env["WP_SUBDOMAIN_INSTALL"] = "0"
    app = create_app(settings=settings, environ=site_env, core=_core())
    with TestClient(app) as client:
        data = client.get("/health/ready").json()["data"]
    assert data["status"] == "ready"
    assert data["multisite"] is True
    assert data["subdomain_install"] is False
    assert data["home"] == "https://example.com"
    assert data["constants"] > 30


def test_readiness_uses_plain_text_failure_contract(settings, site_env):
    del site_env["DB_NAME"]
    app = create_app(settings=settings, environ=site_env, core=_core())
    with TestClient(app) as client:
        resp = client.get("/health/ready")
    assert resp.status_code == 500
    assert resp.text == MISSING_DB_NAME_BODY


def test_without_core_app_requests_get_503(settings, site_env):
    app = create_app(settings=settings, environ=site_env)
    with TestClient(app) as client:
        resp = client.get("/")
    assert resp.status_code == 503
    assert resp.text == "Platform core is not configured\n"


def test_core_app_loaded_from_settings(settings, site_env):
    settings.CORE_APP = "tests.fixtures.core_app:app"
    app = create_app(settings=settings, environ=site_env)
    with TestClient(app) as client:
        assert client.get("/x").json()["path"] == "/x"
