import pytest
from fastapi.testclient import TestClient

from questionnaire_api.config import Settings
from questionnaire_api.main import create_app


@pytest.fixture
def site_client(tmp_path, db_path):
    site = tmp_path / "build"
    (site / "static").mkdir(parents=True)
    (site / "index.html").write_text("<html>spa</html>")
    (site / "static" / "app.js").write_text("console.log('app')")
    settings = Settings(database_url=f"sqlite+aiosqlite:///{db_path}", static_dir=str(site))
    with TestClient(create_app(settings)) as client:
        yield client


def test_serves_existing_asset(site_client):
    response = site_client.get("/static/app.js")
    assert response.status_code == 200
    assert response.text == "console.log('app')"


def test_unknown_path_falls_back_to_index(site_client):
    for path in ("/", "/survey", "/results/42"):
        response = site_client.get(path)
        assert response.status_code == 200
        assert response.text == "<html>spa</html>"


def test_api_paths_keep_their_errors(site_client):
    assert site_client.get("/api/unknown").status_code == 404
    assert site_client.get("/api/fetch-submission", params={"id": 7}).status_code == 404
    assert site_client.get("/api/submit-questionnaire").status_code == 405
