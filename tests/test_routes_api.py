import pytest
from fastapi.testclient import TestClient

from catalog_admin.core.http import ApiClient
from catalog_admin.gateways import Gateways
from catalog_admin.main import create_app
from fakes import InMemoryCatalogSession


@pytest.fixture
def api_session():
    session = InMemoryCatalogSession()
    session.series.append({"id": "existing", "title": "Existing"})
    return session


@pytest.fixture
def client(api_session):
    """Console with the in-memory catalog API behind it."""
    app = create_app(
        lambda: Gateways(ApiClient(base_url="http://catalog.test", session=api_session))
    )
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_series_list_is_loaded_at_startup(client):
    data = client.get("/api/admin").json()

    assert [s["title"] for s in data["catalog"]["series"]] == ["Existing"]
    assert data["seasonsPanel"]["state"] == "idle"
    assert data["episodesPanel"]["canSubmit"] is False


def test_full_admin_flow(client):
    response = client.post("/api/admin/series", json={"title": "Foo"})
    assert response.status_code == 200, response.text
    assert response.json()["title"] == ""

    series = client.get("/api/admin").json()["catalog"]["series"]
    foo = next(s for s in series if s["title"] == "Foo")

    view = client.put("/api/admin/seasons/selection", json={"seriesId": foo["id"]}).json()
    assert view["state"] == "ready"
    assert view["seasons"] == []

    view = client.post("/api/admin/seasons", json={"number": 1}).json()
    assert [s["number"] for s in view["seasons"]] == [1]
    season_id = view["seasons"][0]["id"]

    view = client.put(
        "/api/admin/episodes/selection",
        json={"seriesId": foo["id"], "seasonId": season_id},
    ).json()
    assert view["seasonId"] == season_id
    assert view["episodesState"] == "ready"

    response = client.post(
        "/api/admin/episodes",
        json={"number": 1, "title": "Pilot", "durationSeconds": 1400},
    )
    assert response.status_code == 200, response.text
    assert response.json()["episodes"] == [
        {
            "id": response.json()["episodes"][0]["id"],
            "seasonId": season_id,
            "number": 1,
            "title": "Pilot",
            "durationSeconds": 1400,
            "videoUrl": None,
        }
    ]


def test_blank_series_title_is_rejected_locally(client, api_session):
    response = client.post("/api/admin/series", json={"title": "   "})

    assert response.status_code == 400
    assert all(method == "GET" for method, _ in api_session.requests)


def test_season_submit_without_series_is_rejected(client):
    response = client.post("/api/admin/seasons", json={"number": 1})
    assert response.status_code == 400


def test_poster_upload_fills_form(client):
    response = client.post(
        "/api/admin/series/poster",
        files={"file": ("cover.webp", b"RIFF....WEBP", "image/webp")},
    )

    assert response.status_code == 200
    assert response.json()["posterUrl"] == "/uploads/cover.webp"

    response = client.post("/api/admin/series", json={"title": "With poster"})
    assert response.json()["posterUrl"] == "/uploads/cover.webp"


def test_unknown_season_selection_returns_404(client):
    response = client.put(
        "/api/admin/episodes/selection",
        json={"seriesId": "existing", "seasonId": "nope"},
    )
    assert response.status_code == 404


def test_failed_season_load_is_reported(client):
    view = client.put("/api/admin/seasons/selection", json={"seriesId": "ghost"}).json()

    assert view["state"] == "failed"
    assert view["error"] == "Series not found"


def test_shutdown_closes_session(api_session):
    app = create_app(
        lambda: Gateways(ApiClient(base_url="http://catalog.test", session=api_session))
    )
    with TestClient(app):
        pass
    assert api_session.closed


def test_refresh_picks_up_series_created_elsewhere(client, api_session):
    api_session.series.append({"id": "later", "title": "Later"})

    response = client.post("/api/admin/series/refresh")

    assert response.status_code == 200
    data = response.json()
    assert [s["title"] for s in data["series"]] == ["Existing", "Later"]
    assert data["loading"] is False


def test_new_season_can_be_picked_in_episodes_panel(client):
    client.put("/api/admin/episodes/selection", json={"seriesId": "existing"})
    client.put("/api/admin/seasons/selection", json={"seriesId": "existing"})
    created = client.post("/api/admin/seasons", json={"number": 1})
    season_id = created.json()["seasons"][0]["id"]

    response = client.put(
        "/api/admin/episodes/selection",
        json={"seriesId": "existing", "seasonId": season_id},
    )

    assert response.status_code == 200, response.text
    assert response.json()["seasonId"] == season_id


def test_series_submit_in_flight_returns_conflict(client):
    panel = client.app.state.workflow.series_panel
    panel.title = "Pending"
    panel.submitting = True

    response = client.post("/api/admin/series", json={"title": "Other"})

    assert response.status_code == 409
    assert panel.title == "Pending"
