import pytest
from fastapi.testclient import TestClient

from conftest import FakeGenerator, make_response, raw_part
from plantbuilder import PlantWorkspace

from api import main


@pytest.fixture
def client(monkeypatch, fake_generator, seeded_rng):
    monkeypatch.setattr(main, "WORKSPACE", PlantWorkspace(fake_generator, size_ceiling=80, rng=seeded_rng))
    return TestClient(main.app)


def test_initial_state_is_empty(client):
    response = client.get("/state")

    assert response.status_code == 200
    body = response.json()
    assert body["plant"] is None
    assert body["environment"] == {"sunlight": 50, "water": 50, "temperature": 50}
    assert body["generating"] is False


def test_add_part_uses_default_selection(client):
    response = client.post("/parts", json={})

    assert response.status_code == 200
    body = response.json()
    assert body["part"]["type"] == "trunk"
    assert body["part"]["color"] == "#22c55e"
    assert body["part"]["growthRate"] == "normal"
    assert body["part"]["special"] == "upright"
    assert body["plant"]["name"] == "Custom Plant"


def test_add_part_at_clicked_position(client):
    response = client.post("/parts", json={"type": "vine", "position": {"x": 42, "y": 24}})

    assert response.json()["part"]["position"] == {"x": 42.0, "y": 24.0}


def test_add_part_rejects_unknown_type(client):
    response = client.post("/parts", json={"type": "shrub"})
    assert response.status_code == 422


def test_step_grows_parts(client):
    client.post("/parts", json={"type": "leaf", "growth_rate": "rapid"})

    response = client.post("/step", json={"ticks": 2})

    assert response.json()["plant"]["parts"][0]["size"] == pytest.approx(64.8)


def test_step_without_plant_is_not_found(client):
    assert client.post("/step", json={}).status_code == 404


def test_environment_update_and_range_error(client):
    ok = client.post("/environment", json={"field": "water", "value": 70})
    assert ok.json()["environment"]["water"] == 70

    bad = client.post("/environment", json={"field": "water", "value": 150})
    assert bad.status_code == 400
    assert bad.json()["error"] == "OutOfRange"


def test_generate_replaces_plant(client):
    client.post("/parts", json={})

    response = client.post("/generate", json={"description": "a leafy ivy"})

    assert response.status_code == 200
    assert response.json()["plant"]["name"] == "Ivy"


def test_generate_with_blank_description(client):
    response = client.post("/generate", json={"description": "  "})

    assert response.status_code == 400
    assert response.json()["error"] == "EmptyDescription"


def test_generate_failure_keeps_prior_plant(monkeypatch):
    workspace = PlantWorkspace(FakeGenerator(response=make_response([raw_part(type="shrub")])))
    monkeypatch.setattr(main, "WORKSPACE", workspace)
    client = TestClient(main.app)
    client.post("/parts", json={})

    response = client.post("/generate", json={"description": "a shrub"})

    assert response.status_code == 502
    assert response.json()["error"] == "GenerationFailed"
    assert client.get("/state").json()["plant"]["name"] == "Custom Plant"


def test_reset_clears_plant(client):
    client.post("/parts", json={})
    assert client.post("/reset").json()["plant"] is None
