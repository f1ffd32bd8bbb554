"""
Tests for the ETFI HTTP API.
"""
import pytest
from fastapi.testclient import TestClient

from etfi.api import create_app
from etfi.config import Settings
from etfi.exceptions import SnapshotLoadError
from etfi.packs import GameDataLoader


@pytest.fixture
def snapshot(town_snapshot_data):
    return GameDataLoader().load_data(town_snapshot_data)


@pytest.fixture
def client(snapshot):
    return TestClient(create_app(snapshot))


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["active_rules"] == 1
        assert data["tables"]["TraditionModifiers"] == 2


class TestLabels:

    def test_labels(self, client):
        response = client.get("/labels")

        assert response.status_code == 200
        assert response.json() == {"labels": ["Bonus Gold"]}

    def test_bonus_yields_html(self, client):
        response = client.get("/bonus-yields")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "<span>Bonus Gold</span>" in response.text

    def test_rules(self, client):
        data = client.get("/rules").json()

        assert data["active_rule_count"] == 1
        entry = data["entries"][0]
        assert entry["localized_name"] == "Town Trade"
        assert [m["modifier_id"] for m in entry["modifiers"]] == ["MOD_TOWN_GOLD", "MOD_CITY_SCIENCE"]


class TestLookups:

    def test_modifier(self, client):
        response = client.get("/modifiers/MOD_TOWN_GOLD")

        assert response.status_code == 200
        data = response.json()
        assert data["effect_type"]["effect_type"] == "EFFECT_CITY_ADJUST_YIELD"
        assert data["subject_requirement_set"]["requirement_set_id"] == "REQSET_TOWN"

    def test_unknown_modifier(self, client):
        response = client.get("/modifiers/MOD_NOPE")

        assert response.status_code == 404
        assert "not_found" in response.json()["detail"]

    def test_requirement_set(self, client):
        response = client.get("/requirement-sets/REQSET_CITY")

        assert response.status_code == 200
        assert response.json()["requirements"][0]["requirement_id"] == "REQ_CITY_IS_CAPITAL"

    def test_unknown_requirement_set(self, client):
        assert client.get("/requirement-sets/REQSET_NOPE").status_code == 404


class TestImprovements:

    def test_food_focus(self, client):
        response = client.get("/improvements/food")

        assert response.status_code == 200
        data = response.json()
        assert data["yield_type"] == "YIELD_FOOD"
        assert data["multiplier"] == 2
        assert data["base_count"] == 3
        assert data["total"] == 6
        assert [i["count"] for i in data["items"]] == [2, 1]
        assert "Total Improvements" in data["html"]

    def test_production_focus(self, client):
        data = client.get("/improvements/production").json()

        assert data["items"][0]["constructible_type"] == "IMPROVEMENT_MINE_RESOURCE"
        assert data["total"] == 2

    def test_no_improvements(self, town_snapshot_data):
        town_snapshot_data["city_improvements"] = []
        client = TestClient(create_app(GameDataLoader().load_data(town_snapshot_data)))

        assert client.get("/improvements/food").status_code == 404

    def test_unknown_focus(self, client):
        assert client.get("/improvements/science").status_code == 422


class TestAppFactory:

    def test_docs_can_be_disabled(self, snapshot):
        client = TestClient(create_app(snapshot, Settings(docs_enabled=False)))

        assert client.get("/docs").status_code == 404
        assert client.get("/openapi.json").status_code == 404

    def test_docs_enabled_by_default(self, client):
        assert client.get("/openapi.json").status_code == 200

    def test_loads_configured_snapshot(self, snapshot_file):
        client = TestClient(create_app(settings=Settings(data_path=snapshot_file)))

        assert client.get("/labels").json() == {"labels": ["Bonus Gold"]}

    def test_requires_a_snapshot(self):
        with pytest.raises(SnapshotLoadError):
            create_app()
