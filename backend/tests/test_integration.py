"""Integration tests: class selection through a finished deck over HTTP."""
from __future__ import annotations

import json
import random

import pytest
from fastapi.testclient import TestClient

from twopick.config import draft_config
from twopick.main import app
from twopick.services.catalog_loader import clear_catalog, get_catalog, load_catalog_file, load_catalog_json
from twopick.services.draft_engine import DraftController
from twopick.services.draft_tracker import get_controller, reset_tracker, use_controller


@pytest.fixture(autouse=True)
def clean_state():
    """Load the bundled catalog and reset the draft between tests."""
    load_catalog_file(draft_config.catalog_path)
    reset_tracker()
    use_controller(DraftController(get_catalog(), draft_config, rng=random.Random(17)))
    yield
    reset_tracker()
    clear_catalog()


client = TestClient(app)


def _start(card_class: str = "Forestcraft") -> dict:
    resp = client.post("/api/draft/class", json={"card_class": card_class})
    assert resp.status_code == 200
    return resp.json()


class TestFullWorkflow:
    def test_health(self):
        resp = client.get("/api/health")
        assert resp.json() == {"status": "ok"}

    def test_lifespan_loads_catalog(self):
        clear_catalog()
        with TestClient(app) as c:
            resp = c.get("/api/catalog")
            assert resp.status_code == 200
            assert resp.json()["count"] == 78

    def test_class_previews(self):
        resp = client.get("/api/draft/classes")
        assert resp.status_code == 200
        previews = resp.json()
        assert len(previews) == 7
        for p in previews:
            assert len(p["cards"]) == 2
            assert all(c["class"] == p["card_class"] for c in p["cards"])

        # Previews are stable until restart
        assert client.get("/api/draft/classes").json() == previews

    def test_start_uses_previewed_cards(self):
        previews = client.get("/api/draft/classes").json()
        havencraft = next(p for p in previews if p["card_class"] == "Havencraft")

        state = _start("Havencraft")
        assert state["phase"] == "drafting"
        assert state["current_class"] == "Havencraft"
        assert state["deck"] == havencraft["cards"]
        assert state["round"] == 1
        assert state["rerolls"] == 3
        assert len(state["current_options"]) == 4
        assert len(state["pairs"]) == 2

    def test_full_draft_and_export(self):
        _start("Dragoncraft")
        for i in range(19):
            resp = client.post("/api/draft/pick", json={"pair_index": i % 2})
            assert resp.status_code == 200
        state = resp.json()
        assert state["is_finished"] is True
        assert state["phase"] == "finished"
        assert state["deck_size"] == 40

        # Picking past the last round changes nothing
        resp = client.post("/api/draft/pick", json={"pair_index": 0})
        assert resp.json()["deck_size"] == 40

        resp = client.get("/api/draft/deck")
        assert resp.status_code == 200
        deck = resp.json()
        assert deck["count"] == 40
        assert deck["target"] == 40
        assert sum(b["count"] for b in deck["mana_curve"]) == 40
        assert deck["mana_curve"][-1]["cost"] == "8+"
        costs = [c["cost"] for c in deck["cards"]]
        assert costs == sorted(costs)

        resp = client.get("/api/export/deck", params={"format": "csv"})
        assert resp.status_code == 200
        assert "text/csv" in resp.headers["content-type"]
        lines = resp.text.strip().splitlines()
        assert lines[0] == "Name,Cost,Rarity,Class,Count"

    def test_reroll_workflow(self):
        _start("Swordcraft")
        for expected in (2, 1, 0):
            resp = client.post("/api/draft/reroll")
            assert resp.status_code == 200
            assert resp.json()["rerolls"] == expected

        before = resp.json()["current_options"]
        resp = client.post("/api/draft/reroll")
        assert resp.status_code == 200
        assert resp.json()["rerolls"] == 0
        assert resp.json()["current_options"] == before

    def test_restart(self):
        _start("Runecraft")
        resp = client.post("/api/draft/restart", params={"seed": 5})
        assert resp.status_code == 200
        assert client.get("/api/draft/state").json()["phase"] == "class_selection"
        _start("Portalcraft")

    def test_rules(self):
        resp = client.get("/api/draft/rules")
        assert resp.status_code == 200
        rules = resp.json()
        assert len(rules["rounds"]) == 19
        assert rules["neutral_rate"] == 0.05
        assert rules["duplicate_cap"] == 3
        round_13 = {e["rarity"]: e["odds"] for e in rules["rounds"]["13"]}
        assert round_13["Rainbow"] == 0.0
        assert sum(e["odds"] for e in rules["reroll"]) == pytest.approx(1.0)

    def test_catalog_endpoints(self):
        resp = client.get("/api/catalog", params={"card_class": "Neutral", "rarity": "Gold"})
        assert resp.json()["count"] == 2

        resp = client.get("/api/catalog/search", params={"q": "Goliat"})
        assert resp.json()[0]["name"] == "Goliath"

        resp = client.get("/api/catalog/summary")
        assert resp.json()["Abysscraft"]["Silver"] == 3


class TestDraftValidation:
    def test_pick_before_class(self):
        resp = client.post("/api/draft/pick", json={"pair_index": 0})
        assert resp.status_code == 400

    def test_reroll_before_class(self):
        resp = client.post("/api/draft/reroll")
        assert resp.status_code == 400

    def test_deck_before_class(self):
        assert client.get("/api/draft/deck").status_code == 404
        assert client.get("/api/export/deck").status_code == 404

    def test_choose_class_twice(self):
        _start("Abysscraft")
        resp = client.post("/api/draft/class", json={"card_class": "Forestcraft"})
        assert resp.status_code == 400

    def test_neutral_not_playable(self):
        resp = client.post("/api/draft/class", json={"card_class": "Neutral"})
        assert resp.status_code == 400

    def test_bad_pair_index(self):
        _start()
        resp = client.post("/api/draft/pick", json={"pair_index": 2})
        assert resp.status_code == 422

    def test_unknown_class(self):
        resp = client.post("/api/draft/class", json={"card_class": "Bardcraft"})
        assert resp.status_code == 422

    def test_catalog_unavailable(self):
        clear_catalog()
        assert client.get("/api/catalog").status_code == 503


class TestCatalogReload:
    def test_controller_follows_reloaded_catalog(self):
        before = get_controller()
        stale = client.get("/api/draft/classes").json()
        assert not any(c["name"].startswith("Relic") for p in stale for c in p["cards"])
        content = json.dumps([
            {"name": f"Relic {i}", "cost": i, "rarity": rarity, "class": "Forestcraft"}
            for i, rarity in enumerate(["Gold", "Gold", "Rainbow", "Rainbow"])
        ])
        cards = load_catalog_json(content)

        controller = get_controller()
        assert controller is not before
        assert controller.catalog is cards

        previews = client.get("/api/draft/classes").json()
        forest = next(p for p in previews if p["card_class"] == "Forestcraft")
        assert all(c["name"].startswith("Relic") for c in forest["cards"])
