"""Tests for the read-only viewer API.

The app is built with ``autostart=False`` so the engine stays at step 1
until a test advances it through ``POST /control/step``.
"""

import sys
import os
import math

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient

from hexarena.api.app import create_app
from hexarena.api.routes.map import rle_encode
from hexarena.config import SimulationConfig

API = "/api/v1"


@pytest.fixture()
def client():
    cfg = SimulationConfig(seed=7, map_width=10, map_height=10, entity_count=6, hex_radius=2.0, log_level="WARNING")
    with TestClient(create_app(cfg, autostart=False)) as c:
        yield c


class TestRLE:
    def test_empty(self):
        assert rle_encode(()) == []

    def test_runs(self):
        assert rle_encode((False, False, True, False)) == [0, 2, 1, 1, 0, 1]

    def test_single_run(self):
        assert rle_encode((True,) * 5) == [1, 5]


class TestStateEndpoints:
    def test_initial_state(self, client):
        body = client.get(f"{API}/state").json()
        assert body["step"] == 1
        assert body["alive_count"] == 6
        assert [e["id"] for e in body["entities"]] == list(range(6))
        assert {ev["category"] for ev in body["events"]} == {"spawn"}

    def test_idle_entity_serialization(self, client):
        entity = client.get(f"{API}/state").json()["entities"][0]
        assert entity["state"] == "IDLE"
        assert entity["target"] is None
        assert entity["destroy_at"] is None
        assert entity["started_attack_at"] is None
        assert entity["move_progress"] == 0.0
        assert entity["current_cell"] == entity["x"] + entity["y"] * 10

    def test_world_coordinates(self, client):
        for entity in client.get(f"{API}/state").json()["entities"]:
            x, y = entity["x"], entity["y"]
            assert entity["world_x"] == pytest.approx(2.0 * 1.5 * x)
            assert entity["world_y"] == pytest.approx(2.0 * math.sqrt(3) * (y + 0.5 * (x & 1)))
            assert (entity["next_world_x"], entity["next_world_y"]) == (entity["world_x"], entity["world_y"])

    def test_world_coordinates_follow_reservation(self, client):
        for _ in range(3):
            client.post(f"{API}/control/step")
        for entity in client.get(f"{API}/state").json()["entities"]:
            nx, ny = entity["next_x"], entity["next_y"]
            assert entity["next_world_x"] == pytest.approx(3.0 * nx)
            assert entity["next_world_y"] == pytest.approx(2.0 * math.sqrt(3) * (ny + 0.5 * (nx & 1)))

    def test_entity_lookup(self, client):
        resp = client.get(f"{API}/entities/3")
        assert resp.status_code == 200
        assert resp.json()["id"] == 3

    def test_unknown_entity_is_404(self, client):
        assert client.get(f"{API}/entities/999").status_code == 404

    def test_since_tick_filters_events(self, client):
        assert client.get(f"{API}/state", params={"since_tick": 5}).json()["events"] == []

    def test_stats(self, client):
        stats = client.get(f"{API}/stats").json()
        assert stats["tick"] == 1
        assert stats["alive_count"] == 6
        assert stats["dying_count"] == 0
        assert stats["stored_count"] == 6
        assert stats["event_count"] == 6
        assert stats["running"] is False
        assert stats["finished"] is False


class TestMapEndpoints:
    def test_map_rle_covers_every_cell(self, client):
        body = client.get(f"{API}/map").json()
        assert body["width"] == 10 and body["height"] == 10
        rle = body["occupied"]
        assert sum(rle[1::2]) == body["cell_count"] == 100
        occupied = sum(count for value, count in zip(rle[::2], rle[1::2]) if value == 1)
        assert occupied == 6

    def test_cell_lookup(self, client):
        entity = client.get(f"{API}/entities/0").json()
        cell = client.get(f"{API}/cells/{entity['current_cell']}").json()
        assert cell["occupied"] is True
        assert (cell["x"], cell["y"]) == (entity["x"], entity["y"])

    @pytest.mark.parametrize("index", [-1, 100, 5000])
    def test_cell_out_of_range_is_400(self, client, index):
        assert client.get(f"{API}/cells/{index}").status_code == 400


class TestControl:
    def test_step_advances_one_tick(self, client):
        body = client.post(f"{API}/control/step").json()
        assert body["status"] == "ok"
        assert body["tick"] == 2
        assert client.get(f"{API}/state").json()["step"] == 2

    def test_reset_returns_to_step_one(self, client):
        for _ in range(3):
            client.post(f"{API}/control/step")
        before = client.get(f"{API}/state").json()["entities"]
        body = client.post(f"{API}/control/reset").json()
        assert body["tick"] == 1
        after = client.get(f"{API}/state").json()
        assert after["step"] == 1
        assert [e["id"] for e in after["entities"]] == [e["id"] for e in before]

    def test_pause_when_stopped_is_error(self, client):
        assert client.post(f"{API}/control/pause").json()["status"] == "error"

    def test_unknown_action_is_422(self, client):
        assert client.post(f"{API}/control/explode").status_code == 422

    def test_start_then_pause(self, client):
        assert client.post(f"{API}/control/start").json()["status"] == "ok"
        assert client.post(f"{API}/control/start").json()["status"] == "noop"
        assert client.post(f"{API}/control/pause").json()["status"] == "ok"
        stats = client.get(f"{API}/stats").json()
        assert stats["running"] is True
        assert stats["paused"] is True

    def test_speed_updates_tick_rate(self, client):
        assert client.post(f"{API}/speed", params={"tps": 20}).json()["status"] == "ok"
        assert client.get(f"{API}/config").json()["tick_rate"] == pytest.approx(0.05)

    def test_speed_out_of_range_is_422(self, client):
        assert client.post(f"{API}/speed", params={"tps": 0.1}).status_code == 422


class TestConfigEndpoint:
    def test_config(self, client):
        body = client.get(f"{API}/config").json()
        assert body["seed"] == 7
        assert body["map_width"] == 10
        assert body["entity_count"] == 6
        assert body["attack_distance"] == 1
        assert body["destroy_delay"] == 10
        assert body["hex_radius"] == 2.0
        assert body["tick_rate"] == pytest.approx(0.1)
