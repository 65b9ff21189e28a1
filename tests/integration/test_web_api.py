"""Integration tests for the REST API.

These tests drive the FastAPI app end-to-end with TestClient, using the
bundled catalog.
"""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from rackbuilder.web.app import create_app


@pytest.fixture
def client() -> TestClient:
    """Create a test client for the API."""
    return TestClient(create_app())


def _relays(*slots: int) -> list[dict[str, Any]]:
    return [{"slot": slot, "card_id": "relay-8in-2out"} for slot in slots]


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestChassisEndpoints:
    """Tests for /api/v1/chassis."""

    def test_list(self, client: TestClient) -> None:
        response = client.get("/api/v1/chassis")

        assert response.status_code == 200
        codes = [c["code"] for c in response.json()["chassis_types"]]
        assert codes == ["LTX", "MTX", "STX"]

    def test_get_by_alias(self, client: TestClient) -> None:
        response = client.get("/api/v1/chassis/14-card")

        assert response.status_code == 200
        data = response.json()
        assert data["code"] == "LTX"
        assert data["card_slots"] == list(range(1, 15))
        assert data["placement_groups"] == {"bushing": [[6, 7], [13, 14]]}

    def test_unknown_chassis(self, client: TestClient) -> None:
        response = client.get("/api/v1/chassis/XTX")

        assert response.status_code == 404
        data = response.json()
        assert data["error_type"] == "chassis_type_unresolved"
        assert data["details"]["available"] == ["LTX", "MTX", "STX"]


class TestCardEndpoints:
    """Tests for /api/v1/cards."""

    def test_list_all(self, client: TestClient) -> None:
        response = client.get("/api/v1/cards")

        assert response.status_code == 200
        ids = [c["id"] for c in response.json()["cards"]]
        assert "display-oncard" in ids

    def test_filter_by_chassis(self, client: TestClient) -> None:
        response = client.get("/api/v1/cards", params={"chassis_type": "4-card"})

        ids = [c["id"] for c in response.json()["cards"]]
        assert "display-oncard" not in ids
        assert "bushing-monitor" in ids

    def test_get_card(self, client: TestClient) -> None:
        response = client.get("/api/v1/cards/fiber-6port")

        assert response.status_code == 200
        assert response.json()["specifications"]["protocols"] == ["IEC 61850", "GOOSE"]

    def test_unknown_card(self, client: TestClient) -> None:
        response = client.get("/api/v1/cards/nope")

        assert response.status_code == 404
        assert response.json()["error_type"] == "not_found"


class TestPlaceEndpoint:
    """Tests for POST /api/v1/configurations/place."""

    def test_place_bushing(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/configurations/place",
            json={
                "chassis_type": "LTX",
                "card_id": "bushing-monitor",
                "specifications": {"numberOfBushings": 3},
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["ok"]
        assert data["placed_slots"] == [6, 7]
        assert data["placements"] == [
            {"slot": 6, "card_id": "bushing-monitor", "specifications": {"numberOfBushings": 3}}
        ]
        assert [row["slot"] for row in data["slots"]] == [6, 7]
        assert data["part_number"]["part_number"] == "QTMS-LTX-00000B300000000-0"

    def test_bushing_evicts_under_full_contention(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/configurations/place",
            json={
                "chassis_type": "LTX",
                "placements": _relays(6, 7, 13, 14),
                "card_id": "bushing-monitor",
            },
        )

        data = response.json()
        assert data["ok"]
        assert data["placed_slots"] == [6, 7]
        assert data["displaced"] == [
            {"card_id": "relay-8in-2out", "slots": [6], "superseded": False},
            {"card_id": "relay-8in-2out", "slots": [7], "superseded": False},
        ]
        assert [p["slot"] for p in data["placements"]] == [6, 13, 14]

    def test_rejected_placement_is_not_an_http_error(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/configurations/place",
            json={
                "chassis_type": "LTX",
                "placements": _relays(1),
                "card_id": "display-oncard",
                "target_slot": 3,
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert not data["ok"]
        assert data["error"]["kind"] == "slot_not_allowed"
        assert data["placements"] == [
            {"slot": 1, "card_id": "relay-8in-2out", "specifications": {}}
        ]

    def test_outside_card(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/configurations/place",
            json={"chassis_type": "STX", "card_id": "remote-display"},
        )

        data = response.json()
        assert data["ok"]
        assert data["outside_card_ids"] == ["remote-display"]
        assert data["part_number"]["part_number"] == "QTMS-STX-0000-1"

    def test_unknown_card(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/configurations/place",
            json={"chassis_type": "LTX", "card_id": "nope"},
        )

        assert response.status_code == 404
        assert response.json()["details"] == {"card_id": "nope"}

    def test_unknown_chassis(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/configurations/place",
            json={"chassis_type": "XTX", "card_id": "relay-8in-2out"},
        )

        assert response.status_code == 404

    def test_overlapping_placements(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/configurations/place",
            json={
                "chassis_type": "LTX",
                "placements": [
                    {"slot": 6, "card_id": "bushing-monitor"},
                    {"slot": 7, "card_id": "relay-8in-2out"},
                ],
                "card_id": "analog-8ch",
            },
        )

        assert response.status_code == 422
        assert response.json()["error_type"] == "invalid_slot_map"

    def test_placement_outside_chassis(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/configurations/place",
            json={
                "chassis_type": "STX",
                "placements": _relays(9),
                "card_id": "analog-8ch",
            },
        )

        assert response.status_code == 422

    def test_bushing_off_placement_group(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/configurations/place",
            json={
                "chassis_type": "LTX",
                "placements": [{"slot": 1, "card_id": "bushing-monitor"}],
                "card_id": "relay-8in-2out",
            },
        )

        assert response.status_code == 422
        data = response.json()
        assert data["error_type"] == "invalid_slot_map"
        assert "not on a placement group" in data["error"]

    def test_placement_in_cpu_slot(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/configurations/place",
            json={"chassis_type": "STX", "placements": _relays(0), "card_id": "analog-8ch"},
        )

        assert response.status_code == 422
        assert response.json()["error_type"] == "invalid_slot_map"


class TestRemoveAndMoveEndpoints:
    """Tests for remove and move."""

    def test_remove_clears_whole_run(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/configurations/remove",
            json={
                "chassis_type": "LTX",
                "placements": [{"slot": 6, "card_id": "bushing-monitor"}, *_relays(1)],
                "slot": 7,
            },
        )

        assert response.status_code == 200
        assert [p["slot"] for p in response.json()["placements"]] == [1]

    def test_remove_outside_card(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/configurations/remove",
            json={
                "chassis_type": "STX",
                "outside_card_ids": ["remote-display"],
                "card_id": "remote-display",
            },
        )

        assert response.json()["outside_card_ids"] == []

    def test_remove_needs_slot_or_card(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/configurations/remove",
            json={"chassis_type": "STX"},
        )

        assert response.status_code == 422

    def test_move(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/configurations/move",
            json={"chassis_type": "STX", "placements": _relays(1), "from_slot": 1, "to_slot": 2},
        )

        data = response.json()
        assert data["ok"]
        assert data["part_number"]["part_number"] == "QTMS-STX-0R00-0"

    def test_move_from_empty_slot(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/configurations/move",
            json={"chassis_type": "STX", "from_slot": 1, "to_slot": 2},
        )

        data = response.json()
        assert not data["ok"]
        assert data["error"]["kind"] == "slot_empty"


class TestPartNumberEndpoint:
    """Tests for POST /api/v1/part-number."""

    def test_empty_stx(self, client: TestClient) -> None:
        response = client.post("/api/v1/part-number", json={"chassis_type": "STX"})

        assert response.status_code == 200
        assert response.json() == {
            "part_number": "QTMS-STX-0000-0",
            "slot_codes": ["0", "0", "0", "0"],
            "warnings": [],
        }

    def test_missing_template_value_warns(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/part-number",
            json={"chassis_type": "STX", "placements": [{"slot": 3, "card_id": "bushing-monitor"}]},
        )

        data = response.json()
        assert data["part_number"] == "QTMS-STX-00B0-0"
        assert len(data["warnings"]) == 1

    def test_designated_card_outside_allow_list(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/part-number",
            json={"chassis_type": "LTX", "placements": [{"slot": 3, "card_id": "display-oncard"}]},
        )

        assert response.status_code == 422
        data = response.json()
        assert data["error_type"] == "invalid_slot_map"
        assert "can only be placed in slots 8" in data["error"]

    def test_designated_card_in_allowed_slot(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/part-number",
            json={"chassis_type": "LTX", "placements": [{"slot": 8, "card_id": "display-oncard"}]},
        )

        assert response.status_code == 200
        assert response.json()["part_number"] == "QTMS-LTX-0000000D000000-0"


class TestBuildEndpoint:
    """Tests for POST /api/v1/configurations/build."""

    def test_build(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/configurations/build",
            json={
                "config": {
                    "schema_version": "1.0",
                    "chassis_type": "STX",
                    "cards": [{"card_id": "relay-8in-2out"}],
                }
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["is_valid"]
        assert data["part_number"]["part_number"] == "QTMS-STX-R000-0"
        assert data["line_item"]["revenue"] == pytest.approx(4100)

    def test_invalid_rack_file(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/configurations/build",
            json={"config": {"chassis_type": "STX"}},
        )

        assert response.status_code == 422
        data = response.json()
        assert data["error_type"] == "validation"
        assert data["details"][0]["path"] == "schema_version"
