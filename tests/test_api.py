"""
Tests for the JSON command surface
"""
import base64
from unittest.mock import patch

import pytest
import requests

from conftest import FixedClock, login
from ouranimelist.services.network import check_network_reachability


@pytest.fixture
def registered(client):
    client.post("/api/auth/register", json={"name": "alice", "password": "alice-pw"})
    client.post("/api/auth/register", json={"name": "bob", "password": "bob-pw"})
    client.post("/api/auth/register", json={"name": "root", "password": "root-pw", "admin": True})


@pytest.fixture
def alice(client, registered):
    login(client, "alice", "alice-pw")
    return client


@pytest.fixture
def root(client, registered):
    login(client, "root", "root-pw")
    return client


def add(client, title, release_day="Monday", **extra):
    body = {"title": title, "release_day": release_day, "release_time": "18:00", **extra}
    return client.post("/api/banners", json=body)


def titles(response):
    return [banner["title"] for banner in response.get_json()["data"]]


class TestAuthEndpoints:
    def test_register(self, client):
        response = client.post("/api/auth/register", json={"name": "alice", "password": "pw"})
        assert response.status_code == 201
        assert response.get_json()["data"] == {"registered": True}

    def test_register_duplicate(self, client, registered):
        response = client.post("/api/auth/register", json={"name": "alice", "password": "other"})
        assert response.status_code == 200
        assert response.get_json()["data"] == {"registered": False}

    def test_register_requires_json(self, client):
        response = client.post("/api/auth/register", data="name=alice")
        assert response.status_code == 400
        assert response.get_json()["code"] == "VALIDATION_ERROR"

    def test_register_rejects_non_string_name(self, client):
        response = client.post("/api/auth/register", json={"name": 123, "password": "pw"})
        assert response.status_code == 400
        assert response.get_json()["code"] == "VALIDATION_ERROR"

    def test_login_statuses(self, client, registered):
        assert login(client, "alice", "alice-pw").get_json()["data"] == {"status": "User"}
        assert login(client, "root", "root-pw").get_json()["data"] == {"status": "Admin"}
        assert login(client, "ghost", "pw").get_json()["data"] == {"status": "Fail", "error": "user not found"}
        assert login(client, "alice", "nope").get_json()["data"] == {"status": "Fail", "error": "invalid password"}

    def test_session_identity(self, alice):
        response = alice.get("/api/auth/me")
        assert response.get_json()["data"] == {"name": "alice", "role": "User"}

    def test_logout(self, alice):
        assert alice.post("/api/auth/logout").status_code == 200
        assert alice.get("/api/banners").status_code == 401


class TestBannerEndpoints:
    def test_requires_login(self, client, registered):
        response = client.get("/api/banners")
        assert response.status_code == 401
        assert response.get_json()["code"] == "UNAUTHORIZED"

    def test_add_and_list(self, alice):
        image = base64.b64encode(b"img").decode("ascii")
        response = add(alice, "Frieren", image=image, current_episodes=3, total_episodes=28)
        assert response.status_code == 201

        banners = alice.get("/api/banners").get_json()["data"]
        assert banners == [
            {
                "title": "Frieren",
                "release_day": "Monday",
                "release_time": "18:00",
                "current_episodes": 3,
                "total_episodes": 28,
                "image": image,
            }
        ]
        assert "image" not in alice.get("/api/banners?images=false").get_json()["data"][0]

    def test_duplicate_is_conflict(self, alice):
        add(alice, "Frieren")
        response = add(alice, "Frieren")
        assert response.status_code == 409
        assert response.get_json()["code"] == "CONFLICT"

    def test_invalid_input(self, alice):
        assert add(alice, "Frieren", release_day="Someday").status_code == 400
        assert add(alice, "Frieren", image="not base64!").status_code == 400

        response = alice.post("/api/banners", json={"title": "Frieren", "release_day": "Monday"})
        assert response.status_code == 400
        assert response.get_json()["code"] == "VALIDATION_ERROR"
        assert add(alice, "Frieren", release_time=1800).status_code == 400
        assert alice.get("/api/banners").get_json()["data"] == []

    def test_owner_comes_from_session(self, client, registered):
        login(client, "alice", "alice-pw")
        add(client, "Frieren")
        client.post("/api/auth/logout")

        login(client, "bob", "bob-pw")
        assert client.get("/api/banners").get_json()["data"] == []
        assert client.delete("/api/banners/Frieren").get_json()["data"] == {"affected": 0}

    def test_paging(self, alice):
        for index in range(3):
            add(alice, f"Show {index}")

        response = alice.get("/api/banners?page_size=2&page_index=1")
        body = response.get_json()
        assert titles(response) == ["Show 2"]
        assert body["pagination"] == {"page_index": 1, "page_size": 2, "has_more": False}
        assert alice.get("/api/banners?page_size=2&page_index=5").get_json()["data"] == []

    def test_paging_limits(self, alice):
        assert alice.get("/api/banners?page_size=0").status_code == 400
        assert alice.get("/api/banners?page_size=1000").status_code == 400
        assert alice.get("/api/banners?page_size=abc").status_code == 400

    def test_search(self, alice):
        for title in ["Oshi no Ko", "Frieren", "Kaiju No. 8"]:
            add(alice, title)

        assert titles(alice.get("/api/banners/search?query=no&page_size=10")) == ["Oshi no Ko", "Kaiju No. 8"]

    def test_by_release_day(self, app, alice):
        app.extensions["ouranimelist"]["catalog_store"].clock = FixedClock()
        for title, day in [("Sun", "Sunday"), ("Tue", "Tuesday"), ("Mon", "Monday")]:
            add(alice, title, release_day=day)

        assert titles(alice.get("/api/banners/by-release-day")) == ["Mon", "Tue", "Sun"]

    def test_updates(self, alice):
        add(alice, "Frieren")

        assert alice.put("/api/banners/Frieren/current-episodes", json={"value": 4}).get_json()["data"] == {"affected": 1}
        assert alice.put("/api/banners/Frieren/total-episodes", json={"value": 28}).status_code == 200
        assert alice.put("/api/banners/Frieren/release-day", json={"value": "Friday"}).status_code == 200
        assert alice.put("/api/banners/Frieren/release-time", json={"value": "23:00"}).status_code == 200

        banner = alice.get("/api/banners").get_json()["data"][0]
        assert (banner["current_episodes"], banner["total_episodes"]) == (4, 28)
        assert (banner["release_day"], banner["release_time"]) == ("Friday", "23:00")

    def test_update_errors(self, alice):
        add(alice, "Frieren")

        assert alice.put("/api/banners/Frieren/rating", json={"value": 5}).status_code == 404
        assert alice.put("/api/banners/Frieren/current-episodes", json={}).status_code == 400
        assert alice.put("/api/banners/Frieren/current-episodes", json={"value": -1}).status_code == 400

    def test_delete(self, alice):
        add(alice, "Frieren")

        assert alice.delete("/api/banners/Frieren").get_json()["data"] == {"affected": 1}
        assert alice.delete("/api/banners/Frieren").get_json()["data"] == {"affected": 0}

    def test_countdown(self, app, alice):
        app.extensions["ouranimelist"]["catalog_store"].clock = FixedClock()
        add(alice, "Frieren")

        data = alice.get("/api/banners/Frieren/countdown").get_json()["data"]
        assert (data["days"], data["hours"], data["minutes"], data["seconds"]) == (0, 6, 0, 0)
        assert data["text"] == "0d 6h 0m 0s"
        assert alice.get("/api/banners/Missing/countdown").status_code == 404


class TestAdminEndpoints:
    def test_standard_account_is_forbidden(self, alice):
        response = alice.get("/api/admin/accounts")
        assert response.status_code == 403
        assert response.get_json()["code"] == "FORBIDDEN"

    def test_accounts(self, root):
        data = root.get("/api/admin/accounts").get_json()["data"]
        assert data == [
            {"name": "alice", "role": "User"},
            {"name": "bob", "role": "User"},
            {"name": "root", "role": "Admin"},
        ]

    def test_simulated_attack_is_flagged(self, app, root):
        response = root.post("/api/admin/simulate-attack", json={"account": "bob"})
        assert response.get_json()["data"] == {"account": "bob", "changes": 10}

        received = []
        services = app.extensions["ouranimelist"]
        services["notifier"].subscribe(lambda event, payload: received.append((event, payload)))
        assert services["monitor"].tick() == ["bob"]
        assert received == [("attack_detected", "bob")]

        flagged = root.get("/api/admin/flagged").get_json()["data"]
        assert [flag["account"] for flag in flagged] == ["bob"]

        audit = root.get("/api/admin/audit?account=bob&limit=5").get_json()["data"]
        assert len(audit) == 5
        assert {entry["action"] for entry in audit} == {"update-current-episodes"}

    def test_simulate_attack_validation(self, root):
        assert root.post("/api/admin/simulate-attack", json={"account": "ghost"}).status_code == 404
        assert root.post("/api/admin/simulate-attack", json={"count": 0}).status_code == 400

    def test_monitor_settings(self, root):
        assert root.get("/api/admin/settings/monitor").get_json()["data"]["threshold"] == 10

        response = root.put("/api/admin/settings/monitor", json={"threshold": 4})
        assert response.status_code == 200
        assert response.get_json()["data"]["threshold"] == 4

        assert root.put("/api/admin/settings/monitor", json={"threshold": 0}).status_code == 400
        assert root.put("/api/admin/settings/monitor", json={"enabled": "no"}).status_code == 400
        assert root.put("/api/admin/settings/monitor", json={"extra": 1}).status_code == 400


class TestSystemEndpoints:
    def test_network(self, client):
        with patch("ouranimelist.routes.system.check_network_reachability", return_value=False) as probe:
            response = client.get("/api/system/network")
        assert response.get_json()["data"] == {"reachable": False}
        probe.assert_called_once_with("https://www.google.com", timeout=3)

    def test_health(self, client):
        response = client.get("/api/system/health")
        body = response.get_json()
        assert response.status_code == 200
        assert body["status"] == "healthy"
        assert body["data"]["monitor"] == "disabled"

    def test_metrics(self, client):
        response = client.get("/api/metrics")
        assert response.status_code == 200
        assert b"ouranimelist_audit_entries_total" in response.data

    def test_unknown_route(self, client):
        assert client.get("/api/nothing").status_code == 404


class TestNetworkProbe:
    def test_reachable(self):
        with patch("ouranimelist.services.network.requests.head") as head:
            assert check_network_reachability("https://example.org", timeout=1) is True
        head.assert_called_once_with("https://example.org", timeout=1, allow_redirects=False)

    def test_unreachable(self):
        with patch("ouranimelist.services.network.requests.head", side_effect=requests.ConnectionError("offline")):
            assert check_network_reachability("https://example.org") is False

    def test_timeout(self):
        with patch("ouranimelist.services.network.requests.head", side_effect=requests.Timeout("slow")):
            assert check_network_reachability("https://example.org") is False
