"""
HTTP tests for the routers, backed by in-memory repositories.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from traitmatch.core.mongodb import mongodb
from traitmatch.libs.matching import InvalidMatchInputError
from traitmatch.log.logging import logger
from traitmatch.repositories.messages import MessageRepository, get_message_repository
from traitmatch.schemas.user import ProfileSchema, UserSchema
from traitmatch.tests.factories import make_company, make_job


@pytest.fixture
def catalog(repositories):
    repositories.companies.items = {
        "c1": make_company("c1", {"focus": 8, "collaboration": 6}, email="hr@one.example"),
        "c2": make_company("c2", {"focus": 1}),
    }
    repositories.jobs.items = {
        "j1": make_job("j1", "c1", title="Engineer"),
        "j2": make_job("j2", "c2", title="Analyst"),
        "j3": make_job("j3", "gone", {"focus": 8}, title="Orphan"),
    }
    return repositories


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "Welcome" in response.text


def test_health(client):
    assert client.get("/health").json() == {"status": "UP"}
    assert client.head("/health").status_code == 200


def test_healthcheck_reports_unreachable_database(client, monkeypatch):
    monkeypatch.setattr(mongodb, "ping", AsyncMock(return_value=False))

    assert client.get("/healthcheck").status_code == 500


def test_healthcheck_ok(client, monkeypatch):
    monkeypatch.setattr(mongodb, "ping", AsyncMock(return_value=True))

    assert client.get("/healthcheck").json() == {"status": "UP"}


def test_match_returns_ranked_camel_case_results(client, catalog):
    response = client.post("/match", json={"traits": {"focus": 8, "collaboration": 6}})

    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert body[0]["score"] == 1.0
    assert body[0]["job"]["companyId"] == "c1"
    assert body[0]["company"]["id"] == "c1"


def test_match_filtered_by_company(client, catalog):
    response = client.post("/match?companyId=c2", json={"traits": {"focus": 1}})

    assert [m["job"]["id"] for m in response.json()] == ["j2"]


def test_match_with_empty_profile(client, catalog):
    response = client.post("/match", json={"traits": {}})

    assert response.status_code == 200
    assert response.json() == []


def test_match_requires_traits(client):
    assert client.post("/match", json={}).status_code == 422


def test_match_invalid_input_maps_to_400(client, monkeypatch):
    monkeypatch.setattr(
        "traitmatch.routers.match_router.match_profile",
        AsyncMock(side_effect=InvalidMatchInputError("bad profile")),
    )

    response = client.post("/match", json={"traits": {"focus": 1}})

    assert response.status_code == 400
    assert response.json()["detail"] == "bad profile"


def test_match_catalog_failure_maps_to_500(client, repositories, monkeypatch):
    monkeypatch.setattr(repositories.jobs, "get_all", AsyncMock(side_effect=RuntimeError("down")))

    response = client.post("/match", json={"traits": {"focus": 1}})

    assert response.status_code == 500
    assert "down" not in response.json()["detail"]


def test_match_debug(client, catalog):
    response = client.post("/match/debug", json={"traits": {"focus": 8, "collaboration": 6}})

    assert response.status_code == 200
    body = response.json()
    assert [m["job"]["id"] for m in body["matches"]] == ["j1"]
    diagnostics = body["diagnostics"]
    assert diagnostics["totalJobsAnalyzed"] == 3
    assert diagnostics["matchesBeforeThreshold"] == 2
    assert diagnostics["matchesAfterThreshold"] == 1
    statuses = {j["jobId"]: j["status"] for j in diagnostics["jobs"]}
    assert statuses == {"j1": "scored", "j2": "scored", "j3": "no_company_found"}
    assert diagnostics["traitCoverage"]["focus"]["jobsWithTrait"] == 2


def _capture_warnings():
    records = []
    sink_id = logger.add(lambda m: records.append(m.record), level="WARNING")
    return records, sink_id


def test_match_debug_invalid_input_is_logged_and_maps_to_400(client, monkeypatch):
    monkeypatch.setattr(
        "traitmatch.routers.match_router.match_profile_with_diagnostics",
        AsyncMock(side_effect=InvalidMatchInputError("bad profile")),
    )
    records, sink_id = _capture_warnings()
    try:
        response = client.post("/match/debug", json={"traits": {"focus": 1}})
    finally:
        logger.remove(sink_id)

    assert response.status_code == 400
    assert response.json()["detail"] == "bad profile"
    assert any(
        r["level"].name == "WARNING" and r["extra"].get("error") == "bad profile" for r in records
    )


def test_match_debug_catalog_failure_is_logged_and_maps_to_500(client, repositories, monkeypatch):
    monkeypatch.setattr(repositories.jobs, "get_all", AsyncMock(side_effect=RuntimeError("down")))
    records, sink_id = _capture_warnings()
    try:
        response = client.post("/match/debug", json={"traits": {"focus": 1}})
    finally:
        logger.remove(sink_id)

    assert response.status_code == 500
    assert "down" not in response.json()["detail"]
    assert any(
        r["level"].name == "ERROR" and r["message"] == "Match catalog unavailable" for r in records
    )


def test_jobs_crud(client, repositories):
    response = client.post(
        "/jobs",
        json={"companyId": "c1", "title": "Designer", "traits": {"visual_thinking": 9}},
    )
    assert response.status_code == 201
    job_id = response.json()["id"]
    assert job_id in repositories.jobs.items

    assert client.get(f"/jobs/{job_id}").json()["title"] == "Designer"
    assert [j["id"] for j in client.get("/jobs?companyId=c1").json()] == [job_id]
    assert client.get("/jobs?companyId=other").json() == []

    assert client.delete(f"/jobs/{job_id}").status_code == 204
    assert client.get(f"/jobs/{job_id}").status_code == 404
    assert client.delete(f"/jobs/{job_id}").status_code == 404


def test_create_job_requires_company(client):
    assert client.post("/jobs", json={"title": "No company"}).status_code == 422


def test_companies(client, catalog):
    response = client.post("/companies", json={"id": "c9", "name": "New", "email": "new@c9.example"})
    assert response.status_code == 201

    assert len(client.get("/companies").json()) == 3
    assert client.get("/companies/c1").json()["email"] == "hr@one.example"
    assert client.get("/companies/new@c9.example").json()["id"] == "c9"
    assert client.get("/companies/unknown").status_code == 404


def test_users(client):
    response = client.post(
        "/users",
        json={"id": "u1", "name": "Sam", "email": "sam@example.com", "profile": {"traits": {"focus": 7}}},
    )
    assert response.status_code == 200

    assert client.get("/users/u1").json()["profile"]["traits"] == {"focus": 7}
    assert client.get("/users/sam@example.com").json()["id"] == "u1"
    assert client.get("/users/nobody@example.com").status_code == 404


def test_company_login(client, catalog):
    ok = client.post("/auth/company/login", json={"email": "hr@one.example"})
    assert ok.status_code == 200
    assert ok.json()["success"] is True
    assert ok.json()["company"]["id"] == "c1"

    missing = client.post("/auth/company/login", json={"email": "who@nowhere.example"})
    assert missing.status_code == 404
    assert missing.json()["success"] is False
    assert "who@nowhere.example" in missing.json()["message"]


def test_user_login(client, repositories):
    repositories.users.items["u1"] = UserSchema(
        id="u1", name="Sam", email="sam@example.com", profile=ProfileSchema(traits={})
    )

    assert client.post("/auth/user/login", json={"email": "sam@example.com"}).json()["user"]["id"] == "u1"
    assert client.post("/auth/user/login", json={"email": "x@example.com"}).status_code == 404


def test_messages_flow(client):
    response = client.post(
        "/messages",
        json={"fromId": "u1", "toId": "c1", "content": "Hello", "jobId": "j1"},
    )
    assert response.status_code == 201
    message = response.json()
    assert message["threadId"] == message["id"]
    assert message["status"] == "SENT"

    reply = client.post(
        "/messages",
        json={
            "fromId": "c1",
            "toId": "u1",
            "content": "Hi back",
            "isFromCompany": True,
            "threadId": message["id"],
        },
    )
    assert reply.status_code == 201

    assert len(client.get("/messages/company/c1").json()) == 2
    assert len(client.get("/messages/user/u1").json()) == 2
    assert len(client.get(f"/messages/thread/{message['id']}").json()) == 2

    updated = client.patch(f"/messages/{message['id']}/status", json={"status": "READ"})
    assert updated.json() == {"status": "updated"}
    assert client.patch("/messages/nope/status", json={"status": "READ"}).status_code == 404
    assert client.patch(f"/messages/{message['id']}/status", json={"status": "LOST"}).status_code == 422


def test_anonymous_message_is_stored_without_sender_details(client):
    collection = MagicMock()
    collection.replace_one = AsyncMock()
    client.app.dependency_overrides[get_message_repository] = lambda: MessageRepository(collection)

    response = client.post(
        "/messages",
        json={
            "fromId": "u1",
            "toId": "c1",
            "content": "Curious about the role",
            "isAnonymous": True,
            "senderName": "Sam",
            "senderProfile": {"traits": {"focus": 8}},
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["senderName"] is None
    assert body["senderProfile"] is None
    _, document = collection.replace_one.await_args.args
    assert document["senderName"] is None
    assert document["senderProfile"] is None
    assert document["threadId"] == body["id"]


def test_traits(client):
    library = client.get("/traits").json()
    assert library["version"] == "1.0.0"
    assert len(library["traits"]) == 12
    assert "lastUpdated" in library

    assert client.get("/traits/empathy").json()["category"] == "EMOTIONAL"
    assert client.get("/traits/telepathy").status_code == 404
    assert len(client.get("/traits/category/SOCIAL").json()) == 1
    assert client.get("/traits/category/UNKNOWN").status_code == 422


def test_validate_traits(client):
    response = client.post("/traits/validate", json={"autonomy": 5, "telepathy": 3, "empathy": 12})

    assert response.json() == {
        "valid": False,
        "errors": {
            "telepathy": "Unknown trait ID",
            "empathy": "Value must be between 1 and 10",
        },
    }
    assert client.post("/traits/validate", json={"autonomy": 5}).json() == {"valid": True, "errors": {}}
