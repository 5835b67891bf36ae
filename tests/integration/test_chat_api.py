from datetime import datetime, timedelta, UTC

import pytest

from collab.db import models


def _chat_url(teamspace_id) -> str:
    return f"/api/teamspaces/{teamspace_id}/chat"


@pytest.mark.integration
def test_post_and_list_chat_messages(client, auth_headers, team_context):
    ts = team_context["teamspace"]

    r1 = client.post(_chat_url(ts.id), json={"message": "Morning all"}, headers=auth_headers("alice"))
    r2 = client.post(_chat_url(ts.id), json={"message": "  Hi Alice  "}, headers=auth_headers("bob"))
    assert r1.status_code == 201, r1.text
    assert r2.status_code == 201, r2.text

    created = r2.json()
    assert created["message"] == "Hi Alice"
    assert created["teamspaceId"] == ts.id
    assert created["senderId"] == team_context["bob"].id
    assert created["senderUsername"] == "bob"
    assert isinstance(created["id"], int)

    r = client.get(_chat_url(ts.id), headers=auth_headers("vera"))
    assert r.status_code == 200
    body = r.json()
    assert [m["message"] for m in body] == ["Morning all", "Hi Alice"]
    assert [m["senderUsername"] for m in body] == ["alice", "bob"]
    assert body[0]["id"] < body[1]["id"]


@pytest.mark.integration
def test_viewer_can_post(client, auth_headers, team_context):
    ts = team_context["teamspace"]
    r = client.post(_chat_url(ts.id), json={"message": "viewer here"}, headers=auth_headers("vera"))
    assert r.status_code == 201


@pytest.mark.integration
def test_client_timestamp_is_ignored(client, auth_headers, team_context):
    ts = team_context["teamspace"]
    before = datetime.now(UTC) - timedelta(seconds=5)
    r = client.post(
        _chat_url(ts.id),
        json={"message": "time travel", "timestamp": "2001-01-01T00:00:00Z", "senderId": 999},
        headers=auth_headers("alice"),
    )
    assert r.status_code == 201
    body = r.json()
    assert not body["timestamp"].startswith("2001")
    assert datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00")) >= before
    assert body["senderId"] == team_context["alice"].id


@pytest.mark.integration
def test_messages_ordered_by_timestamp_not_insertion(client, auth_headers, team_context, db_session):
    ts = team_context["teamspace"]
    alice, bob = team_context["alice"], team_context["bob"]
    base = datetime(2026, 6, 1, 10, 0, tzinfo=UTC)
    db_session.add_all([
        models.Chat(message="third", timestamp=base + timedelta(minutes=2), teamspace_id=ts.id, user_id=alice.id),
        models.Chat(message="first", timestamp=base, teamspace_id=ts.id, user_id=bob.id),
        models.Chat(message="second", timestamp=base + timedelta(minutes=1), teamspace_id=ts.id, user_id=alice.id),
    ])
    db_session.commit()

    r = client.get(_chat_url(ts.id), headers=auth_headers("alice"))
    assert r.status_code == 200
    assert [m["message"] for m in r.json()] == ["first", "second", "third"]


@pytest.mark.integration
def test_chat_paging(client, auth_headers, team_context):
    ts = team_context["teamspace"]
    for i in range(5):
        client.post(_chat_url(ts.id), json={"message": f"m{i}"}, headers=auth_headers("alice"))

    r = client.get(_chat_url(ts.id), params={"skip": 1, "limit": 2}, headers=auth_headers("alice"))
    assert r.status_code == 200
    assert [m["message"] for m in r.json()] == ["m1", "m2"]


@pytest.mark.integration
def test_chat_is_scoped_to_teamspace(client, auth_headers, team_context, teamspace_factory):
    ts = team_context["teamspace"]
    other = teamspace_factory("Other Team", owner=team_context["alice"])
    client.post(_chat_url(ts.id), json={"message": "core"}, headers=auth_headers("alice"))
    client.post(_chat_url(other.id), json={"message": "other"}, headers=auth_headers("alice"))

    r = client.get(_chat_url(other.id), headers=auth_headers("alice"))
    assert [m["message"] for m in r.json()] == ["other"]


@pytest.mark.integration
def test_empty_chat_returns_empty_list(client, auth_headers, team_context):
    r = client.get(_chat_url(team_context["teamspace"].id), headers=auth_headers("bob"))
    assert r.status_code == 200
    assert r.json() == []


@pytest.mark.integration
def test_non_member_is_forbidden(client, auth_headers, team_context):
    ts = team_context["teamspace"]
    assert client.get(_chat_url(ts.id), headers=auth_headers("carol")).status_code == 403
    r = client.post(_chat_url(ts.id), json={"message": "let me in"}, headers=auth_headers("carol"))
    assert r.status_code == 403


@pytest.mark.integration
def test_superadmin_can_read_without_membership(client, auth_headers, team_context, user_factory):
    user_factory("root", is_superadmin=True)
    r = client.get(_chat_url(team_context["teamspace"].id), headers=auth_headers("root"))
    assert r.status_code == 200


@pytest.mark.integration
def test_unknown_teamspace_returns_404(client, auth_headers, team_context):
    r = client.get(_chat_url(999999), headers=auth_headers("alice"))
    assert r.status_code == 404
    assert r.json() == {"detail": "Teamspace not found"}
    r = client.post(_chat_url(999999), json={"message": "hello?"}, headers=auth_headers("alice"))
    assert r.status_code == 404


@pytest.mark.integration
def test_guest_requests_are_rejected(client, team_context):
    ts = team_context["teamspace"]
    r = client.get(_chat_url(ts.id))
    assert r.status_code == 401
    r = client.post(_chat_url(ts.id), json={"message": "anon"})
    assert r.status_code == 401
    assert "Guest mode is read-only" in r.text


@pytest.mark.integration
@pytest.mark.parametrize("payload", [{"message": ""}, {"message": "   "}, {"message": "x" * 256}, {}])
def test_invalid_message_returns_400(client, auth_headers, team_context, payload):
    r = client.post(_chat_url(team_context["teamspace"].id), json=payload, headers=auth_headers("alice"))
    assert r.status_code == 400
    assert r.json()["detail"][0]["field"] == "message"


@pytest.mark.integration
def test_message_at_length_limit_is_accepted(client, auth_headers, team_context):
    r = client.post(_chat_url(team_context["teamspace"].id), json={"message": "y" * 255}, headers=auth_headers("alice"))
    assert r.status_code == 201
    assert len(r.json()["message"]) == 255
