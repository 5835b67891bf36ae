import pytest

from collab.db import models


@pytest.mark.integration
def test_lifecycle_actions_are_audited(client, auth_headers, team_context):
    ts, carol = team_context["teamspace"], team_context["carol"]
    client.post(f"/api/teamspaces/{ts.id}/members", json={"username": "carol", "role": "viewer"}, headers=auth_headers("alice"))
    client.put(f"/api/teamspaces/{ts.id}/members/{carol.id}", json={"role": "editor"}, headers=auth_headers("alice"))
    client.post(f"/api/teamspaces/{ts.id}/tasks", json={"title": "Audited"}, headers=auth_headers("carol"))

    r = client.get(f"/api/teamspaces/{ts.id}/audits", headers=auth_headers("alice"))
    assert r.status_code == 200
    logs = r.json()
    assert [entry["actionType"] for entry in logs] == ["task_create", "member_role_change", "member_add"]
    assert logs[0]["metadata"] == {"title": "Audited"}
    assert logs[1]["metadata"] == {"old_role": "viewer", "new_role": "editor"}
    assert logs[2]["targetId"] == carol.id
    assert all(entry["teamspaceId"] == ts.id for entry in logs)

    r = client.get(f"/api/teamspaces/{ts.id}/audits", params={"actionType": "member_add"}, headers=auth_headers("alice"))
    assert [entry["actionType"] for entry in r.json()] == ["member_add"]


@pytest.mark.integration
def test_audit_logs_require_manage_role(client, auth_headers, team_context):
    ts = team_context["teamspace"]
    assert client.get(f"/api/teamspaces/{ts.id}/audits", headers=auth_headers("bob")).status_code == 403
    assert client.get("/api/teamspaces/999999/audits", headers=auth_headers("alice")).status_code == 404


@pytest.mark.integration
def test_chat_messages_are_not_audited(client, auth_headers, team_context, db_session):
    ts = team_context["teamspace"]
    client.post(f"/api/teamspaces/{ts.id}/chat", json={"message": "quiet"}, headers=auth_headers("bob"))
    assert db_session.query(models.AuditLog).count() == 0
