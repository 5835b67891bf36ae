import pytest


@pytest.mark.integration
def test_get_me_includes_memberships(client, auth_headers, team_context):
    r = client.get("/api/users/me", headers=auth_headers("bob"))
    assert r.status_code == 200
    body = r.json()
    assert body["username"] == "bob"
    assert body["displayName"] == "bob"
    assert body["isSuperadmin"] is False
    assert body["memberships"] == [
        {
            "teamspaceId": team_context["teamspace"].id,
            "teamspaceName": "Core Team",
            "role": "editor",
            "canRead": True,
            "canWrite": True,
        }
    ]


@pytest.mark.integration
def test_get_me_provisions_new_user(client, auth_headers):
    r = client.get("/api/users/me", headers=auth_headers("fresh", "Fresh@Example.com"))
    assert r.status_code == 200
    assert r.json()["email"] == "fresh@example.com"
    assert r.json()["memberships"] == []


@pytest.mark.integration
def test_update_me(client, auth_headers):
    r = client.patch("/api/users/me", json={"displayName": "  Alice A.  ", "email": "ALICE@example.com"}, headers=auth_headers("alice"))
    assert r.status_code == 200, r.text
    assert r.json()["displayName"] == "Alice A."
    assert r.json()["email"] == "alice@example.com"


@pytest.mark.integration
@pytest.mark.parametrize("payload", [{"displayName": "   "}, {"displayName": "x" * 81}, {"email": "not-an-email"}])
def test_update_me_validation(client, auth_headers, payload):
    r = client.patch("/api/users/me", json=payload, headers=auth_headers("alice"))
    assert r.status_code == 400


@pytest.mark.integration
def test_update_me_email_conflict(client, auth_headers, user_factory):
    user_factory("bob", email="bob@example.com")
    r = client.patch("/api/users/me", json={"email": "bob@example.com"}, headers=auth_headers("alice"))
    assert r.status_code == 409


@pytest.mark.integration
def test_get_user_by_username(client, auth_headers, user_factory):
    user_factory("bob", email="bob@example.com", display_name="Bobby")
    r = client.get("/api/users/bob", headers=auth_headers("alice"))
    assert r.status_code == 200
    assert r.json()["displayName"] == "Bobby"
    assert "email" not in r.json()

    assert client.get("/api/users/nobody", headers=auth_headers("alice")).status_code == 404
