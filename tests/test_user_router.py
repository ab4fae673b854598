from conftest import auth_headers
from sheetapi.models import UserRole


def test_user_directory(client, make_user, follow):
    me = make_user("me")
    bob = make_user("bob")
    make_user("admin", role=UserRole.ADMIN)
    follow(bob, me)

    everyone = client.get("/api/v1/users", headers=auth_headers(me))
    classmates = client.get("/api/v1/users/classmates", headers=auth_headers(me))

    assert everyone.status_code == 200
    assert [u["username"] for u in everyone.json()] == ["admin", "bob"]
    assert [u["username"] for u in classmates.json()] == ["bob"]
    assert classmates.json()[0]["is_follower"] is True
    assert classmates.json()[0]["is_following"] is False


def test_user_profile(client, make_user, make_worksheet, follow):
    me = make_user("me")
    bob = make_user("bob")
    make_worksheet(bob)
    follow(me, bob)

    response = client.get(f"/api/v1/users/{bob.id}", headers=auth_headers(me))
    missing = client.get("/api/v1/users/31337", headers=auth_headers(me))

    body = response.json()
    assert response.status_code == 200
    assert body["user"]["username"] == "bob"
    assert body["isFollowing"] is True
    assert body["followerCount"] == 1
    assert body["followingCount"] == 0
    assert [w["title"] for w in body["topWorksheets"]] == ["Fractions drill"]
    assert missing.status_code == 404


def test_me_is_not_treated_as_user_id(client, make_user):
    me = make_user("me")

    response = client.get("/api/v1/users/me", headers=auth_headers(me))

    assert response.status_code == 200
    assert response.json()["user"]["username"] == "me"
    assert "isFollowing" not in response.json()
