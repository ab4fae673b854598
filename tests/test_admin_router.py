import pytest

from conftest import auth_headers, points_of
from sheetapi.models import PointTransaction, TransactionType, UserRole


@pytest.fixture
def admin(make_user):
    return make_user("admin", role=UserRole.ADMIN)


def test_adjust_points(client, db, admin, make_user):
    user = make_user("carol", points=30)

    response = client.patch(
        f"/api/v1/admin/accounts/{user.id}/points",
        json={"amount": -50},
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    assert response.json()["points"] == -20
    assert points_of(db, user.id) == (-20, 0)
    assert db.query(PointTransaction).one().type == TransactionType.ADMIN_ADJUST


def test_adjust_points_errors(client, admin, make_user):
    user = make_user("carol")

    zero = client.patch(
        f"/api/v1/admin/accounts/{user.id}/points",
        json={"amount": 0},
        headers=auth_headers(admin),
    )
    missing = client.patch(
        "/api/v1/admin/accounts/999/points",
        json={"amount": 5},
        headers=auth_headers(admin),
    )

    assert zero.status_code == 400
    assert zero.json()["error"]["code"] == "AMOUNT_001"
    assert missing.status_code == 404


def test_account_management(client, admin):
    headers = auth_headers(admin)

    created = client.post("/api/v1/admin/accounts", json={"username": "kim"}, headers=headers)
    duplicate = client.post("/api/v1/admin/accounts", json={"username": "kim"}, headers=headers)
    blank = client.post("/api/v1/admin/accounts", json={"username": "   "}, headers=headers)
    listed = client.get("/api/v1/admin/accounts", headers=headers)
    new_id = created.json()["user"]["id"]
    deleted = client.delete(f"/api/v1/admin/accounts/{new_id}", headers=headers)

    assert created.status_code == 201
    assert duplicate.status_code == 400
    assert blank.status_code == 422
    assert {u["username"] for u in listed.json()} == {"admin", "kim"}
    assert deleted.status_code == 200


def test_worksheet_and_quiz_admin(client, admin, make_user, make_worksheet, make_quiz):
    owner = make_user("bob")
    worksheet = make_worksheet(owner)
    quiz = make_quiz(owner)
    headers = auth_headers(admin)

    views = client.patch(
        f"/api/v1/admin/worksheets/{worksheet.id}/views", json={"views": 12}, headers=headers
    )
    negative = client.patch(
        f"/api/v1/admin/worksheets/{worksheet.id}/views", json={"views": -1}, headers=headers
    )
    quizzes = client.get("/api/v1/admin/quizzes", headers=headers)
    deleted_quiz = client.delete(f"/api/v1/admin/quizzes/{quiz.id}", headers=headers)
    deleted_ws = client.delete(f"/api/v1/admin/worksheets/{worksheet.id}", headers=headers)
    missing_ws = client.delete(f"/api/v1/admin/worksheets/{worksheet.id}", headers=headers)

    assert views.json()["views"] == 12
    assert negative.status_code == 422
    assert [q["id"] for q in quizzes.json()] == [quiz.id]
    assert deleted_quiz.status_code == 200
    assert deleted_ws.status_code == 200
    assert missing_ws.status_code == 404


def test_run_weekly_reward(client, admin):
    response = client.post("/api/v1/admin/rewards/weekly/run", headers=auth_headers(admin))

    assert response.status_code == 200
    assert response.json()["status"] == "NO_SCORES"


def test_delete_subject(client, db, admin, make_user, make_worksheet, subject):
    owner = make_user("bob")
    make_worksheet(owner)
    headers = auth_headers(admin)

    forbidden = client.delete(f"/api/v1/admin/subjects/{subject.id}", headers=auth_headers(owner))
    deleted = client.delete(f"/api/v1/admin/subjects/{subject.id}", headers=headers)
    missing = client.delete(f"/api/v1/admin/subjects/{subject.id}", headers=headers)

    assert forbidden.status_code == 403
    assert deleted.status_code == 200
    assert deleted.json()["message"] == 'Subject "Math" and its worksheets deleted'
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "SUBJECT_404"
    assert client.get("/api/v1/worksheets", headers=auth_headers(owner)).json() == []
