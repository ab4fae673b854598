from unittest.mock import patch

from conftest import auth_headers


def test_request_lines_carry_user_id(client, make_user):
    user = make_user("alice")

    with patch("sheetapi.core.logging_middleware.logger") as logger:
        response = client.get("/api/v1/points/balance", headers=auth_headers(user))

    assert response.status_code == 200
    assert "X-Process-Time-Ms" in response.headers
    lines = [c.args[0] for c in logger.info.call_args_list]
    assert lines[0].startswith(f"[Request] GET /api/v1/points/balance user={user.id}")
    assert lines[1].startswith(f"[Response] GET /api/v1/points/balance user={user.id} -> 200")


def test_anonymous_and_bad_tokens(client):
    with patch("sheetapi.core.logging_middleware.logger") as logger:
        client.get("/api/v1/health")
        client.get("/api/v1/points/balance", headers={"Authorization": "Bearer nope"})

    assert "user=- " in logger.info.call_args_list[0].args[0]
    warning = logger.warning.call_args.args[0]
    assert "user=invalid -> 401" in warning
