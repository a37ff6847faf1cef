from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from userauth.core.config import settings
from userauth.core.dependencies import get_auth_flow, get_notifier
from userauth import main
from userauth.main import app
from userauth.models.user import UserRole
from userauth.schemas.auth_schemas import TokenClaims
from userauth.utils.email import NotificationError, Notifier

ALICE = {
    "username": "alice",
    "password": "pw1",
    "mobile": "555",
    "email": "a@x.com",
    "role": "user",
}


def test_home(client):
    resp = client.get("/home")
    assert resp.status_code == 200
    assert resp.json() == "Hello Welcome To Home"


def test_sign_up_and_duplicate(client):
    resp = client.post("/sign-up", json=ALICE)
    assert resp.status_code == 201
    assert resp.json() == {"message": "User registered successfully. OTP sent to email for verification."}

    resp = client.post("/sign-up", json=ALICE)
    assert resp.status_code == 409
    assert resp.json() == {"error": "Username already exists"}


def test_sign_up_validation_error(client):
    resp = client.post("/sign-up", json={"username": "alice", "password": "pw1", "email": "not-an-email"})
    assert resp.status_code == 422
    body = resp.json()
    assert body["error"] == "Validation error"
    assert any("email" in e["field"] for e in body["errors"])


def test_sign_up_rejects_unknown_role(client):
    resp = client.post("/sign-up", json={**ALICE, "role": "superuser"})
    assert resp.status_code == 422


def test_login(client):
    client.post("/sign-up", json=ALICE)

    resp = client.post("/login", json={"username": "alice", "password": "pw1"})
    assert resp.status_code == 200
    assert resp.json()["token"]
    assert resp.json()["token_type"] == "bearer"

    resp = client.post("/login", json={"username": "alice", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid username or password"}
    assert resp.headers["www-authenticate"] == "Bearer"


def test_otp_verification_scenario(client, sent_otp, token_service):
    client.post("/sign-up", json=ALICE)
    code = sent_otp("a@x.com")

    resp = client.post("/otp-verification", json={"email": "a@x.com", "otp": code})
    assert resp.status_code == 200
    assert token_service.verify(resp.json()["token"]).username == "alice"

    resp = client.post("/otp-verification", json={"email": "a@x.com", "otp": code})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid OTP"}


def test_resend_otp(client, sent_otp):
    client.post("/sign-up", json=ALICE)
    resp = client.post("/resend-otp", json={"email": "a@x.com"})
    assert resp.status_code == 200

    resp = client.post("/otp-verification", json={"email": "a@x.com", "otp": sent_otp("a@x.com")})
    assert resp.status_code == 200

    resp = client.post("/resend-otp", json={"email": "nobody@x.com"})
    assert resp.status_code == 404


def test_sign_up_reports_delivery_failure(client, users):
    class FailingNotifier(Notifier):
        def send(self, to, subject, body):
            raise NotificationError("smtp down")

    app.dependency_overrides[get_notifier] = lambda: FailingNotifier()

    resp = client.post("/sign-up", json=ALICE)
    assert resp.status_code == 502
    assert resp.json() == {"error": "OTP email could not be delivered"}
    assert users.find_by_username("alice") is not None


def test_profile_requires_token(client):
    resp = client.get("/profile")
    assert resp.status_code == 401
    assert resp.json() == {"error": "No token provided"}


def test_profile_rejects_bad_token(client):
    resp = client.get("/profile", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 403
    assert resp.json() == {"error": "Failed to authenticate token"}


def test_profile_rejects_expired_token(client, make_user, token_service):
    user = make_user()
    token = token_service.issue(
        TokenClaims(user_id=user.id, username=user.username, role=user.role),
        ttl=timedelta(seconds=10),
        issued_at=datetime.now(timezone.utc) - timedelta(minutes=5),
    )
    resp = client.get("/profile", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 403
    assert resp.json() == {"error": "Token has expired"}


def test_profile_omits_password(client, make_user, auth_header):
    user = make_user()
    resp = client.get("/profile", headers=auth_header(user))
    assert resp.status_code == 200
    body = resp.json()
    assert body["username"] == "bob"
    assert body["email"] == "bob@example.com"
    assert body["role"] == "user"
    assert "password" not in body


def test_profile_of_deleted_user(client, make_user, auth_header, users):
    user = make_user()
    headers = auth_header(user)
    users.delete_by_id(user.id)

    resp = client.get("/profile", headers=headers)
    assert resp.status_code == 404
    assert resp.json() == {"error": "User not found"}


def test_admin_add_user(client, make_user, auth_header, notifier, users):
    admin = make_user(username="root", email="root@example.com", role=UserRole.ADMIN)

    resp = client.post(
        "/admin/add-user",
        json={**ALICE, "role": "admin"},
        headers=auth_header(admin),
    )
    assert resp.status_code == 201
    assert resp.json() == {"message": "User added successfully by admin."}
    assert users.find_by_username("alice").role == UserRole.ADMIN
    assert notifier.outbox == []

    resp = client.post("/admin/add-user", json=ALICE, headers=auth_header(admin))
    assert resp.status_code == 409


def test_admin_routes_reject_plain_users(client, make_user, auth_header):
    user = make_user()
    headers = auth_header(user)

    resp = client.post("/admin/add-user", json=ALICE, headers=headers)
    assert resp.status_code == 403
    assert resp.json() == {"error": "Admin access required"}

    resp = client.delete(f"/delete-user/{user.id}", headers=headers)
    assert resp.status_code == 403


def test_admin_routes_require_token(client):
    assert client.post("/admin/add-user", json=ALICE).status_code == 401
    assert client.delete("/delete-user/1").status_code == 401


def test_delete_user(client, make_user, auth_header, users):
    admin = make_user(username="root", email="root@example.com", role=UserRole.ADMIN)
    victim = make_user()

    resp = client.delete(f"/delete-user/{victim.id}", headers=auth_header(admin))
    assert resp.status_code == 200
    assert resp.json() == {"message": "User deleted successfully"}
    assert users.find_by_username("bob") is None


def test_delete_nonexistent_user(client, make_user, auth_header):
    admin = make_user(username="root", email="root@example.com", role=UserRole.ADMIN)

    resp = client.delete("/delete-user/999999", headers=auth_header(admin))
    assert resp.status_code == 404
    assert resp.json() == {"error": "User not found"}


def test_unknown_route_uses_error_shape(client):
    resp = client.get("/does-not-exist")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


def test_startup_seeds_initial_admin(client, users):
    assert users.count() == 0

    # entering the client runs the startup events
    with client:
        resp = client.post("/login", json={
            "username": settings.INITIAL_ADMIN_USERNAME,
            "password": settings.INITIAL_ADMIN_PASSWORD,
        })
        assert resp.status_code == 200
        headers = {"Authorization": f"Bearer {resp.json()['token']}"}

        resp = client.delete("/delete-user/999", headers=headers)
        assert resp.status_code == 404
        assert resp.json() == {"error": "User not found"}

    assert users.count() == 1


def test_run_serves_app_on_configured_address(monkeypatch):
    monkeypatch.setattr(settings, "LOG_LEVEL", "not-a-level")
    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs)))

    main.run()

    assert len(calls) == 1
    target, kwargs = calls[0]
    assert target is app
    assert kwargs["host"] == settings.HOST
    assert kwargs["port"] == settings.PORT
    assert kwargs["log_level"] == "info"


def test_unexpected_error_is_generic_500(db):
    def broken_flow():
        raise RuntimeError("database password is hunter2")

    app.dependency_overrides[get_auth_flow] = broken_flow
    try:
        resp = TestClient(app, raise_server_exceptions=False).post("/login", json={"username": "a", "password": "b"})
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}
