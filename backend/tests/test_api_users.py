from uuid import uuid4

from cookbook_api.models import User, UserRole

from conftest import PASSWORD, FakeUploader


API = "/api/v1"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_register_returns_profile_without_password(client):
    response = client.post(
        f"{API}/auth/register",
        json={"name": "Julia", "email": "julia@example.com", "password": PASSWORD},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "julia@example.com"
    assert body["role"] == "user"
    assert "password" not in body
    assert "password_hash" not in body


def test_register_duplicate_email_conflicts(client, make_user):
    make_user(email="julia@example.com")

    response = client.post(
        f"{API}/auth/register",
        json={"name": "Julia", "email": "julia@example.com", "password": PASSWORD},
    )

    assert response.status_code == 409


def test_register_rejects_invalid_payload(client):
    response = client.post(
        f"{API}/auth/register",
        json={"name": "Julia", "email": "not-an-email", "password": "short"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Validation failed"


def test_login_outcomes(client, make_user):
    make_user(email="julia@example.com")

    ok = client.post(f"{API}/auth/login", json={"email": "julia@example.com", "password": PASSWORD})
    assert ok.status_code == 200
    assert ok.json()["token_type"] == "bearer"
    assert ok.json()["access_token"]

    wrong = client.post(f"{API}/auth/login", json={"email": "julia@example.com", "password": "nope-nope"})
    assert wrong.status_code == 400
    assert wrong.json()["detail"] == "Password is not correct"

    unknown = client.post(f"{API}/auth/login", json={"email": "ghost@example.com", "password": PASSWORD})
    assert unknown.status_code == 404


def test_login_token_opens_protected_routes(client, make_user):
    make_user(email="julia@example.com")
    token = client.post(
        f"{API}/auth/login", json={"email": "julia@example.com", "password": PASSWORD}
    ).json()["access_token"]

    response = client.get(f"{API}/users/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["email"] == "julia@example.com"


def test_protected_routes_need_a_valid_token(client):
    missing = client.get(f"{API}/users")
    assert missing.status_code == 401
    assert missing.headers["WWW-Authenticate"] == "Bearer"

    response = client.get(f"{API}/users", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401

    not_bearer = client.get(f"{API}/users", headers={"Authorization": "Basic dXNlcjpwYXNz"})
    assert not_bearer.status_code == 401


def test_list_users_paginates(client, make_user, headers_for):
    users = [make_user(name=f"user{i}", email=f"user{i}@example.com") for i in range(7)]

    response = client.get(f"{API}/users?limit=10&offset=5", headers=headers_for(users[0]))

    assert response.status_code == 200
    body = response.json()
    assert len(body["users"]) == 2
    assert body["total_items"] == 7
    assert body["item_count"] == 10
    assert body["items_per_page"] == 2
    assert body["current_page"] == 5
    assert all("password_hash" not in user for user in body["users"])


def test_list_users_rejects_negative_offset(client, make_user, headers_for):
    user = make_user()

    response = client.get(f"{API}/users?offset=-1", headers=headers_for(user))

    assert response.status_code == 400


def test_list_users_rejects_huge_offset(client, make_user, headers_for):
    user = make_user()

    response = client.get(f"{API}/users?offset=100000000000000000000", headers=headers_for(user))

    assert response.status_code == 400
    assert response.json()["detail"] == "Validation failed"


def test_search_users_by_name(client, make_user, headers_for):
    julia = make_user(name="Julia", email="julia@example.com")
    make_user(name="Marco", email="marco@example.com")

    response = client.get(f"{API}/users?name=Julia", headers=headers_for(julia))

    assert response.status_code == 200
    assert [user["email"] for user in response.json()] == ["julia@example.com"]
    assert all("password" not in user for user in response.json())
    assert all("password_hash" not in user for user in response.json())


def test_get_user_by_id(client, make_user, headers_for):
    julia = make_user()
    marco = make_user(name="Marco", email="marco@example.com")

    found = client.get(f"{API}/users/{marco.id}", headers=headers_for(julia))
    assert found.status_code == 200
    assert found.json()["name"] == "Marco"

    missing = client.get(f"{API}/users/{uuid4()}", headers=headers_for(julia))
    assert missing.status_code == 404


def test_update_own_profile(client, db, make_user, headers_for):
    julia = make_user()

    response = client.put(f"{API}/users/{julia.id}", json={"name": "Jules"}, headers=headers_for(julia))

    assert response.status_code == 200
    assert response.json() == {"affected": 1}
    db.expire_all()
    assert db.get(User, julia.id).name == "Jules"


def test_cannot_update_someone_else(client, db, make_user, headers_for):
    julia = make_user()
    marco = make_user(name="Marco", email="marco@example.com")

    response = client.put(f"{API}/users/{marco.id}", json={"name": "Hacked"}, headers=headers_for(julia))

    assert response.status_code == 403
    db.expire_all()
    assert db.get(User, marco.id).name == "Marco"


def test_role_change_requires_admin(client, db, make_user, headers_for):
    admin = make_user(name="Admin", email="admin@example.com", role=UserRole.ADMIN)
    julia = make_user()

    denied = client.put(f"{API}/users/{julia.id}/role", json={"role": "admin"}, headers=headers_for(julia))
    assert denied.status_code == 403

    allowed = client.put(f"{API}/users/{julia.id}/role", json={"role": "editor"}, headers=headers_for(admin))
    assert allowed.status_code == 200
    assert allowed.json() == {"affected": 1}
    db.expire_all()
    assert db.get(User, julia.id).role == UserRole.EDITOR

    bad_role = client.put(f"{API}/users/{julia.id}/role", json={"role": "chef"}, headers=headers_for(admin))
    assert bad_role.status_code == 400


def test_delete_requires_admin(client, db, make_user, make_recipe, headers_for):
    admin = make_user(name="Admin", email="admin@example.com", role=UserRole.ADMIN)
    julia = make_user()
    make_recipe(julia)

    denied = client.delete(f"{API}/users/{admin.id}", headers=headers_for(julia))
    assert denied.status_code == 403

    deleted = client.delete(f"{API}/users/{julia.id}", headers=headers_for(admin))
    assert deleted.json() == {"affected": 1}

    again = client.delete(f"{API}/users/{julia.id}", headers=headers_for(admin))
    assert again.json() == {"affected": 0}


def test_deleted_user_token_is_rejected(client, db, make_user, headers_for):
    julia = make_user()
    headers = headers_for(julia)
    db.delete(julia)
    db.commit()

    assert client.get(f"{API}/users/me", headers=headers).status_code == 401


def test_upload_avatar(client, uploader, make_user, headers_for):
    julia = make_user()

    response = client.post(
        f"{API}/users/{julia.id}/avatar",
        json={"image": "data:image/png;base64,AAAA"},
        headers=headers_for(julia),
    )

    assert response.status_code == 200
    assert response.json()["avatar_url"] == uploader.response["secure_url"]
    assert uploader.calls == ["data:image/png;base64,AAAA"]


def test_upload_avatar_for_someone_else_is_forbidden(client, uploader, make_user, headers_for):
    julia = make_user()
    marco = make_user(name="Marco", email="marco@example.com")

    response = client.post(
        f"{API}/users/{marco.id}/avatar",
        json={"image": "AAAA"},
        headers=headers_for(julia),
    )

    assert response.status_code == 403
    assert uploader.calls == []


def test_upload_avatar_rejected_by_host(client, make_user, headers_for):
    from cookbook_api.api.v1.deps import get_image_uploader
    from cookbook_api.main import app

    app.dependency_overrides[get_image_uploader] = lambda: FakeUploader(response={"error": "nope"})
    julia = make_user()

    response = client.post(
        f"{API}/users/{julia.id}/avatar",
        json={"image": "AAAA"},
        headers=headers_for(julia),
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Sorry, couldn't add an avatar"
