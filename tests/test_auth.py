from types import SimpleNamespace

from showcase.modules.auth.session import SessionWatcher

API = "/api/v1"


def bearer(headers):
    return headers["Authorization"].split(" ", 1)[1]


def test_register_stores_display_name_in_metadata(client, supabase):
    response = client.post(f"{API}/auth/register", json={
        "email": "carol@club.edu", "password": "hunter22", "name": "Carol",
    })
    assert response.status_code == 201
    user, _ = supabase.auth.users["carol@club.edu"]
    assert user.user_metadata == {"name": "Carol"}
    assert response.json()["user_id"] == user.id


def test_register_twice_is_rejected(client):
    body = {"email": "carol@club.edu", "password": "hunter22", "name": "Carol"}
    assert client.post(f"{API}/auth/register", json=body).status_code == 201
    response = client.post(f"{API}/auth/register", json=body)
    assert response.status_code == 400
    assert response.json()["detail"] == "User already exists"


def test_register_requires_name(client):
    response = client.post(f"{API}/auth/register", json={
        "email": "carol@club.edu", "password": "hunter22", "name": "  ",
    })
    assert response.status_code == 422


def test_first_login_creates_profile_once(client, supabase):
    client.post(f"{API}/auth/register", json={
        "email": "carol@club.edu", "password": "hunter22", "name": "Carol",
    })
    assert supabase.tables["profiles"] == []

    for _ in range(2):
        response = client.post(f"{API}/auth/login", json={"email": "carol@club.edu", "password": "hunter22"})
        assert response.status_code == 200

    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["profile"]["name"] == "Carol"
    assert body["profile"]["email"] == "carol@club.edu"
    assert len(supabase.tables["profiles"]) == 1


def test_profile_name_falls_back_to_email_local_part(client, supabase):
    supabase.auth.create_user("dave@club.edu", password="pw123456")
    body = client.post(f"{API}/auth/login", json={"email": "dave@club.edu", "password": "pw123456"}).json()
    assert body["profile"]["name"] == "dave"


def test_login_with_wrong_password(client, supabase):
    supabase.auth.create_user("dave@club.edu", password="pw123456")
    response = client.post(f"{API}/auth/login", json={"email": "dave@club.edu", "password": "nope"})
    assert response.status_code == 401
    assert supabase.tables["profiles"] == []


def test_me_merges_identity_and_profile(client, supabase, alice):
    alice_id, headers = alice
    supabase.tables["profiles"][0]["bio"] = "Robotics lead"
    body = client.get(f"{API}/auth/me", headers=headers).json()
    assert body["id"] == alice_id
    assert body["name"] == "Alice"
    assert body["bio"] == "Robotics lead"


def test_me_with_invalid_token(client):
    assert client.get(f"{API}/auth/me", headers={"Authorization": "Bearer forged"}).status_code == 401


def test_logout_revokes_the_callers_token(client, supabase, alice):
    _, headers = alice
    response = client.post(f"{API}/auth/logout", headers=headers)
    assert response.status_code == 200
    assert supabase.auth.revoked == [bearer(headers)]
    assert client.get(f"{API}/auth/me", headers=headers).status_code == 401


def test_login_never_signs_in_the_shared_client(client, supabase, alice):
    alice_id, headers = alice
    response = client.post(f"{API}/auth/login", json={"email": "alice@club.edu", "password": "secret123"})
    assert response.status_code == 200
    assert supabase.auth.session is None
    assert supabase.token is None
    # The profile lookup ran on the login's own client, as Alice
    assert supabase.identities == [("profiles", bearer(headers))]
    assert supabase.clients[0].auth.listeners == [supabase.clients[0]._on_own_session_change]


def test_requests_after_a_login_run_as_their_own_caller(client, supabase, alice, bob):
    bob_id, bob_headers = bob
    client.post(f"{API}/auth/login", json={"email": "alice@club.edu", "password": "secret123"})
    supabase.identities.clear()

    response = client.post(f"{API}/projects", json={"title": "Line follower", "category": "Hardware"}, headers=bob_headers)

    assert response.status_code == 201
    assert response.json()["user_id"] == bob_id
    assert supabase.identities
    assert {token for _, token in supabase.identities} == {bearer(bob_headers)}


def test_logout_leaves_other_sessions_alone(client, supabase, alice, bob):
    _, alice_headers = alice
    _, bob_headers = bob
    client.post(f"{API}/auth/login", json={"email": "alice@club.edu", "password": "secret123"})

    assert client.post(f"{API}/auth/logout", headers=bob_headers).status_code == 200

    assert supabase.auth.revoked == [bearer(bob_headers)]
    assert client.get(f"{API}/auth/me", headers=alice_headers).status_code == 200
    assert client.get(f"{API}/auth/me", headers=bob_headers).status_code == 401


def test_anonymous_reads_use_the_anon_key(client, supabase, alice):
    alice_id, _ = alice
    supabase.add_project(alice_id, title="Public")
    assert client.get(f"{API}/projects").status_code == 200
    assert supabase.identities == [("projects", None)]


def test_first_login_profile_is_written_as_the_new_user(client, supabase):
    client.post(f"{API}/auth/register", json={
        "email": "carol@club.edu", "password": "hunter22", "name": "Carol",
    })
    body = client.post(f"{API}/auth/login", json={"email": "carol@club.edu", "password": "hunter22"}).json()
    assert supabase.identities
    assert {token for _, token in supabase.identities} == {body["access_token"]}


def test_session_watcher_without_session_finishes_loading(supabase):
    listeners = list(supabase.auth.listeners)
    watcher = SessionWatcher(supabase)
    assert watcher.loading is True
    watcher.start()
    assert watcher.loading is False
    assert watcher.user is None
    assert len(supabase.auth.listeners) == len(listeners) + 1
    watcher.stop()
    assert supabase.auth.listeners == listeners


def test_session_watcher_creates_profile_for_initial_session(supabase):
    user, _ = supabase.auth.create_user("erin@club.edu", metadata={"name": "Erin", "avatar_url": "https://img/erin.png"})
    supabase.auth.session = SimpleNamespace(access_token="t", user=user)

    watcher = SessionWatcher(supabase)
    watcher.start()

    assert watcher.loading is False
    assert watcher.user["id"] == user.id
    assert watcher.profile.name == "Erin"
    assert watcher.profile.avatar_url == "https://img/erin.png"
    assert supabase.find("profiles", user.id) is not None


def test_session_watcher_follows_sign_in_and_sign_out(supabase):
    supabase.auth.create_user("erin@club.edu", password="pw123456", metadata={"name": "Erin"})
    watcher = SessionWatcher(supabase)
    watcher.start()

    supabase.auth.sign_in_with_password({"email": "erin@club.edu", "password": "pw123456"})
    assert watcher.profile.name == "Erin"

    supabase.auth.sign_out()
    assert watcher.user is None
    assert watcher.profile is None
    assert watcher.loading is False


def test_session_watcher_stops_loading_when_profile_lookup_fails(supabase):
    user, _ = supabase.auth.create_user("erin@club.edu")
    supabase.auth.session = SimpleNamespace(access_token="t", user=user)
    supabase.fail_with = RuntimeError("store unavailable")

    watcher = SessionWatcher(supabase)
    watcher.start()

    assert watcher.loading is False
    assert watcher.user is None
