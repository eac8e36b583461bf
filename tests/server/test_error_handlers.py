"""Error Handlers — one envelope shape for domain, validation and routing errors."""

from notesync.server.error_handlers import field_name


async def test_auth_error_carries_bearer_challenge(http):
    res = await http.get("/notes")
    assert res.status_code == 401
    assert res.headers["www-authenticate"] == "Bearer"


async def test_not_found_note_has_no_challenge(http, auth_headers):
    res = await http.delete("/notes/999", headers=auth_headers)
    assert res.status_code == 404
    assert "www-authenticate" not in res.headers


async def test_validation_field_drops_location_prefix(http, auth_headers):
    res = await http.post("/notes", json={"title": ""}, headers=auth_headers)
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["details"][0]["field"] == "title"
    assert error["message"].startswith("Invalid title:")


async def test_unknown_route_uses_envelope(http):
    res = await http.get("/no-such-route")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "HTTP_404"


async def test_wrong_method_uses_envelope(http):
    res = await http.patch("/login", json={})
    assert res.status_code == 405
    assert res.json()["error"]["code"] == "HTTP_405"


def test_field_name_keeps_nested_path():
    assert field_name(("body", "password")) == "password"
    assert field_name(("body", "tags", 0)) == "tags.0"
    assert field_name(("body",)) == "body"
