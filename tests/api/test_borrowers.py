"""Tests for borrower endpoints (auth, CRUD, list envelope, CSV export)."""

from httpx import AsyncClient

from tests.conftest import OTHER_USER_ID, make_token
from tests.unit._borrowers import borrower_payload


async def _create(client: AsyncClient, headers: dict[str, str], **overrides) -> dict:
    response = await client.post(
        "/api/v1/borrowers", json=borrower_payload(**overrides), headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()


async def test_list_requires_bearer_token(client: AsyncClient) -> None:
    response = await client.get("/api/v1/borrowers")
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"
    assert response.headers["WWW-Authenticate"] == "Bearer"


async def test_invalid_token_returns_401(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/borrowers", headers={"Authorization": "Bearer not-a-token"}
    )
    assert response.status_code == 401


async def test_create_returns_201_without_ssn(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    data = await _create(client, auth_headers)
    assert data["id"]
    assert data["firstname"] == "Ann"
    assert data["registrationdate"] is not None
    assert "socialsecuritynumber" not in data


async def test_create_validates_body(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    response = await client.post(
        "/api/v1/borrowers",
        json=borrower_payload(email="not-an-email", creditscore=-5),
        headers=auth_headers,
    )
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_create_rejects_server_owned_fields(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/api/v1/borrowers",
        json=borrower_payload(user_id=OTHER_USER_ID),
        headers=auth_headers,
    )
    assert response.status_code == 422


async def test_get_update_delete_round(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    created = await _create(client, auth_headers)
    url = f"/api/v1/borrowers/{created['id']}"

    got = await client.get(url, headers=auth_headers)
    assert got.status_code == 200
    assert got.json()["email"] == "ann.lee@example.com"

    patched = await client.patch(url, json={"loanstatus": "completed"}, headers=auth_headers)
    assert patched.status_code == 200
    assert patched.json()["loanstatus"] == "completed"
    assert patched.json()["firstname"] == "Ann"

    deleted = await client.delete(url, headers=auth_headers)
    assert deleted.status_code == 204

    missing = await client.get(url, headers=auth_headers)
    assert missing.status_code == 404
    assert missing.json()["error"] == "RESOURCE_NOT_FOUND"


async def test_other_users_borrower_is_404(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    created = await _create(client, auth_headers)
    other = {"Authorization": f"Bearer {make_token(sub=OTHER_USER_ID, email='x@example.com')}"}
    response = await client.get(f"/api/v1/borrowers/{created['id']}", headers=other)
    assert response.status_code == 404


async def test_list_envelope_and_filters(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    await _create(client, auth_headers, firstname="Grace", creditscore=720)
    await _create(client, auth_headers, firstname="Gregory", creditscore=610, loanstatus="pending")
    await _create(client, auth_headers, firstname="Zed", lastname="Smith", email="zed@example.com")

    everything = await client.get("/api/v1/borrowers?limit=2", headers=auth_headers)
    filtered = await client.get(
        "/api/v1/borrowers",
        params={"search": "gr", "mincreditscore": 700},
        headers=auth_headers,
    )

    body = everything.json()
    assert everything.status_code == 200
    assert body["total"] == 3
    assert body["page"] == 1
    assert body["limit"] == 2
    assert body["has_next"] is True
    assert [b["firstname"] for b in body["items"]] == ["Zed", "Gregory"]
    assert [b["firstname"] for b in filtered.json()["items"]] == ["Grace"]


async def test_list_rejects_bad_paging(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    response = await client.get("/api/v1/borrowers?page=0", headers=auth_headers)
    assert response.status_code == 422
    response = await client.get("/api/v1/borrowers?limit=1000", headers=auth_headers)
    assert response.status_code == 422


async def test_export_returns_csv_attachment(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    for name in ("Ann", "Bo", "Cy"):
        await _create(client, auth_headers, firstname=name)

    response = await client.get("/api/v1/borrowers/export", headers=auth_headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    disposition = response.headers["content-disposition"]
    assert disposition.startswith('attachment; filename="borrowers-')
    assert disposition.endswith('.csv"')
    lines = response.text.strip().split("\n")
    assert lines[0].startswith("First Name,Last Name,Email,Phone,Address,Credit Score")
    assert len(lines) == 4
