"""Cross-endpoint behaviour: malformed ids and the full trip lifecycle."""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from journey.core.database import get_db
from journey.main import app

BAD_ID = "not-a-uuid"

ID_ENDPOINTS = [
    ("patch", f"/participants/{BAD_ID}/confirm", None),
    ("get", f"/trips/{BAD_ID}", None),
    ("put", f"/trips/{BAD_ID}", {"destination": "Recife", "starts_at": "2024-01-01T00:00:00", "ends_at": "2024-01-02T00:00:00"}),
    ("get", f"/trips/{BAD_ID}/activities", None),
    ("post", f"/trips/{BAD_ID}/activities", {"title": "Dive", "occurs_at": "2024-01-01T10:00:00"}),
    ("get", f"/trips/{BAD_ID}/confirm", None),
    ("post", f"/trips/{BAD_ID}/invites", {"email": "x@example.com"}),
    ("get", f"/trips/{BAD_ID}/links", None),
    ("post", f"/trips/{BAD_ID}/links", {"title": "Map", "url": "https://example.com/map"}),
    ("get", f"/trips/{BAD_ID}/participants", None),
]


@pytest.mark.asyncio
@pytest.mark.parametrize("method, path, body", ID_ENDPOINTS)
async def test_malformed_id_never_reaches_storage(client, method, path, body):
    session = MagicMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.commit = AsyncMock()

    async def _mock_db():
        yield session

    app.dependency_overrides[get_db] = _mock_db

    kwargs = {"json": body} if body is not None else {}
    response = await client.request(method.upper(), path, **kwargs)

    assert response.status_code == 400
    assert "not a uuid" in response.json()["message"]
    session.execute.assert_not_awaited()
    session.commit.assert_not_awaited()
    session.add.assert_not_called()


@pytest.mark.asyncio
async def test_trip_lifecycle(client, trip_payload):
    created = await client.post("/trips", json=trip_payload)
    assert created.status_code == 201
    trip_id = created.json()["trip_id"]

    trip = (await client.get(f"/trips/{trip_id}")).json()["trip"]
    assert trip["destination"] == trip_payload["destination"]
    assert datetime.fromisoformat(trip["starts_at"]) == datetime.fromisoformat(trip_payload["starts_at"])
    assert datetime.fromisoformat(trip["ends_at"]) == datetime.fromisoformat(trip_payload["ends_at"])

    participants = (await client.get(f"/trips/{trip_id}/participants")).json()["participants"]
    invited = next(p for p in participants if p["email"] == "ana@example.com")

    assert (await client.patch(f"/participants/{invited['id']}/confirm")).status_code == 204
    repeat = await client.patch(f"/participants/{invited['id']}/confirm")
    assert repeat.status_code == 400
    assert "already confirmed" in repeat.json()["message"]
