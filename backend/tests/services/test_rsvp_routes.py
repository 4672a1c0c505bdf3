"""RSVP Routes — public form, admin listing, deletion and CSV export.

Invariants:
    - POST is public, defaults companions to 0 and confirmed to true
    - Listing and export are admin-only; listing is newest first
    - Export is CSV with one header row plus one row per RSVP
"""

import csv
import io

from event_site.models.rsvp import Rsvp


async def test_public_post_creates_confirmed_rsvp(client):
    res = await client.post("/api/v1/rsvp", json={"name": "Carla"})

    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "Carla"
    assert body["companions"] == 0
    assert body["confirmed"] is True


async def test_post_requires_name(client):
    res = await client.post("/api/v1/rsvp", json={"companions": 2})
    assert res.status_code == 400


async def test_post_rejects_blank_name(client):
    res = await client.post("/api/v1/rsvp", json={"name": "  "})
    assert res.status_code == 400


async def test_listing_requires_admin(client):
    res = await client.get("/api/v1/rsvp")
    assert res.status_code == 401


async def test_listing_is_newest_first(client, admin_headers):
    await client.post("/api/v1/rsvp", json={"name": "Primeiro"})
    await client.post("/api/v1/rsvp", json={"name": "Segundo"})

    res = await client.get("/api/v1/rsvp", headers=admin_headers)

    assert [r["name"] for r in res.json()] == ["Segundo", "Primeiro"]


async def test_delete_and_missing(client, admin_headers, read_fresh):
    created = await client.post("/api/v1/rsvp", json={"name": "Carla"})
    rsvp_id = created.json()["id"]

    res = await client.delete(f"/api/v1/rsvp/{rsvp_id}", headers=admin_headers)
    missing = await client.delete(f"/api/v1/rsvp/{rsvp_id}", headers=admin_headers)

    assert res.status_code == 200
    assert missing.status_code == 404
    assert await read_fresh(Rsvp, rsvp_id) is None


async def test_export_requires_admin(client):
    await client.post("/api/v1/rsvp", json={"name": "Convidado"})

    res = await client.get("/api/v1/rsvp/export")

    assert res.status_code == 401
    assert "Convidado" not in res.text


async def test_export_csv(client, admin_headers):
    await client.post("/api/v1/rsvp", json={
        "name": "Silva, João", "companions": 2, "email": "joao@example.com",
        "message": 'Disse "sim"!',
    })

    res = await client.get("/api/v1/rsvp/export", headers=admin_headers)

    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/csv")
    assert "rsvps.csv" in res.headers["content-disposition"]
    rows = list(csv.reader(io.StringIO(res.text)))
    assert rows[0][0] == "Nome"
    assert rows[1][:5] == ["Silva, João", "2", "joao@example.com", "", 'Disse "sim"!']
    assert rows[1][5] == "Sim"
    assert len(rows) == 2
