"""Background Image Routes — slideshow uploads, ordering and activation.

Invariants:
    - Upload appends a record at position = current count
    - /active lists only active images by position
    - /reorder assigns positions from payload order
"""

from event_site.models.background_image import BackgroundImage

PNG = b"\x89PNG\r\n\x1a\n" + b"0" * 32


async def _upload(client, admin_headers, name="bg.png"):
    return await client.post(
        "/api/v1/background-images/upload",
        files={"image": (name, PNG, "image/png")},
        headers=admin_headers,
    )


async def test_upload_appends_record(client, admin_headers, storage):
    first = await _upload(client, admin_headers)
    second = await _upload(client, admin_headers)

    assert first.status_code == 200
    assert first.json()["message"] == "Upload completed"
    assert first.json()["image"]["position"] == 0
    assert second.json()["image"]["position"] == 1
    path = second.json()["image"]["path"]
    assert path.startswith("/uploads/backgrounds/background-")
    assert storage.resolve(path).exists()


async def test_active_listing_filters(client, admin_headers):
    first = (await _upload(client, admin_headers)).json()["image"]
    await _upload(client, admin_headers)

    await client.put(
        f"/api/v1/background-images/{first['id']}", json={"active": False},
        headers=admin_headers,
    )
    everything = await client.get("/api/v1/background-images")
    active = await client.get("/api/v1/background-images/active")

    assert len(everything.json()) == 2
    assert len(active.json()) == 1
    assert active.json()[0]["id"] != first["id"]


async def test_reorder_assigns_positions(client, admin_headers, read_fresh):
    a = (await _upload(client, admin_headers)).json()["image"]["id"]
    b = (await _upload(client, admin_headers)).json()["image"]["id"]

    res = await client.post(
        "/api/v1/background-images/reorder", json={"order": [b, a]},
        headers=admin_headers,
    )

    assert res.status_code == 200
    assert (await read_fresh(BackgroundImage, b)).position == 0
    assert (await read_fresh(BackgroundImage, a)).position == 1


async def test_delete_removes_file(client, admin_headers, storage, read_fresh):
    image = (await _upload(client, admin_headers)).json()["image"]

    res = await client.delete(
        f"/api/v1/background-images/{image['id']}", headers=admin_headers,
    )

    assert res.status_code == 200
    assert await read_fresh(BackgroundImage, image["id"]) is None
    assert not storage.resolve(image["path"]).exists()


async def test_upload_requires_admin(client):
    res = await client.post(
        "/api/v1/background-images/upload",
        files={"image": ("bg.png", PNG, "image/png")},
    )
    assert res.status_code == 401
