"""Warehouse registry over HTTP."""

WAREHOUSE_PAYLOAD = {
    "code": "MAIN",
    "name": "Main Fulfillment Center",
    "type": "fulfillment",
    "address": "Tehran - Shahrak Sanati",
    "city": "Tehran",
    "contact_person": "Hossein Sadeghi",
    "phone": "+98-21-1111-2222",
    "capacity": 10000,
    "allow_negatives": False,
}


async def test_create_then_fetch_returns_supplied_fields(client):
    created = await client.post("/warehouses", json=WAREHOUSE_PAYLOAD)
    assert created.status_code == 201
    body = created.json()
    assert body["is_active"] is True

    fetched = await client.get(f"/warehouses/{body['id']}")
    assert fetched.status_code == 200
    data = fetched.json()
    for field, value in WAREHOUSE_PAYLOAD.items():
        assert data[field] == value


async def test_create_applies_defaults(client):
    resp = await client.post("/warehouses", json={"code": "POP", "name": "Pop-up Store"})
    assert resp.status_code == 201
    body = resp.json()
    assert body["type"] == "store"
    assert body["capacity"] == 0
    assert body["allow_negatives"] is False


async def test_duplicate_code_is_conflict(client):
    assert (await client.post("/warehouses", json=WAREHOUSE_PAYLOAD)).status_code == 201

    resp = await client.post("/warehouses", json={**WAREHOUSE_PAYLOAD, "name": "Other"})

    assert resp.status_code == 409
    assert resp.json()["error"] == "Warehouse code already exists"
    assert resp.json()["error_code"] == "WAREHOUSE_CODE_EXISTS"


async def test_create_requires_code_and_name(client):
    resp = await client.post("/warehouses", json={"code": "X"})
    assert resp.status_code == 400
    assert resp.json()["success"] is False
    assert "error" in resp.json()


async def test_update_unknown_warehouse_is_not_found(client):
    resp = await client.put("/warehouses/999", json={"name": "Ghost"})
    assert resp.status_code == 404
    assert resp.json()["error"] == "Warehouse not found"


async def test_get_unknown_warehouse_is_not_found(client):
    resp = await client.get("/warehouses/999")
    assert resp.status_code == 404


async def test_update_applies_only_supplied_fields(client):
    created = (await client.post("/warehouses", json=WAREHOUSE_PAYLOAD)).json()

    resp = await client.put(
        f"/warehouses/{created['id']}",
        json={"name": "Renamed", "city": None, "allow_negatives": True},
    )

    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "Renamed"
    assert data["allow_negatives"] is True
    # null behaves like "not supplied"
    assert data["city"] == "Tehran"
    assert data["capacity"] == 10000
    assert data["code"] == "MAIN"


async def test_empty_update_only_touches_updated_at(client):
    created = (await client.post("/warehouses", json=WAREHOUSE_PAYLOAD)).json()
    assert created["updated_at"] is None

    resp = await client.put(f"/warehouses/{created['id']}", json={})

    assert resp.status_code == 200
    data = resp.json()
    assert data["updated_at"] is not None
    for field in set(created) - {"updated_at"}:
        assert data[field] == created[field]


async def test_list_includes_inactive_warehouses_sorted_by_name(client):
    await client.post("/warehouses", json={"code": "B", "name": "Bravo"})
    created = (await client.post("/warehouses", json={"code": "A", "name": "Alpha"})).json()
    await client.put(f"/warehouses/{created['id']}", json={"is_active": False})

    resp = await client.get("/warehouses")

    assert resp.status_code == 200
    rows = resp.json()
    assert [w["name"] for w in rows] == ["Alpha", "Bravo"]
    assert rows[0]["is_active"] is False


async def test_update_ignores_empty_strings(client):
    created = (await client.post("/warehouses", json=WAREHOUSE_PAYLOAD)).json()

    resp = await client.put(
        f"/warehouses/{created['id']}",
        json={"name": "", "type": "", "city": "", "phone": "+98-21-9999-0000"},
    )

    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "Main Fulfillment Center"
    assert data["type"] == "fulfillment"
    assert data["city"] == "Tehran"
    assert data["phone"] == "+98-21-9999-0000"
