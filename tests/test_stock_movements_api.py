"""Stock movement endpoints: receipts, issues, transfers and the log."""


async def _setup(make_product, make_warehouse, **warehouse):
    return await make_product(), await make_warehouse(**warehouse)


async def test_receive_then_issue_shows_newest_first(
    client, make_product, make_warehouse, fetch_item
):
    product_id, warehouse_id = await _setup(make_product, make_warehouse)

    received = await client.post(
        "/inventory/movements/inbound",
        json={
            "product_id": product_id,
            "warehouse_id": warehouse_id,
            "quantity": 10,
            "unit_cost": 5,
            "reference_type": "purchase_order",
            "reference_code": "PO-1001",
        },
    )
    assert received.status_code == 201
    assert received.json()["message"] == "Stock receipt recorded"

    issued = await client.post(
        "/inventory/movements/outbound",
        json={
            "product_id": product_id,
            "warehouse_id": warehouse_id,
            "quantity": 4,
            "reference_code": "SO-77",
        },
    )
    assert issued.status_code == 201
    assert issued.json()["movement_id"] > received.json()["movement_id"]

    assert (await fetch_item(product_id, warehouse_id)).stock_on_hand == 6

    rows = (await client.get("/inventory/movements")).json()
    assert [(r["direction"], r["quantity"]) for r in rows] == [
        ("outbound", 4),
        ("inbound", 10),
    ]
    assert rows[0]["movement_type"] == "sale"
    assert rows[1]["movement_type"] == "purchase"
    assert rows[1]["unit_cost"] == 5.0
    assert rows[1]["reference_code"] == "PO-1001"


async def test_issue_beyond_stock_is_rejected(client, make_product, make_warehouse, fetch_item):
    product_id, warehouse_id = await _setup(make_product, make_warehouse)
    await client.post(
        "/inventory/movements/inbound",
        json={"product_id": product_id, "warehouse_id": warehouse_id, "quantity": 3},
    )

    resp = await client.post(
        "/inventory/movements/outbound",
        json={"product_id": product_id, "warehouse_id": warehouse_id, "quantity": 5},
    )

    assert resp.status_code == 400
    body = resp.json()
    assert body["error_code"] == "INSUFFICIENT_STOCK"
    assert body["details"] == {"stock_on_hand": 3, "requested": 5}
    assert (await fetch_item(product_id, warehouse_id)).stock_on_hand == 3


async def test_non_positive_quantity_is_rejected(client, make_product, make_warehouse, count_movements):
    product_id, warehouse_id = await _setup(make_product, make_warehouse)

    for path in ("/inventory/movements/inbound", "/inventory/movements/outbound"):
        for quantity in (0, -2):
            resp = await client.post(
                path,
                json={
                    "product_id": product_id,
                    "warehouse_id": warehouse_id,
                    "quantity": quantity,
                },
            )
            assert resp.status_code == 400
            assert resp.json()["error_code"] == "VALIDATION_ERROR"

    assert await count_movements() == 0


async def test_missing_product_id_is_rejected(client, make_warehouse):
    warehouse_id = await make_warehouse()

    resp = await client.post(
        "/inventory/movements/inbound",
        json={"warehouse_id": warehouse_id, "quantity": 1},
    )

    assert resp.status_code == 400


async def test_unknown_product_is_not_found(client, make_warehouse):
    warehouse_id = await make_warehouse()

    resp = await client.post(
        "/inventory/movements/inbound",
        json={"product_id": 999, "warehouse_id": warehouse_id, "quantity": 1},
    )

    assert resp.status_code == 404
    assert resp.json()["error"] == "Product not found"


async def test_transfer_endpoint(client, make_product, make_warehouse, fetch_item):
    product_id = await make_product()
    source = await make_warehouse()
    destination = await make_warehouse()
    await client.post(
        "/inventory/movements/inbound",
        json={"product_id": product_id, "warehouse_id": source, "quantity": 8},
    )

    resp = await client.post(
        "/inventory/movements/transfer",
        json={
            "product_id": product_id,
            "from_warehouse_id": source,
            "to_warehouse_id": destination,
            "quantity": 5,
            "reference_code": "TR-1",
        },
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Transfer completed"
    assert body["outbound_movement_id"] < body["inbound_movement_id"]
    assert (await fetch_item(product_id, source)).stock_on_hand == 3
    assert (await fetch_item(product_id, destination)).stock_on_hand == 5

    rows = (await client.get("/inventory/movements", params={"product_id": product_id})).json()
    legs = {r["movement_type"]: r for r in rows}
    assert set(legs) == {"transfer_in", "transfer_out", "purchase"}
    for leg in ("transfer_in", "transfer_out"):
        assert legs[leg]["reference_type"] == "transfer"
        assert legs[leg]["from_warehouse_id"] == source
        assert legs[leg]["to_warehouse_id"] == destination


async def test_transfer_to_same_warehouse_is_bad_request(client, make_product, make_warehouse):
    product_id, warehouse_id = await _setup(make_product, make_warehouse)

    resp = await client.post(
        "/inventory/movements/transfer",
        json={
            "product_id": product_id,
            "from_warehouse_id": warehouse_id,
            "to_warehouse_id": warehouse_id,
            "quantity": 1,
        },
    )

    assert resp.status_code == 400
    assert resp.json()["error_code"] == "TRANSFER_SAME_WAREHOUSE"


async def test_movement_log_filters_and_limit(client, make_product, make_warehouse):
    product_id = await make_product()
    main = await make_warehouse()
    other = await make_warehouse()
    for qty in (1, 2, 3):
        await client.post(
            "/inventory/movements/inbound",
            json={"product_id": product_id, "warehouse_id": main, "quantity": qty},
        )
    await client.post(
        "/inventory/movements/inbound",
        json={"product_id": product_id, "warehouse_id": other, "quantity": 9},
    )
    await client.post(
        "/inventory/movements/outbound",
        json={"product_id": product_id, "warehouse_id": main, "quantity": 1},
    )

    limited = (await client.get("/inventory/movements", params={"limit": 2})).json()
    assert [r["quantity"] for r in limited] == [1, 9]

    outbound = (
        await client.get("/inventory/movements", params={"direction": "outbound"})
    ).json()
    assert len(outbound) == 1

    in_main = (
        await client.get(
            "/inventory/movements",
            params={"warehouse_id": main, "direction": "inbound"},
        )
    ).json()
    assert [r["quantity"] for r in in_main] == [3, 2, 1]


async def test_movement_log_rejects_out_of_range_limit(client):
    assert (await client.get("/inventory/movements", params={"limit": 0})).status_code == 400
    assert (await client.get("/inventory/movements", params={"limit": 501})).status_code == 400
