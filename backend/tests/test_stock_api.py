"""
Inventory API: Stock Endpoint Tests
=====================================

What:  /api/stok CRUD over HTTP. tgl_update is always the server's date.
"""

from datetime import date

import pytest


@pytest.fixture
def today():
    return date.today().isoformat()


async def create_product(client, headers) -> int:
    response = await client.post(
        "/api/produk",
        data={"nama_produk": "Beras 5kg", "kode_produk": "BR-05"},
        headers=headers,
    )
    return response.json()["id_produk"]


async def create_stock(client, headers, id_produk, jumlah=10, **extra) -> int:
    response = await client.post(
        "/api/stok",
        json={"id_produk": id_produk, "jumlah_barang": jumlah, **extra},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["id_stok"]


class TestStockCrud:

    @pytest.mark.asyncio
    async def test_create_and_get(self, client, auth_headers, today):
        id_produk = await create_product(client, auth_headers)

        response = await client.post(
            "/api/stok", json={"id_produk": id_produk, "jumlah_barang": 25}, headers=auth_headers
        )

        assert response.status_code == 201
        assert response.json()["message"] == "Stok berhasil ditambahkan"

        id_stok = response.json()["id_stok"]
        fetched = await client.get(f"/api/stok/{id_stok}", headers=auth_headers)
        assert fetched.json() == {
            "id_stok": id_stok,
            "id_produk": id_produk,
            "jumlah_barang": 25,
            "tgl_update": today,
            "nama_produk": "Beras 5kg",
            "kode_produk": "BR-05",
        }

    @pytest.mark.asyncio
    async def test_client_date_ignored(self, client, auth_headers, today):
        id_produk = await create_product(client, auth_headers)

        id_stok = await create_stock(client, auth_headers, id_produk, tgl_update="2000-01-01")

        fetched = await client.get(f"/api/stok/{id_stok}", headers=auth_headers)
        assert fetched.json()["tgl_update"] == today

    @pytest.mark.asyncio
    async def test_list(self, client, auth_headers):
        id_produk = await create_product(client, auth_headers)
        first = await create_stock(client, auth_headers, id_produk, 1)
        second = await create_stock(client, auth_headers, id_produk, 2)

        response = await client.get("/api/stok", headers=auth_headers)

        assert [row["id_stok"] for row in response.json()] == [first, second]
        assert all(row["nama_produk"] == "Beras 5kg" for row in response.json())

    @pytest.mark.asyncio
    async def test_update(self, client, auth_headers, today):
        id_produk = await create_product(client, auth_headers)
        id_stok = await create_stock(client, auth_headers, id_produk, 10)

        response = await client.put(
            f"/api/stok/{id_stok}",
            json={"id_produk": id_produk, "jumlah_barang": 0},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Stok berhasil diupdate"
        fetched = (await client.get(f"/api/stok/{id_stok}", headers=auth_headers)).json()
        assert fetched["jumlah_barang"] == 0
        assert fetched["tgl_update"] == today

    @pytest.mark.asyncio
    async def test_delete(self, client, auth_headers):
        id_produk = await create_product(client, auth_headers)
        id_stok = await create_stock(client, auth_headers, id_produk)

        response = await client.delete(f"/api/stok/{id_stok}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Stok berhasil dihapus"
        assert (await client.get(f"/api/stok/{id_stok}", headers=auth_headers)).status_code == 404


class TestStockErrors:

    @pytest.mark.asyncio
    async def test_negative_quantity_rejected(self, client, auth_headers):
        id_produk = await create_product(client, auth_headers)

        response = await client.post(
            "/api/stok", json={"id_produk": id_produk, "jumlah_barang": -1}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_quantity_rule_documented(self, client):
        paths = (await client.get("/openapi.json")).json()["paths"]

        assert "negative" in paths["/api/stok"]["post"]["description"]
        assert "negative" in paths["/api/stok/{id_stok}"]["put"]["description"]

    @pytest.mark.asyncio
    async def test_non_integer_quantity_rejected(self, client, auth_headers):
        response = await client.post(
            "/api/stok", json={"id_produk": 1, "jumlah_barang": "banyak"}, headers=auth_headers
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_missing(self, client, auth_headers):
        response = await client.put(
            "/api/stok/999", json={"id_produk": 1, "jumlah_barang": 3}, headers=auth_headers
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Stok tidak ditemukan"

    @pytest.mark.asyncio
    async def test_delete_missing(self, client, auth_headers):
        response = await client.delete("/api/stok/999", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Stok tidak ditemukan"
