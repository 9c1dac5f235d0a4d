"""
Integration tests for /api/recipients.
"""

import pytest


@pytest.mark.recipient
class TestRecipientApi:
    def test_create_and_get(self, client, sample_recipient_data):
        created = client.post("/api/recipients", json=sample_recipient_data)
        assert created.status_code == 200
        body = created.get_json()
        assert body["id"]
        assert body["address"] == {
            "full": "Seoul, Gangnam-gu 123",
            "lat": 37.4979,
            "lng": 127.0276,
        }

        fetched = client.get(f"/api/recipients/{body['id']}")
        assert fetched.status_code == 200
        assert fetched.get_json() == body

    def test_create_without_address_is_rejected(self, client):
        response = client.post("/api/recipients", json={"phone": "010-1111-2222"})

        assert response.status_code == 400
        assert response.get_json() == {"error": "address is required"}

    def test_search_by_substring(self, client):
        client.post("/api/recipients", json={"phone": "010-1111-2222", "address": "Seoul"})
        client.post("/api/recipients", json={"phone": "010-3333-4444", "address": "Busan"})

        response = client.get("/api/recipients?q=Seo")

        assert response.status_code == 200
        assert [r["address"]["full"] for r in response.get_json()] == ["Seoul"]

    def test_search_returns_at_most_ten(self, client):
        for i in range(11):
            client.post(
                "/api/recipients", json={"phone": f"010-{i:04d}", "address": "Seoul"}
            )

        assert len(client.get("/api/recipients?q=Seoul").get_json()) == 10

    def test_update_replaces_recipient(self, client, sample_recipient_data):
        recipient_id = client.post("/api/recipients", json=sample_recipient_data).get_json()["id"]

        response = client.put(
            f"/api/recipients/{recipient_id}",
            json={"phone": "010-9999-9999", "address": "Busan"},
        )

        assert response.status_code == 200
        body = response.get_json()
        assert body["phone"] == "010-9999-9999"
        assert body["name"] is None
        assert body["address"]["lat"] is None

    def test_update_unknown_recipient_is_404(self, client):
        response = client.put(
            "/api/recipients/missing", json={"phone": "010", "address": "Busan"}
        )

        assert response.status_code == 404
        assert response.get_json() == {"error": "Recipient with id missing not found"}
        assert client.get("/api/recipients?q=Busan").get_json() == []

    def test_delete(self, client, sample_recipient_data):
        recipient_id = client.post("/api/recipients", json=sample_recipient_data).get_json()["id"]

        assert client.delete(f"/api/recipients/{recipient_id}").get_json() == {"ok": True}
        assert client.get(f"/api/recipients/{recipient_id}").status_code == 404
        assert client.delete(f"/api/recipients/{recipient_id}").status_code == 404

    def test_delete_recipient_removes_its_deliveries(self, client, sample_delivery_data):
        delivery = client.post("/api/deliveries", json=sample_delivery_data).get_json()
        recipient_id = delivery["recipient"]["id"]

        response = client.delete(f"/api/recipients/{recipient_id}")

        assert response.status_code == 200
        assert response.get_json() == {"ok": True}
        assert client.get(f"/api/deliveries/{delivery['id']}").status_code == 404
        assert client.get("/api/deliveries").get_json() == []
