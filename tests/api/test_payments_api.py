import pytest
import httpx
from sqlalchemy.exc import OperationalError

from flat_payments_backend.services.payment_service import PaymentService

from tests.constants import TEST_FLAT_ID


@pytest.mark.anyio
class TestGenerateEndpoint:

    async def test_generate_then_conflict(self, api_client: httpx.AsyncClient, rent_and_utilities, owner_headers):
        url = f"/flats/{TEST_FLAT_ID}/payments/generate"

        first = await api_client.post(url, json={"month": 6, "year": 2026}, headers=owner_headers)
        assert first.status_code == 201
        body = first.json()
        assert body["generated_count"] == 2
        assert body["message"] == "Payments generated successfully"
        assert {p["amount"] for p in body["payments"]} == {"1500.00", "500.00"}

        second = await api_client.post(url, json={"month": 6, "year": 2026}, headers=owner_headers)
        assert second.status_code == 409
        conflict = second.json()
        assert conflict["error"] == "Payments for this period already exist."
        assert {c["existing_payment_id"] for c in conflict["conflicts"]} == {p["id"] for p in body["payments"]}

        dashboard = await api_client.get("/dashboard/", headers=owner_headers)
        assert dashboard.json()["flats"][0]["debt"] == "2000.00"

    async def test_generate_without_payment_types(self, api_client: httpx.AsyncClient, owner_flat, owner_headers):
        response = await api_client.post(
            f"/flats/{TEST_FLAT_ID}/payments/generate", json={"month": 6, "year": 2026}, headers=owner_headers
        )
        assert response.status_code == 400
        assert "No payment types" in response.json()["error"]

    async def test_generate_invalid_month(self, api_client: httpx.AsyncClient, rent_and_utilities, owner_headers):
        response = await api_client.post(
            f"/flats/{TEST_FLAT_ID}/payments/generate", json={"month": 13, "year": 2026}, headers=owner_headers
        )
        assert response.status_code == 400
        assert "month" in response.json()["details"]

    async def test_generate_for_foreign_flat(self, api_client: httpx.AsyncClient, rent_and_utilities, other_user, other_user_headers):
        response = await api_client.post(
            f"/flats/{TEST_FLAT_ID}/payments/generate", json={"month": 6, "year": 2026}, headers=other_user_headers
        )
        assert response.status_code == 404

    async def test_store_failure_is_opaque(self, api_client: httpx.AsyncClient, rent_and_utilities, owner_headers, monkeypatch):
        async def broken(self, flat_id):
            raise OperationalError("SELECT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(PaymentService, "_get_payment_types", broken)

        response = await api_client.post(
            f"/flats/{TEST_FLAT_ID}/payments/generate", json={"month": 6, "year": 2026}, headers=owner_headers
        )
        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


@pytest.mark.anyio
class TestListAndMarkPaid:

    async def test_list_mark_paid_and_filter(self, api_client: httpx.AsyncClient, rent_and_utilities, owner_headers):
        await api_client.post(
            f"/flats/{TEST_FLAT_ID}/payments/generate", json={"month": 6, "year": 2026}, headers=owner_headers
        )
        payments = (await api_client.get(f"/flats/{TEST_FLAT_ID}/payments", headers=owner_headers)).json()
        assert len(payments) == 2
        rent = next(p for p in payments if p["payment_type_name"] == "Rent")

        paid = await api_client.post(f"/payments/{rent['id']}/mark-paid", headers=owner_headers)
        assert paid.status_code == 200
        assert paid.json()["is_paid"] is True
        assert paid.json()["paid_at"] is not None

        again = await api_client.post(f"/payments/{rent['id']}/mark-paid", headers=owner_headers)
        assert again.status_code == 409
        assert again.json() == {"error": "Payment is already marked as paid"}

        unpaid = await api_client.get(
            f"/flats/{TEST_FLAT_ID}/payments", params={"is_paid": "false"}, headers=owner_headers
        )
        assert [p["payment_type_name"] for p in unpaid.json()] == ["Utilities"]

        dashboard = await api_client.get("/dashboard/", headers=owner_headers)
        assert dashboard.json()["flats"][0]["debt"] == "500.00"

    async def test_invalid_filter(self, api_client: httpx.AsyncClient, owner_flat, owner_headers):
        response = await api_client.get(
            f"/flats/{TEST_FLAT_ID}/payments", params={"month": "13"}, headers=owner_headers
        )
        assert response.status_code == 400
        assert "month" in response.json()["details"]

    async def test_mark_foreign_payment(self, api_client: httpx.AsyncClient, owner, other_user_flat, owner_headers):
        response = await api_client.post(f"/payments/{other_user_flat['payment_id']}/mark-paid", headers=owner_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Payment not found"}

    async def test_mark_malformed_payment_id(self, api_client: httpx.AsyncClient, owner, owner_headers):
        response = await api_client.post("/payments/12345/mark-paid", headers=owner_headers)
        assert response.status_code == 400
