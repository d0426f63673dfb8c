"""Integration tests: student ledger endpoints over the in-memory store."""

import pytest
from httpx import AsyncClient


@pytest.fixture
async def student_id(async_client: AsyncClient, api_base: str) -> str:
    resp = await async_client.post(
        f"{api_base}/students",
        json={"full_name": "Brian Otieno", "semester": "Term 1", "previous_balance": "50000"},
    )
    assert resp.status_code == 201, resp.text
    sid = resp.json()["data"]["id"]

    resp = await async_client.post(
        f"{api_base}/billings",
        json={"student_id": sid, "term": "Term 1", "amount": "200000", "description": "Tuition"},
    )
    assert resp.status_code == 201, resp.text
    resp = await async_client.post(
        f"{api_base}/payments",
        json={"student_id": sid, "amount": "100000", "method": "Cash"},
    )
    assert resp.status_code == 201, resp.text
    return sid


@pytest.mark.asyncio
async def test_summary_and_clearance(async_client: AsyncClient, api_base: str, student_id: str):
    resp = await async_client.get(f"{api_base}/students/{student_id}/summary")
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert float(body["data"]["outstanding_balance"]) == 150000
    assert body["data"]["status_color"] == "#ef4444"

    resp = await async_client.get(f"{api_base}/students/{student_id}/clearance")
    assert resp.json()["data"] == 40.0


@pytest.mark.asyncio
async def test_statement_has_display_row(async_client: AsyncClient, api_base: str, student_id: str):
    resp = await async_client.get(f"{api_base}/students/{student_id}/statement")
    assert resp.status_code == 200
    kinds = sorted(row["kind"] for row in resp.json()["data"])
    assert kinds == ["real", "real", "synthetic"]


@pytest.mark.asyncio
async def test_correction_flow(async_client: AsyncClient, api_base: str, student_id: str):
    resp = await async_client.post(
        f"{api_base}/students/{student_id}/corrections",
        json={"target_balance": "0", "reason": "Waiver"},
        headers={"X-User": "Jane"},
    )
    assert resp.status_code == 201, resp.text
    assert resp.json()["data"]["type"] == "adjustment"

    resp = await async_client.get(f"{api_base}/students/{student_id}/summary")
    assert float(resp.json()["data"]["outstanding_balance"]) == 0

    resp = await async_client.get(f"{api_base}/audit")
    logs = resp.json()["data"]
    assert logs[0]["category"] == "Balance Correction"
    assert logs[0]["user"] == "Jane"


@pytest.mark.asyncio
async def test_correction_with_no_difference_is_400(async_client: AsyncClient, api_base: str, student_id: str):
    resp = await async_client.post(
        f"{api_base}/students/{student_id}/corrections",
        json={"target_balance": "150000", "reason": "noop"},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "CORRECTION_REJECTED"


@pytest.mark.asyncio
async def test_unknown_student_is_404(async_client: AsyncClient, api_base: str):
    resp = await async_client.get(f"{api_base}/students/00000000-0000-0000-0000-000000000000/summary")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


@pytest.mark.asyncio
async def test_status_change(async_client: AsyncClient, api_base: str, student_id: str):
    resp = await async_client.post(
        f"{api_base}/students/{student_id}/status",
        json={"status": "probation", "reason": "Payment plan agreed"},
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["account_status"] == "probation"
    assert data["clearance_history"][0]["is_manual"] is True

    resp = await async_client.get(f"{api_base}/students/{student_id}/summary")
    assert resp.json()["data"]["status_color"] == "#8b5cf6"


@pytest.mark.asyncio
async def test_status_change_requires_reason(async_client: AsyncClient, api_base: str, student_id: str):
    resp = await async_client.post(
        f"{api_base}/students/{student_id}/status",
        json={"status": "probation", "reason": ""},
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_promotion_and_history_view(async_client: AsyncClient, api_base: str, student_id: str):
    resp = await async_client.post(
        f"{api_base}/students/{student_id}/promotions",
        json={"to_semester": "Term 2", "tuition_fee": "180000"},
    )
    assert resp.status_code == 200, resp.text
    assert float(resp.json()["data"]["arrears"]) == 150000

    resp = await async_client.get(f"{api_base}/students/{student_id}/terms")
    assert resp.json()["data"] == ["Term 2", "Term 1"]

    resp = await async_client.get(f"{api_base}/students/{student_id}/summary", params={"term": "Term 1 (Hist)"})
    assert float(resp.json()["data"]["outstanding_balance"]) == 150000

    resp = await async_client.get(f"{api_base}/students/{student_id}/summary")
    assert float(resp.json()["data"]["outstanding_balance"]) == 330000

    resp = await async_client.get(f"{api_base}/students/{student_id}/view", params={"term": "Term 1 (Hist)"})
    view = resp.json()["data"]
    assert view["is_current"] is False
    assert float(view["start_prev_bal"]) == 50000


@pytest.mark.asyncio
async def test_requirements(async_client: AsyncClient, api_base: str):
    resp = await async_client.post(
        f"{api_base}/students",
        json={
            "full_name": "Cheru Wanjiku",
            "semester": "Term 1",
            "physical_requirements": [{"name": "Reams", "required": 3}],
        },
    )
    sid = resp.json()["data"]["id"]
    resp = await async_client.post(f"{api_base}/students/{sid}/requirements", json={"name": "Reams", "change": 2})
    assert resp.status_code == 200
    assert resp.json()["data"]["physical_requirements"][0]["brought"] == 2

    resp = await async_client.post(f"{api_base}/students/{sid}/requirements", json={"name": "Boots", "change": 1})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_list_students_paginates(async_client: AsyncClient, api_base: str, student_id: str):
    resp = await async_client.get(f"{api_base}/students", params={"page": 1, "limit": 10})
    body = resp.json()
    assert body["meta"]["total"] == 1
    assert body["data"][0]["id"] == student_id
