from datetime import date, timedelta

import pytest

from defect_monitor.config.constants import CauseCategory, ProcessStep, RESPONDENT_MAX_LENGTH
from defect_monitor.services.record_store import MESSAGES
from defect_monitor.schemas.defect_record_schema import AddOutcome


def payload(**overrides) -> dict:
    data = {
        "date": date.today().isoformat(),
        "respondent": "田中太郎",
        "process_step": ProcessStep.EXTRUSION.value,
        "cause_category": CauseCategory.EQUIPMENT.value,
        "comment": "ダイス温度低下",
    }
    data.update(overrides)
    return data


@pytest.mark.asyncio
async def test_create_record_returns_refreshed_list(client):
    resp = await client.post("/api/records", json=payload())

    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["success"] is True
    assert body["outcome"] == "created"
    assert body["message"] == MESSAGES[AddOutcome.CREATED]
    assert len(body["records"]) == 1
    stored = body["records"][0]
    assert stored["id"] == body["record_id"]
    assert stored["process_step"] == ProcessStep.EXTRUSION.value
    assert stored["cause_category"] == CauseCategory.EQUIPMENT.value
    assert stored["respondent"] == "田中太郎"


@pytest.mark.asyncio
async def test_duplicate_submission_is_conflict(client):
    first = await client.post("/api/records", json=payload())
    second = await client.post("/api/records", json=payload())

    assert first.status_code == 201
    assert second.status_code == 409
    body = second.json()
    assert body["success"] is False
    assert body["outcome"] == "duplicate"
    assert body["records"] is None

    listed = await client.get("/api/records")
    assert listed.json()["total_count"] == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"respondent": ""},
        {"respondent": "   "},
        {"process_step": ""},
        {"process_step": None},
    ],
)
async def test_missing_required_field_is_validation_failure(client, overrides):
    resp = await client.post("/api/records", json=payload(**overrides))

    assert resp.status_code == 422
    body = resp.json()
    assert body["outcome"] == "validation_failed"
    assert body["message"] == MESSAGES[AddOutcome.VALIDATION_FAILED]

    listed = await client.get("/api/records", params={"period": "all"})
    assert listed.json()["records"] == []


@pytest.mark.asyncio
async def test_unknown_process_step_is_rejected_by_request_validation(client):
    resp = await client.post("/api/records", json=payload(process_step="溶接工程"))

    assert resp.status_code == 422
    assert "detail" in resp.json()


@pytest.mark.asyncio
async def test_optional_fields_may_be_blank(client):
    resp = await client.post("/api/records", json=payload(cause_category="", comment=""))

    assert resp.status_code == 201
    stored = resp.json()["records"][0]
    assert stored["cause_category"] is None
    assert stored["comment"] == ""


@pytest.mark.asyncio
async def test_padded_respondent_at_length_limit_is_stripped_and_stored(client):
    name = "山" * RESPONDENT_MAX_LENGTH

    resp = await client.post("/api/records", json=payload(respondent=f"  {name} "))

    assert resp.status_code == 201, resp.text
    assert resp.json()["records"][0]["respondent"] == name


@pytest.mark.asyncio
async def test_respondent_over_length_limit_is_rejected(client):
    resp = await client.post("/api/records", json=payload(respondent="山" * (RESPONDENT_MAX_LENGTH + 1)))

    assert resp.status_code == 422
    assert "detail" in resp.json()


@pytest.mark.asyncio
async def test_date_defaults_to_today(client):
    data = payload()
    del data["date"]

    resp = await client.post("/api/records", json=data)

    assert resp.status_code == 201
    assert resp.json()["records"][0]["date"] == date.today().isoformat()


@pytest.mark.asyncio
async def test_list_applies_filters_and_default_period(client):
    today = date.today()
    submissions = [
        payload(date=today.isoformat(), process_step=ProcessStep.CUTTING.value),
        payload(date=(today - timedelta(days=3)).isoformat(), process_step=ProcessStep.CUTTING.value,
                cause_category=CauseCategory.OTHER.value),
        payload(date=(today - timedelta(days=10)).isoformat(), process_step=ProcessStep.CUTTING.value),
        payload(date=(today - timedelta(days=1)).isoformat(), process_step=ProcessStep.HEATING.value),
    ]
    for data in submissions:
        assert (await client.post("/api/records", json=data)).status_code == 201

    default = (await client.get("/api/records")).json()
    assert default["period"] == "7d"
    assert default["total_count"] == 3
    assert [r["date"] for r in default["records"]] == [
        today.isoformat(),
        (today - timedelta(days=1)).isoformat(),
        (today - timedelta(days=3)).isoformat(),
    ]

    cutting = (await client.get(
        "/api/records",
        params={"process_step": ProcessStep.CUTTING.value, "period": "all"},
    )).json()
    assert cutting["total_count"] == 3

    narrowed = (await client.get(
        "/api/records",
        params={
            "process_step": ProcessStep.CUTTING.value,
            "cause_category": CauseCategory.OTHER.value,
            "period": "30d",
        },
    )).json()
    assert narrowed["total_count"] == 1
    assert narrowed["records"][0]["cause_category"] == CauseCategory.OTHER.value


@pytest.mark.asyncio
async def test_list_rejects_unknown_period(client):
    resp = await client.get("/api/records", params={"period": "90d"})

    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_store_failure_degrades_to_empty_list(broken_client):
    resp = await broken_client.get("/api/records", params={"period": "all"})

    assert resp.status_code == 200
    assert resp.json() == {"total_count": 0, "period": "all", "records": []}


@pytest.mark.asyncio
async def test_store_failure_on_submit_is_service_unavailable(broken_client):
    resp = await broken_client.post("/api/records", json=payload())

    assert resp.status_code == 503
    body = resp.json()
    assert body["outcome"] == "check_failed"
    assert body["success"] is False


@pytest.mark.asyncio
async def test_responses_carry_request_id(client):
    resp = await client.get("/api/records")

    assert resp.headers.get("X-Request-ID")
