# End-to-end flows against an in-process fake of the PHP backend, served
# through httpx.ASGITransport. These cover behavior that spans several calls.

import httpx
import pytest
from typing import List

from records_client.app.client import RecordsApiClient
from records_client.app.models import (
    AppointmentRecord,
    LoginResult,
    PatientRecord,
    PendingCheck,
    ReaccessRequestRecord,
    UploadResult,
)
from records_client.app.transport import ApiResult
from records_client.tests.fake_backend import BASE_URL, create_app


@pytest.fixture
def fake_app():
    return create_app()


@pytest.fixture
def api(fake_app):
    return RecordsApiClient(base_url=BASE_URL, transport=httpx.ASGITransport(app=fake_app))


@pytest.mark.asyncio
async def test_staff_login(api):
    result = LoginResult.model_validate(await api.login("staff", "adminpass", username="admin1"))
    assert result.success is True
    assert result.role == "admin"
    assert result.user_id == 1

@pytest.mark.asyncio
async def test_wrong_password(api):
    result = await api.login("staff", "nope", username="admin1")
    assert result == {"success": False, "message": "Invalid Password"}

@pytest.mark.asyncio
async def test_patient_rows_decode_into_models(api):
    rows = await api.get_patients("jane")
    patients = ApiResult(data=rows).parse(List[PatientRecord]).data
    assert patients[0].patient_id == 12
    assert patients[0].account_status == "active"

@pytest.mark.asyncio
async def test_three_missed_appointments_restrict_then_reaccess_restores(api, fake_app):
    """
    Tests the restricted patient flow: three missed appointments in a row block
    the patient's login, and an approved re-access request lets them back in.
    """
    # Arrange
    for day in ("01", "02", "03"):
        created = await api.add_appointment(12, 11, f"2024-05-{day} 09:00")
        assert created["success"] is True

    # Act
    outcomes = []
    for appointment_id in (1, 2, 3):
        outcomes.append(await api.update_appointment_status(appointment_id, "missed"))
    login = LoginResult.model_validate(
        await api.login("patient", "x", full_name="Jane Doe", national_id="123")
    )

    # Assert
    assert [o["patient_restricted"] for o in outcomes] == [False, False, True]
    assert login.success is False
    assert login.is_restricted is True
    assert login.patient_id == 12

    # A restricted patient cannot book
    refused = await api.add_appointment(12, 11, "2024-05-04 09:00", "Checkup")
    assert refused["success"] is False

    # Act
    submitted = await api.submit_reaccess_request(login.patient_id, "I was in hospital", "0500")
    duplicate = await api.submit_reaccess_request(login.patient_id, "Again")
    pending = [ReaccessRequestRecord.model_validate(r) for r in await api.get_pending_reaccess_requests()]
    approved = await api.process_reaccess_request(pending[0].request_id, True, admin_id=1)

    # Assert
    assert submitted["success"] is True
    assert duplicate == {"success": False, "message": "You already have a pending request"}
    assert approved["success"] is True
    assert await api.get_pending_reaccess_requests() == []
    assert fake_app.state.records["patients"][0]["consecutive_missed_appointments"] == 0

    relogin = await api.login("patient", "x", full_name="Jane Doe", national_id="123")
    assert relogin["success"] is True

@pytest.mark.asyncio
async def test_rejected_request_keeps_account_restricted(api, fake_app):
    fake_app.state.records["patients"][0]["account_status"] = "restricted"
    await api.submit_reaccess_request(12, "Please")

    result = await api.process_reaccess_request(1, False, admin_response="Call the clinic")

    assert result["message"] == "Request rejected"
    history = await api.get_all_reaccess_requests()
    assert history[0]["status"] == "rejected"
    assert history[0]["admin_response"] == "Call the clinic"
    login = await api.login("patient", "x", full_name="Jane Doe", national_id="123")
    assert login["is_restricted"] is True

@pytest.mark.asyncio
async def test_check_pending_request(api):
    """
    Tests the pending check before and after a request is filed. With nothing
    pending the backend sends `request: false`.
    """
    # Act
    before = ApiResult(data=await api.check_pending_reaccess_request(12)).parse(PendingCheck).data
    await api.submit_reaccess_request(12, "I was in hospital")
    after = ApiResult(data=await api.check_pending_reaccess_request(12)).parse(PendingCheck).data

    # Assert
    assert before.has_pending is False
    assert before.request is False
    assert after.has_pending is True
    assert after.request["reason"] == "I was in hospital"

@pytest.mark.asyncio
async def test_unknown_request_id_is_for_the_backend_to_report(api):
    result = await api.process_reaccess_request(99, True)
    assert result == {"success": False, "message": "Request not found"}

@pytest.mark.asyncio
async def test_appointment_listing_and_filters(api):
    await api.add_appointment(12, 11, "2024-05-01 09:00", "Checkup")
    await api.add_appointment(12, 11, "2024-05-02 09:00")
    await api.update_appointment_status(2, "completed")

    everything = [AppointmentRecord.model_validate(a) for a in await api.get_appointments()]
    completed = await api.get_appointments(patient_id=12, status="completed")

    assert [a.appointment_id for a in everything] == [1, 2]
    assert everything[1].reason_for_visit == ""
    assert [a["appointment_id"] for a in completed] == ["2"]
    assert (await api.get_patients_list())[0]["full_name"] == "Jane Doe"

@pytest.mark.asyncio
async def test_upload_then_attach(api, fake_app, tmp_path):
    # Arrange
    scan = tmp_path / "xray.png"
    scan.write_bytes(b"\x89PNG fake image")

    # Act
    uploaded = await api.upload_lab_file(str(scan))
    result = ApiResult(data=uploaded).parse(UploadResult).data

    # Assert
    assert result.success is True
    assert result.file_path == uploaded["file_path"]
    assert uploaded["success"] is True
    assert uploaded["file_name"] == "xray.png"
    assert uploaded["file_path"] == "uploads/lab_results/lab_1_xray.png"
    assert fake_app.state.records["uploads"] == [{"path": "uploads/lab_results/lab_1_xray.png", "size": 15}]
    assert api.file_url(uploaded["file_path"]) == "http://testserver/medical_app/uploads/lab_results/lab_1_xray.png"

@pytest.mark.asyncio
async def test_crashed_script_yields_sentinel(api):
    result = await api.get_metadata()
    assert result == {"success": False, "message": "Server Error", "specialties": [], "departments": []}

@pytest.mark.asyncio
async def test_error_object_for_list_endpoint_yields_empty_list(api):
    assert await api.get_log_action_types() == []

@pytest.mark.asyncio
async def test_log_page_paging(api):
    page = await api.get_system_logs(limit=1, offset=0)
    assert page["total"] == 1
    assert page["logs"][0]["action_type"] == "login_success"
