import pytest
from pydantic import ValidationError

from records_client.app.actions import (
    AddConsultation,
    AddLabResult,
    AddPatient,
    AddStaff,
    ApproveReaccessRequest,
    GetAppointments,
    GetSystemLogs,
    Login,
    UpdateLabResult,
    UpdatePatient,
    UpdateStaff,
    parse_action,
    today,
)
from records_client.app.models import Department, Specialty

# --- Payload shapes ---

def test_login_payload_always_carries_all_keys():
    """
    Tests that unused credential fields travel as null rather than being dropped.
    """
    payload = Login(login_type="patient", password="x", full_name="Jane Doe", national_id="123").payload()
    assert payload == {
        "login_type": "patient",
        "password": "x",
        "username": None,
        "full_name": "Jane Doe",
        "national_id": "123",
    }

def test_add_patient_payload_fills_omitted_fields():
    """
    Tests that a patient created without an address still sends the key, empty.
    """
    # Act
    payload = AddPatient(
        full_name="Jane Doe",
        national_id="123",
        password="x",
        date_of_birth="1990-01-01",
        gender="Female",
        blood_type="O+",
        phone="0500",
    ).payload()

    # Assert
    assert payload["address"] == ""
    assert set(payload) == {
        "full_name", "national_id", "password", "date_of_birth",
        "gender", "blood_type", "phone", "address",
    }

def test_update_patient_payload_defaults_password_to_empty():
    payload = UpdatePatient(
        patient_id=12, user_id=30, full_name="Jane Doe", date_of_birth="1990-01-01",
        gender="Female", blood_type="O+", phone="0500",
    ).payload()
    assert payload["password"] == ""
    assert payload["address"] == ""

def test_get_appointments_without_filters_has_no_parameters():
    assert GetAppointments().payload() == {}

def test_get_appointments_sends_only_given_filters():
    assert GetAppointments(patient_id=12).payload() == {"patient_id": 12}

def test_get_system_logs_leaves_out_missing_filter():
    assert GetSystemLogs().payload() == {"action": "get_recent", "limit": 50, "offset": 0}

def test_add_consultation_defaults_embedded_lists():
    payload = AddConsultation(
        patient_id=12, doctor_id=7, diagnosis="Flu", symptoms="Fever", doctor_notes="Rest",
    ).payload()
    assert payload["action"] == "add"
    assert payload["appointment_id"] is None
    assert payload["prescriptions"] == []
    assert payload["lab_results"] == []

def test_lab_result_test_date_defaults_to_today():
    action = AddLabResult(consultation_id=3, test_name="CBC", result_summary="Normal")
    assert action.test_date == today()

# --- Lab attachments ---

def test_update_lab_result_omits_unset_attachment():
    """
    Tests that an update with no attachment value leaves the key out, so the
    backend keeps whatever file is stored.
    """
    payload = UpdateLabResult(result_id=9, test_name="CBC", result_summary="Normal", test_date="2024-05-01").payload()
    assert "result_file_path" not in payload

def test_update_lab_result_sends_explicit_clear_marker():
    payload = UpdateLabResult(
        result_id=9, test_name="CBC", result_summary="Normal", test_date="2024-05-01", result_file_path="[]",
    ).payload()
    assert payload["result_file_path"] == "[]"

# --- Staff assignment ---

def test_staff_payload_flattens_assignment_into_extra_id():
    payload = AddStaff(
        username="drsmith", password="pw", role="doctor", full_name="Dr. Smith",
        assignment=Specialty(id=4), phone_number="0500",
    ).payload()
    assert payload["extra_id"] == "4"
    assert "assignment" not in payload

def test_doctor_with_department_is_rejected():
    with pytest.raises(ValidationError) as excinfo:
        AddStaff(
            username="drsmith", password="pw", role="doctor", full_name="Dr. Smith",
            assignment=Department(id=2), phone_number="0500",
        )
    assert "Specialty" in str(excinfo.value)

def test_nurse_with_specialty_is_rejected():
    with pytest.raises(ValidationError):
        UpdateStaff(
            user_id=5, username="nurse1", role="nurse", full_name="Nurse Joy",
            assignment=Specialty(id=2), phone_number="0500",
        )

def test_assignment_accepts_tagged_dict():
    action = AddStaff(
        username="nurse1", password="pw", role="nurse", full_name="Nurse Joy",
        assignment={"kind": "department", "id": "2"}, phone_number="0500",
    )
    assert action.assignment == Department(id=2)

# --- Multiplexed endpoints ---

def test_parse_action_picks_variant_by_action():
    action = parse_action("reaccess_crud.php", {"action": "approve", "request_id": "5"})
    assert isinstance(action, ApproveReaccessRequest)
    assert action.request_id == 5

def test_parse_action_rejects_unknown_action():
    with pytest.raises(ValidationError):
        parse_action("appointments_crud.php", {"action": "drop_table", "appointment_id": 1})

def test_parse_action_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        parse_action("logs_crud.php", {"action": "clear_old", "days": 30, "force": True})

def test_parse_action_rejects_single_purpose_paths():
    with pytest.raises(KeyError):
        parse_action("login.php", {"login_type": "staff", "password": "x"})
