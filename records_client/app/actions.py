# app/actions.py
#
# One Pydantic model per backend action. Each model knows the script it is
# sent to and the HTTP method, and serializes itself into the exact payload the
# PHP backend reads. Endpoints that multiplex several operations behind an
# `action` field get a discriminated union, so an unknown action is rejected
# before anything is serialized.

from datetime import date
from typing import Any, ClassVar, Dict, List, Literal, Optional, Union, Annotated

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from .models import (
    AppointmentStatus,
    Credential,
    Department,
    LabResultItem,
    PrescriptionItem,
    Specialty,
    StaffAssignment,
    StaffRole,
)


def today() -> str:
    """Today's date as the backend stores it (YYYY-MM-DD)."""
    return date.today().isoformat()


class ApiAction(BaseModel):
    """Base class for every request the client can send."""
    # Numbers typed into text fields (IDs, phone numbers) are sent as strings
    model_config = ConfigDict(extra="forbid", coerce_numbers_to_str=True)

    path: ClassVar[str]
    method: ClassVar[str] = "POST"

    def payload(self) -> Dict[str, Any]:
        """JSON body for POST actions, query parameters for GET actions."""
        data = self.model_dump(mode="json")
        if self.method == "GET":
            # Unset filters are left out of the query string entirely
            return {key: value for key, value in data.items() if value is not None}
        return data


# --- Authentication ---

class Login(Credential, ApiAction):
    path: ClassVar[str] = "login.php"


# --- Patient Self-Service ---

class GetPatientAppointments(ApiAction):
    path: ClassVar[str] = "get_patient_appointments.php"
    method: ClassVar[str] = "GET"
    user_id: int

class GetPatientFullRecords(ApiAction):
    path: ClassVar[str] = "get_patient_full_records.php"
    method: ClassVar[str] = "GET"
    user_id: int


# --- Staff Management ---

class GetStaff(ApiAction):
    path: ClassVar[str] = "get_staff.php"
    method: ClassVar[str] = "GET"
    role: str
    search: str = ""

class GetMetadata(ApiAction):
    path: ClassVar[str] = "get_metadata.php"
    method: ClassVar[str] = "GET"


class StaffAction(ApiAction):
    username: str
    password: str
    role: StaffRole
    full_name: str
    assignment: StaffAssignment
    phone_number: str

    @model_validator(mode="after")
    def check_assignment_matches_role(self):
        # The backend files doctors under a specialty and everyone else under a department
        if self.role == "doctor" and not isinstance(self.assignment, Specialty):
            raise ValueError("doctors must be assigned a Specialty")
        if self.role != "doctor" and not isinstance(self.assignment, Department):
            raise ValueError(f"{self.role} staff must be assigned a Department")
        return self

    def payload(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json", exclude={"assignment"})
        data["extra_id"] = str(self.assignment.id)
        return data

class AddStaff(StaffAction):
    path: ClassVar[str] = "add_staff.php"

class UpdateStaff(StaffAction):
    path: ClassVar[str] = "update_staff.php"
    user_id: int
    password: str = "" # Empty keeps the current password

class DeleteUser(ApiAction):
    path: ClassVar[str] = "delete_user.php"
    user_id: int


# --- Patient Management ---

class GetPatients(ApiAction):
    path: ClassVar[str] = "get_patients.php"
    method: ClassVar[str] = "GET"
    query: str = ""

class GetPatientsForDoctor(ApiAction):
    path: ClassVar[str] = "get_patients_for_doctor.php"
    method: ClassVar[str] = "GET"
    query: str = ""

class AddPatient(ApiAction):
    path: ClassVar[str] = "add_patient.php"
    full_name: str
    national_id: str
    password: str
    date_of_birth: str
    gender: str
    blood_type: str
    phone: str
    address: str = ""

class UpdatePatient(ApiAction):
    path: ClassVar[str] = "update_patient.php"
    patient_id: int
    user_id: int
    full_name: str
    date_of_birth: str
    gender: str
    blood_type: str
    phone: str
    address: str = ""
    password: str = "" # Empty keeps the current password

class DeletePatient(ApiAction):
    path: ClassVar[str] = "delete_patient.php"
    patient_id: int


# --- Consultations ---

class GetConsultations(ApiAction):
    path: ClassVar[str] = "consultations_crud.php"
    method: ClassVar[str] = "GET"
    action: Literal["get"] = "get"
    patient_id: int

class AddConsultation(ApiAction):
    path: ClassVar[str] = "consultations_crud.php"
    action: Literal["add"] = "add"
    patient_id: int
    doctor_id: int # The doctor's user_id; the backend resolves it
    diagnosis: str
    symptoms: str
    doctor_notes: str
    appointment_id: Optional[int] = None
    prescriptions: List[PrescriptionItem] = []
    lab_results: List[LabResultItem] = []

class UpdateConsultation(ApiAction):
    path: ClassVar[str] = "consultations_crud.php"
    action: Literal["update"] = "update"
    consultation_id: int
    diagnosis: str
    symptoms: str
    doctor_notes: str

class DeleteConsultation(ApiAction):
    path: ClassVar[str] = "consultations_crud.php"
    action: Literal["delete"] = "delete"
    consultation_id: int

ConsultationAction = Annotated[
    Union[GetConsultations, AddConsultation, UpdateConsultation, DeleteConsultation],
    Field(discriminator="action"),
]


# --- Prescriptions ---

class GetPrescriptions(ApiAction):
    path: ClassVar[str] = "prescriptions_crud.php"
    method: ClassVar[str] = "GET"
    action: Literal["get"] = "get"
    consultation_id: int

class AddPrescription(ApiAction):
    path: ClassVar[str] = "prescriptions_crud.php"
    action: Literal["add"] = "add"
    consultation_id: int
    medication_name: str
    dosage: str
    frequency: str
    duration: str

class UpdatePrescription(ApiAction):
    path: ClassVar[str] = "prescriptions_crud.php"
    action: Literal["update"] = "update"
    prescription_id: int
    medication_name: str
    dosage: str
    frequency: str
    duration: str

class DeletePrescription(ApiAction):
    path: ClassVar[str] = "prescriptions_crud.php"
    action: Literal["delete"] = "delete"
    prescription_id: int

PrescriptionAction = Annotated[
    Union[GetPrescriptions, AddPrescription, UpdatePrescription, DeletePrescription],
    Field(discriminator="action"),
]


# --- Lab Results ---

class UploadLabFile(ApiAction):
    path: ClassVar[str] = "upload_lab_file.php"
    file_path: str

    def payload(self) -> Dict[str, Any]:
        return {}

class GetLabResults(ApiAction):
    path: ClassVar[str] = "lab_results_crud.php"
    method: ClassVar[str] = "GET"
    action: Literal["get"] = "get"
    consultation_id: int

class AddLabResult(ApiAction):
    path: ClassVar[str] = "lab_results_crud.php"
    action: Literal["add"] = "add"
    consultation_id: int
    test_name: str
    result_summary: str
    test_date: str = Field(default_factory=today)
    result_file_path: Optional[str] = None

class UpdateLabResult(ApiAction):
    path: ClassVar[str] = "lab_results_crud.php"
    action: Literal["update"] = "update"
    result_id: int
    test_name: str
    result_summary: str
    test_date: str = Field(default_factory=today)
    # None leaves the stored attachment alone; "[]" clears it
    result_file_path: Optional[str] = None

    def payload(self) -> Dict[str, Any]:
        data = super().payload()
        if data["result_file_path"] is None:
            del data["result_file_path"]
        return data

class DeleteLabResult(ApiAction):
    path: ClassVar[str] = "lab_results_crud.php"
    action: Literal["delete"] = "delete"
    result_id: int

LabResultAction = Annotated[
    Union[GetLabResults, AddLabResult, UpdateLabResult, DeleteLabResult],
    Field(discriminator="action"),
]


# --- Appointments ---

class GetAppointments(ApiAction):
    path: ClassVar[str] = "appointments_crud.php"
    method: ClassVar[str] = "GET"
    action: Literal["get"] = "get"
    doctor_user_id: Optional[int] = None
    patient_id: Optional[int] = None
    status: Optional[AppointmentStatus] = None

    def payload(self) -> Dict[str, Any]:
        # "get" is the backend's default GET action, so a bare listing sends no parameters
        data = super().payload()
        del data["action"]
        return data

class GetPatientsList(ApiAction):
    path: ClassVar[str] = "appointments_crud.php"
    method: ClassVar[str] = "GET"
    action: Literal["get_patients"] = "get_patients"

class AddAppointment(ApiAction):
    path: ClassVar[str] = "appointments_crud.php"
    action: Literal["add"] = "add"
    patient_id: int
    doctor_user_id: int
    appointment_date: str
    reason_for_visit: str = ""

class UpdateAppointment(ApiAction):
    path: ClassVar[str] = "appointments_crud.php"
    action: Literal["update"] = "update"
    appointment_id: int
    appointment_date: str
    reason_for_visit: str = ""

class UpdateAppointmentStatus(ApiAction):
    path: ClassVar[str] = "appointments_crud.php"
    action: Literal["update_status"] = "update_status"
    appointment_id: int
    status: AppointmentStatus

class DeleteAppointment(ApiAction):
    path: ClassVar[str] = "appointments_crud.php"
    action: Literal["delete"] = "delete"
    appointment_id: int

AppointmentAction = Annotated[
    Union[
        GetAppointments,
        GetPatientsList,
        AddAppointment,
        UpdateAppointment,
        UpdateAppointmentStatus,
        DeleteAppointment,
    ],
    Field(discriminator="action"),
]


# --- Re-Access Requests ---

class SubmitReaccessRequest(ApiAction):
    path: ClassVar[str] = "reaccess_crud.php"
    action: Literal["submit"] = "submit"
    patient_id: int
    reason: str
    contact_phone: Optional[str] = None

class GetPendingReaccessRequests(ApiAction):
    path: ClassVar[str] = "reaccess_crud.php"
    method: ClassVar[str] = "GET"
    action: Literal["get_pending"] = "get_pending"

class GetAllReaccessRequests(ApiAction):
    path: ClassVar[str] = "reaccess_crud.php"
    method: ClassVar[str] = "GET"
    action: Literal["get_all"] = "get_all"

class CheckPendingReaccessRequest(ApiAction):
    path: ClassVar[str] = "reaccess_crud.php"
    method: ClassVar[str] = "GET"
    action: Literal["check_existing"] = "check_existing"
    patient_id: int

class ApproveReaccessRequest(ApiAction):
    path: ClassVar[str] = "reaccess_crud.php"
    action: Literal["approve"] = "approve"
    request_id: int
    admin_response: Optional[str] = None
    admin_id: Optional[int] = None

class RejectReaccessRequest(ApiAction):
    path: ClassVar[str] = "reaccess_crud.php"
    action: Literal["reject"] = "reject"
    request_id: int
    admin_response: Optional[str] = None
    admin_id: Optional[int] = None

ReaccessAction = Annotated[
    Union[
        SubmitReaccessRequest,
        GetPendingReaccessRequests,
        GetAllReaccessRequests,
        CheckPendingReaccessRequest,
        ApproveReaccessRequest,
        RejectReaccessRequest,
    ],
    Field(discriminator="action"),
]


# --- System Logs ---

class GetSystemLogs(ApiAction):
    path: ClassVar[str] = "logs_crud.php"
    method: ClassVar[str] = "GET"
    action: Literal["get_recent"] = "get_recent"
    limit: int = 50
    offset: int = 0
    filter_type: Optional[str] = None

class GetLogActionTypes(ApiAction):
    path: ClassVar[str] = "logs_crud.php"
    method: ClassVar[str] = "GET"
    action: Literal["get_action_types"] = "get_action_types"

class AddSystemLog(ApiAction):
    path: ClassVar[str] = "logs_crud.php"
    action: Literal["add"] = "add"
    action_type: str
    action_description: str
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    user_role: Optional[str] = None
    target_type: Optional[str] = None
    target_id: Optional[int] = None

class ClearOldLogs(ApiAction):
    path: ClassVar[str] = "logs_crud.php"
    action: Literal["clear_old"] = "clear_old"
    days: int = 30

LogAction = Annotated[
    Union[GetSystemLogs, GetLogActionTypes, AddSystemLog, ClearOldLogs],
    Field(discriminator="action"),
]


# --- Boundary Validation ---

MULTIPLEXED_ENDPOINTS: Dict[str, TypeAdapter] = {
    "consultations_crud.php": TypeAdapter(ConsultationAction),
    "prescriptions_crud.php": TypeAdapter(PrescriptionAction),
    "lab_results_crud.php": TypeAdapter(LabResultAction),
    "appointments_crud.php": TypeAdapter(AppointmentAction),
    "reaccess_crud.php": TypeAdapter(ReaccessAction),
    "logs_crud.php": TypeAdapter(LogAction),
}


def parse_action(path: str, payload: Dict[str, Any]) -> ApiAction:
    """
    Validates a raw payload for a multiplexed endpoint and returns the matching
    action model. Raises pydantic.ValidationError for an unknown action or
    missing fields, and KeyError for a path that does not multiplex.
    """
    return MULTIPLEXED_ENDPOINTS[path].validate_python(payload)
