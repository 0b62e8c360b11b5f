# app/models.py
#
# This module contains the Pydantic models describing the JSON shapes the
# records backend sends and receives. The PHP backend returns integer columns
# as strings and joins in extra columns freely, so every model accepts
# extra keys and relies on Pydantic's lax coercion for numbers.

from typing import Optional, List, Literal, Union, Any, Annotated
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

LoginType = Literal["staff", "patient"]
StaffRole = Literal["admin", "doctor", "nurse"]
AppointmentStatus = Literal["scheduled", "completed", "missed", "cancelled"]
ReaccessStatus = Literal["pending", "approved", "rejected"]


class WireModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


# --- Staff Assignment ---
# Doctors belong to a specialty, every other staff member to a department.
# Both travel over the wire in the same `extra_id` column.

class Specialty(BaseModel):
    kind: Literal["specialty"] = "specialty"
    id: int

class Department(BaseModel):
    kind: Literal["department"] = "department"
    id: int

StaffAssignment = Annotated[Union[Specialty, Department], Field(discriminator="kind")]


def assignment_for_role(role: str, extra_id: Union[int, str]) -> Union[Specialty, Department]:
    """Wraps a raw `extra_id` in the variant the backend will read for this role."""
    if role == "doctor":
        return Specialty(id=extra_id)
    return Department(id=extra_id)


# --- Request-Side Records ---

class Credential(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    login_type: LoginType
    password: str
    username: Optional[str] = None # Staff only
    full_name: Optional[str] = None # Patient only
    national_id: Optional[str] = None # Patient only

class PrescriptionItem(BaseModel):
    # Prescription lines embedded in a new consultation
    model_config = ConfigDict(coerce_numbers_to_str=True)

    medication_name: str
    dosage: str = ""
    frequency: str = ""
    duration: str = ""

class LabResultItem(BaseModel):
    # Lab results embedded in a new consultation
    model_config = ConfigDict(coerce_numbers_to_str=True)

    test_name: str
    result_summary: str = ""
    test_date: Optional[str] = None
    result_file_path: Optional[str] = None


# --- Entity Records (as returned by the backend) ---

class StaffRecord(WireModel):
    user_id: int
    username: str
    full_name: Optional[str] = None
    role: Optional[StaffRole] = None
    phone_number: Optional[str] = None
    extra_id: Optional[int] = None
    extra_info: Optional[str] = None # Specialty or department name

class PatientRecord(WireModel):
    patient_id: int
    user_id: Optional[int] = None
    full_name: str
    national_id: Optional[str] = None
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    blood_type: Optional[str] = None
    phone_number: Optional[str] = Field(default=None, validation_alias=AliasChoices("phone_number", "phone"))
    address: Optional[str] = None
    account_status: Optional[str] = None
    consecutive_missed_appointments: Optional[int] = None

class PrescriptionRecord(WireModel):
    prescription_id: int
    consultation_id: int
    medication_name: str
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    duration: Optional[str] = None

class LabResultRecord(WireModel):
    result_id: int
    consultation_id: int
    test_name: str
    result_summary: Optional[str] = None
    test_date: Optional[str] = None
    result_file_path: Optional[str] = None

class ConsultationRecord(WireModel):
    consultation_id: int
    patient_id: int
    doctor_id: int
    appointment_id: Optional[int] = None
    visit_date: Optional[str] = None
    diagnosis: Optional[str] = None
    symptoms: Optional[str] = None
    doctor_notes: Optional[str] = None
    doctor_name: Optional[str] = None
    prescriptions: List[PrescriptionRecord] = []
    lab_results: List[LabResultRecord] = []

class AppointmentRecord(WireModel):
    appointment_id: int
    patient_id: int
    doctor_id: Optional[int] = None
    appointment_date: str
    reason_for_visit: Optional[str] = None
    status: AppointmentStatus = "scheduled"
    patient_name: Optional[str] = None
    doctor_name: Optional[str] = None

class ReaccessRequestRecord(WireModel):
    request_id: int
    patient_id: int
    reason: str
    contact_phone: Optional[str] = None
    status: ReaccessStatus = "pending"
    admin_response: Optional[str] = None
    processed_by: Optional[int] = None
    consecutive_missed_appointments: Optional[int] = None
    created_at: Optional[str] = None
    patient_name: Optional[str] = None

class SystemLogEntry(WireModel):
    log_id: Optional[int] = None
    action_type: str
    action_description: str
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    user_role: Optional[str] = None
    target_type: Optional[str] = None
    target_id: Optional[int] = None
    created_at: Optional[str] = None


# --- Response Envelopes ---

class StatusResponse(WireModel):
    success: bool
    message: Optional[str] = None

class LoginResult(StatusResponse):
    user_id: Optional[int] = None
    role: Optional[str] = None
    name: Optional[str] = None
    # Set when a patient is blocked after repeated missed appointments
    is_restricted: bool = False
    patient_id: Optional[int] = None

class UploadResult(StatusResponse):
    file_path: Optional[str] = None
    file_name: Optional[str] = None

class MetadataItem(WireModel):
    id: int
    name: str

class MetadataResponse(WireModel):
    specialties: List[MetadataItem] = []
    departments: List[MetadataItem] = []

class SystemLogPage(StatusResponse):
    logs: List[SystemLogEntry] = []
    total: int = 0
    limit: int = 50
    offset: int = 0

class RecordStats(WireModel):
    total_consultations: int = 0
    total_prescriptions: int = 0
    total_lab_results: int = 0
    total_appointments: int = 0
    upcoming_appointments: int = 0

class PatientFullRecords(WireModel):
    success: bool = True
    patient: Optional[PatientRecord] = None
    consultations: List[ConsultationRecord] = []
    prescriptions: List[PrescriptionRecord] = []
    lab_results: List[LabResultRecord] = []
    appointments: List[AppointmentRecord] = []
    stats: Optional[RecordStats] = None

class PendingCheck(WireModel):
    has_pending: bool = False
    request: Optional[Any] = None # False when nothing is pending
