# app/resources/patients.py
#
# Patient records: the nurse-facing CRUD screens, the doctor's patient
# search, and the patient's own view of their history.

from typing import Any, Dict, List

from ..actions import (
    AddPatient,
    DeletePatient,
    GetPatientAppointments,
    GetPatientFullRecords,
    GetPatients,
    GetPatientsForDoctor,
    UpdatePatient,
)


class PatientResource:

    # --- Patient Self-Service ---

    async def get_patient_appointments(self, user_id: int) -> List[Any]:
        """Appointments of the patient logged in as `user_id`."""
        result = await self.call(GetPatientAppointments, list, user_id=user_id)
        return result.as_list("fetching appointments")

    async def get_patient_full_records(self, user_id: int) -> Dict[str, Any]:
        """
        Everything the backend knows about one patient in a single bundle:
        `patient`, nested `consultations`, flat `prescriptions` and
        `lab_results`, `appointments` and summary `stats`.
        """
        result = await self.call(GetPatientFullRecords, dict, user_id=user_id)
        if result.ok:
            return result.data
        server_message = f"Server error: {result.status_code}"
        message = result.failure_message("Connection error", server_message)
        # The records screen reads "error" rather than "message"
        return result.as_object("Connection error", server_message, error=message)

    # --- Patient Management ---

    async def get_patients(self, query: str = "") -> List[Any]:
        # An empty query lists every patient
        result = await self.call(GetPatients, list, query=query)
        return result.as_list("fetching patients")

    async def add_patient(
        self,
        full_name: str,
        national_id: str,
        password: str,
        date_of_birth: str,
        gender: str,
        blood_type: str,
        phone: str,
        address: str = "",
    ) -> Dict[str, Any]:
        result = await self.call(
            AddPatient,
            dict,
            full_name=full_name,
            national_id=national_id,
            password=password,
            date_of_birth=date_of_birth,
            gender=gender,
            blood_type=blood_type,
            phone=phone,
            address=address,
        )
        return result.as_object()

    async def update_patient(
        self,
        patient_id: int,
        user_id: int,
        full_name: str,
        date_of_birth: str,
        gender: str,
        blood_type: str,
        phone: str,
        address: str = "",
        password: str = "",
    ) -> Dict[str, Any]:
        """Updates a patient's profile. An empty `password` keeps the current one."""
        result = await self.call(
            UpdatePatient,
            dict,
            patient_id=patient_id,
            user_id=user_id,
            full_name=full_name,
            date_of_birth=date_of_birth,
            gender=gender,
            blood_type=blood_type,
            phone=phone,
            address=address,
            password=password,
        )
        return result.as_object()

    async def delete_patient(self, patient_id: int) -> Dict[str, Any]:
        result = await self.call(DeletePatient, dict, patient_id=patient_id)
        return result.as_object()

    # --- Doctor View ---

    async def get_patients_for_doctor(self, query: str = "") -> List[Any]:
        """Patient search for doctors, with consultation counts and last visit date."""
        result = await self.call(GetPatientsForDoctor, list, query=query)
        return result.as_list("fetching patients for doctor")
