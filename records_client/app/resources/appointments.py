# app/resources/appointments.py
#
# Appointment booking and status tracking. Marking an appointment 'missed'
# three times in a row restricts the patient's account on the backend.

from typing import Any, Dict, List, Optional

from ..actions import (
    AddAppointment,
    DeleteAppointment,
    GetAppointments,
    GetPatientsList,
    UpdateAppointment,
    UpdateAppointmentStatus,
)


class AppointmentResource:

    async def get_appointments(
        self,
        doctor_user_id: Optional[int] = None,
        patient_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> List[Any]:
        """
        Lists appointments, newest first. Only the filters that are given are
        sent; with none at all the backend returns every appointment.
        """
        result = await self.call(
            GetAppointments,
            list,
            doctor_user_id=doctor_user_id,
            patient_id=patient_id,
            status=status,
        )
        return result.as_list("fetching appointments")

    async def get_patients_list(self) -> List[Any]:
        """Every patient as {patient_id, full_name, phone_number, account_status}, for the booking dropdown."""
        result = await self.call(GetPatientsList, list)
        return result.as_list("fetching patients list")

    async def add_appointment(
        self,
        patient_id: int,
        doctor_user_id: int,
        appointment_date: str,
        reason_for_visit: Optional[str] = None,
    ) -> Dict[str, Any]:
        result = await self.call(
            AddAppointment,
            dict,
            patient_id=patient_id,
            doctor_user_id=doctor_user_id,
            appointment_date=appointment_date,
            reason_for_visit=reason_for_visit or "",
        )
        return result.as_object()

    async def update_appointment(
        self,
        appointment_id: int,
        appointment_date: str,
        reason_for_visit: Optional[str] = None,
    ) -> Dict[str, Any]:
        result = await self.call(
            UpdateAppointment,
            dict,
            appointment_id=appointment_id,
            appointment_date=appointment_date,
            reason_for_visit=reason_for_visit or "",
        )
        return result.as_object()

    async def update_appointment_status(self, appointment_id: int, status: str) -> Dict[str, Any]:
        # status: scheduled, completed, missed or cancelled
        result = await self.call(
            UpdateAppointmentStatus,
            dict,
            appointment_id=appointment_id,
            status=status,
        )
        return result.as_object()

    async def delete_appointment(self, appointment_id: int) -> Dict[str, Any]:
        result = await self.call(DeleteAppointment, dict, appointment_id=appointment_id)
        return result.as_object()
