# app/resources/consultations.py
#
# Doctor-side medical records: consultations and the prescriptions attached
# to them. Both live behind action-multiplexed scripts.

from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..actions import (
    AddConsultation,
    AddPrescription,
    DeleteConsultation,
    DeletePrescription,
    GetConsultations,
    GetPrescriptions,
    UpdateConsultation,
    UpdatePrescription,
)


class ConsultationResource:

    # --- Consultations ---

    async def get_patient_consultations(self, patient_id: int) -> List[Any]:
        """A patient's consultations, newest first, each with its prescriptions and lab results nested."""
        result = await self.call(GetConsultations, list, patient_id=patient_id)
        return result.as_list("fetching consultations")

    async def add_consultation(
        self,
        patient_id: int,
        doctor_id: int,
        diagnosis: str,
        symptoms: str,
        doctor_notes: str,
        appointment_id: Optional[int] = None,
        prescriptions: Optional[Sequence[Mapping[str, Any]]] = None,
        lab_results: Optional[Sequence[Mapping[str, Any]]] = None,
    ) -> Dict[str, Any]:
        """
        Records a consultation together with any prescriptions and lab results
        written during it. The backend inserts all three in one transaction and
        returns the new `consultation_id`.

        `doctor_id` is the doctor's user ID from login; the backend maps it to
        the doctor record.
        """
        result = await self.call(
            AddConsultation,
            dict,
            patient_id=patient_id,
            doctor_id=doctor_id,
            diagnosis=diagnosis,
            symptoms=symptoms,
            doctor_notes=doctor_notes,
            appointment_id=appointment_id,
            prescriptions=list(prescriptions or []),
            lab_results=list(lab_results or []),
        )
        return result.as_object()

    async def update_consultation(
        self,
        consultation_id: int,
        diagnosis: str,
        symptoms: str,
        doctor_notes: str,
    ) -> Dict[str, Any]:
        result = await self.call(
            UpdateConsultation,
            dict,
            consultation_id=consultation_id,
            diagnosis=diagnosis,
            symptoms=symptoms,
            doctor_notes=doctor_notes,
        )
        return result.as_object()

    async def delete_consultation(self, consultation_id: int) -> Dict[str, Any]:
        """Deletes a consultation; the backend removes its prescriptions and lab results first."""
        result = await self.call(DeleteConsultation, dict, consultation_id=consultation_id)
        return result.as_object()

    # --- Prescriptions ---

    async def get_prescriptions(self, consultation_id: int) -> List[Any]:
        result = await self.call(GetPrescriptions, list, consultation_id=consultation_id)
        return result.as_list("fetching prescriptions")

    async def add_prescription(
        self,
        consultation_id: int,
        medication_name: str,
        dosage: str,
        frequency: str,
        duration: str,
    ) -> Dict[str, Any]:
        result = await self.call(
            AddPrescription,
            dict,
            consultation_id=consultation_id,
            medication_name=medication_name,
            dosage=dosage,
            frequency=frequency,
            duration=duration,
        )
        return result.as_object()

    async def update_prescription(
        self,
        prescription_id: int,
        medication_name: str,
        dosage: str,
        frequency: str,
        duration: str,
    ) -> Dict[str, Any]:
        result = await self.call(
            UpdatePrescription,
            dict,
            prescription_id=prescription_id,
            medication_name=medication_name,
            dosage=dosage,
            frequency=frequency,
            duration=duration,
        )
        return result.as_object()

    async def delete_prescription(self, prescription_id: int) -> Dict[str, Any]:
        result = await self.call(DeletePrescription, dict, prescription_id=prescription_id)
        return result.as_object()
