# app/resources/reaccess.py
#
# Re-access requests: a restricted patient asks to be let back in, and an
# admin approves (resetting the missed-appointment counter) or rejects.

from typing import Any, Dict, List, Optional

from ..actions import (
    ApproveReaccessRequest,
    CheckPendingReaccessRequest,
    GetAllReaccessRequests,
    GetPendingReaccessRequests,
    RejectReaccessRequest,
    SubmitReaccessRequest,
)


class ReaccessResource:

    async def submit_reaccess_request(
        self,
        patient_id: int,
        reason: str,
        contact_phone: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Files a request for a restricted patient. The backend refuses a second pending one."""
        result = await self.call(
            SubmitReaccessRequest,
            dict,
            patient_id=patient_id,
            reason=reason,
            contact_phone=contact_phone,
        )
        return result.as_object()

    async def get_pending_reaccess_requests(self) -> List[Any]:
        result = await self.call(GetPendingReaccessRequests, list)
        return result.as_list("fetching pending re-access requests")

    async def get_all_reaccess_requests(self) -> List[Any]:
        result = await self.call(GetAllReaccessRequests, list)
        return result.as_list("fetching re-access requests")

    async def check_pending_reaccess_request(self, patient_id: int) -> Dict[str, Any]:
        """Returns {has_pending, request} for one patient."""
        result = await self.call(CheckPendingReaccessRequest, dict, patient_id=patient_id)
        return result.as_object(has_pending=False)

    async def process_reaccess_request(
        self,
        request_id: int,
        approve: bool,
        admin_response: Optional[str] = None,
        admin_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Approves or rejects a request. The action sent is decided by `approve`
        alone; whether `request_id` exists is for the backend to say.
        """
        action_type = ApproveReaccessRequest if approve else RejectReaccessRequest
        result = await self.call(
            action_type,
            dict,
            request_id=request_id,
            admin_response=admin_response,
            admin_id=admin_id,
        )
        return result.as_object()
