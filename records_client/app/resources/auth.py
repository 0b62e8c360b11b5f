# app/resources/auth.py
#
# Login for both staff (username + password) and patients
# (full name + national ID + password).

from typing import Any, Dict, Optional

from ..actions import Login


class AuthResource:

    async def login(
        self,
        login_type: str,
        password: str,
        username: Optional[str] = None,
        full_name: Optional[str] = None,
        national_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Authenticates a staff member or a patient.

        `login_type` is 'staff' or 'patient'. Staff send `username`; patients send
        `full_name` and `national_id`. All five keys always travel in the body,
        the unused ones as null.

        On success the backend answers with `user_id`, `role` and `name`. A
        restricted patient gets `success: False` with `is_restricted: True` and
        the `patient_id` needed to file a re-access request.
        """
        result = await self.call(
            Login,
            dict,
            login_type=login_type,
            password=password,
            username=username,
            full_name=full_name,
            national_id=national_id,
        )
        return result.as_object()
