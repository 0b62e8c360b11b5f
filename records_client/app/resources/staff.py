# app/resources/staff.py
#
# Admin-side staff management. A staff member's `extra_id` column means a
# specialty for doctors and a department for everyone else, so callers pass a
# Specialty or Department instead of a bare number.

from typing import Any, Dict, List, Union

from ..actions import AddStaff, DeleteUser, GetMetadata, GetStaff, UpdateStaff
from ..models import Department, Specialty


class StaffResource:

    async def get_staff(self, role: str, query: str = "") -> List[Any]:
        """Staff of one role ('admin', 'doctor' or 'nurse'), filtered by name or username."""
        result = await self.call(GetStaff, list, role=role, search=query)
        return result.as_list("fetching staff")

    async def get_metadata(self) -> Dict[str, Any]:
        """Dropdown reference data: `specialties` and `departments`, each a list of {id, name}."""
        result = await self.call(GetMetadata, dict)
        return result.as_object(specialties=[], departments=[])

    async def add_staff(
        self,
        username: str,
        password: str,
        role: str,
        full_name: str,
        assignment: Union[Specialty, Department],
        phone: str,
    ) -> Dict[str, Any]:
        result = await self.call(
            AddStaff,
            dict,
            username=username,
            password=password,
            role=role,
            full_name=full_name,
            assignment=assignment,
            phone_number=phone,
        )
        return result.as_object()

    async def update_staff(
        self,
        user_id: int,
        username: str,
        password: str,
        role: str,
        full_name: str,
        assignment: Union[Specialty, Department],
        phone: str,
    ) -> Dict[str, Any]:
        """Updates a staff account. Send an empty `password` to keep the current one."""
        result = await self.call(
            UpdateStaff,
            dict,
            user_id=user_id,
            username=username,
            password=password,
            role=role,
            full_name=full_name,
            assignment=assignment,
            phone_number=phone,
        )
        return result.as_object()

    async def delete_user(self, user_id: int) -> Dict[str, Any]:
        result = await self.call(DeleteUser, dict, user_id=user_id)
        return result.as_object()
