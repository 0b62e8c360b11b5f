# app/resources/logs.py
#
# The admin audit trail. The backend writes most entries itself (logins,
# appointments, re-access decisions); the client can add its own.

from typing import Any, Dict, List, Optional

from ..actions import AddSystemLog, ClearOldLogs, GetLogActionTypes, GetSystemLogs


class LogResource:

    async def get_system_logs(
        self,
        limit: int = 50,
        offset: int = 0,
        filter_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        One page of log entries, newest first, as
        {success, logs, total, limit, offset}. `filter_type` restricts the page
        to a single action type (see get_log_action_types).
        """
        result = await self.call(
            GetSystemLogs,
            dict,
            limit=limit,
            offset=offset,
            filter_type=filter_type,
        )
        return result.as_object(logs=[])

    async def get_log_action_types(self) -> List[Any]:
        result = await self.call(GetLogActionTypes, list)
        return result.as_list("fetching log action types")

    async def add_system_log(
        self,
        action_type: str,
        description: str,
        user_id: Optional[int] = None,
        user_name: Optional[str] = None,
        user_role: Optional[str] = None,
        target_type: Optional[str] = None,
        target_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        result = await self.call(
            AddSystemLog,
            dict,
            action_type=action_type,
            action_description=description,
            user_id=user_id,
            user_name=user_name,
            user_role=user_role,
            target_type=target_type,
            target_id=target_id,
        )
        return result.as_object()

    async def clear_old_logs(self, days: int = 30) -> Dict[str, Any]:
        """Deletes entries older than `days` days; the response reports how many in `deleted`."""
        result = await self.call(ClearOldLogs, dict, days=days)
        return result.as_object()
