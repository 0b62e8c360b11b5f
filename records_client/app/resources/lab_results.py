# app/resources/lab_results.py
#
# Lab results and their file attachments. Files are uploaded first, on their
# own; the returned relative path is then stored on the lab result.

from typing import Any, Dict, List, Optional, Sequence, Union

from ..actions import (
    AddLabResult,
    DeleteLabResult,
    GetLabResults,
    UpdateLabResult,
    UploadLabFile,
    today,
)
from ..files import file_path_field

FilePaths = Optional[Union[str, Sequence[str]]]


class LabResultResource:

    async def upload_lab_file(self, file_path: str) -> Dict[str, Any]:
        """
        Uploads a local file (PDF, JPG, PNG or GIF, 10MB max server-side) as the
        multipart field `file`. On success the response carries the
        server-relative `file_path` to store on a lab result.
        """
        result = await self.call(UploadLabFile, dict, file_path=file_path)
        return result.as_object("Upload Error")

    async def get_lab_results(self, consultation_id: int) -> List[Any]:
        result = await self.call(GetLabResults, list, consultation_id=consultation_id)
        return result.as_list("fetching lab results")

    async def add_lab_result(
        self,
        consultation_id: int,
        test_name: str,
        result_summary: str,
        test_date: Optional[str] = None,
        result_file_path: FilePaths = None,
    ) -> Dict[str, Any]:
        """
        Adds a lab result to a consultation. `test_date` defaults to today.
        `result_file_path` may be a stored path string or a list of uploaded paths.
        """
        result = await self.call(
            AddLabResult,
            dict,
            consultation_id=consultation_id,
            test_name=test_name,
            result_summary=result_summary,
            test_date=test_date or today(),
            result_file_path=file_path_field(result_file_path),
        )
        return result.as_object()

    async def update_lab_result(
        self,
        result_id: int,
        test_name: str,
        result_summary: str,
        test_date: Optional[str] = None,
        result_file_path: FilePaths = None,
    ) -> Dict[str, Any]:
        """
        Updates a lab result. `test_date` defaults to today.

        Attachments: leave `result_file_path` as None to keep whatever is stored.
        Pass a list of paths (or a JSON array string) to replace them; an empty
        list, or files.CLEAR_ATTACHMENTS, removes them all.
        """
        result = await self.call(
            UpdateLabResult,
            dict,
            result_id=result_id,
            test_name=test_name,
            result_summary=result_summary,
            test_date=test_date or today(),
            result_file_path=file_path_field(result_file_path),
        )
        return result.as_object()

    async def delete_lab_result(self, result_id: int) -> Dict[str, Any]:
        # The backend also removes the attached files from disk
        result = await self.call(DeleteLabResult, dict, result_id=result_id)
        return result.as_object()
