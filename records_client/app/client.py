# app/client.py
#
# This is the main entry point of the package. RecordsApiClient gathers the
# per-resource operations on top of the transport, the same way the API
# side gathers its routers onto one app.
#
# Every operation is a coroutine performing exactly one request. None of them
# raise: failures come back as {"success": False, "message": ...} for object
# endpoints and as [] for list endpoints. Use `send()` directly when the kind
# of failure matters.

from .transport import ApiTransport
from .resources.auth import AuthResource
from .resources.patients import PatientResource
from .resources.staff import StaffResource
from .resources.consultations import ConsultationResource
from .resources.lab_results import LabResultResource
from .resources.appointments import AppointmentResource
from .resources.reaccess import ReaccessResource
from .resources.logs import LogResource


class RecordsApiClient(
    AuthResource,
    PatientResource,
    StaffResource,
    ConsultationResource,
    LabResultResource,
    AppointmentResource,
    ReaccessResource,
    LogResource,
    ApiTransport,
):
    """
    Client for the clinic records backend.

        api = RecordsApiClient()  # RECORDS_API_BASE_URL or the emulator default
        result = await api.login("staff", "secret", username="admin1")
    """

    def file_url(self, relative_path: str) -> str:
        """Absolute URL of an uploaded file, from the relative path the backend stores."""
        return self.url_for(relative_path)
