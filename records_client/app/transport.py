# app/transport.py
#
# This module is the only place that talks HTTP. It sends an action to the
# backend with httpx, and folds every possible outcome into an ApiResult so
# that no caller ever sees an exception from the network.

import os
from enum import Enum
from typing import Any, Dict, List, Optional, Type

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from . import config
from .actions import ApiAction, UploadLabFile


class ErrorKind(str, Enum):
    NETWORK = "network" # DNS, refused connection, timeout, unreadable upload file
    SERVER = "server" # Any status other than 200
    DECODE = "decode" # Body is not JSON, or not the JSON kind we expected
    REQUEST = "request" # The request itself failed validation; nothing was sent


class ApiResult(BaseModel):
    """Outcome of one request: either decoded JSON data or a tagged failure."""
    data: Any = None
    error_kind: Optional[ErrorKind] = None
    status_code: Optional[int] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def invalid(cls, error: ValidationError) -> "ApiResult":
        return cls(error_kind=ErrorKind.REQUEST, detail=_describe_validation_error(error))

    def expecting(self, expected_type: type) -> "ApiResult":
        """Turns a successful result of the wrong JSON kind into a decode failure."""
        if self.ok and not isinstance(self.data, expected_type):
            expected = "array" if expected_type is list else "object"
            return ApiResult(
                error_kind=ErrorKind.DECODE,
                status_code=self.status_code,
                detail=f"expected a JSON {expected}, got {type(self.data).__name__}",
            )
        return self

    def parse(self, schema: Any) -> "ApiResult":
        """
        Decodes `data` into a typed value (a Pydantic model, or e.g. List[Model]).
        A body that does not fit the schema becomes a decode failure.
        """
        if not self.ok:
            return self
        try:
            value = TypeAdapter(schema).validate_python(self.data)
        except ValidationError as e:
            return ApiResult(
                error_kind=ErrorKind.DECODE,
                status_code=self.status_code,
                detail=_describe_validation_error(e),
            )
        return ApiResult(data=value, status_code=self.status_code)

    def failure_message(self, error_prefix: str = "Connection Error", server_message: str = "Server Error") -> str:
        if self.error_kind == ErrorKind.SERVER:
            return server_message
        if self.error_kind == ErrorKind.REQUEST:
            return f"Invalid Request: {self.detail}"
        return f"{error_prefix}: {self.detail}"

    def as_object(self, error_prefix: str = "Connection Error", server_message: str = "Server Error", **extra: Any) -> Dict[str, Any]:
        """
        The decoded JSON object, or the failure sentinel
        {"success": False, "message": ...} merged with any operation-specific
        placeholder keys.
        """
        if self.ok:
            return self.data
        sentinel = {"success": False, "message": self.failure_message(error_prefix, server_message)}
        sentinel.update(extra)
        return sentinel

    def as_list(self, context: str) -> List[Any]:
        """The decoded JSON array, or an empty list after a diagnostic line."""
        if self.ok:
            return self.data
        print(f"API: Error {context}: {self.failure_message()}")
        return []


def _describe_validation_error(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "request"
        problems.append(f"{location}: {item.get('msg')}")
    return "; ".join(problems)


class ApiTransport:
    """
    Sends actions to the records backend. Holds configuration only, never
    connection state: each request opens and closes its own httpx client.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = config.normalize_base_url(base_url or config.BASE_URL)
        self.timeout = timeout if timeout is not None else config.TIMEOUT
        self.transport = transport

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _client(self) -> httpx.AsyncClient:
        options: Dict[str, Any] = {}
        if self.timeout is not None:
            options["timeout"] = self.timeout
        if self.transport is not None:
            options["transport"] = self.transport
        return httpx.AsyncClient(**options)

    async def _dispatch(self, client: httpx.AsyncClient, action: ApiAction) -> httpx.Response:
        url = self.url_for(action.path)
        if action.method == "GET":
            return await client.get(url, params=action.payload())
        if isinstance(action, UploadLabFile):
            # Lab files are capped at 10MB server-side, so the whole file is read
            # before the request starts and httpx never touches the disk
            with open(action.file_path, "rb") as handle:
                content = handle.read()
            files = {"file": (os.path.basename(action.file_path), content)}
            return await client.post(url, files=files)
        return await client.post(url, json=action.payload())

    async def send(self, action: ApiAction) -> ApiResult:
        """Performs exactly one request for `action`. Never raises."""
        try:
            async with self._client() as client:
                response = await self._dispatch(client, action)
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as e:
            detail = str(e) or e.__class__.__name__
            print(f"API: Network error on {action.method} {action.path}: {detail}")
            return ApiResult(error_kind=ErrorKind.NETWORK, detail=detail)

        if response.status_code != 200:
            # Whatever the server put in the body is discarded
            print(f"API: Server error on {action.method} {action.path}: HTTP {response.status_code}")
            return ApiResult(
                error_kind=ErrorKind.SERVER,
                status_code=response.status_code,
                detail=f"HTTP {response.status_code}",
            )

        try:
            data = response.json()
        except ValueError as e:
            print(f"API: Could not decode response from {action.path}: {e}")
            return ApiResult(error_kind=ErrorKind.DECODE, status_code=200, detail=str(e))

        return ApiResult(data=data, status_code=200)

    async def call(self, action_type: Type[ApiAction], expect: type, /, **fields: Any) -> ApiResult:
        """
        Builds the action from keyword fields, sends it and checks the JSON kind.
        `action_type` and `expect` are positional-only; action fields such as
        AddSystemLog.action_type reuse those names.
        """
        try:
            action = action_type(**fields)
        except ValidationError as e:
            print(f"API: Invalid {action_type.__name__} request: {e.error_count()} problem(s)")
            return ApiResult.invalid(e)
        result = await self.send(action)
        return result.expecting(expect)
