#!/usr/bin/env python3
# encoding : utf-8
# create at: 2026/10/12-下午4:36
from typing import Optional

import httpx


class RegistryClientError(Exception):
    pass


class APIError(RegistryClientError):
    """
    the api answered with a non-2xx status

    Attributes:
        response: the raw `httpx.Response`
        status_code: http status code
        message: `message` from the error body, or the body text when it has none
        request_id: `request_id` from the error body, or the `x-request-id` header
        id: machine readable error id, like `not_found`
    """

    def __init__(
        self,
        response: httpx.Response,
        message: str = "",
        request_id: str = "",
        error_id: Optional[str] = None,
    ):
        self.response = response
        self.status_code = response.status_code
        self.message = message
        self.request_id = request_id
        self.id = error_id
        request = response.request
        super(APIError, self).__init__(
            f'{request.method} {request.url}: {self.status_code} (request "{request_id}") {message}'
        )

    @classmethod
    def from_response(cls, response: httpx.Response) -> "APIError":
        message, request_id, error_id = "", "", None
        body = response.read()
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict):
            message = data.get("message") or ""
            request_id = data.get("request_id") or ""
            error_id = data.get("id")
        if not message:
            message = body.decode(errors="replace").strip()
        if not request_id:
            request_id = response.headers.get("x-request-id", "")
        return cls(response, message=message, request_id=request_id, error_id=error_id)


class DecodeError(RegistryClientError):
    def __init__(self, target: str, reason: str = ""):
        self.target = target
        message = f"failed to decode {target} from response"
        if reason:
            message = f"{message}: {reason}"
        super(DecodeError, self).__init__(message)
