#!/usr/bin/env python3
# encoding : utf-8
# create at: 2026/10/12-下午4:06
from typing import Any, Dict, Optional, Union

import httpx
from pydantic import BaseModel

from docr_client.auth import TokenAuth, request_hook, response_hook
from docr_client.errors import APIError
from docr_client.registry import RegistryService, TimeoutType
from docr_client.response import Response
from docr_client.utlis import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, MEDIA_TYPE_JSON, USER_AGENT


class Client(httpx.Client):
    """
    http client for the DigitalOcean api

    >>> with Client(token="dop_v1_xxx") as client:
    ...     registry, resp = client.registry.get()
    """

    def __init__(
        self,
        token: str = "",
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = USER_AGENT,
        **kwargs,
    ):
        kwargs.setdefault("timeout", DEFAULT_TIMEOUT)
        if token:
            kwargs.setdefault("auth", TokenAuth(token))
        headers = {"Accept": MEDIA_TYPE_JSON, "User-Agent": user_agent}
        headers.update(kwargs.pop("headers", None) or {})
        event_hooks = kwargs.pop("event_hooks", None) or {}
        super(Client, self).__init__(base_url=base_url, headers=headers, **kwargs)
        self.event_hooks = {
            "request": [request_hook, *event_hooks.get("request", [])],
            "response": [response_hook, *event_hooks.get("response", [])],
        }
        self.registry = RegistryService(self)

    def new_request(
        self,
        method: str,
        path: str,
        body: Optional[Union[BaseModel, Dict[str, Any]]] = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: TimeoutType = None,
    ) -> httpx.Request:
        if not path.startswith("/"):
            path = f"/{path}"
        if isinstance(body, BaseModel):
            body = body.model_dump(mode="json")
        extra = {}
        if timeout is not None:
            extra["timeout"] = timeout
        return self.build_request(method.upper(), path, json=body, params=params or None, **extra)

    def do(self, request: httpx.Request) -> Response:
        """
        send the request, raise `APIError` for a non-2xx status

        transport errors and timeouts from httpx are not caught
        """
        resp = self.send(request)
        if not resp.is_success:
            raise APIError.from_response(resp)
        return Response(resp)
