#!/usr/bin/env python3
# encoding : utf-8
# create at: 2026/10/12-下午4:31
from typing import Dict

import httpx
from loguru import logger

REDACTED = "[redacted]"


def bearer_header(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TokenAuth(httpx.Auth):
    def __init__(self, token: str):
        if not token:
            raise ValueError("an api token is required for TokenAuth")
        self._token = token

    def auth_flow(self, request: httpx.Request):
        request.headers.update(bearer_header(self._token))
        yield request


def _safe_headers(headers: httpx.Headers) -> Dict[str, str]:
    safe = dict(headers)
    if "authorization" in safe:
        safe["authorization"] = REDACTED
    return safe


def request_hook(request: httpx.Request):
    logger.debug(f"{request.method} {request.url} {_safe_headers(request.headers)}")


def response_hook(response: httpx.Response):
    logger.debug(f"RESPONSE: {response.status_code} {response.url} {response.headers}")
