#!/usr/bin/env python3
# encoding : utf-8
# create at: 2026/10/12-下午6:18
from typing import Any, Dict, Generator, List, Optional, Protocol, Tuple, Type, TypeVar, Union

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from docr_client.errors import DecodeError
from docr_client.response import ListOptions, Response, paginate
from docr_client.spec import (
    DockerCredentials,
    GarbageCollection,
    GarbageCollectionRoot,
    GarbageCollectionsRoot,
    Registry,
    RegistryCreateRequest,
    RegistryDockerCredentialsRequest,
    RegistryRoot,
    RepositoriesRoot,
    Repository,
    RepositoryTag,
    RepositoryTagsRoot,
    UpdateGarbageCollectionRequest,
)
from docr_client.utlis import REGISTRY_PATH, escape_path_segment

TimeoutType = Union[float, httpx.Timeout, None]
RootT = TypeVar("RootT", bound=BaseModel)


class Requester(Protocol):
    def new_request(
        self,
        method: str,
        path: str,
        body: Optional[Union[BaseModel, Dict[str, Any]]] = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: TimeoutType = None,
    ) -> httpx.Request:
        ...

    def do(self, request: httpx.Request) -> Response:
        ...


def _decode(resp: Response, root: Type[RootT]) -> RootT:
    try:
        return root.model_validate(resp.json())
    except ValueError as exc:
        # ValidationError is a ValueError too, keep the pydantic summary for it
        reason = str(exc) if isinstance(exc, ValidationError) else f"invalid json: {exc}"
        raise DecodeError(root.__name__, reason) from exc


def _list_params(opts: Optional[ListOptions]) -> Optional[Dict[str, int]]:
    if opts is None:
        return None
    return opts.to_params()


class RegistryService:
    """
    DigitalOcean Container Registry endpoints, one method for each api operation.

    Every method sends exactly one request. `timeout` is handed to the request unchanged,
    api errors raise `APIError`, bodies that can not be decoded raise `DecodeError`.
    """

    def __init__(self, client: Requester):
        self.client = client

    def _send(
        self,
        method: str,
        path: str,
        body: Optional[BaseModel] = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: TimeoutType = None,
    ) -> Response:
        request = self.client.new_request(method, path, body=body, params=params, timeout=timeout)
        return self.client.do(request)

    @staticmethod
    def _repository_path(registry: str, repository: str) -> str:
        return f"{REGISTRY_PATH}/{registry}/repositories/{escape_path_segment(repository)}"

    def create(self, request: RegistryCreateRequest, timeout: TimeoutType = None) -> Tuple[Registry, Response]:
        resp = self._send("POST", REGISTRY_PATH, body=request, timeout=timeout)
        root = _decode(resp, RegistryRoot)
        logger.info(f"create registry:{root.registry.name} success")
        return root.registry, resp

    def get(self, timeout: TimeoutType = None) -> Tuple[Registry, Response]:
        resp = self._send("GET", REGISTRY_PATH, timeout=timeout)
        return _decode(resp, RegistryRoot).registry, resp

    def delete(self, timeout: TimeoutType = None) -> Response:
        resp = self._send("DELETE", REGISTRY_PATH, timeout=timeout)
        logger.info("delete registry success")
        return resp

    def docker_credentials(
        self,
        request: Optional[RegistryDockerCredentialsRequest] = None,
        timeout: TimeoutType = None,
    ) -> Tuple[DockerCredentials, Response]:
        """
        Fetch a docker `config.json` with credentials for the registry.

        Args:
            request (RegistryDockerCredentialsRequest): read/write access and expiry, read-only
                credentials without expiry when not present.

        Returns:
            (DockerCredentials, Response), the payload is kept as raw bytes
        """
        request = request or RegistryDockerCredentialsRequest()
        resp = self._send(
            "GET",
            f"{REGISTRY_PATH}/docker-credentials",
            params=request.to_params(),
            timeout=timeout,
        )
        return DockerCredentials(docker_config_json=resp.content), resp

    def list_repositories(
        self,
        registry: str,
        opts: Optional[ListOptions] = None,
        timeout: TimeoutType = None,
    ) -> Tuple[List[Repository], Response]:
        resp = self._send(
            "GET",
            f"{REGISTRY_PATH}/{registry}/repositories",
            params=_list_params(opts),
            timeout=timeout,
        )
        return _decode(resp, RepositoriesRoot).repositories, resp

    def list_repository_tags(
        self,
        registry: str,
        repository: str,
        opts: Optional[ListOptions] = None,
        timeout: TimeoutType = None,
    ) -> Tuple[List[RepositoryTag], Response]:
        """
        List tags of a repository.

        Args:
            registry (str): registry name
            repository (str): repository name, may contain `/`, it's sent as one path segment
            opts (ListOptions): page and per_page
        """
        resp = self._send(
            "GET",
            f"{self._repository_path(registry, repository)}/tags",
            params=_list_params(opts),
            timeout=timeout,
        )
        return _decode(resp, RepositoryTagsRoot).tags, resp

    def delete_tag(self, registry: str, repository: str, tag: str, timeout: TimeoutType = None) -> Response:
        resp = self._send("DELETE", f"{self._repository_path(registry, repository)}/tags/{tag}", timeout=timeout)
        logger.info(f"delete tag:{registry}/{repository}:{tag} success")
        return resp

    def delete_manifest(self, registry: str, repository: str, digest: str, timeout: TimeoutType = None) -> Response:
        resp = self._send(
            "DELETE",
            f"{self._repository_path(registry, repository)}/digests/{digest}",
            timeout=timeout,
        )
        logger.info(f"delete manifest:{registry}/{repository}@{digest} success")
        return resp

    def start_garbage_collection(
        self, registry: str, timeout: TimeoutType = None
    ) -> Tuple[GarbageCollection, Response]:
        resp = self._send("POST", f"{REGISTRY_PATH}/{registry}/garbage-collection", timeout=timeout)
        gc = _decode(resp, GarbageCollectionRoot).garbage_collection
        logger.info(f"garbage collection {gc.uuid} started on {registry}, status: {gc.status}")
        return gc, resp

    def get_garbage_collection(
        self, registry: str, timeout: TimeoutType = None
    ) -> Tuple[GarbageCollection, Response]:
        """the active garbage collection of the registry"""
        resp = self._send("GET", f"{REGISTRY_PATH}/{registry}/garbage-collection", timeout=timeout)
        return _decode(resp, GarbageCollectionRoot).garbage_collection, resp

    def list_garbage_collections(
        self,
        registry: str,
        opts: Optional[ListOptions] = None,
        timeout: TimeoutType = None,
    ) -> Tuple[List[GarbageCollection], Response]:
        resp = self._send(
            "GET",
            f"{REGISTRY_PATH}/{registry}/garbage-collections",
            params=_list_params(opts),
            timeout=timeout,
        )
        return _decode(resp, GarbageCollectionsRoot).garbage_collections, resp

    def update_garbage_collection(
        self,
        registry: str,
        gc_uuid: str,
        request: UpdateGarbageCollectionRequest,
        timeout: TimeoutType = None,
    ) -> Tuple[GarbageCollection, Response]:
        resp = self._send(
            "PUT",
            f"{REGISTRY_PATH}/{registry}/garbage-collection/{gc_uuid}",
            body=request,
            timeout=timeout,
        )
        gc = _decode(resp, GarbageCollectionRoot).garbage_collection
        if request.cancel:
            logger.info(f"garbage collection {gc_uuid} on {registry} cancel requested, status: {gc.status}")
        return gc, resp

    def iter_repositories(
        self, registry: str, per_page: Optional[int] = None, timeout: TimeoutType = None
    ) -> Generator[Repository, None, None]:
        return paginate(self.list_repositories, registry, per_page=per_page, timeout=timeout)

    def iter_repository_tags(
        self, registry: str, repository: str, per_page: Optional[int] = None, timeout: TimeoutType = None
    ) -> Generator[RepositoryTag, None, None]:
        return paginate(self.list_repository_tags, registry, repository, per_page=per_page, timeout=timeout)

    def iter_garbage_collections(
        self, registry: str, per_page: Optional[int] = None, timeout: TimeoutType = None
    ) -> Generator[GarbageCollection, None, None]:
        return paginate(self.list_garbage_collections, registry, per_page=per_page, timeout=timeout)
