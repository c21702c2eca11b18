# https://docs.digitalocean.com/reference/api/api-reference/#tag/Container-Registry
import datetime
import json
import typing

from pydantic import Field

from docr_client.utlis import CustomModel


class Registry(CustomModel):
    name: str
    created_at: typing.Optional[datetime.datetime] = None
    region: typing.Optional[str] = None
    storage_usage_bytes: typing.Optional[int] = None
    storage_usage_bytes_updated_at: typing.Optional[datetime.datetime] = None


class RegistryCreateRequest(CustomModel):
    name: str
    subscription_tier_slug: typing.Optional[str] = None
    region: typing.Optional[str] = None


class RegistryDockerCredentialsRequest(CustomModel):
    read_write: bool = False
    # None means "let the server decide", 0 is sent as is
    expiry_seconds: typing.Optional[int] = None

    def to_params(self) -> typing.Dict[str, str]:
        params = {"read_write": "true" if self.read_write else "false"}
        if self.expiry_seconds is not None:
            params["expiry_seconds"] = str(int(self.expiry_seconds))
        return params


class DockerCredentials(CustomModel):
    docker_config_json: bytes

    def config(self) -> typing.Dict[str, typing.Any]:
        """the payload decoded as a docker `config.json` document"""
        return json.loads(self.docker_config_json)


class RepositoryTag(CustomModel):
    registry_name: str
    repository: str
    tag: str
    manifest_digest: str
    compressed_size_bytes: int = 0
    size_bytes: int = 0
    updated_at: typing.Optional[datetime.datetime] = None


class Repository(CustomModel):
    registry_name: str
    name: str
    tag_count: int = 0
    latest_tag: typing.Optional[RepositoryTag] = None


class GarbageCollection(CustomModel):
    uuid: str
    registry_name: str
    # server defined, e.g. requested, waiting for write JWTs to expire, scanning manifests,
    # deleting unreferenced blobs, cancelling, failed, succeeded, cancelled
    status: str
    created_at: typing.Optional[datetime.datetime] = None
    updated_at: typing.Optional[datetime.datetime] = None
    blobs_deleted: int = 0
    freed_bytes: int = 0


class UpdateGarbageCollectionRequest(CustomModel):
    cancel: bool


class RegistryRoot(CustomModel):
    registry: Registry


class RepositoriesRoot(CustomModel):
    repositories: typing.List[Repository] = Field(default_factory=list)


class RepositoryTagsRoot(CustomModel):
    tags: typing.List[RepositoryTag] = Field(default_factory=list)


class GarbageCollectionRoot(CustomModel):
    garbage_collection: GarbageCollection


class GarbageCollectionsRoot(CustomModel):
    garbage_collections: typing.List[GarbageCollection] = Field(default_factory=list)
