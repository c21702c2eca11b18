#!/usr/bin/env python3
# encoding : utf-8
# create at: 2026/10/14-下午10:16
import functools
import json
import sys
from typing import Any, Optional

import httpx
from loguru import logger
from pydantic import BaseModel
from typer import Argument, BadParameter, Context, Exit, Option, Typer, echo

from docr_client.client import Client
from docr_client.errors import RegistryClientError
from docr_client.spec import RegistryCreateRequest, RegistryDockerCredentialsRequest, UpdateGarbageCollectionRequest
from docr_client.utlis import DEFAULT_BASE_URL

app = Typer(name="docr", help="DigitalOcean Container Registry client")


class GlobalOptions(BaseModel):
    token: str = ""
    api_url: str = DEFAULT_BASE_URL
    debug: bool = False


def version_callback(value: bool):
    if value:
        from docr_client._version import version

        echo(f"docr client: {version}")
        raise Exit()


def new_client(ctx: Context) -> Client:
    global_options: GlobalOptions = ctx.obj
    if not global_options.token:
        raise BadParameter("an api token is required, use --token or DIGITALOCEAN_ACCESS_TOKEN")
    return Client(token=global_options.token, base_url=global_options.api_url)


def dump(value: Any):
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    elif isinstance(value, list):
        value = [one.model_dump(mode="json") if isinstance(one, BaseModel) else one for one in value]
    echo(json.dumps(value, indent=2))


def exit_on_error(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (RegistryClientError, httpx.HTTPError) as exc:
            echo(f"Error: {exc}", err=True)
            raise Exit(code=1)

    return wrapper


registry_argument = Argument(..., help="registry name")
repository_argument = Argument(..., help="repository name, like: my-app|team/my-app")


@app.command("get")
@exit_on_error
def get_registry(ctx: Context):
    with new_client(ctx) as client:
        registry, _ = client.registry.get()
    dump(registry)


@app.command("create")
@exit_on_error
def create_registry(
    ctx: Context,
    name: str = Argument(..., help="registry name, unique across DigitalOcean"),
    region: Optional[str] = Option(None, help="region slug, like: fra1"),
    subscription_tier: Optional[str] = Option(None, help="subscription tier slug, like: basic"),
):
    request = RegistryCreateRequest(name=name, region=region, subscription_tier_slug=subscription_tier)
    with new_client(ctx) as client:
        registry, _ = client.registry.create(request)
    dump(registry)


@app.command("delete")
@exit_on_error
def delete_registry(ctx: Context):
    with new_client(ctx) as client:
        client.registry.delete()
    echo("registry deleted")


@app.command("docker-config")
@exit_on_error
def docker_config(
    ctx: Context,
    read_write: bool = Option(False, "--read-write", help="grant push access too"),
    expiry_seconds: Optional[int] = Option(None, min=0, help="credentials lifetime, no expiry when not present"),
):
    request = RegistryDockerCredentialsRequest(read_write=read_write, expiry_seconds=expiry_seconds)
    with new_client(ctx) as client:
        credentials, _ = client.registry.docker_credentials(request)
    echo(credentials.docker_config_json.decode())


@app.command("list-repositories")
@exit_on_error
def list_repositories(
    ctx: Context,
    registry: str = registry_argument,
    per_page: Optional[int] = Option(None, min=1, help="page size used while walking all pages"),
):
    with new_client(ctx) as client:
        repositories = list(client.registry.iter_repositories(registry, per_page=per_page))
    dump(repositories)


@app.command("list-tags")
@exit_on_error
def list_tags(
    ctx: Context,
    registry: str = registry_argument,
    repository: str = repository_argument,
    per_page: Optional[int] = Option(None, min=1, help="page size used while walking all pages"),
):
    with new_client(ctx) as client:
        tags = list(client.registry.iter_repository_tags(registry, repository, per_page=per_page))
    dump(tags)


@app.command("delete-tag")
@exit_on_error
def delete_tag(
    ctx: Context,
    registry: str = registry_argument,
    repository: str = repository_argument,
    tag: str = Argument(..., help="tag to delete, like: latest"),
):
    with new_client(ctx) as client:
        client.registry.delete_tag(registry, repository, tag)
    echo(f"tag {repository}:{tag} deleted")


@app.command("delete-manifest")
@exit_on_error
def delete_manifest(
    ctx: Context,
    registry: str = registry_argument,
    repository: str = repository_argument,
    digest: str = Argument(..., help="manifest digest, like: sha256:e692...331f"),
):
    with new_client(ctx) as client:
        client.registry.delete_manifest(registry, repository, digest)
    echo(f"manifest {repository}@{digest} deleted")


@app.command("start-gc")
@exit_on_error
def start_gc(ctx: Context, registry: str = registry_argument):
    with new_client(ctx) as client:
        gc, _ = client.registry.start_garbage_collection(registry)
    dump(gc)


@app.command("get-gc")
@exit_on_error
def get_gc(ctx: Context, registry: str = registry_argument):
    with new_client(ctx) as client:
        gc, _ = client.registry.get_garbage_collection(registry)
    dump(gc)


@app.command("list-gc")
@exit_on_error
def list_gc(
    ctx: Context,
    registry: str = registry_argument,
    per_page: Optional[int] = Option(None, min=1, help="page size used while walking all pages"),
):
    with new_client(ctx) as client:
        gcs = list(client.registry.iter_garbage_collections(registry, per_page=per_page))
    dump(gcs)


@app.command("cancel-gc")
@exit_on_error
def cancel_gc(
    ctx: Context,
    registry: str = registry_argument,
    gc_uuid: str = Argument(..., help="garbage collection uuid"),
):
    with new_client(ctx) as client:
        gc, _ = client.registry.update_garbage_collection(
            registry, gc_uuid, UpdateGarbageCollectionRequest(cancel=True)
        )
    dump(gc)


@app.callback()
def main(
    ctx: Context,
    version: Optional[bool] = Option(None, "--version", callback=version_callback, is_eager=True),
    token: str = Option("", envvar="DIGITALOCEAN_ACCESS_TOKEN", help="api token", show_default=False),
    api_url: str = Option(DEFAULT_BASE_URL, envvar="DIGITALOCEAN_API_URL", help="api base url"),
    debug: bool = Option(False, help="log every request and response"),
):
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if debug else "WARNING")
    ctx.obj = GlobalOptions(token=token, api_url=api_url, debug=debug)


if __name__ == "__main__":
    app()
