import pytest
import respx

from docr_client.client import Client

FAKE_API_URL = "https://api.docr-fake.yy"
FAKE_API_TOKEN = "dop_v1_fake_token"


@pytest.fixture(scope="function")
def api_url() -> str:
    return FAKE_API_URL


@pytest.fixture(scope="function")
def api_token() -> str:
    return FAKE_API_TOKEN


@pytest.fixture(scope="function")
def client(api_url, api_token):
    with Client(token=api_token, base_url=api_url) as client:
        yield client


@pytest.fixture(scope="function")
def registry_service(client):
    return client.registry


@pytest.fixture(scope="function")
def api_mock(api_url):
    with respx.mock(base_url=api_url, assert_all_mocked=True, assert_all_called=False) as api_mock:
        yield api_mock


@pytest.fixture(scope="function")
def registry_root(api_mock):
    yield api_mock.route(path__regex=r"/v2/registry$", name="registry")


@pytest.fixture(scope="function")
def registry_docker_credentials(api_mock):
    yield api_mock.route(path__regex=r"/v2/registry/docker-credentials$", method="GET", name="docker_credentials")


@pytest.fixture(scope="function")
def registry_repositories(api_mock):
    yield api_mock.route(path__regex=r"/v2/registry/(?P<registry>[^/]+)/repositories$", name="repositories")


@pytest.fixture(scope="function")
def registry_repository_tags(api_mock):
    yield api_mock.route(
        path__regex=r"/v2/registry/(?P<registry>[^/]+)/repositories/(?P<repository>.+)/tags$",
        name="repository_tags",
    )


@pytest.fixture(scope="function")
def registry_repository_tag(api_mock):
    yield api_mock.route(
        path__regex=r"/v2/registry/(?P<registry>[^/]+)/repositories/(?P<repository>.+)/tags/(?P<tag>[^/]+)$",
        name="repository_tag",
    )


@pytest.fixture(scope="function")
def registry_repository_digest(api_mock):
    yield api_mock.route(
        path__regex=r"/v2/registry/(?P<registry>[^/]+)/repositories/(?P<repository>.+)/digests/(?P<digest>[^/]+)$",
        name="repository_digest",
    )


@pytest.fixture(scope="function")
def registry_garbage_collection(api_mock):
    yield api_mock.route(path__regex=r"/v2/registry/(?P<registry>[^/]+)/garbage-collection$", name="gc")


@pytest.fixture(scope="function")
def registry_garbage_collection_uuid(api_mock):
    yield api_mock.route(
        path__regex=r"/v2/registry/(?P<registry>[^/]+)/garbage-collection/(?P<gc_uuid>[^/]+)$",
        name="gc_uuid",
    )


@pytest.fixture(scope="function")
def registry_garbage_collections(api_mock):
    yield api_mock.route(path__regex=r"/v2/registry/(?P<registry>[^/]+)/garbage-collections$", name="gcs")
