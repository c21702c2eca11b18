import urllib.parse

from pydantic import BaseModel, ConfigDict

from docr_client._version import version

DEFAULT_BASE_URL: str = "https://api.digitalocean.com"
DEFAULT_TIMEOUT: float = 30.0
USER_AGENT: str = f"docr-client/{version}"
MEDIA_TYPE_JSON = "application/json"

REGISTRY_PATH = "/v2/registry"


def escape_path_segment(value: str) -> str:
    """
    percent-encode `value` so it stays a single url path segment

    >>> escape_path_segment("test/repository")
    'test%2Frepository'
    """
    return urllib.parse.quote(str(value), safe="")


class CustomModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def model_dump(self, *args, **kwargs):
        if kwargs.get("exclude_none") is None:
            kwargs["exclude_none"] = True
        return super(CustomModel, self).model_dump(*args, **kwargs)

    def model_dump_json(self, *args, **kwargs):
        if kwargs.get("exclude_none") is None:
            kwargs["exclude_none"] = True
        return super(CustomModel, self).model_dump_json(*args, **kwargs)
