"""
Labeleer API Client
Wrapper for the Labeleer REST API: project locales and translation import/export.
"""
import logging

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from labeleer_cli.config import ApiConfig
from labeleer_cli.errors import RemoteRequestFailed
from labeleer_cli.formats import SupportedFormat
from labeleer_cli.labels import LabelFile

logger = logging.getLogger(__name__)


class LocaleEntry(BaseModel):
    """A locale configured on the remote project."""

    model_config = ConfigDict(populate_by_name=True)

    locale: str
    is_reference: bool = Field(alias="isReference")
    id: str | None = None
    created_at: str | None = Field(default=None, alias="createdAt")


class LocaleListResponse(BaseModel):
    data: list[LocaleEntry]


class LabeleerClient:
    """Client for the Labeleer API of a single project token.

    Requests carry no timeout and are never retried; a failure surfaces
    once as RemoteRequestFailed.
    """

    def __init__(self, access_token: str, api: ApiConfig | None = None, session: requests.Session | None = None):
        api = api or ApiConfig()
        self.base_url = api.base_url.rstrip("/")
        self.session = session or requests.Session()
        self.headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
            "User-Agent": api.user_agent,
        }

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """Send a request and raise RemoteRequestFailed on any non-2xx outcome."""
        url = f"{self.base_url}{endpoint}"
        logger.debug("%s %s", method, url)

        try:
            response = self.session.request(method, url, headers=self.headers, **kwargs)
        except requests.RequestException as e:
            raise RemoteRequestFailed(f"Unable to reach {self.base_url}: {e}") from e

        if not response.ok:
            logger.debug("%s %s answered %s", method, url, response.status_code)
            raise RemoteRequestFailed(
                f"{response.status_code} {response.reason}".strip(),
                status_code=response.status_code,
                reason=response.reason or "",
                body=response.text,
            )
        return response

    def fetch_locales(self, project_id: str) -> list[LocaleEntry]:
        """List the locales configured on the project."""
        response = self._request("GET", f"/project/{project_id}/locale")
        try:
            return LocaleListResponse.model_validate(response.json()).data
        except (ValueError, ValidationError) as e:
            raise RemoteRequestFailed(
                "Unexpected locale list returned by the server.",
                status_code=response.status_code,
                reason=response.reason or "",
                body=response.text,
            ) from e

    def export_translations(self, project_id: str, fmt: SupportedFormat) -> bytes:
        """Export every translation of the project as a raw file body in ``fmt``."""
        response = self._request(
            "GET",
            f"/project/{project_id}/translations/export",
            params={"format": fmt.value},
        )
        return response.content

    def publish_translations(self, project_id: str, labels: LabelFile) -> None:
        """Replace the project's translations with the given label file content."""
        self._request("POST", f"/project/{project_id}/translations", json={"entries": labels})
