from __future__ import annotations

import logging
from typing import Any, List, Optional

import requests

from standards.domain.constants import DEFAULT_API_BASE_URL
from standards.domain.errors import APIClientError
from standards.domain.workspace_models import ProjectRef
from standards.infra.network.common import DEFAULT_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)

PROJECTS_ENDPOINT = "/api/projects"


class SagebrushAPIClient:
    """Lists the projects that get a directory in the standards working tree."""

    def __init__(
            self,
            base_url: str = DEFAULT_API_BASE_URL,
            timeout: int = DEFAULT_TIMEOUT,
            session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session

    def fetch_projects(self) -> List[ProjectRef]:
        """Query the project listing endpoint."""
        url = f"{self.base_url}{PROJECTS_ENDPOINT}"
        headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        getter = self._session.get if self._session is not None else requests.get

        logger.info(f"Fetching projects from {url}")
        try:
            response = getter(url, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise APIClientError(f"Project listing failed: {e}", status_code=status) from e
        except requests.exceptions.RequestException as e:
            raise APIClientError(f"Project listing unreachable: {e}") from e
        except ValueError as e:
            raise APIClientError(f"Project listing returned invalid JSON: {e}") from e

        return _parse_projects(payload)


def _parse_projects(payload: Any) -> List[ProjectRef]:
    """Accept either a bare list or {"projects": [...]}."""
    if isinstance(payload, dict):
        payload = payload.get("projects")
    if not isinstance(payload, list):
        raise APIClientError("Project listing returned an unexpected payload")

    projects: List[ProjectRef] = []
    for item in payload:
        name = item.get("name") if isinstance(item, dict) else None
        if not isinstance(name, str) or not name.strip():
            raise APIClientError(f"Project entry without a name: {item!r}")
        projects.append(ProjectRef(name=name.strip()))
    return projects
