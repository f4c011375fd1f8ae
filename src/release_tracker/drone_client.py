"""Drone CI REST API client for build history retrieval."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional

import requests

from .config import Config
from .errors import ApiError, AuthenticationError
from .models import BuildRecord, RepositoryRef

logger = logging.getLogger(__name__)


class DroneClient:
    """Small, typed client for the Drone builds API.

    Requests are made once; there is no retry policy. Callers decide what a
    failed page means for them.
    """

    def __init__(self, config: Config, timeout_seconds: int = 30) -> None:
        """Initialize an authenticated Drone API client.

        Args:
            config: Validated runtime configuration including server and token.
            timeout_seconds: Per-request timeout in seconds.
        """
        self._config = config
        self._timeout_seconds = timeout_seconds
        self._base_url = f"{config.server}/api"
        self._local = threading.local()

    @property
    def _session(self) -> requests.Session:
        """Session owned by the calling thread.

        ``requests.Session`` is not documented as thread-safe, so concurrent
        repository fetches each get their own.
        """
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update(
                {
                    "Accept": "application/json",
                    "Authorization": f"Bearer {self._config.token}",
                }
            )
            self._local.session = session
        return session

    def _build_url(self, path: str) -> str:
        """Build a fully qualified API URL from a path below ``/api``."""
        return f"{self._base_url}/{path.lstrip('/')}"

    def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Execute a single GET request and decode its JSON body.

        Raises:
            AuthenticationError: If the server rejects the token (HTTP 401/403).
            ApiError: If the request fails, returns HTTP >= 400, or does not
                return valid JSON.
        """
        url = self._build_url(path)

        try:
            response = self._session.get(url, params=params, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise ApiError(f"Drone request failed: GET {url}") from exc

        status_code = response.status_code
        if status_code in (401, 403):
            raise AuthenticationError(
                f"Drone rejected the access token: GET {url} returned {status_code}"
            )
        if status_code >= 400:
            raise ApiError(f"Drone API request failed: GET {url} returned {status_code} - {response.text}")

        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"Drone API returned invalid JSON: GET {url}") from exc

    def _parse_build(self, item: Any) -> Optional[BuildRecord]:
        """Convert one build payload into a record, or ``None`` if it is malformed."""
        if not isinstance(item, dict):
            return None

        created = item.get("created")
        event = item.get("event")
        if created is None or not event:
            return None

        try:
            return BuildRecord(
                id=int(item.get("id") or 0),
                number=int(item.get("number") or 0),
                created=int(created),
                event=str(event),
                deploy_to=str(item.get("deploy_to") or ""),
            )
        except (TypeError, ValueError):
            return None

    def list_builds(self, repo: RepositoryRef, page: int, size: int) -> List[BuildRecord]:
        """List one page of builds for a repository.

        Malformed build payloads are skipped.

        Args:
            repo: Repository to list builds for.
            page: 1-based page number.
            size: Number of builds per page.

        Raises:
            ApiError: If the request fails or the payload is not a list.
        """
        payload = self._get_json(
            f"repos/{repo.namespace}/{repo.name}/builds",
            params={"page": page, "per_page": size},
        )
        if not isinstance(payload, list):
            raise ApiError(
                f"Drone API returned unexpected payload shape for {repo.slug} builds page {page}"
            )

        builds: List[BuildRecord] = []
        for item in payload:
            build = self._parse_build(item)
            if build is None:
                logger.debug(
                    "Skipping malformed build payload",
                    extra={"repo": repo.slug, "page": page, "payload": item},
                )
                continue
            builds.append(build)

        return builds
