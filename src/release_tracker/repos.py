"""Parsing of ``namespace/name`` repository identifiers."""

from __future__ import annotations

from typing import List

from .errors import ConfigurationError
from .models import RepositoryRef

REPO_SEPARATOR = "/"
REPO_LIST_SEPARATOR = ","


def split_repo_ref(value: str, sep: str = REPO_SEPARATOR) -> RepositoryRef:
    """Split ``namespace<sep>name`` into a :class:`RepositoryRef`.

    Only the first two parts of ``value.split(sep)`` are kept, so
    ``"a/b/c"`` yields namespace ``"a"`` and name ``"b"``.

    Raises:
        ConfigurationError: If ``sep`` does not occur in ``value``.
    """
    parts = value.split(sep)
    if len(parts) < 2:
        raise ConfigurationError("Drone repository should be made of <namespace>/<name>")
    return RepositoryRef(namespace=parts[0], name=parts[1])


def split_repo_list(value: str) -> List[RepositoryRef]:
    """Parse a comma-separated repository list.

    Items are not stripped. The first malformed item aborts the whole list.
    """
    return [split_repo_ref(item) for item in value.split(REPO_LIST_SEPARATOR)]
