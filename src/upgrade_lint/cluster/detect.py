"""Installed platform and OpenShift version detection."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from packaging.version import Version

from ..exceptions import (
    InvalidVersionError,
    ResourceNotFoundError,
    VersionDetectionError,
)
from ..utils.logging import get_logger
from ..utils.version import parse_tolerant
from .resources import CLUSTER_VERSION, DATA_SCIENCE_CLUSTER, DSC_INITIALIZATION

if TYPE_CHECKING:
    from ..check.context import RunContext
    from .client import ClusterReader

logger = get_logger(__name__)


def _release_version(obj: dict[str, Any]) -> str | None:
    status = obj.get("status") or {}
    release = status.get("release") or {}
    return release.get("version") or None


def detect_platform_version(ctx: RunContext, client: ClusterReader) -> Version:
    """Read the installed platform version.

    Tries the DataScienceCluster first, then DSCInitialization, and uses the
    first ``.status.release.version`` found.

    Raises:
        VersionDetectionError: If neither resource reports a parseable version
    """
    for resource in (DATA_SCIENCE_CLUSTER, DSC_INITIALIZATION):
        try:
            items = client.list(ctx, resource)
        except ResourceNotFoundError:
            logger.debug("platform_resource_missing", kind=resource.kind)
            continue

        for item in items:
            raw = _release_version(item)
            if raw is None:
                continue
            try:
                version = parse_tolerant(raw)
            except InvalidVersionError as e:
                raise VersionDetectionError(
                    f"{resource.kind} reports an invalid version {raw!r}",
                    context={"kind": resource.kind},
                ) from e
            logger.debug(
                "platform_version_detected", kind=resource.kind, version=str(version)
            )
            return version

    raise VersionDetectionError(
        "could not detect the installed platform version",
        suggestion="Make sure the operator is installed and a DataScienceCluster "
        "or DSCInitialization exists",
    )


def detect_openshift_version(ctx: RunContext, client: ClusterReader) -> Version:
    """Read the OpenShift version from the "version" ClusterVersion.

    Uses the most recent Completed history entry, falling back to the desired
    version while the first install is still in progress.

    Raises:
        VersionDetectionError: If no version can be determined
        ClusterError: If the API call fails for another reason
    """
    try:
        obj = client.get(ctx, CLUSTER_VERSION, "version")
    except ResourceNotFoundError as e:
        raise VersionDetectionError("ClusterVersion 'version' not found") from e

    status = obj.get("status") or {}
    raw = None
    for entry in status.get("history") or []:
        if entry.get("state") == "Completed" and entry.get("version"):
            raw = entry["version"]
            break
    if raw is None:
        raw = (status.get("desired") or {}).get("version")
    if not raw:
        raise VersionDetectionError("ClusterVersion reports no version")

    try:
        return parse_tolerant(raw)
    except InvalidVersionError as e:
        raise VersionDetectionError(
            f"ClusterVersion reports an invalid version {raw!r}"
        ) from e
