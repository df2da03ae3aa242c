"""Descriptors of the Kubernetes resource types the checks read."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ResourceType:
    """A Kubernetes API resource.

    Attributes:
        group: API group, "" for the core group
        version: API version within the group
        kind: Object kind
        plural: URL path segment
        namespaced: Whether objects live in namespaces
    """

    group: str
    version: str
    kind: str
    plural: str
    namespaced: bool = False

    @property
    def api_version(self) -> str:
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"

    def path(self, name: str | None = None, namespace: str | None = None) -> str:
        """API path for a collection or a single object."""
        parts = ["/apis" if self.group else "/api", self.api_version]
        if self.namespaced and namespace:
            parts += ["namespaces", namespace]
        parts.append(self.plural)
        if name:
            parts.append(name)
        return "/".join(parts)


DATA_SCIENCE_CLUSTER = ResourceType(
    group="datasciencecluster.opendatahub.io",
    version="v1",
    kind="DataScienceCluster",
    plural="datascienceclusters",
)

DSC_INITIALIZATION = ResourceType(
    group="dscinitialization.opendatahub.io",
    version="v1",
    kind="DSCInitialization",
    plural="dscinitializations",
)

CLUSTER_VERSION = ResourceType(
    group="config.openshift.io",
    version="v1",
    kind="ClusterVersion",
    plural="clusterversions",
)

NAMESPACE = ResourceType(group="", version="v1", kind="Namespace", plural="namespaces")

RAY_CLUSTER = ResourceType(
    group="ray.io",
    version="v1",
    kind="RayCluster",
    plural="rayclusters",
    namespaced=True,
)
