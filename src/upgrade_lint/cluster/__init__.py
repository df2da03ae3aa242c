"""Read-only cluster access."""

from .client import ClusterReader, ConnectionConfig, KubeClient
from .detect import detect_openshift_version, detect_platform_version
from .kubeconfig import load_connection
from .resources import ResourceType

__all__ = [
    "ClusterReader",
    "ConnectionConfig",
    "KubeClient",
    "ResourceType",
    "detect_openshift_version",
    "detect_platform_version",
    "load_connection",
]
