"""Test fixtures package."""

from .fake_cluster import (
    FakeClusterReader,
    cluster_version,
    data_science_cluster,
    dsc_initialization,
    namespace,
    platform_cluster,
    ray_cluster,
)
from .static_checks import StaticCheck

__all__ = [
    "FakeClusterReader",
    "StaticCheck",
    "cluster_version",
    "data_science_cluster",
    "dsc_initialization",
    "namespace",
    "platform_cluster",
    "ray_cluster",
]
