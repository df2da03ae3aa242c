"""Pytest configuration and fixtures for the test suite."""

import io

import pytest
from packaging.version import Version

from upgrade_lint.check.context import RunContext
from upgrade_lint.check.registry import CheckRegistry
from upgrade_lint.check.target import Target
from upgrade_lint.cli_commands.shared import reset_cli_state
from tests.fixtures import FakeClusterReader, platform_cluster


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep the user's config, kubeconfig and env out of every test."""
    import os

    for key in list(os.environ):
        if key.startswith("UPGRADE_LINT_"):
            monkeypatch.delenv(key)
    monkeypatch.delenv("KUBECONFIG", raising=False)
    monkeypatch.delenv("KUBERNETES_SERVICE_HOST", raising=False)
    monkeypatch.chdir(tmp_path)
    reset_cli_state()
    yield
    reset_cli_state()


@pytest.fixture
def clock():
    """Provide a controllable clock."""
    return FakeClock()


@pytest.fixture
def ctx():
    """Provide an unbounded run context."""
    return RunContext()


@pytest.fixture
def fake_cluster():
    """Provide an empty in-memory cluster."""
    return FakeClusterReader()


@pytest.fixture
def upgrade_cluster():
    """Provide a 2.17 cluster with CodeFlare and ModelMesh enabled on OpenShift 4.19."""
    return platform_cluster(
        "2.17.0",
        components={"codeflare": "Managed", "modelmeshserving": "Managed"},
        openshift="4.19.3",
    )


@pytest.fixture
def upgrade_target(upgrade_cluster):
    """Provide a 2.17.0 -> 3.0.0 target over the upgrade cluster."""
    return Target(
        client=upgrade_cluster,
        current_version=Version("2.17.0"),
        target_version=Version("3.0.0"),
    )


@pytest.fixture
def registry():
    """Provide an empty registry."""
    return CheckRegistry()


@pytest.fixture
def out():
    """Provide a text buffer for rendered output."""
    return io.StringIO()
