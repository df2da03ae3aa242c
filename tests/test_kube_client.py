"""Tests for the Kubernetes REST client."""

import httpx
import pytest
import respx

from upgrade_lint.check.context import RunContext
from upgrade_lint.cluster.client import ConnectionConfig, KubeClient
from upgrade_lint.cluster.resources import (
    CLUSTER_VERSION,
    DATA_SCIENCE_CLUSTER,
    NAMESPACE,
    RAY_CLUSTER,
)
from upgrade_lint.exceptions import (
    ClusterAccessDeniedError,
    ClusterConnectionError,
    ClusterError,
    ClusterTimeoutError,
    ClusterUnavailableError,
    ResourceNotFoundError,
    RunTimeoutError,
)

SERVER = "https://api.example.test:6443"


@pytest.fixture
def client():
    kube = KubeClient(ConnectionConfig(server=SERVER, token="sha256~abc"))
    yield kube
    kube.close()


class TestResourcePaths:
    """Test API path construction."""

    def test_cluster_scoped_group(self) -> None:
        assert (
            CLUSTER_VERSION.path("version")
            == "/apis/config.openshift.io/v1/clusterversions/version"
        )

    def test_core_group(self) -> None:
        assert NAMESPACE.path("demo") == "/api/v1/namespaces/demo"

    def test_namespaced_list(self) -> None:
        assert RAY_CLUSTER.path(namespace="ns1") == "/apis/ray.io/v1/namespaces/ns1/rayclusters"
        assert RAY_CLUSTER.path() == "/apis/ray.io/v1/rayclusters"


class TestKubeClient:
    """Test requests and error mapping."""

    @respx.mock
    def test_get_sends_bearer_token(self, client, ctx) -> None:
        route = respx.get(f"{SERVER}/apis/config.openshift.io/v1/clusterversions/version").mock(
            return_value=httpx.Response(200, json={"metadata": {"name": "version"}})
        )

        obj = client.get(ctx, CLUSTER_VERSION, "version")

        assert obj["metadata"]["name"] == "version"
        assert route.calls.last.request.headers["Authorization"] == "Bearer sha256~abc"

    @respx.mock
    def test_list_fills_api_version_and_kind(self, client, ctx) -> None:
        respx.get(f"{SERVER}/apis/datasciencecluster.opendatahub.io/v1/datascienceclusters").mock(
            return_value=httpx.Response(
                200, json={"items": [{"metadata": {"name": "default-dsc"}}]}
            )
        )

        items = client.list(ctx, DATA_SCIENCE_CLUSTER)

        assert items == [
            {
                "metadata": {"name": "default-dsc"},
                "apiVersion": "datasciencecluster.opendatahub.io/v1",
                "kind": "DataScienceCluster",
            }
        ]

    @respx.mock
    def test_list_passes_label_selector(self, client, ctx) -> None:
        route = respx.get(f"{SERVER}/apis/ray.io/v1/rayclusters").mock(
            return_value=httpx.Response(200, json={"items": []})
        )

        client.list(ctx, RAY_CLUSTER, label_selector="app=ray")

        assert route.calls.last.request.url.params["labelSelector"] == "app=ray"

    @pytest.mark.parametrize(
        ("status", "error"),
        [
            (404, ResourceNotFoundError),
            (401, ClusterAccessDeniedError),
            (403, ClusterAccessDeniedError),
            (500, ClusterUnavailableError),
            (503, ClusterUnavailableError),
            (409, ClusterError),
        ],
    )
    @respx.mock
    def test_status_mapping(self, client, ctx, status, error) -> None:
        respx.get(f"{SERVER}/api/v1/namespaces/demo").mock(
            return_value=httpx.Response(status, json={})
        )

        with pytest.raises(error):
            client.get(ctx, NAMESPACE, "demo")

    @respx.mock
    def test_non_json_body(self, client, ctx) -> None:
        respx.get(f"{SERVER}/api/v1/namespaces/demo").mock(
            return_value=httpx.Response(
                200,
                text="<html>login</html>",
                headers={"Content-Type": "text/html"},
            )
        )

        with pytest.raises(ClusterError, match="non-JSON response") as exc_info:
            client.get(ctx, NAMESPACE, "demo")

        assert exc_info.value.context["path"] == "/api/v1/namespaces/demo"
        assert exc_info.value.context["content_type"] == "text/html"

    @respx.mock
    def test_json_body_must_be_object(self, client, ctx) -> None:
        respx.get(f"{SERVER}/api/v1/namespaces/demo").mock(
            return_value=httpx.Response(200, json=["demo"])
        )

        with pytest.raises(ClusterError, match="expected a JSON object"):
            client.get(ctx, NAMESPACE, "demo")

    @respx.mock
    def test_connection_failure(self, client, ctx) -> None:
        respx.get(f"{SERVER}/api/v1/namespaces/demo").mock(
            side_effect=httpx.ConnectError("connection refused")
        )

        with pytest.raises(ClusterConnectionError, match="cannot reach API server"):
            client.get(ctx, NAMESPACE, "demo")

    @respx.mock
    def test_request_timeout_before_deadline(self, client, ctx) -> None:
        respx.get(f"{SERVER}/api/v1/namespaces/demo").mock(
            side_effect=httpx.ReadTimeout("slow")
        )

        with pytest.raises(ClusterTimeoutError):
            client.get(ctx, NAMESPACE, "demo")

    @respx.mock
    def test_request_timeout_at_deadline(self, client, clock) -> None:
        ctx = RunContext.with_timeout(5, clock=clock)

        def slow(request):
            clock.advance(10)
            raise httpx.ReadTimeout("slow", request=request)

        respx.get(f"{SERVER}/api/v1/namespaces/demo").mock(side_effect=slow)

        with pytest.raises(RunTimeoutError):
            client.get(ctx, NAMESPACE, "demo")

    def test_expired_context_sends_nothing(self, client, clock) -> None:
        ctx = RunContext.with_timeout(1, clock=clock)
        clock.advance(2)

        with respx.mock(assert_all_called=False) as mock:
            route = mock.get(f"{SERVER}/api/v1/namespaces/demo")
            with pytest.raises(RunTimeoutError):
                client.get(ctx, NAMESPACE, "demo")
            assert not route.called


class TestConnectionConfig:
    """Test TLS settings."""

    def test_plain_verify_flag(self) -> None:
        assert ConnectionConfig(server=SERVER).ssl_verify() is True
        assert ConnectionConfig(server=SERVER, verify_tls=False).ssl_verify() is False

    def test_secrets_hidden_from_repr(self) -> None:
        config = ConnectionConfig(server=SERVER, client_key_data="PRIVATE")
        assert "PRIVATE" not in repr(config)
