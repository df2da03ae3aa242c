"""Read-only Kubernetes API access over httpx."""

from __future__ import annotations

import ssl
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

import httpx

from ..exceptions import (
    ClusterAccessDeniedError,
    ClusterConnectionError,
    ClusterError,
    ClusterTimeoutError,
    ClusterUnavailableError,
    ResourceNotFoundError,
    RunTimeoutError,
)
from ..utils.logging import get_logger
from ..utils.throttle import TokenBucket
from .resources import ResourceType

if TYPE_CHECKING:
    from ..check.context import RunContext

logger = get_logger(__name__)

DEFAULT_QPS = 50.0
DEFAULT_BURST = 100
DEFAULT_REQUEST_TIMEOUT = 30.0


class ClusterReader(Protocol):
    """The read-only cluster capability checks are given."""

    def get(
        self,
        ctx: RunContext,
        resource: ResourceType,
        name: str,
        namespace: str | None = None,
    ) -> dict[str, Any]: ...

    def list(
        self,
        ctx: RunContext,
        resource: ResourceType,
        namespace: str | None = None,
        label_selector: str | None = None,
    ) -> list[dict[str, Any]]: ...


@dataclass(frozen=True)
class ConnectionConfig:
    """How to reach and authenticate to an API server.

    Attributes:
        server: API server URL
        token: Bearer token
        client_cert: Path to a client certificate (PEM)
        client_key: Path to the client certificate's key (PEM)
        client_cert_data: PEM client certificate content
        client_key_data: PEM client key content
        ca_file: Path to a CA bundle
        ca_data: PEM CA bundle content
        verify_tls: Verify the server certificate
    """

    server: str
    token: str | None = None
    client_cert: str | None = None
    client_key: str | None = None
    client_cert_data: str | None = field(default=None, repr=False)
    client_key_data: str | None = field(default=None, repr=False)
    ca_file: str | None = None
    ca_data: str | None = None
    verify_tls: bool = True

    @property
    def has_client_cert(self) -> bool:
        return bool(self.client_cert or self.client_cert_data)

    def ssl_verify(self) -> ssl.SSLContext | bool:
        """Value for httpx's ``verify`` argument."""
        if not (self.ca_file or self.ca_data or self.has_client_cert):
            return self.verify_tls
        context = ssl.create_default_context(cafile=self.ca_file, cadata=self.ca_data)
        if not self.verify_tls:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        if self.client_cert:
            context.load_cert_chain(self.client_cert, self.client_key)
        elif self.client_cert_data:
            self._load_inline_cert_chain(context)
        return context

    def _load_inline_cert_chain(self, context: ssl.SSLContext) -> None:
        # ssl only loads cert chains from files
        with tempfile.TemporaryDirectory(prefix="upgrade-lint-") as tmp:
            cert_path = Path(tmp) / "client.crt"
            cert_path.write_text(self.client_cert_data or "", encoding="utf-8")
            key_path = None
            if self.client_key_data:
                key_path = Path(tmp) / "client.key"
                key_path.write_text(self.client_key_data, encoding="utf-8")
            context.load_cert_chain(str(cert_path), str(key_path) if key_path else None)


class KubeClient:
    """ClusterReader backed by the Kubernetes REST API.

    Every request takes a throttle token first and is bounded by the time left
    in the run. Requests are never retried.
    """

    def __init__(
        self,
        config: ConnectionConfig,
        qps: float = DEFAULT_QPS,
        burst: int = DEFAULT_BURST,
        throttle: TokenBucket | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            config: Server address and credentials
            qps: Sustained client-side request rate
            burst: Requests allowed above the sustained rate
            throttle: Pre-built throttle, mainly for tests
            transport: Custom httpx transport, mainly for tests
        """
        self.config = config
        self.throttle = throttle or TokenBucket(qps=qps, burst=burst)

        headers = {"Accept": "application/json"}
        if config.token:
            headers["Authorization"] = f"Bearer {config.token}"

        self._client = httpx.Client(
            base_url=config.server.rstrip("/"),
            headers=headers,
            verify=config.ssl_verify(),
            timeout=httpx.Timeout(DEFAULT_REQUEST_TIMEOUT),
            transport=transport,
        )

        logger.debug(
            "kube_client_initialized",
            server=config.server,
            auth="token"
            if config.token
            else "cert"
            if config.has_client_cert
            else "none",
            qps=self.throttle.qps,
            burst=self.throttle.burst,
        )

    def __enter__(self) -> KubeClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get(
        self,
        ctx: RunContext,
        resource: ResourceType,
        name: str,
        namespace: str | None = None,
    ) -> dict[str, Any]:
        """Fetch one object.

        Raises:
            ResourceNotFoundError: The object does not exist
            ClusterError: Any other API failure
            RunTimeoutError: The run deadline passed
        """
        return self._request(ctx, resource.path(name, namespace), resource)

    def list(
        self,
        ctx: RunContext,
        resource: ResourceType,
        namespace: str | None = None,
        label_selector: str | None = None,
    ) -> list[dict[str, Any]]:
        """List objects, across all namespaces when ``namespace`` is None.

        Raises:
            ResourceNotFoundError: The resource type is not served (CRD missing)
            ClusterError: Any other API failure
            RunTimeoutError: The run deadline passed
        """
        params = {"labelSelector": label_selector} if label_selector else None
        body = self._request(ctx, resource.path(namespace=namespace), resource, params)
        items = body.get("items") or []
        for item in items:
            # list responses omit per-item apiVersion/kind
            item.setdefault("apiVersion", resource.api_version)
            item.setdefault("kind", resource.kind)
        return items

    def _request(
        self,
        ctx: RunContext,
        path: str,
        resource: ResourceType,
        params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        ctx.raise_if_done()
        self.throttle.acquire(ctx)

        remaining = ctx.remaining()
        timeout = (
            DEFAULT_REQUEST_TIMEOUT
            if remaining is None
            else min(DEFAULT_REQUEST_TIMEOUT, remaining)
        )

        logger.debug("cluster_request", path=path, timeout=round(timeout, 3))
        try:
            response = self._client.get(path, params=params, timeout=timeout)
        except httpx.TimeoutException as e:
            if ctx.expired():
                raise RunTimeoutError(timeout=ctx.timeout) from e
            raise ClusterTimeoutError(
                f"request to {path} timed out",
                context={"path": path},
            ) from e
        except httpx.TransportError as e:
            raise ClusterConnectionError(
                f"cannot reach API server {self.config.server}: {e}",
                suggestion="Check the kubeconfig server address and network access",
                context={"path": path},
            ) from e

        self._raise_for_status(response, path, resource)
        try:
            body = response.json()
        except ValueError as e:
            raise ClusterError(
                f"non-JSON response for {path}",
                context={
                    "path": path,
                    "status_code": response.status_code,
                    "content_type": response.headers.get("content-type"),
                },
            ) from e
        if not isinstance(body, dict):
            raise ClusterError(
                f"expected a JSON object for {path}, got {type(body).__name__}",
                context={"path": path, "status_code": response.status_code},
            )
        return body

    @staticmethod
    def _raise_for_status(
        response: httpx.Response, path: str, resource: ResourceType
    ) -> None:
        status = response.status_code
        if status < 400:
            return

        context = {"path": path, "status_code": status, "kind": resource.kind}
        if status == 404:
            raise ResourceNotFoundError(
                f"{resource.kind} not found at {path}", context=context
            )
        if status in (401, 403):
            raise ClusterAccessDeniedError(
                f"access to {resource.kind} denied ({status})",
                suggestion="Log in again or use an account allowed to read "
                f"{resource.plural}.{resource.group or 'core'}",
                context=context,
            )
        if status >= 500:
            raise ClusterUnavailableError(
                f"API server is unavailable or overloaded ({status})",
                context=context,
            )
        raise ClusterError(
            f"unexpected API response {status} for {path}", context=context
        )
