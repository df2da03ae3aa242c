"""Resolve API server address and credentials from a kubeconfig."""

import base64
import binascii
import os
from pathlib import Path
from typing import Any

import yaml

from ..error_codes import ErrorCode
from ..exceptions import ConfigurationError
from ..utils.logging import get_logger
from .client import ConnectionConfig

logger = get_logger(__name__)

SERVICE_ACCOUNT_DIR = Path("/var/run/secrets/kubernetes.io/serviceaccount")


def _kubeconfig_candidates(path: Path | None) -> list[Path]:
    if path is not None:
        return [path]
    env = os.environ.get("KUBECONFIG")
    if env:
        # first existing entry wins; merging multiple files is not supported
        return [Path(p).expanduser() for p in env.split(os.pathsep) if p]
    return [Path.home() / ".kube" / "config"]


def _decode(value: str, field_name: str) -> str:
    try:
        return base64.b64decode(value, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ConfigurationError(
            f"kubeconfig field {field_name} is not valid base64",
            error_code=ErrorCode.CFG_KUBECONFIG.value,
        ) from e


def _named(entries: list[dict[str, Any]] | None, name: str, section: str) -> dict:
    for entry in entries or []:
        if entry.get("name") == name:
            return entry.get(section) or {}
    raise ConfigurationError(
        f"kubeconfig has no {section} named {name!r}",
        error_code=ErrorCode.CFG_KUBECONFIG.value,
    )


def _resolve(base: Path, value: str | None) -> str | None:
    if not value:
        return None
    candidate = Path(value).expanduser()
    if not candidate.is_absolute():
        candidate = base / candidate
    return str(candidate)


def parse_kubeconfig(
    data: dict[str, Any],
    context: str | None = None,
    base_dir: Path | None = None,
    verify_tls: bool = True,
) -> ConnectionConfig:
    """Build a connection from parsed kubeconfig content.

    Args:
        data: Parsed kubeconfig document
        context: Context name; defaults to current-context
        base_dir: Directory relative file references resolve against
        verify_tls: False forces TLS verification off

    Returns:
        Connection settings for the chosen context

    Raises:
        ConfigurationError: If the context, cluster or user is missing
    """
    base_dir = base_dir or Path.cwd()
    context_name = context or data.get("current-context")
    if not context_name:
        raise ConfigurationError(
            "kubeconfig has no current context",
            suggestion="Pass --context or set current-context in the kubeconfig",
            error_code=ErrorCode.CFG_KUBECONFIG.value,
        )

    ctx = _named(data.get("contexts"), context_name, "context")
    cluster = _named(data.get("clusters"), ctx.get("cluster", ""), "cluster")
    user = _named(data.get("users"), ctx["user"], "user") if ctx.get("user") else {}

    server = cluster.get("server")
    if not server:
        raise ConfigurationError(
            f"cluster for context {context_name!r} has no server",
            error_code=ErrorCode.CFG_KUBECONFIG.value,
        )

    token = user.get("token")
    token_file = _resolve(base_dir, user.get("tokenFile"))
    if not token and token_file:
        token = Path(token_file).read_text(encoding="utf-8").strip()

    ca_data = cluster.get("certificate-authority-data")
    cert_data = user.get("client-certificate-data")
    key_data = user.get("client-key-data")

    return ConnectionConfig(
        server=server,
        token=token or None,
        client_cert=_resolve(base_dir, user.get("client-certificate")),
        client_key=_resolve(base_dir, user.get("client-key")),
        client_cert_data=_decode(cert_data, "client-certificate-data")
        if cert_data
        else None,
        client_key_data=_decode(key_data, "client-key-data") if key_data else None,
        ca_file=_resolve(base_dir, cluster.get("certificate-authority")),
        ca_data=_decode(ca_data, "certificate-authority-data") if ca_data else None,
        verify_tls=verify_tls and not cluster.get("insecure-skip-tls-verify", False),
    )


def in_cluster_connection(verify_tls: bool = True) -> ConnectionConfig | None:
    """Connection from the pod's service account, None outside a cluster."""
    host = os.environ.get("KUBERNETES_SERVICE_HOST")
    port = os.environ.get("KUBERNETES_SERVICE_PORT", "443")
    token_path = SERVICE_ACCOUNT_DIR / "token"
    if not host or not token_path.exists():
        return None
    ca_path = SERVICE_ACCOUNT_DIR / "ca.crt"
    if ":" in host:
        host = f"[{host}]"
    return ConnectionConfig(
        server=f"https://{host}:{port}",
        token=token_path.read_text(encoding="utf-8").strip(),
        ca_file=str(ca_path) if ca_path.exists() else None,
        verify_tls=verify_tls,
    )


def load_connection(
    path: Path | None = None,
    context: str | None = None,
    verify_tls: bool = True,
) -> ConnectionConfig:
    """Find and load connection settings.

    Looks at the explicit path, then KUBECONFIG, then ~/.kube/config, and
    finally falls back to the in-cluster service account.

    Raises:
        ConfigurationError: If nothing usable is found or the file is invalid
    """
    for candidate in _kubeconfig_candidates(path):
        if not candidate.exists():
            if path is not None:
                raise ConfigurationError(
                    f"kubeconfig not found: {candidate}",
                    error_code=ErrorCode.CFG_KUBECONFIG.value,
                )
            continue
        try:
            data = yaml.safe_load(candidate.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"cannot read kubeconfig {candidate}: {e}",
                error_code=ErrorCode.CFG_KUBECONFIG.value,
            ) from e
        logger.debug("kubeconfig_loaded", path=str(candidate), context=context)
        return parse_kubeconfig(
            data, context=context, base_dir=candidate.parent, verify_tls=verify_tls
        )

    connection = in_cluster_connection(verify_tls=verify_tls)
    if connection is not None:
        logger.debug("kubeconfig_in_cluster", server=connection.server)
        return connection

    raise ConfigurationError(
        "no kubeconfig found",
        suggestion="Pass --kubeconfig, set KUBECONFIG, or log in with oc/kubectl",
        error_code=ErrorCode.CFG_KUBECONFIG.value,
    )
