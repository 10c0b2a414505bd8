"""Kubectl-backed data source - lists cluster objects as JSON."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import re
import subprocess
from typing import Any

from kubereport.constants.defaults import UNKNOWN
from kubereport.constants.enums import CLUSTER_SCOPED_KINDS, ResourceKind
from kubereport.constants.timeouts import (
    CLUSTER_CHECK_TIMEOUT,
    CLUSTER_REQUEST_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
    KUBECTL_CONFIG_TIMEOUT,
)
from kubereport.sources.base import DataSource

logger = logging.getLogger(__name__)

_DURATION_PART = re.compile(r"(\d+)(h|m|s)")


class KubectlDataSource(DataSource):
    """Lists objects by shelling out to kubectl with JSON output.

    Each call runs in a worker thread so the event loop stays free, but the
    report pipeline awaits calls one at a time.
    """

    _CONNECTION_ERROR_TOKENS = (
        "unable to connect to the server",
        "you must be logged in",
        "context deadline exceeded",
        "timed out",
        "certificate",
        "no such host",
        "forbidden",
        "unauthorized",
    )

    def __init__(
        self,
        context: str | None = None,
        kubeconfig: str | None = None,
        request_timeout: str = CLUSTER_REQUEST_TIMEOUT,
    ) -> None:
        """Initialize the kubectl data source.

        Args:
            context: Optional Kubernetes context name.
            kubeconfig: Optional kubeconfig path (defaults to kubectl's own lookup).
            request_timeout: kubectl --request-timeout value (e.g. "30s").
        """
        self.context = context
        self.kubeconfig = kubeconfig
        self.request_timeout = request_timeout
        self.last_error: str | None = None

    @staticmethod
    def _duration_seconds(duration: str) -> int | None:
        """Convert a kubectl duration like "1m30s" to seconds."""
        parts = _DURATION_PART.findall(duration)
        if not parts:
            return None
        factors = {"h": 3600, "m": 60, "s": 1}
        return sum(int(amount) * factors[unit] for amount, unit in parts)

    def _command_timeout(self) -> int:
        """Process timeout, always above the API request timeout."""
        request_seconds = self._duration_seconds(self.request_timeout)
        if request_seconds is None:
            return KUBECTL_COMMAND_TIMEOUT
        return max(KUBECTL_COMMAND_TIMEOUT, request_seconds + 15)

    def _base_command(self) -> list[str]:
        cmd = ["kubectl"]
        if self.kubeconfig:
            cmd.extend(["--kubeconfig", self.kubeconfig])
        if self.context:
            cmd.extend(["--context", self.context])
        return cmd

    def _run_kubectl_sync(self, args: tuple[str, ...], timeout: int | None = None) -> str:
        """Run a kubectl command synchronously (thread-safe wrapper target)."""
        cmd = [*self._base_command(), *args]
        effective_timeout = timeout if timeout is not None else self._command_timeout()
        result = subprocess.run(
            cmd, capture_output=True, text=True, timeout=effective_timeout
        )
        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise RuntimeError(stderr or "kubectl command failed")
        return result.stdout

    async def _run_kubectl(self, args: tuple[str, ...], timeout: int | None = None) -> str:
        return await asyncio.to_thread(self._run_kubectl_sync, args, timeout)

    @classmethod
    def _summarize_connection_error(cls, error: BaseException) -> str:
        """Extract a concise, user-facing connection error from kubectl output."""
        raw_message = str(error).strip()
        lines = [line.strip() for line in raw_message.splitlines() if line.strip()]
        if not lines:
            return "Cluster connection check failed"

        selected_line = lines[-1]
        for line in reversed(lines):
            lower_line = line.lower()
            if line.startswith("error:") or any(
                token in lower_line for token in cls._CONNECTION_ERROR_TOKENS
            ):
                selected_line = line
                break

        cleaned = selected_line.removeprefix("error:").strip()
        if len(cleaned) > 160:
            return f"{cleaned[:157].rstrip()}..."
        return cleaned or "Cluster connection check failed"

    async def check_connection(self) -> bool:
        """Check that the API server answers a version request."""
        try:
            await self._run_kubectl(
                ("version", "-o", "json", f"--request-timeout={self.request_timeout}"),
                timeout=int(CLUSTER_CHECK_TIMEOUT) + 5,
            )
        except (OSError, RuntimeError, subprocess.TimeoutExpired) as exc:
            self.last_error = self._summarize_connection_error(exc)
            logger.warning("Cluster connection check failed: %s", self.last_error)
            return False
        self.last_error = None
        return True

    async def cluster_name(self) -> str:
        """Resolve the current context's cluster name, falling back to the API host."""
        for jsonpath in ("{.clusters[0].name}", "{.clusters[0].cluster.server}"):
            try:
                output = await self._run_kubectl(
                    ("config", "view", "--minify", "-o", f"jsonpath={jsonpath}"),
                    timeout=KUBECTL_CONFIG_TIMEOUT,
                )
            except (OSError, RuntimeError, subprocess.TimeoutExpired) as exc:
                logger.debug("kubectl config view failed: %s", exc)
                continue
            name = output.strip()
            if name:
                return name
        return os.environ.get("KUBERNETES_SERVICE_HOST") or UNKNOWN

    def _build_list_args(
        self,
        kind: ResourceKind,
        namespace: str | None,
        field_selector: str | None,
    ) -> tuple[str, ...]:
        args: list[str] = ["get", kind.value]
        if kind not in CLUSTER_SCOPED_KINDS:
            if namespace:
                args.extend(["-n", namespace])
            else:
                args.append("--all-namespaces")
        if field_selector:
            args.append(f"--field-selector={field_selector}")
        args.extend(["-o", "json", f"--request-timeout={self.request_timeout}"])
        return tuple(args)

    async def list_objects(
        self,
        kind: ResourceKind,
        *,
        namespace: str | None = None,
        field_selector: str | None = None,
    ) -> list[dict[str, Any]]:
        """List objects of a kind as raw dictionaries.

        Raises:
            RuntimeError: If kubectl fails or returns invalid JSON.
        """
        args = self._build_list_args(kind, namespace, field_selector)
        logger.debug("kubectl %s", " ".join(args))
        try:
            output = await self._run_kubectl(args)
        except subprocess.TimeoutExpired as exc:
            raise RuntimeError(f"kubectl timed out listing {kind.value}") from exc

        if not output.strip():
            return []
        try:
            data = json.loads(output)
        except json.JSONDecodeError as exc:
            raise RuntimeError(f"invalid JSON listing {kind.value}: {exc}") from exc

        items = data.get("items", [])
        return [item for item in items if isinstance(item, dict)]
