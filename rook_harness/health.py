import abc
import json
import logging
import time

from rook_harness.constants import (
    RETRY_INTERVAL,
    RETRY_LOOP,
    ROOK_TOOLS,
    CephHealth,
)
from rook_harness.exceptions import (
    ClusterHealthTimeoutError,
    ClusterNotHealthyError,
    ToolboxPodNotFoundError,
)
from rook_harness.infra import get_pod_by_name_prefix


LOGGER = logging.getLogger(__name__)


class HealthClient(abc.ABC):
    """
    Cluster health query.

    query_health() returns the cluster status when the cluster is healthy and
    raises otherwise.
    """

    @abc.abstractmethod
    def query_health(self):
        pass


class ToolboxHealthClient(HealthClient):
    """
    Query ceph health by running `ceph status` in the rook toolbox pod.
    """

    def __init__(
        self, client, namespace, toolbox_pod_prefix=ROOK_TOOLS, allow_warn=False
    ):
        """
        Args:
            client (DynamicClient): Client used to find the toolbox pod.
            namespace (str): Namespace of the cluster.
            toolbox_pod_prefix (str): Name prefix (or regex) of the toolbox pod.
            allow_warn (bool): Consider HEALTH_WARN as healthy.
        """
        self.client = client
        self.namespace = namespace
        self.toolbox_pod_prefix = toolbox_pod_prefix
        self.allow_warn = allow_warn
        self._pod = None

    @property
    def pod(self):
        if not self._pod:
            self._pod = get_pod_by_name_prefix(
                dyn_client=self.client,
                pod_prefix=self.toolbox_pod_prefix,
                namespace=self.namespace,
            )
            if not self._pod:
                raise ToolboxPodNotFoundError(
                    prefix=self.toolbox_pod_prefix, namespace=self.namespace
                )
        return self._pod

    def query_health(self):
        out = self.pod.execute(command=["ceph", "status", "--format", "json"])
        status = json.loads(out)
        health = status.get("health", {})
        # Older ceph releases report "overall_status"
        health_status = health.get("status") or health.get("overall_status")
        healthy = (CephHealth.OK, CephHealth.WARN) if self.allow_warn else (CephHealth.OK,)
        if health_status not in healthy:
            raise ClusterNotHealthyError(
                health=health_status, details=health.get("checks")
            )
        return status


class HealthPoller:
    """
    Poll the cluster health with a fixed attempts budget and a fixed interval.

    Blocks for up to (attempts - 1) * interval seconds plus the query time.
    """

    def __init__(
        self,
        health_client,
        attempts=RETRY_LOOP,
        interval=RETRY_INTERVAL,
        exceptions=(Exception,),
        sleep=time.sleep,
        logger=None,
    ):
        """
        Args:
            health_client (HealthClient): Client used to query health.
            attempts (int): Maximum number of health queries, at least 1.
            interval (float): Seconds to sleep between queries.
            exceptions (tuple): Exceptions that mean "not healthy yet".
            sleep (callable): Sleep function.
            logger (logging.Logger): Logger of the current test.
        """
        if attempts < 1:
            raise ValueError(f"attempts must be at least 1, got {attempts}")
        if interval < 0:
            raise ValueError(f"interval must not be negative, got {interval}")

        self.health_client = health_client
        self.attempts = attempts
        self.interval = interval
        self.exceptions = exceptions
        self.sleep = sleep
        self.logger = logger or LOGGER

    def wait_for_healthy(self, cluster_name=""):
        """
        Query health until it succeeds or the attempts budget is exhausted.

        Args:
            cluster_name (str): Cluster name used in log messages.

        Returns:
            object: The status returned by the health client.

        Raises:
            ClusterHealthTimeoutError: If no query succeeded, holds the last error.
        """
        last_error = None
        for attempt in range(1, self.attempts + 1):
            if attempt > 1:
                self.sleep(self.interval)

            try:
                status = self.health_client.query_health()
            except self.exceptions as exp:
                last_error = exp
                self.logger.info(
                    f"waiting for cluster {cluster_name} to become healthy "
                    f"(attempt {attempt}/{self.attempts}). err: {exp}"
                )
                continue

            self.logger.info(
                f"cluster {cluster_name} is healthy. final status: {status}"
            )
            return status

        raise ClusterHealthTimeoutError(
            attempts=self.attempts, last_error=last_error
        ) from last_error
