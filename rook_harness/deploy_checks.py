import logging

from pytest_testconfig import config as py_config

from rook_harness.constants import RETRY_INTERVAL, RETRY_LOOP, ROOK_TOOLS
from rook_harness.exceptions import ClusterHealthTimeoutError
from rook_harness.health import HealthPoller, ToolboxHealthClient
from rook_harness.pods import rook_cluster_expectations


LOGGER = logging.getLogger(__name__)


def health_poller_from_config(health_client, config=None, logger=None):
    """
    Build a HealthPoller, attempts and interval taken from config when set there.

    Args:
        health_client (HealthClient): Client used to query health.
        config (dict): Mapping with health_retry_attempts / health_retry_interval, defaults to py_config.
        logger (logging.Logger): Logger of the current test.

    Returns:
        HealthPoller: The poller.
    """
    config = py_config if config is None else config
    return HealthPoller(
        health_client=health_client,
        attempts=int(config.get("health_retry_attempts", RETRY_LOOP)),
        interval=float(config.get("health_retry_interval", RETRY_INTERVAL)),
        logger=logger,
    )


def check_if_rook_cluster_is_installed(
    checker, operator_namespace, cluster_namespace, mons
):
    """
    Assert that all rook components are installed and Running.

    Args:
        checker (PodExpectationChecker): Checker to use.
        operator_namespace (str): Namespace of the operator and agent.
        cluster_namespace (str): Namespace of the cluster.
        mons (int): Expected number of monitors.
    """
    checker.logger.info(
        f"Make sure all Pods in Rook Cluster {cluster_namespace} are running"
    )
    failures = []
    for expectation in rook_cluster_expectations(
        operator_namespace=operator_namespace,
        cluster_namespace=cluster_namespace,
        mons=mons,
    ):
        if not checker.check_expectation(expectation=expectation):
            verb = "is" if expectation.count == 1 else "are"
            failures.append(
                f"Make sure there {verb} {expectation.count} {expectation.role} "
                f"present in {expectation.state} state (namespace {expectation.namespace})"
            )

    assert not failures, "\n".join(failures)


def check_if_rook_cluster_is_healthy(poller, cluster_namespace):
    """
    Assert that the cluster becomes healthy within the poller attempts budget.

    Args:
        poller (HealthPoller): Poller to use.
        cluster_namespace (str): Namespace of the cluster.

    Returns:
        object: The final health status.
    """
    poller.logger.info(f"Testing cluster {cluster_namespace} health")
    try:
        return poller.wait_for_healthy(cluster_name=cluster_namespace)
    except ClusterHealthTimeoutError as exp:
        raise AssertionError(
            f"cluster {cluster_namespace} is not healthy: {exp.last_error}"
        ) from exp


def get_health_client(lifecycle, toolbox_pod_prefix=None, allow_warn=False):
    """
    Create the toolbox health client of the lifecycle cluster.

    If the toolbox pod cannot be found the test is failed, rook is torn down
    and the test is stopped.

    Args:
        lifecycle (TestLifecycleManager): Lifecycle of the test.
        toolbox_pod_prefix (str): Toolbox pod prefix, defaults to py_config["toolbox_pod_prefix"].
        allow_warn (bool): Consider HEALTH_WARN as healthy.

    Returns:
        ToolboxHealthClient: The client.
    """
    health_client = ToolboxHealthClient(
        client=lifecycle.client,
        namespace=lifecycle.context.cluster_namespace,
        toolbox_pod_prefix=toolbox_pod_prefix
        or py_config.get("toolbox_pod_prefix", ROOK_TOOLS),
        allow_warn=allow_warn,
    )
    try:
        LOGGER.info(f"Using toolbox pod {health_client.pod.name}")
    except Exception as exp:
        lifecycle.logger.error(f"Cannot create rook test client, err -> {exp}")
        lifecycle.test_handle.fail()
        try:
            lifecycle.tear_down()
        finally:
            lifecycle.test_handle.fail_now(
                message=f"Cannot create rook test client: {exp}"
            )

    return health_client
