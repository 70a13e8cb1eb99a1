import logging
from dataclasses import dataclass

from ocp_resources.pod import Pod
from timeout_sampler import TimeoutExpiredError, TimeoutSampler

from rook_harness.constants import (
    ROOK_AGENT,
    ROOK_API,
    ROOK_CEPH_MGR,
    ROOK_CEPH_MON,
    ROOK_CEPH_OSD,
    ROOK_OPERATOR,
    TIMEOUT_5MIN,
)
from rook_harness.exceptions import PodExpectationError
from rook_harness.infra import get_pods_by_role


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PodExpectation:
    role: str
    namespace: str
    count: int
    state: str = Pod.Status.RUNNING

    @property
    def description(self):
        return f"{self.count} {self.role} in {self.namespace} in {self.state} state"


def rook_cluster_expectations(operator_namespace, cluster_namespace, mons):
    """
    Pods that must exist for a rook cluster to be considered installed and running.

    Args:
        operator_namespace (str): Namespace of the operator and agent.
        cluster_namespace (str): Namespace of the cluster.
        mons (int): Expected number of monitors.

    Returns:
        list: List of PodExpectation.
    """
    return [
        PodExpectation(role=ROOK_OPERATOR, namespace=operator_namespace, count=1),
        PodExpectation(role=ROOK_AGENT, namespace=operator_namespace, count=1),
        PodExpectation(role=ROOK_API, namespace=cluster_namespace, count=1),
        PodExpectation(role=ROOK_CEPH_MGR, namespace=cluster_namespace, count=1),
        PodExpectation(role=ROOK_CEPH_OSD, namespace=cluster_namespace, count=1),
        PodExpectation(role=ROOK_CEPH_MON, namespace=cluster_namespace, count=mons),
    ]


class PodExpectationChecker:
    """
    Compare the pods running on the cluster against expected counts and states.

    The checks never retry, callers that need to wait should use
    wait_for_expectations().
    """

    def __init__(self, client, logger=None):
        """
        Args:
            client (DynamicClient): Client used to list pods.
            logger (logging.Logger): Logger of the current test.
        """
        self.client = client
        self.logger = logger or LOGGER

    def check_pod_count_and_state(
        self, role, namespace, expected_count, expected_state
    ):
        """
        Check that exactly expected_count pods of the role exist, all in expected_state.

        Args:
            role (str): Role of the pods ("app" label value).
            namespace (str): Namespace name.
            expected_count (int): Exact number of expected pods.
            expected_state (str): Expected pod phase, e.g. Running.

        Returns:
            bool: True if the pods match, False otherwise or if the pods cannot be listed.
        """
        try:
            pods = get_pods_by_role(
                dyn_client=self.client, role=role, namespace=namespace
            )
            states = [pod.status for pod in pods]
        except Exception as exp:
            self.logger.warning(
                f"Failed to list {role} pods in namespace {namespace}: {exp}"
            )
            return False

        if len(states) != expected_count:
            self.logger.info(
                f"Expected {expected_count} {role} pods in {namespace}, found {len(states)}"
            )
            return False

        not_in_state = [state for state in states if state != expected_state]
        if not_in_state:
            self.logger.info(
                f"{len(not_in_state)} {role} pods in {namespace} are not {expected_state}: {not_in_state}"
            )
            return False

        return True

    def check_expectation(self, expectation):
        return self.check_pod_count_and_state(
            role=expectation.role,
            namespace=expectation.namespace,
            expected_count=expectation.count,
            expected_state=expectation.state,
        )

    def unsatisfied_expectations(self, expectations):
        return [
            expectation
            for expectation in expectations
            if not self.check_expectation(expectation=expectation)
        ]

    def check_all(self, expectations):
        # Every expectation is evaluated so the log shows all failing roles
        return not self.unsatisfied_expectations(expectations=expectations)

    def wait_for_expectations(self, expectations, wait_timeout=TIMEOUT_5MIN, sleep=5):
        """
        Wait until all expectations are satisfied.

        Args:
            expectations (list): List of PodExpectation.
            wait_timeout (int): Time to wait in seconds.
            sleep (int): Time between checks in seconds.

        Raises:
            PodExpectationError: If some expectations are still unmet after wait_timeout.
        """
        self.logger.info(
            f"Wait for pods: {[expectation.description for expectation in expectations]}"
        )
        samples = TimeoutSampler(
            wait_timeout=wait_timeout,
            sleep=sleep,
            func=self.unsatisfied_expectations,
            expectations=expectations,
        )
        sample = expectations
        try:
            for sample in samples:
                if not sample:
                    return
        except TimeoutExpiredError:
            raise PodExpectationError(expectations=sample)
