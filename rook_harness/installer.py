import abc
import logging
import os
import re

from ocp_resources.pod import Pod

from rook_harness.constants import DEFAULT_LOG_COLLECTOR_DIR


LOGGER = logging.getLogger(__name__)


class Installer(abc.ABC):
    """
    Installs and removes the storage system under test.

    Subclasses implement install() and uninstall(); gather_logs() dumps the
    logs of every pod in a namespace and can be overridden.
    """

    def __init__(self, client, logs_dir=DEFAULT_LOG_COLLECTOR_DIR):
        """
        Args:
            client (DynamicClient): Client of the cluster the system is installed on.
            logs_dir (str): Base directory for gathered logs.
        """
        self.client = client
        self.logs_dir = logs_dir

    @abc.abstractmethod
    def install(self, context):
        """
        Install the storage system.

        Args:
            context (TestContext): Configuration of the test run.

        Returns:
            bool: True if the system was installed.

        Raises:
            InstallationError: On hard failures.
        """

    @abc.abstractmethod
    def uninstall(self, context):
        """
        Remove the storage system, including partially installed leftovers.

        Args:
            context (TestContext): Configuration of the test run.
        """

    def gather_logs(self, namespace, test_name):
        """
        Write the logs of all pods in namespace under <logs_dir>/<test_name>/<namespace>.

        Args:
            namespace (str): Namespace name.
            test_name (str): Name of the test, used as directory name.

        Returns:
            str: Directory the logs were written to.
        """
        target_dir = os.path.join(
            self.logs_dir, re.sub(r"[^\w.-]", "_", test_name), namespace
        )
        os.makedirs(target_dir, exist_ok=True)
        LOGGER.info(f"Gathering logs of namespace {namespace} to {target_dir}")
        for pod in Pod.get(dyn_client=self.client, namespace=namespace):
            for container in pod.instance.spec.containers:
                log_file = os.path.join(target_dir, f"{pod.name}-{container.name}.log")
                try:
                    pod_log = pod.log(container=container.name)
                except Exception as exp:
                    LOGGER.warning(
                        f"Failed to get logs of {pod.name}/{container.name}: {exp}"
                    )
                    continue

                with open(log_file, "w") as fd:
                    fd.write(pod_log)

        return target_dir
