import enum
import logging

from pytest_testconfig import config as py_config

from rook_harness.context import TestContext
from rook_harness.infra import get_admin_client, import_from_path


LOGGER = logging.getLogger(__name__)


class LifecycleState(enum.Enum):
    NOT_STARTED = "NotStarted"
    INSTALLED = "Installed"
    TORN_DOWN = "TornDown"


class TestLifecycleManager:
    """
    Owns the installation of the storage system under test.

    set_up() installs, tear_down() gathers logs of failed tests and
    uninstalls. tear_down() runs its destructive part at most once.

    Can be used as a context manager:

        with TestLifecycleManager(...) as lifecycle:
            ...
    """

    __test__ = False

    def __init__(self, context, installer, client, test_handle, logger=None):
        """
        Args:
            context (TestContext): Configuration of the test run.
            installer (Installer): Installs, uninstalls and gathers logs.
            client (DynamicClient): Client of the cluster under test.
            test_handle (TestHandle): The running test.
            logger (logging.Logger): Logger of the current test.
        """
        self._context = context
        self._installer = installer
        self._client = client
        self.test_handle = test_handle
        self.logger = logger or LOGGER
        self._state = LifecycleState.NOT_STARTED

    def __enter__(self):
        self.set_up()
        return self

    def __exit__(self, exception_type, exception_value, traceback):
        if isinstance(exception_value, Exception):
            self.test_handle.fail()
        self.tear_down()

    @property
    def context(self):
        return self._context

    @property
    def installer(self):
        return self._installer

    @property
    def client(self):
        return self._client

    @property
    def state(self):
        return self._state

    @property
    def is_installed(self):
        return self._state == LifecycleState.INSTALLED

    def set_up(self):
        """
        Install the storage system.

        A failed install is never retried: the test is marked failed, the
        partial installation is torn down and the test is stopped.
        """
        self.logger.info(
            f"Installing rook in namespace {self._context.cluster_namespace}: {self._context}"
        )
        try:
            installed = self._installer.install(context=self._context)
        except Exception as exp:
            self.logger.error(f"Rook install raised: {exp}")
            self.test_handle.fail()
            installed = False

        if installed:
            self._state = LifecycleState.INSTALLED
            self.logger.info(f"Rook installed in namespace {self._context.cluster_namespace}")
            return

        self.logger.error("Rook was not installed successfully")
        self.test_handle.fail()
        try:
            self.tear_down()
        finally:
            self.test_handle.fail_now(
                message=f"Rook was not installed in namespace {self._context.cluster_namespace}"
            )

    def tear_down(self):
        """
        Gather logs if the test failed, then uninstall. Safe to call more than once.

        Log gathering is best effort and never prevents the uninstall.
        Uninstall errors are raised, the uninstall is not attempted again.
        """
        if self._state == LifecycleState.TORN_DOWN:
            self.logger.info("Rook already torn down, nothing to do")
            return

        if self.test_handle.failed:
            self._gather_logs()

        self._state = LifecycleState.TORN_DOWN
        self.logger.info(f"Uninstalling rook from namespace {self._context.cluster_namespace}")
        self._installer.uninstall(context=self._context)

    def _gather_logs(self):
        namespaces = [self._context.cluster_namespace]
        if self._context.operator_namespace not in namespaces:
            namespaces.append(self._context.operator_namespace)

        for namespace in namespaces:
            try:
                self._installer.gather_logs(
                    namespace=namespace, test_name=self.test_handle.name
                )
            except Exception as exp:
                self.logger.warning(f"Failed to gather logs of {namespace}: {exp}")


def get_installer(client, installer=None, config=None):
    """
    Resolve the installer to use.

    Args:
        client (DynamicClient): Client passed to the installer class.
        installer (Installer): Explicit installer, returned as is.
        config (dict): Mapping with "installer_class" (dotted path) and
            optional "log_collector_dir", defaults to py_config.

    Returns:
        Installer: The installer.
    """
    if installer:
        return installer

    config = py_config if config is None else config
    installer_class = import_from_path(path=config.get("installer_class"))
    kwargs = {"client": client}
    if config.get("log_collector_dir"):
        kwargs["logs_dir"] = config["log_collector_dir"]
    return installer_class(**kwargs)


def new_base_test_operations(
    test_handle,
    namespace,
    store_type,
    data_dir_host_path,
    helm_installed,
    use_devices,
    mons,
    operator_namespace=None,
    installer=None,
    client=None,
    logger=None,
):
    """
    Install rook for a test and return the lifecycle managing it.

    Args:
        test_handle (TestHandle): The running test.
        namespace (str): Cluster namespace.
        store_type (str): OSD store type.
        data_dir_host_path (str): Host path for persisted data.
        helm_installed (bool): Install with helm.
        use_devices (bool): Use raw devices.
        mons (int): Expected number of monitors.
        operator_namespace (str): Operator namespace, defaults to TestContext default.
        installer (Installer): Installer, defaults to py_config["installer_class"].
        client (DynamicClient): Cluster client, defaults to the kubeconfig client.
        logger (logging.Logger): Logger of the current test.

    Returns:
        tuple: (TestLifecycleManager, DynamicClient)
    """
    context_kwargs = {"operator_namespace": operator_namespace} if operator_namespace else {}
    context = TestContext.build(
        cluster_namespace=namespace,
        store_type=store_type,
        data_dir_host_path=data_dir_host_path,
        helm_installed=helm_installed,
        use_devices=use_devices,
        mons=mons,
        **context_kwargs,
    )
    client = client or get_admin_client()
    lifecycle = TestLifecycleManager(
        context=context,
        installer=get_installer(client=client, installer=installer),
        client=client,
        test_handle=test_handle,
        logger=logger,
    )
    lifecycle.set_up()
    return lifecycle, client
