import logging

import pytest
from pytest_testconfig import config as py_config

from rook_harness.context import TestContext
from rook_harness.deploy_checks import get_health_client, health_poller_from_config
from rook_harness.lifecycle import new_base_test_operations
from rook_harness.logger import get_test_logger
from rook_harness.panic_guard import PytestTestHandle
from rook_harness.pods import PodExpectationChecker


LOGGER = logging.getLogger(__name__)


@pytest.fixture()
def rook_test_handle(request):
    return PytestTestHandle(request=request)


@pytest.fixture()
def rook_test_logger(request):
    return get_test_logger(test_name=request.node.name)


@pytest.fixture()
def rook_context():
    return TestContext.from_config(config=py_config)


@pytest.fixture()
def rook_lifecycle(rook_test_handle, rook_test_logger, rook_context):
    """
    Install rook for the test, uninstall on every exit path.
    """
    lifecycle, _ = new_base_test_operations(
        test_handle=rook_test_handle,
        namespace=rook_context.cluster_namespace,
        store_type=rook_context.store_type,
        data_dir_host_path=rook_context.data_dir_host_path,
        helm_installed=rook_context.helm_installed,
        use_devices=rook_context.use_devices,
        mons=rook_context.mons,
        operator_namespace=rook_context.operator_namespace,
        logger=rook_test_logger,
    )
    yield lifecycle
    lifecycle.tear_down()


@pytest.fixture()
def pod_checker(rook_lifecycle, rook_test_logger):
    return PodExpectationChecker(
        client=rook_lifecycle.client, logger=rook_test_logger
    )


@pytest.fixture()
def health_poller(rook_lifecycle, rook_test_logger):
    return health_poller_from_config(
        health_client=get_health_client(lifecycle=rook_lifecycle),
        logger=rook_test_logger,
    )
