import logging

import pytest

from rook_harness.context import TestContext
from rook_harness.lifecycle import TestLifecycleManager
from rook_harness.logger import get_test_logger
from tests.unit.fakes import FakeInstaller, FakeTestHandle


@pytest.fixture()
def test_handle(request):
    return FakeTestHandle(name=request.node.name)


@pytest.fixture()
def test_logger(request):
    return get_test_logger(
        test_name=request.node.name, logger=logging.getLogger("rook_harness.tests")
    )


@pytest.fixture()
def test_context():
    return TestContext.build(
        cluster_namespace="rook",
        operator_namespace="rook-system",
        store_type="bluestore",
        mons=3,
    )


@pytest.fixture()
def installer():
    return FakeInstaller()


@pytest.fixture()
def lifecycle(test_context, installer, test_handle, test_logger):
    return TestLifecycleManager(
        context=test_context,
        installer=installer,
        client=None,
        test_handle=test_handle,
        logger=test_logger,
    )
