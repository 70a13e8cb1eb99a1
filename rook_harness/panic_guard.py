import abc
import logging
from contextlib import contextmanager

import pytest


LOGGER = logging.getLogger(__name__)


class TestHandle(abc.ABC):
    """
    The running test as seen by the harness.
    """

    __test__ = False

    @property
    @abc.abstractmethod
    def name(self):
        pass

    @property
    @abc.abstractmethod
    def failed(self):
        pass

    @abc.abstractmethod
    def fail(self):
        """
        Mark the test as failed and let it continue.
        """

    @abc.abstractmethod
    def fail_now(self, message):
        """
        Mark the test as failed and stop it, never returns.
        """


class PytestTestHandle(TestHandle):
    """
    TestHandle of a pytest test, built from the request fixture.

    failed is also True when the setup or call phase of the test already
    reported a failure (see pytest_runtest_makereport in conftest.py).
    """

    def __init__(self, request):
        self.node = request.node
        self._failed = False

    @property
    def name(self):
        return self.node.name

    @property
    def failed(self):
        if self._failed:
            return True

        for when in ("setup", "call"):
            report = getattr(self.node, f"rep_{when}", None)
            if report and report.failed:
                return True

        return False

    def fail(self):
        self._failed = True

    def fail_now(self, message):
        self._failed = True
        pytest.fail(reason=message, pytrace=False)


def handle_panics(exc, lifecycle, test_handle, logger=None):
    """
    Turn an unexpected exception of a test body into teardown and test failure.

    Args:
        exc (BaseException): The exception caught from the test body, None if there was none.
        lifecycle (TestLifecycleManager): Lifecycle to tear down.
        test_handle (TestHandle): The running test.
        logger (logging.Logger): Logger of the current test.
    """
    if exc is None:
        return

    logger = logger or LOGGER
    logger.error(
        f"unexpected panic occurred during test {test_handle.name}, --> {exc!r}"
    )
    test_handle.fail()
    try:
        lifecycle.tear_down()
    finally:
        test_handle.fail_now(
            message=f"unexpected panic occurred during test {test_handle.name}: {exc!r}"
        )


@contextmanager
def supervised(lifecycle, test_handle, logger=None):
    """
    Run a test body and guarantee teardown if it raises.

    Failed assertions tear down and are re-raised as they are, any other
    exception goes through handle_panics(). pytest outcomes (pytest.fail,
    pytest.skip, ...) are BaseException and pass through.

    Example:
        with supervised(lifecycle=lifecycle, test_handle=test_handle):
            check_if_rook_cluster_is_installed(...)
    """
    try:
        yield
    except AssertionError:
        test_handle.fail()
        try:
            lifecycle.tear_down()
        except Exception as exp:
            logger = logger or LOGGER
            logger.error(f"teardown of test {test_handle.name} failed: {exp!r}")
        raise
    except Exception as exp:
        handle_panics(
            exc=exp, lifecycle=lifecycle, test_handle=test_handle, logger=logger
        )
