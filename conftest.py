# -*- coding: utf-8 -*-

"""
Pytest conftest file for rook deploy tests
"""
import logging
import os

import pytest
from pytest_testconfig import config as py_config

from rook_harness.constants import DEFAULT_LOG_COLLECTOR_DIR, DEFAULT_PYTEST_LOG_FILE
from rook_harness.logger import BASIC_LOGGER_NAME, setup_logging
from rook_harness.pytest_utils import separator, skip_if_pytest_flags_exists


LOGGER = logging.getLogger(__name__)
BASIC_LOGGER = logging.getLogger(BASIC_LOGGER_NAME)


def pytest_addoption(parser):
    rook_group = parser.getgroup(name="Rook")
    log_collector_group = parser.getgroup(name="LogCollector")

    # Rook addoption
    rook_group.addoption(
        "--rook-integration",
        action="store_true",
        help="Run tests that deploy rook on the cluster from $KUBECONFIG",
    )

    # Log collector group
    log_collector_group.addoption(
        "--log-collector-dir",
        help="Path to store the logs gathered for failed tests",
        default=DEFAULT_LOG_COLLECTOR_DIR,
    )
    log_collector_group.addoption(
        "--pytest-log-file",
        help="Path to pytest log file",
        default=DEFAULT_PYTEST_LOG_FILE,
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: deploys rook, runs only with --rook-integration"
    )


def pytest_collection_modifyitems(session, config, items):
    if config.getoption("--rook-integration"):
        return

    skip = pytest.mark.skip(reason="Pass --rook-integration to deploy rook")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(marker=skip)


def pytest_report_teststatus(report, config):
    test_name = report.head_line
    when = report.when
    call_str = "call"
    if report.passed:
        if when == call_str:
            BASIC_LOGGER.info(f"\nTEST: {test_name} STATUS: \033[0;32mPASSED\033[0m")

    elif report.skipped:
        BASIC_LOGGER.info(f"\nTEST: {test_name} STATUS: \033[1;33mSKIPPED\033[0m")

    elif report.failed:
        if when != call_str:
            BASIC_LOGGER.info(
                f"\nTEST: {test_name} STATUS: [{when}] \033[0;31mERROR\033[0m"
            )
        else:
            BASIC_LOGGER.info(f"\nTEST: {test_name} STATUS: \033[0;31mFAILED\033[0m")


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Keep the report of each phase on the item, rep_setup / rep_call / rep_teardown
    """
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


def pytest_fixture_setup(fixturedef, request):
    LOGGER.info(f"Executing {fixturedef.scope} fixture: {fixturedef.argname}")


def pytest_runtest_setup(item):
    BASIC_LOGGER.info(f"\n{separator(symbol_='-', val=item.name)}")
    BASIC_LOGGER.info(f"{separator(symbol_='-', val='SETUP')}")


def pytest_runtest_call(item):
    BASIC_LOGGER.info(f"{separator(symbol_='-', val='CALL')}")


def pytest_runtest_teardown(item):
    BASIC_LOGGER.info(f"{separator(symbol_='-', val='TEARDOWN')}")


def pytest_sessionstart(session):
    py_config["log_collector_dir"] = session.config.getoption("log_collector_dir")
    if skip_if_pytest_flags_exists(pytest_config=session.config):
        return

    tests_log_file = session.config.getoption("pytest_log_file")
    if os.path.exists(tests_log_file):
        os.remove(tests_log_file)

    setup_logging(
        log_file=tests_log_file,
        log_level=session.config.getoption("log_cli_level") or logging.INFO,
    )


def pytest_sessionfinish(session, exitstatus):
    reporter = session.config.pluginmanager.get_plugin("terminalreporter")
    if not reporter:
        return

    summary = (
        f"{len(reporter.stats.get('passed', []))} passed, "
        f"{len(reporter.stats.get('skipped', []))} skipped, "
        f"{len(reporter.stats.get('failed', []))} failed, "
        f"{len(reporter.stats.get('error', []))} error, "
        f"exit status {exitstatus} "
    )
    BASIC_LOGGER.info(f"{separator(symbol_='-', val=summary)}")
