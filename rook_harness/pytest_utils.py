import shutil


def separator(symbol_, val=None):
    terminal_width = shutil.get_terminal_size(fallback=(120, 40))[0]
    if not val:
        return f"{symbol_ * terminal_width}"

    sepa = int((terminal_width - len(val) - 2) // 2)
    return f"{symbol_ * sepa} {val} {symbol_ * sepa}"


def skip_if_pytest_flags_exists(pytest_config):
    """
    In some cases we want to skip some operation when pytest got executed with some flags

    Args:
        pytest_config (_pytest.config.Config): Pytest config object

    Returns:
        bool: True if skip is needed, otherwise False
    """
    return pytest_config.getoption("--collect-only") or pytest_config.getoption(
        "--setup-plan"
    )
