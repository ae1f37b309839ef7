import pytest

from rpncalc.stack import SegmentedStack


@pytest.fixture
def stack():
    return SegmentedStack()


@pytest.fixture
def small_stack():
    # capacity 3 so segment boundaries are reached quickly
    return SegmentedStack(segment_capacity=3)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    # keep a developer's .env and RPNCALC_* variables out of the tests
    for var in ('RPNCALC_SEGMENT_CAPACITY', 'RPNCALC_PRECISION', 'RPNCALC_HISTORY_FILE', 'RPNCALC_LOG_LEVEL'):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    if report.when == "call":
        print(f"TEST: {item.name} - {'PASSED' if report.passed else 'FAILED'}")
