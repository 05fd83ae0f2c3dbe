"""Integration tests for the pytest capture plugin."""

import pytest

PLUGIN = "meet_harness.plugins.capture"

FAKE_DRIVER = '''
import pytest


class FakeDriver:
    def __init__(self, name):
        self.name = name
        self.page_source = "<html>" + name + "</html>"

    def execute_script(self, script):
        return '{"role": "%s"}' % self.name

    def get_screenshot_as_png(self):
        return b"png"

    def get_log(self, kind):
        return ["console of " + self.name]
'''


def run(pytester, source, *args):
    pytester.makepyfile(test_conference=FAKE_DRIVER + source)
    return pytester.runpytest("-p", PLUGIN, "--test-reports-dir", "reports", *args)


def test_failure_captures_owner_artifacts(pytester):
    result = run(pytester, '''
@pytest.fixture
def owner():
    return FakeDriver("owner")


class SampleTest:
    def testX(self, owner):
        assert False


class TestPasses:
    def test_ok(self, owner):
        assert True
''', "-o", "python_classes=SampleTest Test*", "-o", "python_functions=test*")

    result.assert_outcomes(passed=1, failed=1)
    reports = pytester.path / "reports"
    assert (reports / "screenshots" / "SampleTest.testX-owner.png").read_bytes() == b"png"
    assert (reports / "html-sources" / "SampleTest.testX-owner.html").read_text() == "<html>owner</html>"
    assert (reports / "logs" / "SampleTest.testX-meetlog-owner.json").read_text() == '{"role": "owner"}'
    assert (reports / "logs" / "SampleTest.testX-console-owner.log").read_text() == "console of owner\n\n"
    assert not list((reports / "screenshots").glob("TestPasses*"))


def test_conference_fixture_roles(pytester):
    result = run(pytester, '''
class Conference:
    owner = FakeDriver("owner")
    second_participant = FakeDriver("participant")
    third_participant = None


@pytest.fixture
def conference():
    return Conference()


def test_call(conference):
    raise RuntimeError("error, not failure")
''')

    result.assert_outcomes(failed=1)
    screenshots = sorted(p.name for p in (pytester.path / "reports" / "screenshots").iterdir())
    assert screenshots == ["test_conference.test_call-owner.png", "test_conference.test_call-participant.png"]


def test_setup_error_is_captured(pytester):
    result = run(pytester, '''
@pytest.fixture
def owner():
    return FakeDriver("owner")


@pytest.fixture
def broken(owner):
    raise RuntimeError("room not ready")


def test_join(owner, broken):
    pass
''')

    result.assert_outcomes(errors=1)
    assert (pytester.path / "reports" / "screenshots" / "test_conference.test_join-owner.png").exists()


def test_skips_and_xfails_are_ignored(pytester):
    result = run(pytester, '''
@pytest.fixture
def owner():
    return FakeDriver("owner")


def test_skipped(owner):
    pytest.skip("no bridge")


@pytest.mark.xfail
def test_expected(owner):
    assert False
''')

    result.assert_outcomes(skipped=1, xfailed=1)
    assert not list((pytester.path / "reports" / "screenshots").iterdir())


def test_capture_error_keeps_failure(pytester):
    result = run(pytester, '''
class BrokenDriver(FakeDriver):
    def get_screenshot_as_png(self):
        raise RuntimeError("browser crashed")

    @property
    def page_source(self):
        raise RuntimeError("browser crashed")

    @page_source.setter
    def page_source(self, value):
        pass


@pytest.fixture
def owner():
    return BrokenDriver("owner")


def test_media(owner):
    assert 1 == 2
''')

    result.assert_outcomes(failed=1)
    result.stdout.fnmatch_lines(["*assert 1 == 2*"])
    logs = pytester.path / "reports" / "logs"
    assert (logs / "test_conference.test_media-meetlog-owner.json").exists()
    assert not list((pytester.path / "reports" / "screenshots").iterdir())


def test_artifacts_in_junit_xml(pytester):
    result = run(pytester, '''
@pytest.fixture
def owner():
    return FakeDriver("owner")


def test_fails(owner):
    assert False
''', "--junitxml=junit.xml")

    result.assert_outcomes(failed=1)
    xml = (pytester.path / "junit.xml").read_text()
    assert 'name="artifact"' in xml
    assert "test_conference.test_fails-owner.png" in xml


def test_tests_without_sessions_are_untouched(pytester):
    result = run(pytester, '''
def test_plain():
    assert False
''')

    result.assert_outcomes(failed=1)
    reports = pytester.path / "reports"
    assert all(not list(d.iterdir()) for d in reports.iterdir())


def test_ini_reports_dir(pytester):
    pytester.makeini("[pytest]\ntest_reports_dir = ini-reports\n")
    pytester.makepyfile(test_conference=FAKE_DRIVER + '''
@pytest.fixture
def owner():
    return FakeDriver("owner")


def test_fails(owner):
    assert False
''')

    result = pytester.runpytest("-p", PLUGIN)

    result.assert_outcomes(failed=1)
    assert (pytester.path / "ini-reports" / "screenshots" / "test_conference.test_fails-owner.png").exists()


def test_teardown_error_is_not_captured(pytester):
    result = run(pytester, '''
@pytest.fixture
def owner():
    yield FakeDriver("owner")
    raise RuntimeError("hangup failed")


def test_leave(owner):
    pass
''')

    result.assert_outcomes(passed=1, errors=1)
    assert not list((pytester.path / "reports" / "screenshots").iterdir())
