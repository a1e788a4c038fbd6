"""Extensions to the standard unittest library: snake_case set up and tear
down hooks, test selection by glob, and colorized results."""

import fnmatch
import inspect
import types
import unittest
from pathlib import Path


class TestCaseEx(unittest.TestCase):
    """A unittest.TestCase with added features."""

    # Skip any tests that match these globs.
    SKIP = []
    # Only run tests that match these globs.
    ONLY = []

    def setUp(self) -> None:
        self.set_up()

    def tearDown(self) -> None:
        self.tear_down()

    def set_up(self):
        """Override to set up each test."""

    def tear_down(self):
        """Override to clean up after each test."""

    def __getattribute__(self, item):
        """Wrap test methods so that tests deselected via the SKIP and ONLY
        globs are skipped. Globs match the test name (without 'test_'), the
        class name, or the module file name."""

        attr = super().__getattribute__(item)

        if not (isinstance(attr, types.MethodType) and
                attr.__name__.startswith('test_')):
            return attr

        cls = super().__getattribute__('__class__')
        names = (
            attr.__name__[len('test_'):].lower(),
            cls.__name__.lower(),
            Path(inspect.getfile(cls)).with_suffix('').name.lower(),
        )

        def matches(globs):
            return any(fnmatch.fnmatch(name, glob.lower())
                       for glob in globs for name in names)

        if self.SKIP:
            return unittest.skip("via cmdline")(attr) if matches(self.SKIP) \
                else attr

        if self.ONLY and not matches(self.ONLY):
            return unittest.skip("via cmdline")(attr)

        return attr

    @classmethod
    def set_skip(cls, globs):
        """Skip tests whose names match the given globs."""

        cls.SKIP = globs

    @classmethod
    def set_only(cls, globs):
        """Only run tests whose names match the given globs."""

        cls.ONLY = globs


class ColorResult(unittest.TextTestResult):
    """Provides colorized results for the python unittest library."""

    COLOR_BASE = '\x1b[{}m'
    COLOR_RESET = '\x1b[0m'
    RED = COLOR_BASE.format(31)
    GREEN = COLOR_BASE.format(32)
    MAGENTA = COLOR_BASE.format(35)
    CYAN = COLOR_BASE.format(36)

    def _colored(self, color, method, *args):
        self.stream.write(color)
        method(*args)
        self.stream.write(self.COLOR_RESET)

    def addSuccess(self, test):
        self._colored(self.GREEN, super().addSuccess, test)

    def addFailure(self, test, err):
        self._colored(self.MAGENTA, super().addFailure, test, err)

    def addError(self, test, err):
        self._colored(self.RED, super().addError, test, err)

    def addSkip(self, test, reason):
        self._colored(self.CYAN, super().addSkip, test, reason)
