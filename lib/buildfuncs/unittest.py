"""This module provides a base set of utilities for creating unittests
for buildfuncs."""

import shutil
import tempfile
from pathlib import Path

from buildfuncs import function_sets
from buildfuncs import registry
from buildfuncs.context import (Assembly, Platform, PlatformKind,
                                ProjectContext, TaskBuilder)
from buildfuncs.dispatch import CallDescriptor, Dispatcher
from unittest_ex import TestCaseEx


class FuncTestCase(TestCaseEx):
    """A unittest.TestCase with buildfuncs fixtures baked in. All buildfuncs
unittests (in test/tests) should use this as their base class.

:cvar Path TEST_ROOT: The unit test directory.
:cvar Path TEST_DATA_ROOT: The unit test data directory.

:ivar Path tmp_dir: A scratch directory, removed after each test.
:ivar ProjectContext project: A fresh project context for each test, based
    in tmp_dir, on a fixed unix platform.
:ivar registry.FunctionRegistry registry: A fresh registry with all of the
    core function sets registered.
:ivar Dispatcher dispatcher: A dispatcher for project and registry.
"""

    TEST_ROOT = Path(__file__).resolve().parents[2]/'test'
    TEST_DATA_ROOT = TEST_ROOT/'data'

    def set_up(self):
        """Give every test an isolated project, registry and dispatcher."""

        self.tmp_dir = Path(tempfile.mkdtemp(prefix='buildfuncs-test-'))
        self.project = self.make_project()
        self.registry = registry.FunctionRegistry()
        function_sets.register_core_sets(self.registry)
        self.dispatcher = Dispatcher(self.project, self.registry)

    def tear_down(self):
        """Clean up the scratch directory and the default registry."""

        shutil.rmtree(str(self.tmp_dir), ignore_errors=True)

        # pylint: disable=protected-access
        registry._reset()

    def make_project(self, **kwargs) -> ProjectContext:
        """Create a project context rooted in the scratch directory."""

        kwargs.setdefault('platform', Platform('linux', PlatformKind.UNIX))
        return ProjectContext(self.tmp_dir, **kwargs)

    @staticmethod
    def add_task(project, name, assembly_name='buildtasks',
                 version='1.0.0') -> TaskBuilder:
        """Add a task builder (and its assembly) to the project."""

        assembly = Assembly(assembly_name, version,
                            Path('/opt/tasks')/(assembly_name + '.py'))
        return project.task_builders.add(
            TaskBuilder(name, assembly, class_name=name.title() + 'Task'))

    def call(self, namespace, function, *args):
        """Invoke a function through the test dispatcher and return the
        CallResult."""

        return self.dispatcher.invoke(
            CallDescriptor(namespace, function, args))

    def assert_value(self, result, expected):
        """Assert that the call succeeded with exactly the expected value
        (and type)."""

        self.assertTrue(result.ok, msg="Call failed: {}".format(result))
        self.assertEqual(result.value, expected)
        self.assertIs(type(result.value), type(expected))

    def assert_failure(self, result, kind):
        """Assert that the call failed with the given ErrorKind, and return
        the failure."""

        self.assertFalse(result.ok,
                         msg="Expected a {} failure, got {}"
                             .format(kind.value, result))
        self.assertIs(result.failure.kind, kind,
                      msg=result.failure.message)
        return result.failure
