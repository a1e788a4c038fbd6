"""Check each of the core functions."""

from pathlib import Path

import buildfuncs
from buildfuncs.context import Assembly, Platform, PlatformKind
from buildfuncs.dispatch import CallDescriptor, Dispatcher
from buildfuncs.errors import ErrorKind
from buildfuncs.unittest import FuncTestCase


class CoreFunctionTests(FuncTestCase):
    """Check the core function sets against a populated project."""

    def set_up(self):
        super().set_up()

        self.project.name = 'Acme'
        self.project.default_target = 'build'
        self.project.build_file = self.tmp_dir/'acme.build'

        for name in ('init', 'build', 'clean'):
            self.project.targets.add(name)

        self.project.properties.set('debug', 'true', read_only=True)
        self.project.properties.set('now', '12:00', dynamic=True)
        self.project.properties.set('plain', 'value')

        self.add_task(self.project, 'csc', assembly_name='dotnet.tasks',
                      version='1.2')

        self.probe_dir = self.tmp_dir/'probe'
        (self.probe_dir/'lib'/'net').mkdir(parents=True)
        (self.probe_dir/'lib'/'net'/'nunit.framework.dll').touch()
        self.project.probing_paths = [self.probe_dir]

    def test_core_functions(self):
        """Every core function must have at least one test.

        Each test is a list of (args, answer). Answers are checked for both
        value and type."""

        task_asm = self.project.task_builders.find('csc').assembly
        lib_dir = Path(buildfuncs.__file__).resolve().parent
        own_asm = Assembly('buildfuncs', buildfuncs.__version__, lib_dir)

        tests = {
            'nant::get-base-directory': [((), str(lib_dir))],
            'nant::get-assembly': [((), own_asm)],
            'nant::scan-probing-paths': [
                (('nunit.framework.dll',),
                 str((self.probe_dir/'lib'/'net'/'nunit.framework.dll')
                     .resolve()))],
            'project::get-name': [((), 'Acme')],
            'project::get-buildfile-uri': [
                ((), (self.tmp_dir/'acme.build').resolve().as_uri())],
            'project::get-buildfile-path': [
                ((), str(self.tmp_dir/'acme.build'))],
            'project::get-default-target': [((), 'build')],
            'project::get-base-directory': [((), str(self.tmp_dir))],
            'target::exists': [(('clean',), True),
                               (('dist',), False)],
            'target::has-executed': [(('init',), False)],
            'task::exists': [(('csc',), True),
                             (('vbc',), False)],
            'task::get-assembly': [(('csc',), task_asm)],
            'property::exists': [(('debug',), True),
                                 (('release',), False)],
            'property::get-value': [(('now',), '12:00')],
            'property::is-readonly': [(('debug',), True),
                                      (('plain',), False)],
            'property::is-dynamic': [(('now',), True),
                                     (('debug',), False)],
            'platform::get-name': [((), 'linux')],
            'platform::is-win32': [((), False)],
            'platform::is-unix': [((), True)],
            'assembly::get-full-name': [((task_asm,),
                                         'dotnet.tasks, Version=1.2')],
            'assembly::get-name': [((task_asm,), 'dotnet.tasks')],
            'assembly::get-version': [((task_asm,), '1.2')],
            'assembly::get-location': [
                ((task_asm,), str(Path('/opt/tasks/dotnet.tasks.py'))),
                ((Assembly('in.memory'),), '')],
        }

        # get-current-target needs a running target.
        stateful = {'target::get-current-target'}

        for desc in self.registry.functions():
            name = desc.qualified_name
            if name in stateful:
                continue

            self.assertIn(name, tests,
                          msg='You must provide tests for all core '
                              'functions. Missing {}'.format(name))

            for args, answer in tests[name]:
                result = self.call(desc.namespace, desc.name, *args)
                self.assertTrue(
                    result.ok,
                    msg="Error evaluating function '{}' with args '{}': {}"
                        .format(name, args, result.failure))
                self.assertEqual(result.value, answer, msg=name)
                self.assertIs(type(result.value), type(answer), msg=name)

    def test_empty_project(self):
        """Optional project values come back as empty strings."""

        self.dispatcher = Dispatcher(self.make_project(), self.registry)

        for func in ('get-name', 'get-buildfile-uri', 'get-buildfile-path',
                     'get-default-target'):
            self.assert_value(self.call('project', func), '')

        project = self.make_project()
        project.name = None
        self.dispatcher = Dispatcher(project, self.registry)
        self.assert_value(self.call('project', 'get-name'), '')

    def test_current_target(self):
        """The current target is only available while one is running."""

        self.assert_failure(self.call('target', 'get-current-target'),
                            ErrorKind.INVALID_STATE)

        with self.project.executing('build'):
            self.assert_value(self.call('target', 'get-current-target'),
                              'build')

            with self.project.executing('init'):
                self.assert_value(
                    self.call('target', 'get-current-target'), 'init')

            self.assert_value(self.call('target', 'get-current-target'),
                              'build')

        self.assert_failure(self.call('target', 'get-current-target'),
                            ErrorKind.INVALID_STATE)

    def test_has_executed(self):
        """Targets report whether they've run; unknown targets fail."""

        self.assert_value(self.call('target', 'has-executed', 'clean'),
                          False)
        with self.project.executing('clean'):
            pass
        self.assert_value(self.call('target', 'has-executed', 'clean'),
                          True)

        failure = self.assert_failure(
            self.call('target', 'has-executed', 'dist'),
            ErrorKind.UNKNOWN_TARGET)
        self.assertIn("'dist'", failure.message)

        # Existence checks never fail.
        self.assert_value(self.call('target', 'exists', 'dist'), False)

    def test_tasks(self):
        """Missing tasks are 'false' for exists, but an error otherwise."""

        self.project.task_builders.data.clear()

        self.assert_value(self.call('task', 'exists', 'compile'), False)
        failure = self.assert_failure(
            self.call('task', 'get-assembly', 'compile'),
            ErrorKind.UNKNOWN_TASK)
        self.assertIn("task::get-assembly('compile')", failure.message)

    def test_property_flags(self):
        """Flag queries fail exactly when the property is missing."""

        for func in ('is-readonly', 'is-dynamic', 'get-value'):
            failure = self.assert_failure(
                self.call('property', func, 'missing'),
                ErrorKind.UNKNOWN_PROPERTY)
            self.assertIn("property::{}('missing')".format(func),
                          failure.message)

        self.project.properties.set('missing', 'now here', read_only=True)
        self.assert_value(self.call('property', 'is-readonly', 'missing'),
                          True)

        self.project.properties.remove('missing')
        self.assert_failure(self.call('property', 'is-readonly', 'missing'),
                            ErrorKind.UNKNOWN_PROPERTY)

    def test_platforms(self):
        """Platform functions reflect the project's platform."""

        project = self.make_project(
            platform=Platform('win32', PlatformKind.WIN32))
        dispatcher = Dispatcher(project, self.registry)

        def value(func):
            return dispatcher.invoke(CallDescriptor('platform', func)).value

        self.assertEqual(value('get-name'), 'win32')
        self.assertTrue(value('is-win32'))
        self.assertFalse(value('is-unix'))

    def test_scan_probing_paths(self):
        """Probing paths are searched in order, recursively."""

        self.project.probing_paths = []
        failure = self.assert_failure(
            self.call('nant', 'scan-probing-paths', 'nunit.framework.dll'),
            ErrorKind.FILE_NOT_FOUND)
        self.assertIn('nunit.framework.dll', failure.message)

        first = self.tmp_dir/'first'
        (first/'deep'/'er').mkdir(parents=True)
        (first/'deep'/'er'/'nunit.framework.dll').touch()

        self.project.probing_paths = [self.tmp_dir/'missing', first,
                                      self.probe_dir]
        result = self.call('nant', 'scan-probing-paths',
                           'nunit.framework.dll')
        self.assertEqual(
            result.value,
            str((first/'deep'/'er'/'nunit.framework.dll').resolve()))
        self.assertTrue(Path(result.value).is_absolute())

        self.assert_failure(
            self.call('nant', 'scan-probing-paths', 'other.dll'),
            ErrorKind.FILE_NOT_FOUND)
