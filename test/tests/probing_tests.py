"""Test probing path file resolution."""

from buildfuncs import probing
from buildfuncs.errors import ErrorKind
from buildfuncs.unittest import FuncTestCase


class ProbingTests(FuncTestCase):
    """Check the probing directory search."""

    def set_up(self):
        super().set_up()

        self.first = self.tmp_dir/'first'
        self.second = self.tmp_dir/'second'
        for path in (self.first/'b', self.first/'a', self.second):
            path.mkdir(parents=True)

        (self.first/'b'/'lib.dll').touch()
        (self.first/'a'/'lib.dll').touch()
        (self.second/'lib.dll').touch()
        (self.second/'top.dll').touch()

    def test_order(self):
        """Directories are searched in order; subdirectories in sorted
        order."""

        found = probing.resolve_file([self.first, self.second], 'lib.dll')
        self.assertEqual(found, (self.first/'a'/'lib.dll').resolve())

        found = probing.resolve_file([self.second, self.first], 'lib.dll')
        self.assertEqual(found, (self.second/'lib.dll').resolve())

    def test_not_recursive(self):
        """Without recursion only the directories themselves are checked."""

        found = probing.resolve_file([self.first, self.second], 'lib.dll',
                                     recursive=False)
        self.assertEqual(found, (self.second/'lib.dll').resolve())

        self.assertIsNone(probing.resolve_file([self.first], 'lib.dll',
                                               recursive=False))

    def test_missing(self):
        """Missing directories are skipped, and missing files give None."""

        found = probing.resolve_file(
            [self.tmp_dir/'nope', str(self.second)], 'top.dll')
        self.assertEqual(found, (self.second/'top.dll').resolve())
        self.assertTrue(found.is_absolute())

        self.assertIsNone(probing.resolve_file([], 'top.dll'))
        self.assertIsNone(probing.resolve_file([self.first], 'top.dll'))

    def test_plain_names_only(self):
        """Names that reach outside the probing directories never match."""

        outside = self.tmp_dir/'outside'
        outside.mkdir()
        (outside/'secret.txt').touch()

        for name in (str(outside/'secret.txt'), '../outside/secret.txt',
                     'a/lib.dll', '..', '.', ''):
            self.assertIsNone(
                probing.resolve_file([self.first, self.second], name),
                msg=name)

        self.project.probing_paths = [self.first]
        for name in (str(outside/'secret.txt'), '../outside/secret.txt'):
            self.assert_failure(self.call('nant', 'scan-probing-paths', name),
                                ErrorKind.FILE_NOT_FOUND)
