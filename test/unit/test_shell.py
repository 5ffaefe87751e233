import subprocess

from . import *

from pcprobe import shell
from pcprobe.platforms import platform_info


class TestSplit(TestCase):
    def test_single(self):
        self.assertEqual(shell.split('foo'), ['foo'])
        self.assertEqual(shell.split(' foo'), ['foo'])
        self.assertEqual(shell.split('foo '), ['foo'])

    def test_multiple(self):
        self.assertEqual(shell.split('foo bar baz'), ['foo', 'bar', 'baz'])

    def test_quote(self):
        self.assertEqual(shell.split('foo "bar baz"'), ['foo', 'bar baz'])
        self.assertEqual(shell.split("foo 'bar baz'"), ['foo', 'bar baz'])

    def test_escapes(self):
        self.assertEqual(shell.split(r'foo\ bar'), ['foo\\', 'bar'])
        self.assertEqual(shell.split(r'foo\ bar', escapes=True), ['foo bar'])

    def test_type(self):
        self.assertEqual(shell.split('foo bar', type=tuple), ('foo', 'bar'))

    def test_unclosed_quote(self):
        self.assertRaises(ValueError, shell.split, 'foo "bar')

    def test_invalid(self):
        self.assertRaises(TypeError, shell.split, 1)


class TestQuote(TestCase):
    def test_simple(self):
        self.assertEqual(shell.quote('foo'), 'foo')
        self.assertEqual(shell.quote('-I/usr/include'), '-I/usr/include')

    def test_space(self):
        self.assertEqual(shell.quote('foo bar'), "'foo bar'")

    def test_quote(self):
        self.assertEqual(shell.quote("foo'bar"), "'foo'\\''bar'")

    def test_join(self):
        self.assertEqual(shell.join(['foo', 'bar baz']), "foo 'bar baz'")


class TestSplitPaths(TestCase):
    def test_none(self):
        self.assertEqual(shell.split_paths(None), [])

    def test_paths(self):
        self.assertEqual(shell.split_paths('foo:bar', ':'), ['foo', 'bar'])
        self.assertEqual(shell.split_paths('foo::bar', ':'), ['foo', 'bar'])

    def test_join(self):
        self.assertEqual(shell.join_paths(['foo', 'bar'], ':'), 'foo:bar')


class TestWhich(TestCase):
    def setUp(self):
        self.env = {'PATH': '/usr/bin:/usr/local/bin'}
        self.platform = platform_info('linux')

    def test_simple(self):
        with mock.patch('os.path.exists', return_value=True), \
             mock.patch('pcprobe.shell.platform_info',
                        return_value=self.platform):
            self.assertEqual(shell.which('pkg-config', env=self.env),
                             ['pkg-config'])

    def test_multiple_args(self):
        with mock.patch('os.path.exists', return_value=True), \
             mock.patch('pcprobe.shell.platform_info',
                        return_value=self.platform):
            self.assertEqual(shell.which('pkg-config --static', env=self.env),
                             ['pkg-config', '--static'])
            self.assertEqual(shell.which([['pkgconf', '--foo']],
                                         env=self.env),
                             ['pkgconf', '--foo'])

    def test_multiple_names(self):
        with mock.patch('os.path.exists', side_effect=[False, False, True]), \
             mock.patch('pcprobe.shell.platform_info',
                        return_value=self.platform):
            self.assertEqual(shell.which(['pkg-config', 'pkgconf'],
                                         env=self.env),
                             ['pkgconf'])

    def test_not_found(self):
        with mock.patch('os.path.exists', return_value=False), \
             mock.patch('pcprobe.shell.platform_info',
                        return_value=self.platform):
            self.assertRaises(IOError, shell.which, 'pkg-config',
                              env=self.env)

    def test_empty(self):
        self.assertRaises(TypeError, shell.which, [])


class TestExecute(TestCase):
    def test_pipe(self):
        proc = subprocess.CompletedProcess(['cmd'], 0, 'output\n', None)
        with mock.patch('subprocess.run', return_value=proc) as mrun:
            self.assertEqual(shell.execute(['cmd'], stdout=shell.Mode.pipe),
                             'output\n')
            mrun.assert_called_once_with(
                ['cmd'], universal_newlines=True, env=None,
                stdout=subprocess.PIPE, stderr=None
            )

    def test_env(self):
        proc = subprocess.CompletedProcess(['cmd'], 0, 'output\n', None)
        with mock.patch('subprocess.run', return_value=proc) as mrun:
            shell.execute(['cmd'], env={'FOO': 'bar'},
                          stdout=shell.Mode.pipe, stderr=shell.Mode.devnull)
            mrun.assert_called_once_with(
                ['cmd'], universal_newlines=True, env={'FOO': 'bar'},
                stdout=subprocess.PIPE, stderr=subprocess.DEVNULL
            )

    def test_failure(self):
        proc = subprocess.CompletedProcess(['cmd'], 1, '', None)
        with mock.patch('subprocess.run', return_value=proc):
            self.assertRaises(shell.CalledProcessError, shell.execute,
                              ['cmd'], stdout=shell.Mode.pipe)

    def test_any_returncode(self):
        proc = subprocess.CompletedProcess(['cmd'], 1, 'output', None)
        with mock.patch('subprocess.run', return_value=proc):
            self.assertEqual(shell.execute(['cmd'], stdout=shell.Mode.pipe,
                                           returncode='any'), 'output')
