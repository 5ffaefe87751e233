from . import *

from pcprobe import platforms


class TestPlatformName(TestCase):
    def setUp(self):
        platforms.platform_name._reset()

    def tearDown(self):
        platforms.platform_name._reset()

    def test_linux(self):
        with mock.patch('platform.system', return_value='Linux'):
            self.assertEqual(platforms.platform_name(), 'linux')

    def test_macos(self):
        with mock.patch('platform.system', return_value='Darwin'), \
             mock.patch('platform.machine', return_value='x86_64'):
            self.assertEqual(platforms.platform_name(), 'macos')

    def test_ios(self):
        with mock.patch('platform.system', return_value='Darwin'), \
             mock.patch('platform.machine', return_value='iPhone'):
            self.assertEqual(platforms.platform_name(), 'ios')

    def test_windows(self):
        with mock.patch('platform.system', return_value='Windows'), \
             mock.patch('subprocess.check_output', side_effect=OSError()):
            self.assertEqual(platforms.platform_name(), 'winnt')

    def test_windows_cygwin(self):
        with mock.patch('platform.system', return_value='Windows'), \
             mock.patch('subprocess.check_output',
                        return_value='CYGWIN_NT-10.0'):
            self.assertEqual(platforms.platform_name(), 'cygwin')

    def test_cygwin(self):
        with mock.patch('platform.system', return_value='CYGWIN_NT-10.0'):
            self.assertEqual(platforms.platform_name(), 'cygwin')


class TestPlatformTuple(TestCase):
    def test_known(self):
        self.assertEqual(platforms.platform_tuple('linux'), ('linux', 'linux'))
        self.assertEqual(platforms.platform_tuple('macos'),
                         ('darwin', 'macos'))
        self.assertEqual(platforms.platform_tuple('android'),
                         ('linux', 'android'))

    def test_default(self):
        with mock.patch('pcprobe.platforms.platform_name',
                        return_value='linux'):
            self.assertEqual(platforms.platform_tuple(), ('linux', 'linux'))


class TestPlatformInfo(TestCase):
    def test_posix(self):
        p = platforms.platform_info('macos')
        self.assertIsInstance(p, platforms.PosixPlatform)
        self.assertEqual(p.name, 'macos')
        self.assertEqual(p.genus, 'darwin')
        self.assertEqual(p.family, 'posix')
        self.assertEqual(p.names, {'macos', 'darwin', 'posix'})
        self.assertFalse(p.has_path_ext)

    def test_windows(self):
        p = platforms.platform_info('winnt')
        self.assertIsInstance(p, platforms.WindowsPlatform)
        self.assertEqual(p.family, 'windows')
        self.assertEqual(p.names, {'winnt', 'windows'})
        self.assertTrue(p.has_path_ext)

    def test_unknown(self):
        p = platforms.platform_info('haiku')
        self.assertIsInstance(p, platforms.PosixPlatform)
        self.assertEqual(p.name, 'haiku')

    def test_passthrough(self):
        p = platforms.platform_info('linux')
        self.assertIs(platforms.platform_info(p), p)

    def test_equality(self):
        self.assertEqual(platforms.platform_info('linux'),
                         platforms.PosixPlatform('linux', 'linux'))
        self.assertNotEqual(platforms.platform_info('linux'),
                            platforms.platform_info('android'))


class TestNormpath(TestCase):
    def test_posix(self):
        p = platforms.platform_info('linux')
        self.assertEqual(p.normpath('/usr/include/', '/base'), '/usr/include')
        self.assertEqual(p.normpath('/usr/./lib/../include', '/base'),
                         '/usr/include')
        self.assertEqual(p.normpath('include', '/base'), '/base/include')
        self.assertEqual(p.normpath('../include', '/base/dir'),
                         '/base/include')

    def test_posix_cwd(self):
        p = platforms.platform_info('linux')
        with mock.patch('os.getcwd', return_value='/cwd'):
            self.assertEqual(p.normpath('include'), '/cwd/include')

    def test_windows(self):
        p = platforms.platform_info('winnt')
        self.assertEqual(p.normpath('C:/foo/bar/', 'C:\\base'),
                         'C:\\foo\\bar')
        self.assertEqual(p.normpath('include', 'C:\\base'),
                         'C:\\base\\include')
        self.assertEqual(p.normpath('..\\include', 'C:/base/dir'),
                         'C:\\base\\include')
