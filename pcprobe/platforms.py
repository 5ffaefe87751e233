import ntpath
import os
import platform
import posixpath
import re
import subprocess

from .objutils import memoize

__all__ = ['known_platforms', 'platform_info', 'platform_name',
           'platform_tuple', 'Platform', 'PosixPlatform', 'WindowsPlatform']

# This lists the known platform families and genera.
known_platforms = ['posix', 'windows', 'linux', 'darwin', 'cygwin', 'winnt',
                   'win9x', 'msdos']

_platform_genus = {
    'android': 'linux',
    'ios': 'darwin',
    'macos': 'darwin',
}


@memoize
def platform_name():
    system = platform.system().lower()
    if system.startswith('cygwin'):
        return 'cygwin'

    if system == 'windows':
        try:
            uname = subprocess.check_output(
                'uname', universal_newlines=True
            ).lower()
            if uname.startswith('cygwin'):
                return 'cygwin'
        except OSError:
            pass
        return 'winnt'
    elif system == 'darwin':
        machine = platform.machine()
        if re.match(r'(iPhone|iPad|iPod)', machine):
            return 'ios'
        return 'macos'

    return system


def platform_tuple(name=None):
    if name is None:
        name = platform_name()
    return _platform_genus.get(name, str(name)), name


class Platform:
    _ospath = posixpath

    def __init__(self, genus, species):
        self.genus = genus
        self.species = species

    @property
    def name(self):
        return self.species

    @property
    def names(self):
        return {self.species, self.genus, self.family}

    def normpath(self, path, base_dir=None):
        """Make `path` absolute (relative to `base_dir`, or the current
        directory) and normalize it using this platform's conventions."""
        if base_dir is None:
            base_dir = os.getcwd()
        path = self._localize(path)
        return self._ospath.normpath(self._ospath.join(
            self._localize(base_dir), path
        ))

    def _localize(self, path):
        return path

    def __eq__(self, rhs):
        if not isinstance(rhs, Platform):
            return NotImplemented
        return self.genus == rhs.genus and self.species == rhs.species

    def __ne__(self, rhs):
        return not self == rhs

    def __hash__(self):
        return hash((self.genus, self.species))

    def __repr__(self):
        return '<{}({!r})>'.format(type(self).__name__, self.name)


class PosixPlatform(Platform):
    @property
    def family(self):
        return 'posix'

    @property
    def has_path_ext(self):
        return False


class WindowsPlatform(Platform):
    _ospath = ntpath

    @property
    def family(self):
        return 'windows'

    @property
    def has_path_ext(self):
        return True

    def _localize(self, path):
        return path.replace('/', '\\')


_platform_types = {
    'winnt': WindowsPlatform,
    'win9x': WindowsPlatform,
    'msdos': WindowsPlatform,
}


@memoize
def _get_platform_info(genus, species):
    # Fall back to a generic POSIX system if we don't recognize the platform
    # name.
    return _platform_types.get(genus, PosixPlatform)(genus, species)


def platform_info(name=None):
    if isinstance(name, Platform):
        return name
    genus, species = platform_tuple(name)
    return _get_platform_info(genus, species)
