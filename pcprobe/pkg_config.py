import argparse
import os
import posixpath
import re
import warnings

from . import log, shell
from .iterutils import first, iterate, listify, uniques
from .versioning import Version


def _flag_parser(flag, dest):
    parser = argparse.ArgumentParser(add_help=False, exit_on_error=False)
    parser.add_argument(flag, action='append', dest=dest)
    return parser


_include_dirs_parser = _flag_parser('-I', 'include_dirs')
_lib_dirs_parser = _flag_parser('-L', 'lib_dirs')
_libs_parser = _flag_parser('-l', 'libs')

# Matches library files like `libfoo.a`, `libfoo.dylib` or `libfoo.so.1.2`.
_lib_file_ex = re.compile(r'^lib(.+?)\.(?:a|dylib|so(?:\.\d+)*)$')


def _shell_split(output):
    return shell.split(output, escapes=True)


class RawMetadata:
    """The unprocessed result of querying pkg-config for a single package."""

    __slots__ = ('name', 'version', 'include_dirs', 'other_cflags',
                 'lib_dirs', 'libs', 'other_ldflags')

    def __init__(self, name, version=None, *, include_dirs=(),
                 other_cflags=(), lib_dirs=(), libs=(), other_ldflags=()):
        set_ = super().__setattr__
        set_('name', name)
        set_('version', version)
        set_('include_dirs', tuple(include_dirs))
        set_('other_cflags', tuple(other_cflags))
        set_('lib_dirs', tuple(lib_dirs))
        set_('libs', tuple(libs))
        set_('other_ldflags', tuple(other_ldflags))

    def __setattr__(self, name, value):
        raise AttributeError('{} is immutable'.format(type(self).__name__))

    def __eq__(self, rhs):
        if not isinstance(rhs, RawMetadata):
            return NotImplemented
        return all(getattr(self, i) == getattr(rhs, i)
                   for i in self.__slots__)

    def __hash__(self):
        return hash(tuple(getattr(self, i) for i in self.__slots__))

    def __repr__(self):
        return '<{}({!r}, {!r})>'.format(type(self).__name__, self.name,
                                         str(self.version))


def split_lib_files(args):
    """Split raw library files out of a list of link arguments. Some `.pc`
    files name their libraries by path instead of with `-L`/`-l`; return
    those as directories and library names, along with the remaining
    arguments."""
    lib_dirs, libs, rest = [], [], []
    for i in args:
        if not i.startswith('-'):
            dirname, basename = posixpath.split(i.replace('\\', '/'))
            m = _lib_file_ex.match(basename)
            if dirname and m:
                lib_dirs.append(dirname)
                libs.append(m.group(1))
                continue
        rest.append(i)
    return lib_dirs, libs, rest


class PkgConfig:
    # Map field names to pkg-config flags and how to convert their output.
    _options = {
        'version': (['--modversion'], None),
        'include_dirs': (['--cflags-only-I'], _shell_split),
        'other_cflags': (['--cflags-only-other'], _shell_split),
        'lib_dirs': (['--libs-only-L'], _shell_split),
        'libs': (['--libs-only-l'], _shell_split),
        'other_ldflags': (['--libs-only-other'], _shell_split),
    }

    def __init__(self, command=None, *, search_path=None, static=False,
                 environ=os.environ):
        self.environ = environ
        if command is None:
            command = environ.get('PKG_CONFIG', 'pkg-config')
        self.command, self.found = _check_which(command, environ)
        self.search_path = listify(search_path)
        self.static = static

    def _env(self):
        if not self.search_path:
            return None
        paths = self.search_path + shell.split_paths(
            self.environ.get('PKG_CONFIG_PATH')
        )
        return dict(self.environ, PKG_CONFIG_PATH=shell.join_paths(paths))

    def _call(self, name, type, static=None):
        if static is None:
            static = self.static
        result = self.command + [name] + self._options[type][0]
        if static and type != 'version':
            result.append('--static')
        return result

    def run(self, name, type, static=None):
        result = shell.execute(
            self._call(name, type, static), env=self._env(),
            stdout=shell.Mode.pipe, stderr=shell.Mode.devnull
        ).strip()
        if self._options[type][1]:
            return self._options[type][1](result)
        return result

    def _field(self, name, type, parser=None, static=None):
        # A single bad field shouldn't sink the whole query; just treat it as
        # though it were empty.
        try:
            result = self.run(name, type, static)
            if parser:
                result = getattr(parser.parse_known_args(result)[0], type)
            return list(iterate(result))
        except (OSError, ValueError, argparse.ArgumentError,
                shell.CalledProcessError) as e:
            warnings.warn('ignoring malformed {} for package {!r}: {}'
                          .format(type, name, e))
            return []

    def query(self, name, static=None):
        """Return the RawMetadata for the package `name`, or None if
        pkg-config doesn't know about it. If `static` is set, it overrides
        the static mode this object was created with."""
        try:
            version = self.run(name, 'version')
        except shell.CalledProcessError:
            log.debug('package {!r} not found via pkg-config'.format(name))
            return None
        except OSError as e:
            log.debug('unable to run pkg-config: {}'.format(e))
            return None

        file_dirs, file_libs, other_ldflags = split_lib_files(
            self._field(name, 'other_ldflags', static=static)
        )
        lib_dirs = self._field(name, 'lib_dirs', _lib_dirs_parser, static)
        libs = self._field(name, 'libs', _libs_parser, static)

        result = RawMetadata(
            name, Version(version) if version else None,
            include_dirs=self._field(name, 'include_dirs',
                                     _include_dirs_parser, static),
            other_cflags=self._field(name, 'other_cflags', static=static),
            lib_dirs=uniques(lib_dirs + file_dirs),
            libs=uniques(libs + file_libs),
            other_ldflags=other_ldflags,
        )
        log.info('found package {!r} version {} via pkg-config'
                 .format(name, result.version))
        return result

    def __repr__(self):
        return '<{}({})>'.format(
            type(self).__name__, ', '.join(repr(i) for i in self.command)
        )


def _check_which(names, environ):
    names = listify(names)
    try:
        return shell.which(names, env=environ), True
    except IOError as e:
        warnings.warn(str(e))
        # Assume the first name is the best choice.
        return shell.split(first(names)), False
