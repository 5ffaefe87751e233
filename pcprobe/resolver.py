import os
import warnings

from . import log, shell
from .catalog import builtin_catalog
from .exceptions import LibraryNotFound, MissingDependency, PackageVersionError
from .iterutils import iterate, uniques
from .pkg_config import PkgConfig
from .platforms import platform_info
from .versioning import check_version, make_specifier

__all__ = ['probe', 'ResolvedDescriptor', 'Resolver']

_lib_file_formats = ['lib{}.a', 'lib{}.so', 'lib{}.dylib', '{}.lib']


class ResolvedDescriptor:
    """The corrected set of flags needed to compile and link against a
    package."""

    _fields = ('name', 'version', 'include_dirs', 'other_cflags', 'lib_dirs',
               'libs', 'other_ldflags')
    __slots__ = _fields

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

    def cflags(self):
        return ['-I' + i for i in self.include_dirs] + list(self.other_cflags)

    def ldflags(self):
        return (['-L' + i for i in self.lib_dirs] + list(self.other_ldflags) +
                ['-l' + i for i in self.libs])

    def to_json(self):
        result = {i: list(getattr(self, i)) for i in self._fields[2:]}
        result['name'] = self.name
        result['version'] = str(self.version) if self.version else None
        return result

    def __setattr__(self, name, value):
        raise AttributeError('{} is immutable'.format(type(self).__name__))

    def __eq__(self, rhs):
        if not isinstance(rhs, ResolvedDescriptor):
            return NotImplemented
        return all(getattr(self, i) == getattr(rhs, i) for i in self._fields)

    def __hash__(self):
        return hash(tuple(getattr(self, i) for i in self._fields))

    def __repr__(self):
        return '<{}({!r}, {!r})>'.format(type(self).__name__, self.name,
                                         str(self.version))


def _partition_cflags(args):
    # Pull out any `-I` flags (in either `-Idir` or `-I dir` form) so they can
    # be tracked as include directories.
    include_dirs, other = [], []
    args = iter(args)
    for i in args:
        if i == '-I':
            include_dirs.extend(iterate(next(args, None)))
        elif i.startswith('-I'):
            include_dirs.append(i[2:])
        else:
            other.append(i)
    return include_dirs, other


def _expand(match, replacement):
    result = match.expand(replacement)
    try:
        return shell.split(result, escapes=True)
    except ValueError as e:
        warnings.warn('unable to split rewritten flag {!r}: {}'
                      .format(result, e))
        return [result]


def _apply_rewrites(rules, flags):
    rewrites = [(n, i) for n, rule in enumerate(rules) for i in rule.rewrites]
    for index, (n, rewrite) in enumerate(rewrites):
        # If a later rule rewrites this flag too, that rule wins.
        later = [i for m, i in rewrites[index + 1:] if m > n]
        result = []
        for flag in flags:
            m = rewrite.match(flag)
            if m and not any(i.match(flag) for i in later):
                expanded = _expand(m, rewrite.replacement)
                log.debug('rewriting {!r} to {!r}'.format(flag, expanded))
                result.extend(expanded)
            else:
                result.append(flag)
        flags = result
    return flags


def _drop(rules, things, prefix=''):
    def dropped(thing):
        return any(i.drops_match(thing) or
                   (prefix and i.drops_match(prefix + thing)) for i in rules)

    return [i for i in things if not dropped(i)]


class Resolver:
    def __init__(self, adapter, catalog=None, platform=None, *,
                 base_dir=None):
        self.adapter = adapter
        self.catalog = catalog if catalog is not None else builtin_catalog
        self.platform = platform_info(platform)
        self.base_dir = base_dir

    def _query(self, name, static):
        if static:
            return self.adapter.query(name, static=True)
        return self.adapter.query(name)

    def _query_requirements(self, name, rules, static):
        seen = {name}
        results = []
        for rule in rules:
            for dep in rule.requires:
                if dep in seen:
                    continue
                seen.add(dep)
                metadata = self._query(dep, static)
                if metadata is None:
                    raise MissingDependency(dep, name)
                results.append(metadata)
        return results

    def _find_library(self, names, lib_dirs):
        base_dir = self.base_dir or os.getcwd()
        for lib_dir in lib_dirs:
            for name in names:
                for fmt in _lib_file_formats:
                    path = os.path.join(base_dir, lib_dir, fmt.format(name))
                    if os.path.exists(path):
                        return name
        return None

    def _normpaths(self, paths):
        return uniques(self.platform.normpath(i, self.base_dir)
                       for i in paths if i)

    def probe(self, name, version=None):
        rules = self.catalog.lookup(name, self.platform)
        static = any(i.static for i in rules)

        target = self._query(name, static)
        if target is None:
            raise LibraryNotFound(name)
        if version is not None:
            check_version(target.version, make_specifier(version), name,
                          PackageVersionError)

        if rules:
            log.debug('applying {} correction rule(s) for {!r}'
                      .format(len(rules), name))
        results = [target] + self._query_requirements(name, rules, static)

        def merged(field):
            return uniques(j for i in results for j in getattr(i, field))

        include_dirs = merged('include_dirs')
        cflags = merged('other_cflags')
        lib_dirs = _drop(rules, merged('lib_dirs'), '-L')
        libs = merged('libs')
        ldflags = merged('other_ldflags')

        for rule in rules:
            for group in rule.link_any:
                lib = self._find_library(group, lib_dirs)
                if lib is None:
                    raise MissingDependency(' or '.join(group), name)
                if lib not in libs:
                    libs.append(lib)

        for rule in rules:
            add_include_dirs, add_cflags = _partition_cflags(rule.add_flags)
            include_dirs.extend(i for i in add_include_dirs
                                if i not in include_dirs)
            cflags.extend(i for i in add_cflags if i not in cflags)

        include_dirs, cflags = _partition_cflags(_apply_rewrites(
            rules, ['-I' + i for i in include_dirs if i] + cflags
        ))

        include_dirs = _drop(rules, self._normpaths(
            _drop(rules, include_dirs, '-I')
        ), '-I')
        lib_dirs = _drop(rules, self._normpaths(
            _drop(rules, lib_dirs, '-L')
        ), '-L')

        return ResolvedDescriptor(
            name, target.version,
            include_dirs=include_dirs,
            other_cflags=_drop(rules, cflags),
            lib_dirs=lib_dirs,
            libs=_drop(rules, libs, '-l'),
            other_ldflags=_drop(rules, ldflags),
        )


def probe(name, platform=None, *, version=None, catalog=None,
          search_path=None, static=False, pkg_config=None, base_dir=None):
    adapter = PkgConfig(pkg_config, search_path=search_path, static=static)
    resolver = Resolver(adapter, catalog, platform, base_dir=base_dir)
    return resolver.probe(name, version)
