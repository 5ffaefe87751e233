import importlib_resources
import re
import yaml

from .exceptions import CatalogError
from .iterutils import isiterable, ismapping, iterate
from .platforms import platform_info

__all__ = ['builtin_catalog', 'Catalog', 'CorrectionRule', 'load_catalog',
           'load_catalog_file', 'Rewrite']


def _compile(pattern):
    try:
        return re.compile(pattern)
    except (re.error, TypeError) as e:
        raise CatalogError('invalid pattern {!r}: {}'.format(pattern, e))


def _strings(value, field):
    result = tuple(iterate(value))
    if not all(isinstance(i, str) for i in result):
        raise CatalogError('expected a list of strings for {!r}'
                           .format(field))
    return result


class Rewrite:
    __slots__ = ('pattern', 'replacement')

    def __init__(self, pattern, replacement):
        if not isinstance(replacement, str):
            raise CatalogError('invalid replacement {!r}'.format(replacement))
        self.pattern = _compile(pattern)
        self.replacement = replacement
        self._check_replacement()

    def _check_replacement(self):
        # Expand against a match with the same groups so that bad group
        # references are caught now instead of while probing.
        m = _compile(self.pattern.pattern + '|').fullmatch('')
        try:
            m.expand(self.replacement)
        except (re.error, IndexError) as e:
            raise CatalogError('invalid replacement {!r}: {}'.format(
                self.replacement, e
            ))

    def match(self, flag):
        return self.pattern.fullmatch(flag)

    def __eq__(self, rhs):
        return (type(self) is type(rhs) and self.pattern == rhs.pattern and
                self.replacement == rhs.replacement)

    def __hash__(self):
        return hash((self.pattern, self.replacement))

    def __repr__(self):
        return '<Rewrite({!r} => {!r})>'.format(self.pattern.pattern,
                                                self.replacement)


class CorrectionRule:
    """A declarative fix for a known problem with a library's pkg-config
    metadata on one or more platforms."""

    _fields = ('library', 'platforms', 'static', 'requires', 'link_any',
               'add_flags', 'rewrites', 'drops')
    __slots__ = _fields

    def __init__(self, library, platforms=(), static=False, requires=(),
                 link_any=(), add_flags=(), rewrites=(), drops=()):
        if not isinstance(library, str) or not library:
            raise CatalogError('invalid library name {!r}'.format(library))
        if not isinstance(static, bool):
            raise CatalogError("expected a boolean for 'static'")

        set_ = super().__setattr__
        set_('library', library)
        set_('platforms', frozenset(_strings(platforms, 'platforms')))
        set_('static', static)
        set_('requires', _strings(requires, 'requires'))
        set_('link_any', tuple(_strings(i, 'link_any') for i in link_any))
        set_('add_flags', _strings(add_flags, 'add_flags'))
        set_('rewrites', tuple(
            i if isinstance(i, Rewrite) else Rewrite(*i) for i in rewrites
        ))
        set_('drops', tuple(_compile(i) for i in drops))

    @classmethod
    def from_data(cls, data):
        if not ismapping(data):
            raise CatalogError('expected a mapping for each rule')
        unknown = set(data) - set(cls._fields)
        if unknown:
            raise CatalogError('unknown rule fields: {}'.format(
                ', '.join(sorted(unknown))
            ))
        if 'library' not in data:
            raise CatalogError('rule is missing a library')

        kwargs = dict(data)
        rewrites = []
        for i in iterate(kwargs.pop('rewrites', None)):
            if not ismapping(i) or set(i) != {'pattern', 'replacement'}:
                raise CatalogError('expected a pattern and replacement for ' +
                                   'each rewrite')
            rewrites.append(Rewrite(i['pattern'], i['replacement']))
        link_any = kwargs.pop('link_any', None) or ()
        if not isiterable(link_any):
            raise CatalogError("expected a list for 'link_any'")
        static = kwargs.pop('static', None)
        if static is None:
            static = False

        return cls(rewrites=rewrites, link_any=link_any, static=static, **{
            k: (v if v is not None else ()) for k, v in kwargs.items()
        })

    def applies_to(self, name, platform):
        if name != self.library:
            return False
        return not self.platforms or bool(self.platforms & platform.names)

    def drops_match(self, thing):
        return any(i.fullmatch(thing) for i in self.drops)

    def __setattr__(self, name, value):
        raise AttributeError('{} is immutable'.format(type(self).__name__))

    def __eq__(self, rhs):
        return type(self) is type(rhs) and all(
            getattr(self, i) == getattr(rhs, i) for i in self._fields
        )

    def __hash__(self):
        return hash(tuple(getattr(self, i) for i in self._fields))

    def __repr__(self):
        platforms = ', '.join(sorted(self.platforms)) or 'any'
        return '<{}({!r}, {})>'.format(type(self).__name__, self.library,
                                       platforms)


class Catalog:
    def __init__(self, rules=()):
        self.rules = tuple(rules)

    def lookup(self, name, platform=None):
        platform = platform_info(platform)
        return [i for i in self.rules if i.applies_to(name, platform)]

    def extend(self, other):
        rules = other.rules if isinstance(other, Catalog) else other
        return Catalog(self.rules + tuple(rules))

    def __len__(self):
        return len(self.rules)

    def __repr__(self):
        return '<{}({} rules)>'.format(type(self).__name__, len(self.rules))


def load_catalog(stream):
    try:
        data = yaml.safe_load(stream)
    except yaml.YAMLError as e:
        raise CatalogError('unable to parse catalog: {}'.format(e))

    if data is None:
        return Catalog()
    if not ismapping(data) or not isiterable(data.get('rules') or []):
        raise CatalogError('expected a mapping with a list of rules')
    return Catalog(CorrectionRule.from_data(i)
                   for i in data.get('rules') or [])


def load_catalog_file(filename):
    with open(filename) as f:
        return load_catalog(f)


def _load_builtin():
    path = importlib_resources.files('pcprobe') / 'data' / 'catalog.yml'
    with path.open('r') as f:
        return load_catalog(f)


builtin_catalog = _load_builtin()
