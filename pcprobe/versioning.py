from verspec.loose import (LooseSpecifierSet as SpecifierSet,
                           LooseVersion as Version)

from .exceptions import VersionError

__all__ = ['check_version', 'make_specifier', 'SpecifierSet', 'Version',
           'VersionError']


def make_specifier(s):
    if s is None or isinstance(s, SpecifierSet):
        return s
    return SpecifierSet(s)


def check_version(version, specifier, kind, exception_type=VersionError):
    msg = "{kind} version {ver} doesn't meet requirement {req}"
    if version is None:
        raise exception_type('{kind} version is unknown; requirement is {req}'
                             .format(kind=kind, req=specifier))
    if version not in specifier:
        raise exception_type(msg.format(kind=kind, ver=version, req=specifier))
