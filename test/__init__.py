import unittest
from unittest import mock  # noqa: F401

from pcprobe.pkg_config import RawMetadata
from pcprobe.versioning import Version

__all__ = ['FakeAdapter', 'mock', 'raw', 'TestCase']


def raw(name, version=None, **kwargs):
    return RawMetadata(name, Version(version) if version else None, **kwargs)


class FakeAdapter:
    def __init__(self, packages):
        self.packages = {i.name: i for i in packages}
        self.queries = []
        self.static_queries = []

    def query(self, name, static=False):
        self.queries.append(name)
        if static:
            self.static_queries.append(name)
        return self.packages.get(name)


class TestCase(unittest.TestCase):
    pass
