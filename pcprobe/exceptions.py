from subprocess import CalledProcessError  # noqa: F401


class ProbeError(Exception):
    pass


class LibraryNotFound(ProbeError):
    def __init__(self, name):
        super().__init__("unable to find package '{}'".format(name))
        self.name = name


class MissingDependency(ProbeError):
    def __init__(self, name, required_by=None):
        msg = "unable to find dependency '{}'".format(name)
        if required_by:
            msg += " required by '{}'".format(required_by)
        super().__init__(msg)
        self.name = name
        self.required_by = required_by


class VersionError(Exception):
    pass


class PackageVersionError(ProbeError, VersionError):
    pass


class CatalogError(ValueError):
    pass
