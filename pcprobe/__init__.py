from .app_version import version as __version__  # noqa: F401
from .catalog import builtin_catalog, Catalog, CorrectionRule  # noqa: F401
from .exceptions import (LibraryNotFound, MissingDependency,  # noqa: F401
                         PackageVersionError, ProbeError)
from .pkg_config import PkgConfig, RawMetadata  # noqa: F401
from .resolver import probe, ResolvedDescriptor, Resolver  # noqa: F401
