import argparse
import json

from . import log, shell
from .app_version import version
from .catalog import builtin_catalog, load_catalog_file
from .exceptions import CatalogError, ProbeError
from .resolver import probe

logger = log.getLogger(__name__)

description = """
Find the compiler and linker flags needed to build against a package described
by pkg-config, correcting known gaps and bugs in the package's metadata.
"""


def format_descriptor(descriptor, format):
    if format == 'json':
        return json.dumps(descriptor.to_json(), indent=2)
    elif format == 'cflags':
        return shell.join(descriptor.cflags())
    elif format == 'libs':
        return shell.join(descriptor.ldflags())
    elif format == 'shell':
        return 'CFLAGS={}\nLIBS={}'.format(
            shell.quote(shell.join(descriptor.cflags())),
            shell.quote(shell.join(descriptor.ldflags()))
        )
    raise ValueError('unknown format {!r}'.format(format))


def load_catalog(filenames):
    catalog = builtin_catalog
    for i in filenames:
        catalog = catalog.extend(load_catalog_file(i))
    return catalog


def main(args=None):
    parser = argparse.ArgumentParser(prog='pcprobe', description=description)
    parser.add_argument('--version', action='version',
                        version='%(prog)s ' + version)
    parser.add_argument('--debug', action='store_true',
                        help='report extra information for debugging')
    parser.add_argument('--color', metavar='WHEN',
                        choices=['always', 'never', 'auto'], default='auto',
                        help=('show colored output (one of: %(choices)s; ' +
                              'default: %(default)s)'))
    parser.add_argument('--platform', metavar='NAME',
                        help='the platform to apply corrections for')
    parser.add_argument('--static', action='store_true',
                        help='request flags for static linking')
    parser.add_argument('--search-path', metavar='DIR', action='append',
                        default=[],
                        help='add DIR to the pkg-config search path')
    parser.add_argument('--catalog', metavar='FILE', action='append',
                        default=[],
                        help='load extra correction rules from FILE')
    parser.add_argument('--version-spec', metavar='SPEC',
                        help='require a package version matching SPEC')
    parser.add_argument('--format', default='json',
                        choices=['json', 'cflags', 'libs', 'shell'],
                        help=('output format (one of: %(choices)s; ' +
                              'default: %(default)s)'))
    parser.add_argument('name', help='the name of the package to probe')
    args = parser.parse_args(args)

    log.init(args.color, debug=args.debug)

    try:
        descriptor = probe(
            args.name, args.platform, version=args.version_spec,
            catalog=load_catalog(args.catalog), search_path=args.search_path,
            static=args.static
        )
    except (ProbeError, CatalogError, OSError) as e:
        logger.error(str(e), exc_info=args.debug)
        return 1

    print(format_descriptor(descriptor, args.format))
    return 0
