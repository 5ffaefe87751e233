import os
import re
import subprocess
from enum import Enum
from shlex import shlex

from . import iterutils
from .iterutils import default_sentinel
from .platforms import platform_info

__all__ = ['CalledProcessError', 'execute', 'join', 'join_paths', 'Mode',
           'quote', 'split', 'split_paths', 'which']

CalledProcessError = subprocess.CalledProcessError

_bad_chars = re.compile(r'[^\w@%+=:,./-]')


class Mode(Enum):
    normal = None
    pipe = subprocess.PIPE
    stdout = subprocess.STDOUT
    devnull = subprocess.DEVNULL


def split(s, type=list, escapes=False):
    if not isinstance(s, str):
        raise TypeError('expected a string')
    lexer = shlex(s, posix=True)
    lexer.commenters = ''
    if not escapes:
        lexer.escape = ''
    lexer.whitespace_split = True
    return type(lexer)


def quote(s):
    if _bad_chars.search(s):
        return "'" + s.replace("'", r"'\''") + "'"
    return s


def join(args):
    return ' '.join(quote(i) for i in args)


def split_paths(s, sep=os.pathsep):
    if s is None:
        return []
    return [i for i in s.split(sep) if i]


def join_paths(paths, sep=os.pathsep):
    return sep.join(paths)


def which(names, path=default_sentinel, pathext=default_sentinel, *,
          env=os.environ, kind='executable'):
    names = iterutils.listify(names)
    if len(names) == 0:
        raise TypeError('must supply at least one name')

    if path is default_sentinel:
        path = split_paths(env.get('PATH', os.defpath))

    if pathext is default_sentinel:
        pathext = ['']
        if platform_info().has_path_ext:
            extstr = env.get('PATHEXT')
            if extstr:
                pathext.extend(split_paths(extstr))

    for name in names:
        name = split(name) if isinstance(name, str) else list(name)
        check = name[0]
        if os.path.isabs(check):
            fullpaths = [check]
        else:
            search = ['.'] if os.path.dirname(check) else path
            fullpaths = [os.path.normpath(os.path.join(p, check))
                         for p in search]

        for fullpath in fullpaths:
            for ext in pathext:
                if os.path.exists(fullpath + ext):
                    return name

    raise FileNotFoundError('unable to find {kind}{filler} {names}'.format(
        kind=kind, filler='; tried' if len(names) > 1 else '',
        names=', '.join('{!r}'.format(i) for i in names)
    ))


def execute(args, *, env=None, stdout=Mode.normal, stderr=Mode.normal,
            returncode=0):
    def conv_mode(mode):
        return mode.value if isinstance(mode, Mode) else mode

    proc = subprocess.run(
        args, universal_newlines=True, env=env,
        stdout=conv_mode(stdout), stderr=conv_mode(stderr)
    )
    if not (returncode == 'any' or
            (returncode == 'fail' and proc.returncode != 0) or
            proc.returncode in iterutils.listify(returncode)):
        raise CalledProcessError(proc.returncode, proc.args, proc.stdout,
                                 proc.stderr)

    if stdout == Mode.pipe:
        if stderr == Mode.pipe:
            return proc.stdout, proc.stderr
        return proc.stdout
    return proc.stderr
