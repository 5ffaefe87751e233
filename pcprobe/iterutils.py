from collections.abc import Iterable, Mapping

__all__ = ['default_sentinel', 'first', 'isiterable', 'ismapping', 'iterate',
           'listify', 'tween', 'uniques']


class _DefaultType:
    def __bool__(self):
        return False

    def __repr__(self):
        return '<default_sentinel>'


default_sentinel = _DefaultType()


def isiterable(thing):
    return (isinstance(thing, Iterable) and not isinstance(thing, str) and
            not ismapping(thing))


def ismapping(thing):
    return isinstance(thing, Mapping)


def iterate(thing):
    def generate_none():
        return iter(())

    def generate_one(x):
        yield x

    if thing is None:
        return generate_none()
    elif isiterable(thing):
        return iter(thing)
    else:
        return generate_one(thing)


def listify(thing, always_copy=False, scalar_ok=True, type=list):
    if not always_copy and isinstance(thing, type):
        return thing
    if scalar_ok:
        thing = iterate(thing)
    elif not isiterable(thing):
        raise TypeError('expected an iterable')
    return type(thing)


def first(thing, default=default_sentinel):
    try:
        return next(iterate(thing))
    except StopIteration:
        if default is not default_sentinel:
            return default
        raise LookupError()


def tween(iterable, delim, prefix=None, suffix=None):
    first = True
    for i in iterable:
        if first:
            first = False
            if prefix is not None:
                yield prefix
        else:
            yield delim
        yield i
    if not first and suffix is not None:
        yield suffix


def uniques(iterable, type=list):
    def generate_uniques(iterable):
        seen = set()
        for item in iterable:
            if item not in seen:
                seen.add(item)
                yield item
    return type(generate_uniques(iterable))
