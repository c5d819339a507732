import collections.abc

from ._utils import NO_DEFAULT, variadic


def _lookup(obj, key):
    if key is None:
        return obj
    if isinstance(obj, collections.abc.Mapping):
        return obj.get(key)
    if isinstance(key, int) and isinstance(obj, (list, tuple)):
        return obj[key] if -len(obj) <= key < len(obj) else None
    return None


def traverse_obj(obj, *paths, default=NO_DEFAULT, expected_type=None):
    """
    Safely look up values in nested `dict`s and lists decoded from JSON

    >>> obj = [{}, {"key": "value"}]
    >>> traverse_obj(obj, (1, "key"))
    'value'

    A path is a single key or a tuple of keys. `str` keys index mappings,
    `int` keys index lists and `None` stands for the current object. Missing
    keys and mismatched containers yield nothing instead of raising.

    Each path is tried in turn and the first one producing a value wins.
    `None` and `{}` do not count as values.

    @param default          Value to return if no path matches.
    @param expected_type    Only accept final values of this type.
    """
    for path in paths:
        value = obj
        for key in variadic(path):
            value = _lookup(value, key)
            if value is None:
                break
        if expected_type is not None and not isinstance(value, expected_type):
            continue
        if value not in (None, {}):
            return value

    return None if default is NO_DEFAULT else default


def dict_get(d, key_or_keys, default=None, skip_false_values=True):
    for val in map(d.get, variadic(key_or_keys)):
        if val is not None and (val or not skip_false_values):
            return val
    return default
