"""
Parsed values of one option or positional parameter.

A Values object is owned by its Option/Parameter and filled by the registry
while parsing; callers only ever get a view of it:

    >>> args["--verbose"].count()
    2
    >>> args["--chmod"].value_or("0644")
    '0644'
    >>> args["SRC"].values()
    ('a.c', 'b.c')

An option given without a value (a flag, or an optional value left out) is
recorded as the empty string, so presence is always "count() > 0".
"""


class Values:
    __slots__ = ("_data",)

    def __init__(self):
        self._data = []

    def count(self):
        return len(self._data)

    def empty(self):
        return not self._data

    def values(self):
        """All values in command-line order (read-only)."""
        return tuple(self._data)

    def value(self, index=0, /):
        """
        Value at `index` (the first one by default).

        Raises IndexError when there is no such value; check count() or use
        value_or() when the value may be absent.
        """
        if not 0 <= index < len(self._data):
            raise IndexError("value index %d out of range (have %d)" % (index, len(self._data)))
        return self._data[index]

    def value_or(self, default, /):
        return self._data[0] if self._data else default

    def _add(self, value, /):
        self._data.append(value)

    def _clear(self):
        self._data.clear()

    def __bool__(self):
        return bool(self._data)

    def __len__(self):
        return len(self._data)

    def __iter__(self):
        return iter(tuple(self._data))

    def __repr__(self):
        return "values(%s)" % ", ".join(map(repr, self._data))

    def __rich_repr__(self):
        yield from self._data


__all__ = (
    "Values",
)
