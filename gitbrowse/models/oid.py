"""
Object id used to identify branches
"""


class Oid:
    """
    Value object for a git object id or ref name

    Two Oid instances built from the same id compare and hash equal, so they
    can be used interchangeably as dictionary keys.
    """

    __slots__ = ('_id',)

    def __init__(self, id):
        """
        Args:
            id (str | Oid | pygit2.Oid): Hex id or canonical ref name
        """
        if isinstance(id, Oid):
            id = id._id
        id = str(id)
        if not id:
            raise ValueError("Oid must not be empty")
        object.__setattr__(self, '_id', id)

    def __setattr__(self, name, value):
        raise AttributeError("Oid is immutable")

    @property
    def id(self):
        return self._id

    @property
    def short_id(self):
        """Abbreviated hash, or the ref name without 'refs/<kind>/'"""
        if self._id.startswith('refs/'):
            return self._id.split('/', 2)[-1]
        return self._id[:7]

    def __eq__(self, other):
        if not isinstance(other, Oid):
            return NotImplemented
        return self._id == other._id

    def __hash__(self):
        return hash(self._id)

    def __str__(self):
        return self._id

    def __repr__(self):
        return f"Oid('{self._id}')"
