class WordsprintError(Exception):
    pass


class WordSourceError(WordsprintError):
    """A word source produced no usable tokens."""


class DatabaseError(WordsprintError):
    pass
