__all__ = [
    "AstroTextError",
    "ParseFailure",
    "FieldOutOfRange",
    "CalendarServiceUnavailable",
]


class AstroTextError(ValueError):
    """Base class of all astrotext errors."""


class ParseFailure(AstroTextError):
    """Malformed angle or date text."""


class FieldOutOfRange(ParseFailure):
    """A structurally valid field violates a numeric bound.

    Parameters
    ----------
    field : str
        name of the offending field, e.g. "minutes"
    value : int or float
        the parsed value
    bounds : tuple
        (lower, upper) bound, ``None`` where unbounded
    """

    def __init__(self, field, value, bounds=(None, None), message=None):
        self.field = field
        self.value = value
        self.bounds = bounds
        if message is None:
            message = "{} = {} out of range {}".format(field, value, bounds)
        super().__init__(message)


class CalendarServiceUnavailable(AstroTextError):
    """The calendar service cannot resolve an instant."""
