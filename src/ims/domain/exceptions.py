"""Domain-level exceptions.

Every rejected command is expressed as a subclass of DomainException so
the CLI and HTTP layers can catch them uniformly and report a
structured cause to the caller.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    code = "domain_error"


class ValidationError(DomainException):
    """Input was missing, malformed or out of range."""

    code = "validation_error"


class NotFoundError(DomainException):
    """A referenced entity does not exist."""

    code = "not_found"


class InsufficientStockError(DomainException):
    """A withdrawal asked for more units than are on hand."""

    code = "insufficient_stock"


class PersistenceError(DomainException):
    """The durable copy of the ledger could not be read or written.

    Not client-correctable; the previous durable state stays authoritative.
    """

    code = "persistence_error"
