"""Translation of database integrity errors into domain errors."""

from sqlalchemy.exc import IntegrityError

from invitely.domain.error import DuplicateKeyError


def raise_if_duplicate(
    error: IntegrityError,
    resource: str,
    constraints: dict[str, tuple[str, str]],
) -> None:
    """Raise DuplicateKeyError when a known unique constraint was violated.

    Postgres names ``unique=True`` constraints ``<table>_<column>_key`` and
    includes that name in the error message.

    Args:
        error: The integrity error raised by the driver
        resource: Resource name for the error message
        constraints: Constraint name -> (field, value) of the attempted row

    Raises:
        DuplicateKeyError: If one of the constraints matches
    """
    message = str(error.orig)
    for name, (field, value) in constraints.items():
        if name in message:
            raise DuplicateKeyError(resource, field, value) from error
