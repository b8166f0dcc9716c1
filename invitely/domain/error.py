"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """One or more field-level validation failures.

    The message is the individual errors joined with ", ".
    """

    def __init__(self, errors: list[str] | str):
        self.errors = [errors] if isinstance(errors, str) else list(errors)
        super().__init__(", ".join(self.errors))


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when an authenticated caller lacks the required role."""

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message)


class InvalidCredentialsError(DomainError):
    """Raised when a login attempt does not match an active account."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found.

    Owner-scoped lookups raise this for resources owned by someone else too.
    """

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when an operation collides with existing state."""

    pass


class DuplicateKeyError(ConflictError):
    """Raised when a unique key is already taken."""

    def __init__(self, resource: str, field: str, value: str):
        self.resource = resource
        self.field = field
        self.value = value
        super().__init__(f"{resource} with {field} '{value}' already exists")


class ReferralCodeGenerationError(ConflictError):
    """Raised when no free referral code was found within the attempt budget."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__("Failed to generate unique referral code")


class ResourceInUseError(ConflictError):
    """Raised when deleting a resource that others still reference."""

    def __init__(self, resource: str, identifier: str, references: int):
        self.references = references
        super().__init__(
            f"{resource} {identifier} is referenced by {references} invitation(s)"
        )


class SlugGenerationError(DomainError):
    """Raised when no free slug was found within the attempt budget."""

    pass
