"""Custom exception classes for Pagecraft."""


class PagecraftError(Exception):
    """Base exception for all Pagecraft errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        status_code: int = 500,
        details: dict | None = None,
    ):
        """Initialize PagecraftError.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            status_code: HTTP status code for API responses.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "INTERNAL_ERROR"
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert exception to dictionary for API response."""
        result = {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class NotFoundError(PagecraftError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        message: str | None = None,
    ):
        """Initialize NotFoundError.

        Args:
            resource_type: Type of resource (e.g., "Page", "Theme").
            resource_id: ID of the resource that was not found.
            message: Optional custom message.
        """
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(
            message=message or f"{resource_type} with ID '{resource_id}' not found",
            error_code="NOT_FOUND",
            status_code=404,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class ValidationError(PagecraftError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str = "Validation failed",
        errors: list[dict] | None = None,
    ):
        """Initialize ValidationError.

        Args:
            message: Error message.
            errors: List of validation errors with field and message.
        """
        self.errors = errors or []
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=400,
            details={"errors": self.errors},
        )

    @classmethod
    def from_pydantic(cls, exc: Exception) -> "ValidationError":
        """Create ValidationError from Pydantic ValidationError."""
        errors = []
        if hasattr(exc, "errors"):
            for error in exc.errors():
                errors.append(
                    {
                        "field": ".".join(str(loc) for loc in error.get("loc", [])),
                        "message": error.get("msg", "Invalid value"),
                        "type": error.get("type", "unknown"),
                    }
                )
        return cls(message="Validation failed", errors=errors)


class ConflictError(PagecraftError):
    """Raised when there's a conflict (e.g., duplicate slug, optimistic lock failure)."""

    def __init__(
        self,
        message: str = "Resource conflict",
        conflict_type: str | None = None,
    ):
        """Initialize ConflictError."""
        super().__init__(
            message=message,
            error_code="CONFLICT",
            status_code=409,
            details={"conflict_type": conflict_type} if conflict_type else None,
        )


class DuplicateBlockTypeError(PagecraftError):
    """Raised when two block definitions share the same type key."""

    def __init__(self, block_type: str):
        """Initialize DuplicateBlockTypeError."""
        self.block_type = block_type
        super().__init__(
            message=f"Block type '{block_type}' is already registered",
            error_code="DUPLICATE_BLOCK_TYPE",
            status_code=500,
            details={"block_type": block_type},
        )


class UnknownBlockTypeError(PagecraftError):
    """Raised when a block type is not present in the registry."""

    def __init__(self, block_type: str):
        """Initialize UnknownBlockTypeError."""
        self.block_type = block_type
        super().__init__(
            message=f"Unknown block type '{block_type}'",
            error_code="UNKNOWN_BLOCK_TYPE",
            status_code=400,
            details={"block_type": block_type},
        )
