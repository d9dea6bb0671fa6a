"""Exception types raised by the NutriPlan core."""


class NutriplanError(Exception):
    """Base error carrying a machine-readable code and a suggested HTTP status."""

    http_status = 500
    default_code = "INTERNAL_ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code

    def to_dict(self) -> dict[str, object]:
        return {"code": self.code, "message": self.message}

    def __str__(self) -> str:
        return self.message


class StorageError(NutriplanError):
    """Raised when a storage call fails; callers should retry or escalate."""


class KnowledgeBaseError(NutriplanError):
    """Raised when knowledge base data breaks a catalog invariant at load time."""

    default_code = "KNOWLEDGE_BASE_INVALID"


class StudentNotFoundError(NutriplanError):
    """Raised when a student id has no stored profile."""

    http_status = 404
    default_code = "STUDENT_NOT_FOUND"


class SelectionClosedError(NutriplanError):
    """Raised when a student writes a choice outside the selection window."""

    http_status = 403
    default_code = "SELECTION_CLOSED"


class InvalidChoiceError(NutriplanError):
    """Raised for an unknown day or menu choice."""

    http_status = 400
    default_code = "INVALID_INPUT"


class CategoryNotFoundError(NutriplanError):
    """Raised when a requested ingredient category is outside the known set."""

    http_status = 404
    default_code = "CATEGORY_NOT_FOUND"


class InvalidRangeError(NutriplanError):
    """Raised when a numeric range has its lower bound above its upper bound."""

    http_status = 400
    default_code = "INVALID_INPUT"
