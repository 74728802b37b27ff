from shared.utils.app_status_code import AppStatusCode


class ContractStoreError(Exception):
    """Base for every error the contract store reports to its caller."""

    default_status_code = AppStatusCode.OPERATION_FAILED

    def __init__(self, message: str, status_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code or self.default_status_code


class NotFound(ContractStoreError):
    default_status_code = AppStatusCode.NOT_FOUND


class ConstraintViolation(ContractStoreError):
    """Uniqueness, foreign key or decimal precision breach."""

    default_status_code = AppStatusCode.OPERATION_ERROR


class InvalidArgument(ContractStoreError):
    """Structurally malformed input, e.g. text longer than its column."""

    default_status_code = AppStatusCode.INVALID_INPUT
