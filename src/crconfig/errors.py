"""
CRConfig synthesis errors.

Every error raised here is fatal to a synthesis run: the run aborts and no
document is returned. Non-fatal data issues are logged, never raised.
"""


class CRConfigError(Exception):
    """Base exception for CRConfig synthesis errors."""
    pass


class StoreError(CRConfigError):
    """Raised when a store query or row fetch fails."""

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation}: {cause}")


class ParameterConflictError(CRConfigError):
    """Raised when two server profiles disagree on a delivery service parameter."""

    def __init__(
        self,
        parameter: str,
        profile: str,
        value: str,
        other_profile: str,
        other_value: str,
    ):
        self.parameter = parameter
        self.profile = profile
        self.value = value
        self.other_profile = other_profile
        self.other_value = other_value
        super().__init__(
            f"profiles {profile} and {other_profile} have conflicting values "
            f"'{value}' and '{other_value}' for parameter {parameter}"
        )


class DeliveryServiceDecodeError(CRConfigError):
    """Raised when a delivery service row is internally inconsistent."""

    def __init__(self, xml_id: str | None, reason: str):
        self.xml_id = xml_id
        self.reason = reason
        super().__init__(f"decoding delivery service {xml_id or '<unknown>'}: {reason}")
