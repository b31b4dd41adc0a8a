import math
from datetime import timedelta


class ComplaintError(Exception):
    """Base class for every outcome the lifecycle engine reports as a failure."""


class SubmissionValidationError(ComplaintError):
    def __init__(self, field: str, message: str = ""):
        self.field = field
        self.message = message or f"Invalid value for {field}."
        super().__init__(f"{field}: {self.message}")


class RateLimited(ComplaintError):
    def __init__(self, remaining: timedelta):
        self.remaining = remaining
        super().__init__(f"Submission cooldown active for another {remaining}.")

    @property
    def retry_after_seconds(self) -> int:
        return max(math.ceil(self.remaining.total_seconds()), 0)


class Unauthorized(ComplaintError):
    def __init__(self, role, current_status, target_status):
        self.role = role
        self.current_status = current_status
        self.target_status = target_status
        super().__init__(f"Role {role!r} may not move a complaint from {current_status} to {target_status}.")


class InvalidTransition(ComplaintError):
    def __init__(self, current_status, target_status):
        self.current_status = current_status
        self.target_status = target_status
        super().__init__(f"No transition from {current_status} to {target_status}.")


class MissingRequiredField(ComplaintError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} is required for this transition.")


class NotFound(ComplaintError):
    def __init__(self, key):
        self.key = key
        super().__init__(f"Complaint {key!r} does not exist.")


class ComplaintLocked(ComplaintError):
    def __init__(self, status):
        self.status = status
        super().__init__(f"Complaints in {status} are read-only.")
