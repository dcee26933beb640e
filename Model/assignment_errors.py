class AssignmentError(Exception):
    """Base class for rejected coordinator operations. Nothing is mutated when raised."""

    kind = "AssignmentError"
    http_status = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"kind": self.kind, "message": self.message}


class NotFound(AssignmentError):
    kind = "NotFound"
    http_status = 404


class StaffUnavailable(AssignmentError):
    kind = "StaffUnavailable"


class EquipmentUnavailable(AssignmentError):
    kind = "EquipmentUnavailable"


class TypeMismatch(AssignmentError):
    kind = "TypeMismatch"


class InvalidTransition(AssignmentError):
    kind = "InvalidTransition"


class ResourceInUse(AssignmentError):
    kind = "ResourceInUse"


class BackendError(Exception):
    """Raised when the remote transport API cannot be reached or answers with a non-2xx status."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
