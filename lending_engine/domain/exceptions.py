"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidStageTransitionError(DomainException):
    """Requested stage change is not permitted by the lifecycle rules"""

    def __init__(self, from_stage: str, to_stage: str, reason: str):
        super().__init__(reason)
        self.from_stage = from_stage
        self.to_stage = to_stage
        self.reason = reason
