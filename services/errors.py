"""
Domain errors raised by the services and translated to HTTP responses in main.py
"""


class TripPlannerError(Exception):
    """Base class; `code` is the stable identifier returned to clients."""

    status_code = 500
    code = "Internal"
    default_detail = "Internal error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(TripPlannerError):
    status_code = 401
    code = "Unauthenticated"
    default_detail = "Authentication required"


class Forbidden(TripPlannerError):
    status_code = 403
    code = "Forbidden"
    default_detail = "You are not allowed to perform this action"


class NotFound(TripPlannerError):
    status_code = 404
    code = "NotFound"
    default_detail = "Resource not found"


class InvalidPhase(TripPlannerError):
    status_code = 409
    code = "InvalidPhase"
    default_detail = "The trip is not in the phase required for this action"


class DeadlineMissing(TripPlannerError):
    status_code = 409
    code = "DeadlineMissing"
    default_detail = "The organizer has not set a date pitch deadline yet"


class DeadlinePassed(TripPlannerError):
    status_code = 409
    code = "DeadlinePassed"
    default_detail = "The date pitch deadline has passed"


class VotingNotOpen(TripPlannerError):
    status_code = 409
    code = "VotingNotOpen"
    default_detail = "Voting opens when the pitch deadline is reached"


class VotingClosed(TripPlannerError):
    status_code = 409
    code = "VotingClosed"
    default_detail = "Voting for this pitch has closed"


class InvalidRange(TripPlannerError):
    status_code = 422
    code = "InvalidRange"
    default_detail = "End date must be after start date"


class InvalidVoteType(TripPlannerError):
    status_code = 422
    code = "InvalidVoteType"
    default_detail = "Vote type must be one of ALL_WORK, PARTIAL, NONE_WORK"


class InvalidSelectedDates(TripPlannerError):
    status_code = 422
    code = "InvalidSelectedDates"
    default_detail = "Partial votes need at least one date inside the pitched range"


class InvalidRanking(TripPlannerError):
    status_code = 422
    code = "InvalidRanking"
    default_detail = "Ranking must be a positive integer not used on another pitch"


class InvalidDeadline(TripPlannerError):
    status_code = 422
    code = "InvalidDeadline"
    default_detail = "The pitch deadline must be in the future"


class InvalidDuration(TripPlannerError):
    status_code = 422
    code = "InvalidDuration"
    default_detail = "Voting duration must be at least one day"


class InvalidRsvpStatus(TripPlannerError):
    status_code = 422
    code = "InvalidRsvpStatus"
    default_detail = "RSVP status must be one of GOING, INTERESTED, NOT_GOING"


class Internal(TripPlannerError):
    pass
