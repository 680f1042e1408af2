"""
Custom exceptions for match scoring and rankings with user-friendly error messages.
"""


class ScrimHubError(Exception):
    """Base exception for scoring and scrim management errors."""
    status_code = 400

    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message


class ValidationError(ScrimHubError):
    """Raised when a submission is malformed (negative kills, bad placement, missing ids)."""
    status_code = 422

    def __init__(self, reason: str):
        super().__init__(f"Validation failed: {reason}", reason)


class NotFound(ScrimHubError):
    """Raised when a referenced match, scrim, team or player does not exist."""
    status_code = 404

    def __init__(self, entity: str, entity_id):
        super().__init__(
            f"{entity} {entity_id} not found",
            f"{entity} not found."
        )
        self.entity = entity
        self.entity_id = entity_id


class InvalidReference(ScrimHubError):
    """Raised when a team or player is not part of the scrim it is used in."""
    status_code = 400

    def __init__(self, reason: str):
        super().__init__(f"Invalid reference: {reason}", reason)


class PartialWriteFailure(ScrimHubError):
    """Raised when a batched stats write fails before the match could be completed."""
    status_code = 503

    def __init__(self, match_id: int, details: str = None):
        super().__init__(
            f"Saving results for match {match_id} failed: {details}",
            "Failed to save match results. Nothing was completed, please submit again."
        )
        self.match_id = match_id
