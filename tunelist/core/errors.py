# ============================================================================
# FILE: tunelist/core/errors.py
# Domain errors raised by services and turned into JSON envelopes by the API
# ============================================================================


class TunelistError(Exception):
    """Base class for errors that map onto an HTTP status"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TunelistError):
    """Malformed or missing input"""
    status_code = 400


class AuthError(TunelistError):
    """Bad credentials (never says which field was wrong)"""
    status_code = 401


class NotFoundError(TunelistError):
    """Unknown user, playlist or song"""
    status_code = 404


class ConflictError(TunelistError):
    """Duplicate username or duplicate song"""
    status_code = 400


class TooLargeError(TunelistError):
    status_code = 400


class UnsupportedTypeError(TunelistError):
    status_code = 400


class CatalogUnavailableError(TunelistError):
    """The external video catalog is not configured or did not answer"""
    status_code = 503
