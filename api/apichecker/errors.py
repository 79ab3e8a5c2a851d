"""Error taxonomy for the check pipeline.

Every error carries the HTTP status it maps to, the pipeline step it came
from, and a generic message that is safe to return to the caller. The
underlying cause stays in the logs.
"""


class CheckerError(Exception):
    status_code = 500
    step = "unknown"
    message = "internal server error"

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.message)
        self.detail = detail


# --- Client input (4xx) ---


class ClientInputError(CheckerError):
    status_code = 400


class MethodNotAllowedError(ClientInputError):
    status_code = 405
    step = "decode"
    message = "only POST method is supported"


class InvalidContentTypeError(ClientInputError):
    step = "decode"
    message = "invalid content-type"


class InvalidPayloadError(ClientInputError):
    step = "decode"
    message = "invalid payload"


class InvalidMethodError(ClientInputError):
    step = "fetch"
    message = "invalid method"


class InvalidBodyError(ClientInputError):
    step = "fetch"
    message = "invalid body"


# --- Upstream / processing (5xx) ---


class UpstreamError(CheckerError):
    status_code = 500


class QueryCompileError(UpstreamError):
    step = "compile"
    message = "failed to parse jq query"


class FetchError(UpstreamError):
    step = "fetch"
    message = "failed to request"


class QueryEvaluationError(UpstreamError):
    step = "evaluate"
    message = "failed to run jq query"


class SerializationError(UpstreamError):
    step = "serialize"
    message = "failed to marshal json"


class NotificationError(UpstreamError):
    step = "notify"
    message = "failed to notify"
