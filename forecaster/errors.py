"""Error taxonomy for the forecaster CLI."""

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_CONFIG = 2
EXIT_NETWORK = 3
EXIT_RESPONSE = 4


class ForecasterError(Exception):
    """Base class for all expected, user-reportable failures."""

    exit_code: int = EXIT_USAGE


class ConfigurationError(ForecasterError):
    """Config file unreadable, API key missing/empty, or a value unparseable."""

    exit_code = EXIT_CONFIG


class NetworkError(ForecasterError):
    """Connection failure, timeout or interruption during the HTTP call."""

    exit_code = EXIT_NETWORK


class ResponseShapeError(ForecasterError):
    """The response body is not the JSON document we expect."""

    exit_code = EXIT_RESPONSE
