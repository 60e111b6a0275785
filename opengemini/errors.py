"""Error types raised by the client and the argument checks that raise them."""


class OpenGeminiError(Exception):
    """Base class for every error raised by the client."""

    default_message = "opengemini client error"

    def __init__(self, message=None):
        super().__init__(self.default_message if message is None else message)


class EmptyAuthTokenError(OpenGeminiError):
    default_message = "empty auth token"


class EmptyAuthUsernameError(OpenGeminiError):
    default_message = "empty auth username"


class EmptyAuthPasswordError(OpenGeminiError):
    default_message = "empty auth password"


class EmptyDatabaseNameError(OpenGeminiError):
    default_message = "empty database name"


class EmptyMeasurementError(OpenGeminiError):
    default_message = "empty measurement"


class EmptyCommandError(OpenGeminiError):
    default_message = "empty command"


class EmptyTagOrFieldError(OpenGeminiError):
    default_message = "empty tag or field"


class EmptyTagKeyError(OpenGeminiError):
    default_message = "empty tag key"


class NoAddressError(OpenGeminiError):
    default_message = "must have at least one address"


class EmptyRetentionPolicyError(OpenGeminiError):
    default_message = "empty retention policy"


class UnsupportedFieldValueTypeError(OpenGeminiError, TypeError):
    default_message = "unsupported field value type"


class EmptyRecordError(OpenGeminiError):
    default_message = "empty record"


def check_database_name(database):
    """Raise EmptyDatabaseNameError if the database name is empty."""
    if not database:
        raise EmptyDatabaseNameError()


def check_measurement_name(measurement):
    """Raise EmptyMeasurementError if the measurement name is empty."""
    if not measurement:
        raise EmptyMeasurementError()


def check_database_and_policy(database, retention_policy):
    """Raise if either the database or the retention policy is empty."""
    if not database:
        raise EmptyDatabaseNameError()
    if not retention_policy:
        raise EmptyRetentionPolicyError()


def check_command(command):
    """Raise EmptyCommandError if the command is empty."""
    if not command:
        raise EmptyCommandError()