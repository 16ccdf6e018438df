from __future__ import annotations


class CheckinError(RuntimeError):
    """Fatal for the current run; reported in the notification."""


class ConfigError(CheckinError):
    pass


class AuthError(CheckinError):
    pass


class ResponseError(CheckinError):
    pass


class TransientRequestError(CheckinError):
    """5xx or network-level failure. The only error the retry wrapper retries."""
