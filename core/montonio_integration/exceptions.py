"""
Montonio Callback Exceptions

Errors that reject an inbound Montonio callback before any donation record is
touched. All of them are answered with HTTP 400 and logged as warnings; none
is retried.

A callback whose token decodes but whose claims do not match is *not* an
error: it is the normal "abandoned" outcome of the verifier.

Author: DSP Development Team
Version: 1.0.0
"""

from typing import Any, Dict, Optional


class MontonioCallbackError(Exception):
    """
    Base exception for rejected Montonio callbacks.

    Attributes:
        message (str): Human-readable error message
        status_code (int): HTTP status code answered to the caller
        error_code (str): Short machine-readable category
        details (Dict[str, Any]): Additional context for logging
    """

    default_error_code = "InvalidCallback"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = 400
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "status_code": self.status_code,
            "error_code": self.error_code,
            "details": self.details,
            "exception_type": self.__class__.__name__,
        }


class MissingParameterError(MontonioCallbackError):
    """Token, payment id or form id is absent from the callback."""

    default_error_code = "MissingParameter"

    def __init__(self, missing, message: Optional[str] = None) -> None:
        self.missing = list(missing)
        super().__init__(
            message or f"Missing required parameters: {', '.join(self.missing)}",
            details={"missing": self.missing},
        )


class TokenDecodeError(MontonioCallbackError):
    """The payment token could not be decoded or its signature is invalid."""

    default_error_code = "DecodeFailure"


class MalformedClaimError(MontonioCallbackError):
    """The decoded payment token lacks one of the required claims."""

    default_error_code = "MalformedClaim"

    def __init__(self, missing, payload: Optional[Dict[str, Any]] = None) -> None:
        self.missing = list(missing)
        super().__init__(
            f"Invalid token structure, missing claims: {', '.join(self.missing)}",
            details={"missing": self.missing, "claims": sorted(payload or {})},
        )
