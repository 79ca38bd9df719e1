# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Reasons for a verification to fail. They never reach the client as exceptions,
the verifier converts them into a `VerificationResult`.
"""


class RedemptionError(Exception):
    """Base class for all redemption verification errors."""

    error_code: str = None
    """Machine readable code identifying the error."""

    error_description: str = None
    """Human readable reason, shown to the staff member."""

    def __init__(self, additional_error_description: str = None) -> None:
        """Create a redemption error.

        Args:
            additional_error_description (str, optional): Further information for the logs, not shown to the staff member.
        """
        super().__init__(self.error_description)
        self.additional_error_description = additional_error_description


class MalformedPayloadError(RedemptionError):
    error_code = "invalid_format"
    error_description = "invalid format"


class ExpiredPayloadError(RedemptionError):
    error_code = "expired"
    error_description = "QR code expired"


class NonceInvalidOrUsedError(RedemptionError):
    error_code = "invalid_nonce"
    error_description = "invalid or used QR code"


class CertificateUnavailableError(RedemptionError):
    error_code = "certificate_unavailable"
    error_description = "certificate not found or already redeemed"


class RedemptionFailedError(RedemptionError):
    error_code = "redemption_failed"
    error_description = "failed to process redemption"


class PostConditionFailedError(RedemptionError):
    error_code = "postcondition_failed"
    error_description = "failed to update certificate status"


class StoreUnavailableError(RedemptionError):
    """The connection to the certificate store is not established or got lost"""

    error_code = "store_unavailable"
    error_description = "certificate store unavailable"


class VerificationAbortedError(RedemptionError):
    """Failure outside of any verification stage"""

    error_code = "verification_aborted"
    error_description = "failed to verify QR code"


def exception_to_additional_error_description(msg: str, e: Exception) -> str:
    """Create the additional error description form the exception message & notes.
    * msg: some additional information helping to find out what went wrong
    * e: the exception causing the error
    """
    additional_information = f"{msg} - {repr(e)}"
    if hasattr(e, '__notes__'):
        additional_information += f" - {','.join(e.__notes__)}"
    return additional_information
