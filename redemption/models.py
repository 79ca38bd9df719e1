# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CertificateStatus(Enum):
    """
    Lifecycle of a certificate as far as the redemption is concerned
    """

    ACTIVE = "ACTIVE"
    """
    Issued and not yet redeemed
    """
    REDEEMED = "REDEEMED"
    """
    Redeemed by a successful verification. Final.
    """
    REVOKED = "REVOKED"
    """
    Withdrawn by the issuer, can not be redeemed
    """


class QRPayload(BaseModel):
    """
    Content of a redemption QR code, as produced by the issuing system.
    Keys are camelCase on the wire; unknown keys are ignored.
    """

    model_config = ConfigDict(populate_by_name=True)

    certificate_id: str = Field(alias="certificateId", min_length=1)
    user_id: str | None = Field(default=None, alias="userId")
    amount: float | None = None
    expiry_timestamp: int = Field(alias="expiryTimestamp", strict=True)
    """
    Expiration time in milliseconds since 1.1.1970
    The code is not valid anymore if the current time > expiry_timestamp
    Strict, booleans and floats (e.g. 1700000060000.0) are rejected.
    """
    nonce: str = Field(min_length=1)
    """Single use token, registered in the store when the code was issued"""
    signature: str | None = None
    """Parsed for completeness. Not verified, see DESIGN.md"""


class NonceRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    nonce: str
    used: bool


class CertificateRecord(BaseModel):
    """
    Snapshot of a certificate as read from the store
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    status: str
    user_id: str | None = None
    amount: float | None = None


class ScanRequest(BaseModel):
    """
    Raw text as read by the QR scanner of the terminal
    """

    raw_scan: str


class VerificationResult(BaseModel):
    """
    Outcome of one verification.
    * valid: whether the certificate has been redeemed by this verification
    * error: human readable reason why the verification failed
    * error_code: machine readable code for the reason
    * certificate: the certificate as it was before the redemption
    """

    valid: bool
    error: str | None = None
    error_code: str | None = None
    certificate: CertificateRecord | None = None

    def display_message(self) -> str:
        """Text to show to the staff member operating the scanner."""
        if self.valid:
            return "Certificate verified successfully!"
        return f"Verification failed: {self.error}"
