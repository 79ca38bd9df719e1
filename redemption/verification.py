# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Verification of scanned redemption QR codes.

A scan is valid if the code is well formed, not expired, its nonce was issued and never used
and the certificate is still active. A valid scan redeems the certificate.
"""

import json
import logging
import time
from collections.abc import Callable
from typing import TypeVar

from common import parsing

import redemption.exception as err
import redemption.models as models
from redemption import config as conf
from redemption.logging import RedemptionOperationsLogEntry
from redemption.store import CertificateStore

_logger = logging.getLogger(__name__)

T = TypeVar("T")


def current_time_ms() -> int:
    return int(time.time() * 1000)


def decode_payload(raw_scan: str) -> models.QRPayload:
    """
    Decodes the scanned text. Accepts a JSON object or an url safe base64 encoded JSON object.

    Raises `MalformedPayloadError` if the text can not be decoded into a payload.
    """
    if not isinstance(raw_scan, str):
        raise err.MalformedPayloadError(additional_error_description=f"Expected text, got {type(raw_scan).__name__}.")
    text = raw_scan.strip()
    try:
        data = json.loads(text) if text.startswith("{") else parsing.object_from_url_safe(text)
    except (ValueError, RecursionError) as e:
        # RecursionError for too deeply nested JSON
        raise err.MalformedPayloadError(additional_error_description=err.exception_to_additional_error_description("Not decodable", e))
    if not isinstance(data, dict):
        raise err.MalformedPayloadError(additional_error_description="Payload is not a key value object.")
    try:
        return models.QRPayload.model_validate(data)
    except ValueError as e:
        # pydantic.ValidationError
        raise err.MalformedPayloadError(additional_error_description=str(e))


def is_expired(payload: models.QRPayload, now_ms: int) -> bool:
    """
    Checks if the QR code is expired. There is no tolerance.
    """
    return now_ms > payload.expiry_timestamp


class RedemptionVerifier:
    """
    Verifies scans against the injected store and redeems valid certificates.
    """

    def __init__(
        self,
        store: CertificateStore,
        config: conf.RedemptionConfig | None = None,
        clock: Callable[[], int] = current_time_ms,
    ) -> None:
        self.store = store
        self.config = config or conf.RedemptionConfig()
        self.clock = clock

    def verify(self, raw_scan: str) -> models.VerificationResult:
        """
        Verifies the scan and redeems the certificate if valid.

        Never raises; every failure is returned as an invalid result.
        """
        try:
            certificate = self._verify(raw_scan)
        except err.RedemptionError as e:
            _logger.info(
                RedemptionOperationsLogEntry(
                    message="Verification failed.",
                    status=RedemptionOperationsLogEntry.Status.error,
                    operation=RedemptionOperationsLogEntry.Operation.redemption,
                    step=RedemptionOperationsLogEntry.Step.redemption_evaluation,
                    error_code=e.error_code,
                ),
            )
            if e.additional_error_description:
                _logger.debug(f"Verification failed with {e.error_code}: {e.additional_error_description}")
            return models.VerificationResult(valid=False, error=e.error_description, error_code=e.error_code)
        except Exception:
            _logger.exception("Verification aborted.")
            return models.VerificationResult(
                valid=False,
                error=err.VerificationAbortedError.error_description,
                error_code=err.VerificationAbortedError.error_code,
            )

        _logger.info(
            RedemptionOperationsLogEntry(
                message="Verification successful.",
                status=RedemptionOperationsLogEntry.Status.success,
                operation=RedemptionOperationsLogEntry.Operation.redemption,
                step=RedemptionOperationsLogEntry.Step.redemption_evaluation,
                certificate_id=certificate.id,
            ),
        )
        return models.VerificationResult(valid=True, certificate=certificate)

    def _verify(self, raw_scan: str) -> models.CertificateRecord:
        payload = decode_payload(raw_scan)

        if is_expired(payload, self.clock()):
            raise err.ExpiredPayloadError()

        # Replay protection, the same code (or a copy) can not be redeemed twice
        nonce_record = self._call_store(err.NonceInvalidOrUsedError, self.store.get_nonce, payload.nonce)
        if nonce_record is None or nonce_record.used:
            raise err.NonceInvalidOrUsedError()

        certificate = self._call_store(
            err.CertificateUnavailableError,
            self.store.get_certificate,
            payload.certificate_id,
            models.CertificateStatus.ACTIVE.value,
        )
        if certificate is None:
            raise err.CertificateUnavailableError()

        # The checks above are only a read; the store re-checks both conditions atomically
        if not self._call_store(err.RedemptionFailedError, self.store.redeem, payload.certificate_id, payload.nonce):
            raise err.RedemptionFailedError()

        if self.config.enable_postcondition_check:
            status = self._call_store(err.PostConditionFailedError, self.store.get_certificate_status, payload.certificate_id)
            if status != models.CertificateStatus.REDEEMED.value:
                raise err.PostConditionFailedError(additional_error_description=f"Certificate status is {status} after redemption.")

        return certificate

    @staticmethod
    def _call_store(error_type: type[err.RedemptionError], operation: Callable[..., T], *args) -> T:
        """
        Calls the store. Unexpected failures are reported as `error_type`,
        errors of the store itself (e.g. unavailable) are passed on.
        """
        try:
            return operation(*args)
        except err.RedemptionError:
            raise
        except Exception as e:
            error_msg = f"Store operation {getattr(operation, '__name__', operation)} failed"
            _logger.exception(error_msg)
            raise error_type(additional_error_description=err.exception_to_additional_error_description(error_msg, e)) from e
