# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Thread safe in-memory certificate store for tests.
Records every call, so tests can assert which operations the verifier used.
"""

import threading

import redemption.models as models
from redemption.store import CertificateStore


class InMemoryCertificateStore(CertificateStore):
    def __init__(self, nonces: dict[str, bool] | None = None, certificates: dict[str, str] | None = None) -> None:
        """
        Args:
            nonces (dict): nonce -> used
            certificates (dict): certificate id -> status
        """
        self.nonces = dict(nonces or {})
        self.certificates = dict(certificates or {})
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def called(self, operation: str) -> bool:
        return operation in self.calls

    def get_nonce(self, nonce: str) -> models.NonceRecord | None:
        self.calls.append("get_nonce")
        with self._lock:
            if nonce not in self.nonces:
                return None
            return models.NonceRecord(nonce=nonce, used=self.nonces[nonce])

    def get_certificate(self, certificate_id: str, status_filter: str) -> models.CertificateRecord | None:
        self.calls.append("get_certificate")
        with self._lock:
            if self.certificates.get(certificate_id) != status_filter:
                return None
            return models.CertificateRecord(id=certificate_id, status=self.certificates[certificate_id])

    def redeem(self, certificate_id: str, nonce: str) -> bool:
        self.calls.append("redeem")
        with self._lock:
            if self.nonces.get(nonce, True):
                return False
            if self.certificates.get(certificate_id) != models.CertificateStatus.ACTIVE.value:
                return False
            self.nonces[nonce] = True
            self.certificates[certificate_id] = models.CertificateStatus.REDEEMED.value
            return True

    def get_certificate_status(self, certificate_id: str) -> str | None:
        self.calls.append("get_certificate_status")
        with self._lock:
            return self.certificates.get(certificate_id)
