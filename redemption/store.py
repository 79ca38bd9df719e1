# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Access to the certificate store. The verifier only depends on `CertificateStore`;
`SqlCertificateStore` implements it on top of a SQLAlchemy session.
"""

import abc
import datetime
import logging

import sqlalchemy.exc
import sqlalchemy.orm as sa_orm
from sqlalchemy import select, update

import redemption.exception as err
import redemption.models as models
from redemption.db.certificate import GoldCertificate, RedemptionNonce
from redemption.logging import RedemptionOperationsLogEntry

_logger = logging.getLogger(__name__)


class CertificateStore(abc.ABC):
    """Record store holding nonces and certificates."""

    @abc.abstractmethod
    def get_nonce(self, nonce: str) -> models.NonceRecord | None:
        """Returns the nonce record or None if the nonce was never issued."""

    @abc.abstractmethod
    def get_certificate(self, certificate_id: str, status_filter: str) -> models.CertificateRecord | None:
        """Returns the certificate if it exists and has the given status."""

    @abc.abstractmethod
    def redeem(self, certificate_id: str, nonce: str) -> bool:
        """
        Marks the nonce as used and the certificate as redeemed, all or nothing.
        Must itself check that the nonce is unused and the certificate is active;
        returns False without changing anything otherwise.
        """

    @abc.abstractmethod
    def get_certificate_status(self, certificate_id: str) -> str | None:
        """Returns the current status of the certificate, None if it does not exist."""


class SqlCertificateStore(CertificateStore):
    """
    Certificate store on the tables `redemption_nonce` and `gold_certificate`.

    The session is owned by the caller. `None` stands for a connection which could not be established.
    """

    def __init__(self, session: sa_orm.Session | None) -> None:
        self._db_session = session

    def _session(self) -> sa_orm.Session:
        if self._db_session is None:
            raise err.StoreUnavailableError(additional_error_description="No database session available.")
        return self._db_session

    def get_nonce(self, nonce: str) -> models.NonceRecord | None:
        try:
            record = self._session().scalars(select(RedemptionNonce).where(RedemptionNonce.nonce == nonce)).one_or_none()
        except sqlalchemy.exc.OperationalError as e:
            raise _unavailable("Failed to read nonce", e) from e
        return models.NonceRecord.model_validate(record) if record else None

    def get_certificate(self, certificate_id: str, status_filter: str) -> models.CertificateRecord | None:
        try:
            record = self._session().scalars(
                select(GoldCertificate).where(GoldCertificate.id == certificate_id, GoldCertificate.status == status_filter)
            ).one_or_none()
        except sqlalchemy.exc.OperationalError as e:
            raise _unavailable("Failed to read certificate", e) from e
        return models.CertificateRecord.model_validate(record) if record else None

    def redeem(self, certificate_id: str, nonce: str) -> bool:
        """
        Both updates are conditional on the expected previous state and run in one transaction.
        Concurrent redemptions are serialized by the row locks of the database;
        the loser affects no rows and rolls back.
        """
        session = self._session()
        try:
            nonce_update = session.execute(
                update(RedemptionNonce)
                .where(RedemptionNonce.nonce == nonce, RedemptionNonce.used.is_(False))
                .values(used=True)
                .execution_options(synchronize_session=False)
            )
            if nonce_update.rowcount != 1:
                session.rollback()
                return False
            certificate_update = session.execute(
                update(GoldCertificate)
                .where(GoldCertificate.id == certificate_id, GoldCertificate.status == models.CertificateStatus.ACTIVE.value)
                .values(status=models.CertificateStatus.REDEEMED.value, redeemed_at=datetime.datetime.now(datetime.timezone.utc))
                .execution_options(synchronize_session=False)
            )
            if certificate_update.rowcount != 1:
                session.rollback()
                return False
            session.commit()
        except sqlalchemy.exc.OperationalError as e:
            session.rollback()
            raise _unavailable("Failed to redeem certificate", e) from e
        except Exception:
            session.rollback()
            raise

        _logger.info(
            RedemptionOperationsLogEntry(
                message="Certificate redeemed.",
                status=RedemptionOperationsLogEntry.Status.success,
                operation=RedemptionOperationsLogEntry.Operation.redemption,
                step=RedemptionOperationsLogEntry.Step.redemption_transition,
                certificate_id=certificate_id,
            ),
        )
        return True

    def get_certificate_status(self, certificate_id: str) -> str | None:
        try:
            return self._session().scalars(select(GoldCertificate.status).where(GoldCertificate.id == certificate_id)).one_or_none()
        except sqlalchemy.exc.OperationalError as e:
            raise _unavailable("Failed to read certificate status", e) from e


def _unavailable(msg: str, e: Exception) -> err.StoreUnavailableError:
    _logger.exception(msg)
    return err.StoreUnavailableError(additional_error_description=err.exception_to_additional_error_description(msg, e))
