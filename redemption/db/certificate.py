# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Storage for certificates and the nonces of their redemption QR codes.
Both are created by the issuing system; the verifier only reads them and performs the redemption.
"""

import datetime

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Boolean, DateTime, Numeric, Text

import common.db.postgres as db
from redemption.models import CertificateStatus


class RedemptionNonce(db.Base):
    """
    Nonce of an issued redemption QR code
    """

    __tablename__ = "redemption_nonce"
    nonce: Mapped[str] = mapped_column(Text, primary_key=True)
    used: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    """Set once by the redemption, never reset"""


class GoldCertificate(db.Base):
    """
    Redeemable certificate
    """

    __tablename__ = "gold_certificate"
    id: Mapped[str] = mapped_column(Text, primary_key=True)
    status: Mapped[str] = mapped_column(Text, nullable=False, default=CertificateStatus.ACTIVE.value)
    """One of `CertificateStatus`, ACTIVE -> REDEEMED happens exactly once"""
    user_id: Mapped[str] = mapped_column(Text, nullable=True)
    amount: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=True)
    redeemed_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=True)
