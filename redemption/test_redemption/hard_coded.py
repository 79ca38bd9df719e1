# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""Fixed test data for the redemption tests"""

import json

from sqlalchemy.orm import sessionmaker

from redemption.db.certificate import GoldCertificate, RedemptionNonce

NOW_MS = 1_700_000_000_000
"""Pinned clock for the tests"""
FUTURE_MS = NOW_MS + 60_000
PAST_MS = NOW_MS - 1


def clock() -> int:
    return NOW_MS


def create_scan(certificate_id: str = "C1", nonce: str = "N1", expiry_timestamp: int = FUTURE_MS, **additional) -> str:
    """QR code text as produced by the issuing system"""
    return json.dumps({"certificateId": certificate_id, "nonce": nonce, "expiryTimestamp": expiry_timestamp, **additional})


def seed(session_local: sessionmaker) -> None:
    """
    Nonces: N1 unused, N2 used
    Certificates: C1 active, C2 redeemed, C3 revoked
    """
    with session_local() as session:
        session.add(RedemptionNonce(nonce="N1", used=False))
        session.add(RedemptionNonce(nonce="N2", used=True))
        session.add(GoldCertificate(id="C1", status="ACTIVE", user_id="U1", amount=100.0))
        session.add(GoldCertificate(id="C2", status="REDEEMED", user_id="U1", amount=50.0))
        session.add(GoldCertificate(id="C3", status="REVOKED", user_id="U2", amount=10.0))
        session.commit()


def read_state(session_local: sessionmaker, certificate_id: str, nonce: str) -> tuple[str | None, bool | None]:
    """Returns (certificate status, nonce used) as stored in the database"""
    with session_local() as session:
        certificate = session.get(GoldCertificate, certificate_id)
        nonce_record = session.get(RedemptionNonce, nonce)
        return (
            certificate.status if certificate else None,
            nonce_record.used if nonce_record else None,
        )
