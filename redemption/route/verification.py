# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import fastapi
from fastapi import status

import common.db.postgres as db
from common.apikey import require_api_key
import common.model.exception as ex

import redemption.config as conf
import redemption.models as models
from redemption.store import SqlCertificateStore
from redemption.verification import RedemptionVerifier

TAG = "Redemption"

router = fastapi.APIRouter(
    prefix="/redemption",
    dependencies=[fastapi.Security(require_api_key)],
    tags=[TAG],
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ex.HTTPError}},
)


@router.post(
    "/verify",
    description="Verifies a scanned redemption QR code and redeems the certificate if valid. A failed verification is not an http error.",
)
def verify_redemption(scan: models.ScanRequest, session: db.inject, config: conf.inject) -> models.VerificationResult:
    verifier = RedemptionVerifier(SqlCertificateStore(session), config)
    return verifier.verify(scan.raw_scan)
