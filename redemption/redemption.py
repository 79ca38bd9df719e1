# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Redemption Verifier

Staff terminals post the text of scanned voucher QR codes. A valid code
redeems its gold certificate exactly once.
"""

from asgi_correlation_id import CorrelationIdMiddleware

from common.fastapi_extensions import ExtendedFastAPI
import common.db.postgres as db

import redemption.route.verification as verification
import redemption.route.health as health

from redemption import config as conf


app = ExtendedFastAPI(conf.RedemptionConfig, lifespan_functions=[db.database_lifespan])
app.include_router(verification.router)
app.include_router(health.router)

app.add_middleware(CorrelationIdMiddleware)
