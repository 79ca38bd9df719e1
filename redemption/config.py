# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import os
import common.config as conf
from typing import Annotated
from fastapi import Depends

from common.parsing import interpret_as_bool


class RedemptionConfig(conf.Config):
    def __init__(self):
        super().__init__()
        self.app_name = os.getenv("APP_NAME", "Redemption Verifier")
        self.enable_postcondition_check: bool = interpret_as_bool(os.getenv("ENABLE_POSTCONDITION_CHECK", "True"))
        """
        Re-read the certificate status after the atomic redemption and fail the verification if it is not redeemed.
        Only safe to disable if the store reports failures of the redemption reliably.
        """

    def has_minimum_config(self) -> bool:
        return all([self.api_key])


inject = Annotated[RedemptionConfig, Depends(RedemptionConfig)]
