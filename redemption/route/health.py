# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""This file defines the custom health checks for the application."""

from fastapi import Response
from common.health import base, db_connection_check

from redemption import config as conf


class DebugHealthResponse(base.HealthResponse):
    """Response body model for the debug probe."""

    configuration_redemption_has_minimum_config: base.HealthStatus = base.HealthStatus.unhealthy


class RedemptionHealthAPIRouter(db_connection_check.HealthAPIRouterWithDBInject):
    def __init__(self) -> None:
        super().__init__(debug_response_model=DebugHealthResponse)

    def _build_debug_probe(
        self,
        result: DebugHealthResponse,
        response: Response,
        config: conf.RedemptionConfig,
    ) -> DebugHealthResponse:
        result.configuration_redemption_has_minimum_config = bool(config.has_minimum_config())
        return super()._build_debug_probe(result, response, config)

    def get_debug_probe(
        self,
        response: Response,
        config: conf.inject,
    ) -> DebugHealthResponse:
        return self._build_debug_probe(
            result=DebugHealthResponse(),
            response=response,
            config=config,
        )


router = RedemptionHealthAPIRouter()
