# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

from enum import Enum

from pydantic import BaseModel

from fastapi import APIRouter, status, Response

import common.config as conf


class HealthStatus(Enum):
    """Indicator of system health."""

    healthy = "HEALTHY"
    unhealthy = "UNHEALTHY"


class HealthResponse(BaseModel):
    """Response body model for the health probes.

    May only contain `HealthStatus` fields. Checks may assign booleans,
    those are converted before the model is returned to the client."""

    http_server_connectivity: HealthStatus = HealthStatus.unhealthy

    def convert_from_bool(self) -> None:
        '''Converts every boolean field into its `HealthStatus` representation.'''
        for k, v in iter(self):
            if isinstance(v, bool):
                setattr(self, k, HealthStatus.healthy if v else HealthStatus.unhealthy)

    def is_healthy(self) -> bool:
        """Summarizes all checks performed."""
        return all([v == HealthStatus.healthy for _, v in iter(self)])


class HealthAPIRouter(APIRouter):
    """Api router for the probes `/health/debug`, `/health/liveness` and `/health/readiness`.

    Application specific checks are added by subclassing `HealthResponse` and this router,
    overwriting the `_build_*` and `get_*` methods and handing the response models to the constructor.
    """

    def __init__(
        self,
        readiness_response_model: type[HealthResponse] = HealthResponse,
        liveness_response_model: type[HealthResponse] = HealthResponse,
        debug_response_model: type[HealthResponse] = HealthResponse,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(prefix="/health", tags=["Health"], *args, **kwargs)
        self.add_api_route(
            "/debug",
            endpoint=self.get_debug_probe,
            description="Provides information regarding debug and config states.",
            responses={
                status.HTTP_200_OK: {"model": debug_response_model},
                status.HTTP_503_SERVICE_UNAVAILABLE: {"model": debug_response_model},
            },
        )
        self.add_api_route(
            "/liveness",
            endpoint=self.get_liveness_probe,
            description="Determines whether the application instance needs to be restarted.",
            responses={
                status.HTTP_200_OK: {"model": liveness_response_model},
                status.HTTP_503_SERVICE_UNAVAILABLE: {"model": liveness_response_model},
            },
        )
        self.add_api_route(
            "/readiness",
            endpoint=self.get_readiness_probe,
            description="Determines whether the application instance is ready to verify redemptions.",
            responses={
                status.HTTP_200_OK: {"model": readiness_response_model},
                status.HTTP_503_SERVICE_UNAVAILABLE: {"model": readiness_response_model},
            },
        )

    def __resolve_probe(self, result: HealthResponse, response: Response) -> HealthResponse:
        """Sets the http code of `response` according to the checks collected in `result`."""
        result.http_server_connectivity = HealthStatus.healthy
        result.convert_from_bool()
        response.status_code = status.HTTP_200_OK if result.is_healthy() else status.HTTP_503_SERVICE_UNAVAILABLE
        return result

    def _build_debug_probe(self, result: HealthResponse, response: Response, config: conf.Config) -> HealthResponse:
        return self.__resolve_probe(result, response)

    def get_debug_probe(self, response: Response, config: conf.inject) -> HealthResponse:
        """Provides information regarding debug and config states."""
        return self._build_debug_probe(result=HealthResponse(), response=response, config=config)

    def _build_liveness_probe(self, result: HealthResponse, response: Response, config: conf.Config) -> HealthResponse:
        return self.__resolve_probe(result, response)

    def get_liveness_probe(self, response: Response, config: conf.inject) -> HealthResponse:
        """Determines whether the application instance needs to be restarted."""
        return self._build_liveness_probe(result=HealthResponse(), response=response, config=config)

    def _build_readiness_probe(self, result: HealthResponse, response: Response, config: conf.Config) -> HealthResponse:
        return self.__resolve_probe(result, response)

    def get_readiness_probe(self, response: Response, config: conf.inject) -> HealthResponse:
        """Determines whether the application instance is ready to accept requests."""
        return self._build_readiness_probe(result=HealthResponse(), response=response, config=config)
