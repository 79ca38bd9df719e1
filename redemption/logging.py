# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

from enum import Enum

from common.logging import operations


class RedemptionOperationsLogEntry(operations.OperationsLogEntry):
    """Container for redemption operations specific logging."""

    class Operation(Enum):
        redemption = "REDEMPTION"

    class Step(Enum):
        redemption_evaluation = "EVALUATION"
        redemption_transition = "TRANSITION"

    operation: Operation
    step: Step

    error_code: str | None = None
    certificate_id: str | None = None
