# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Requisition, RequisitionNote, RequisitionStatus, check_measurements
from .exceptions import InvalidStatusTransitionError, RequisitionNotFoundError
from .repositories import RequisitionRepository

__all__ = [
    "InvalidStatusTransitionError",
    "Requisition",
    "RequisitionNote",
    "RequisitionNotFoundError",
    "RequisitionRepository",
    "RequisitionStatus",
    "check_measurements",
]
