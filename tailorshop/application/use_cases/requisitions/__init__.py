# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .add_note import AddRequisitionNoteUseCase
from .create_requisition import CreateRequisitionUseCase
from .delete_requisition import DeleteRequisitionUseCase
from .get_requisition import GetRequisitionUseCase
from .list_requisitions import ListRequisitionsUseCase, RequisitionPage
from .update_requisition import UpdateRequisitionUseCase

__all__ = [
    "AddRequisitionNoteUseCase",
    "CreateRequisitionUseCase",
    "DeleteRequisitionUseCase",
    "GetRequisitionUseCase",
    "ListRequisitionsUseCase",
    "RequisitionPage",
    "UpdateRequisitionUseCase",
]
