# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .sqlalchemy_requisition_repository import SqlAlchemyRequisitionRepository

__all__ = ["SqlAlchemyRequisitionRepository"]
