# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from time import perf_counter

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from tailorshop.application.use_cases.requisitions import (
    AddRequisitionNoteUseCase,
    CreateRequisitionUseCase,
    DeleteRequisitionUseCase,
    GetRequisitionUseCase,
    ListRequisitionsUseCase,
    UpdateRequisitionUseCase,
)
from tailorshop.infrastructure.audit import AuditAction, audit_log
from tailorshop.interfaces.http.auth_guard import BearerAuth, current_user_id
from tailorshop.interfaces.http.dto.requisitions import (
    AddNoteDTO,
    CreateRequisitionDTO,
    RequisitionDTO,
    RequisitionQueryDTO,
    UpdateRequisitionDTO,
)
from tailorshop.shared.errors.validation import raise_validation_error
from tailorshop.shared.logging import logger


def _json_body() -> dict:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _requisition_response(requisition, status: int = 200) -> tuple[Response, int]:
    body = {"ok": True, "data": {"requisition": RequisitionDTO.from_entity(requisition).to_json()}}
    return jsonify(body), status


class RequisitionsController:
    def __init__(
        self,
        *,
        auth: BearerAuth,
        create_use_case: CreateRequisitionUseCase,
        list_use_case: ListRequisitionsUseCase,
        get_use_case: GetRequisitionUseCase,
        update_use_case: UpdateRequisitionUseCase,
        delete_use_case: DeleteRequisitionUseCase,
        add_note_use_case: AddRequisitionNoteUseCase,
    ) -> None:
        self._auth = auth
        self._create = create_use_case
        self._list = list_use_case
        self._get = get_use_case
        self._update = update_use_case
        self._delete = delete_use_case
        self._add_note = add_note_use_case

    def as_blueprint(self) -> Blueprint:
        required = self._auth.required

        bp = Blueprint("requisitions", __name__, url_prefix="/api")
        bp.add_url_rule("/requisitions", view_func=required(self.list_requisitions), methods=["GET"])
        bp.add_url_rule("/requisitions", view_func=required(self.create), methods=["POST"])
        bp.add_url_rule(
            "/requisitions/<int:requisition_id>",
            view_func=required(self.get),
            methods=["GET"],
        )
        bp.add_url_rule(
            "/requisitions/<int:requisition_id>",
            view_func=required(self.update),
            methods=["PATCH", "PUT"],
        )
        bp.add_url_rule(
            "/requisitions/<int:requisition_id>",
            view_func=required(self.delete),
            methods=["DELETE"],
        )
        bp.add_url_rule(
            "/requisitions/<int:requisition_id>/notes",
            view_func=required(self.add_note),
            methods=["POST"],
        )
        return bp

    def list_requisitions(self) -> tuple[Response, int]:
        t0 = perf_counter()
        try:
            query = RequisitionQueryDTO.model_validate(request.args.to_dict())
        except ValidationError as exc:
            raise_validation_error(exc)

        user_id = current_user_id()
        page = self._list.execute(
            user_id,
            status=query.status,
            page=query.page,
            limit=query.limit,
        )
        dt = (perf_counter() - t0) * 1000
        logger.info(
            f"requisitions.list: ok (user_id={user_id}, n={len(page.items)}, dt_ms={dt:.0f})"
        )
        body = {
            "ok": True,
            "data": {
                "requisitions": [RequisitionDTO.from_entity(item).to_json() for item in page.items],
                "total": page.total,
                "page": page.page,
                "limit": page.limit,
            },
        }
        return jsonify(body), 200

    def create(self) -> tuple[Response, int]:
        try:
            dto = CreateRequisitionDTO.model_validate(_json_body())
        except ValidationError as exc:
            raise_validation_error(exc)

        user_id = current_user_id()
        requisition = self._create.execute(user_id, **dto.to_command())
        audit_log(
            AuditAction.REQUISITION_CREATED,
            user_id=user_id,
            details={"requisition_id": requisition.id},
        )
        return _requisition_response(requisition, 201)

    def get(self, requisition_id: int) -> tuple[Response, int]:
        requisition = self._get.execute(current_user_id(), requisition_id)
        return _requisition_response(requisition)

    def update(self, requisition_id: int) -> tuple[Response, int]:
        try:
            dto = UpdateRequisitionDTO.model_validate(_json_body())
        except ValidationError as exc:
            raise_validation_error(exc)

        user_id = current_user_id()
        changes = dto.to_changes()
        requisition = self._update.execute(user_id, requisition_id, changes)
        audit_log(
            AuditAction.REQUISITION_UPDATED,
            user_id=user_id,
            details={"requisition_id": requisition_id, "fields": sorted(changes)},
        )
        return _requisition_response(requisition)

    def delete(self, requisition_id: int) -> tuple[Response, int]:
        user_id = current_user_id()
        self._delete.execute(user_id, requisition_id)
        audit_log(
            AuditAction.REQUISITION_DELETED,
            user_id=user_id,
            details={"requisition_id": requisition_id},
        )
        return jsonify({"ok": True}), 200

    def add_note(self, requisition_id: int) -> tuple[Response, int]:
        try:
            dto = AddNoteDTO.model_validate(_json_body())
        except ValidationError as exc:
            raise_validation_error(exc)

        requisition = self._add_note.execute(current_user_id(), requisition_id, dto.text)
        return _requisition_response(requisition, 201)
