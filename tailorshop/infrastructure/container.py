# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine

from tailorshop.application.services.password_hashing import WerkzeugPasswordHasher
from tailorshop.application.services.token_service import JwtTokenService
from tailorshop.application.use_cases.requisitions import (
    AddRequisitionNoteUseCase,
    CreateRequisitionUseCase,
    DeleteRequisitionUseCase,
    GetRequisitionUseCase,
    ListRequisitionsUseCase,
    UpdateRequisitionUseCase,
)
from tailorshop.application.use_cases.users import (
    AuthenticateRequestUseCase,
    ChangePasswordUseCase,
    DeleteProfileUseCase,
    GetProfileUseCase,
    LoginUserUseCase,
    RegisterUserUseCase,
    UpdateProfileUseCase,
)
from tailorshop.infrastructure.db import SessionFactory, create_db_engine, create_session_factory
from tailorshop.infrastructure.repositories.requisitions import SqlAlchemyRequisitionRepository
from tailorshop.infrastructure.repositories.users import SqlAlchemyUserRepository
from tailorshop.interfaces.http.auth_guard import BearerAuth
from tailorshop.interfaces.http.controllers.auth_controller import AuthController
from tailorshop.interfaces.http.controllers.misc_controller import MiscController
from tailorshop.interfaces.http.controllers.requisitions_controller import (
    RequisitionsController,
)
from tailorshop.shared.config import AppConfig


class Container:
    """Builds every service from one explicit configuration."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    # Persistence

    @cached_property
    def engine(self) -> Engine:
        return create_db_engine(self.config.database)

    @cached_property
    def session_factory(self) -> SessionFactory:
        return create_session_factory(self.engine)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def requisition_repository(self) -> SqlAlchemyRequisitionRepository:
        return SqlAlchemyRequisitionRepository(self.session_factory)

    # Services

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(method=self.config.auth.password_hash_method)

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(
            secret=self.config.secret_key,
            ttl=self.config.auth.token_ttl,
            algorithm=self.config.auth.jwt_algorithm,
        )

    # Users

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def authenticate_request_use_case(self) -> AuthenticateRequestUseCase:
        return AuthenticateRequestUseCase(users=self.user_repository, tokens=self.token_service)

    @cached_property
    def get_profile_use_case(self) -> GetProfileUseCase:
        return GetProfileUseCase(users=self.user_repository)

    @cached_property
    def update_profile_use_case(self) -> UpdateProfileUseCase:
        return UpdateProfileUseCase(users=self.user_repository)

    @cached_property
    def delete_profile_use_case(self) -> DeleteProfileUseCase:
        return DeleteProfileUseCase(users=self.user_repository)

    @cached_property
    def change_password_use_case(self) -> ChangePasswordUseCase:
        return ChangePasswordUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    # Requisitions

    @cached_property
    def create_requisition_use_case(self) -> CreateRequisitionUseCase:
        return CreateRequisitionUseCase(requisitions=self.requisition_repository)

    @cached_property
    def list_requisitions_use_case(self) -> ListRequisitionsUseCase:
        return ListRequisitionsUseCase(requisitions=self.requisition_repository)

    @cached_property
    def get_requisition_use_case(self) -> GetRequisitionUseCase:
        return GetRequisitionUseCase(requisitions=self.requisition_repository)

    @cached_property
    def update_requisition_use_case(self) -> UpdateRequisitionUseCase:
        return UpdateRequisitionUseCase(requisitions=self.requisition_repository)

    @cached_property
    def delete_requisition_use_case(self) -> DeleteRequisitionUseCase:
        return DeleteRequisitionUseCase(requisitions=self.requisition_repository)

    @cached_property
    def add_requisition_note_use_case(self) -> AddRequisitionNoteUseCase:
        return AddRequisitionNoteUseCase(requisitions=self.requisition_repository)

    # HTTP

    @cached_property
    def bearer_auth(self) -> BearerAuth:
        return BearerAuth(self.authenticate_request_use_case)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            auth=self.bearer_auth,
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            get_profile_use_case=self.get_profile_use_case,
            update_profile_use_case=self.update_profile_use_case,
            delete_profile_use_case=self.delete_profile_use_case,
            change_password_use_case=self.change_password_use_case,
            rate_limit_requests=self.config.security.rate_limit_requests,
            rate_limit_window=self.config.security.rate_limit_window,
            min_password_length=self.config.auth.min_password_length,
        )

    @cached_property
    def requisitions_controller(self) -> RequisitionsController:
        return RequisitionsController(
            auth=self.bearer_auth,
            create_use_case=self.create_requisition_use_case,
            list_use_case=self.list_requisitions_use_case,
            get_use_case=self.get_requisition_use_case,
            update_use_case=self.update_requisition_use_case,
            delete_use_case=self.delete_requisition_use_case,
            add_note_use_case=self.add_requisition_note_use_case,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)

    def dispose(self) -> None:
        self.session_factory.remove()
        self.engine.dispose()
