# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from user_management.application.use_cases.users.list_users import ListUsersUseCase
from user_management.application.use_cases.users.login_user import LoginUserUseCase
from user_management.application.use_cases.users.register_user import RegisterUserUseCase
from user_management.domain.users.repositories import TokenService
from user_management.interfaces.http.auth import bearer_required
from user_management.interfaces.http.dto.users import (
    LoginRequestDTO,
    MessageDTO,
    RegisterRequestDTO,
    TokenResponseDTO,
    UserListResponseDTO,
    UserResponseDTO,
)
from user_management.shared.errors.validation import raise_validation_error
from user_management.shared.logging import logger

URL_PREFIX = "/api/users"


class UsersController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        list_users_use_case: ListUsersUseCase,
        tokens: TokenService,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._list_users_use_case = list_users_use_case
        self._tokens = tokens

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._register_use_case.execute(dto.email, dto.username, dto.password)

        payload = UserResponseDTO.from_profile(user.profile()).model_dump(
            mode="json", by_alias=True
        )
        response = jsonify(payload)
        response.headers["Location"] = f"{URL_PREFIX}/{user.id}"
        return response, 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        token = self._login_use_case.execute(dto.email, dto.password)
        return jsonify(TokenResponseDTO(token=token).model_dump()), 200

    def protected(self) -> tuple[Response, int]:
        payload = MessageDTO(
            message="This is a protected endpoint. now you are inside the endpoint"
        )
        return jsonify(payload.model_dump()), 200

    def list_all(self) -> tuple[Response, int]:
        profiles = self._list_users_use_case.execute()
        payload = UserListResponseDTO(
            users=[UserResponseDTO.from_profile(profile) for profile in profiles]
        )
        logger.debug(f"users.list: returned {len(profiles)} user(s)")
        return jsonify(payload.model_dump(mode="json", by_alias=True)), 200

    def as_blueprint(self) -> Blueprint:
        guard = bearer_required(self._tokens)
        bp = Blueprint("users", __name__, url_prefix=URL_PREFIX)
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule(
            "/protected", endpoint="protected", view_func=guard(self.protected), methods=["GET"]
        )
        bp.add_url_rule("/all", endpoint="all", view_func=guard(self.list_all), methods=["GET"])
        return bp
