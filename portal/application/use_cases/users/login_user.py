# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from portal.domain.users.entities import Credential
from portal.domain.users.exceptions import InvalidCredentialsError
from portal.domain.users.repositories import SessionStore


class LoginUserUseCase:
    def __init__(
        self,
        *,
        credential: Credential,
        sessions: SessionStore,
    ) -> None:
        self._credential = credential
        self._sessions = sessions

    def execute(self, username: str, password: str) -> str:
        if not self._credential.matches(username, password):
            raise InvalidCredentialsError()

        return self._sessions.create(username)
