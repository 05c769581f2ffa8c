# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import SessionUser


class SessionStore(Protocol):
    def create(self, username: str) -> str: ...
    def lookup(self, session_id: str) -> SessionUser | None: ...
    def destroy(self, session_id: str) -> None: ...
