# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hmac
from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class SessionUser:

    username: str

    def to_dict(self) -> dict[str, str]:
        return {"username": self.username}


@dataclass(slots=True, frozen=True)
class Session:

    session_id: str
    user: SessionUser
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


@dataclass(slots=True, frozen=True)
class Credential:
    """The single username/password pair accepted by the login transition.

    Comparison is exact and case-sensitive; both fields are compared even
    when the first one already differs.
    """

    username: str
    password: str

    def matches(self, username: str, password: str) -> bool:
        user_ok = hmac.compare_digest(username.encode("utf-8"), self.username.encode("utf-8"))
        pass_ok = hmac.compare_digest(password.encode("utf-8"), self.password.encode("utf-8"))
        return user_ok and pass_ok

    def __repr__(self) -> str:
        return f"Credential(username={self.username!r}, password='***')"
