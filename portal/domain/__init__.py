# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users.entities import Credential, Session, SessionUser
from .users.exceptions import InvalidCredentialsError
from .users.repositories import SessionStore

__all__ = [
    "Credential",
    "InvalidCredentialsError",
    "Session",
    "SessionStore",
    "SessionUser",
]
