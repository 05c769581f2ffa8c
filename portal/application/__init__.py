# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.logout_user import LogoutUserUseCase

__all__ = [
    "LoginUserUseCase",
    "LogoutUserUseCase",
]
