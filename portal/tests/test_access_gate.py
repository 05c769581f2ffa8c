from __future__ import annotations

import pytest

from portal.interfaces.http.access_gate import AccessPolicy, Protection


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/inicio", Protection.PAGE),
        ("/inicio/", Protection.PAGE),
        ("/inicio/perfil", Protection.PAGE),
        ("/INICIO", Protection.PAGE),
        ("/inicio.html", Protection.PUBLIC),
        ("/iniciox", Protection.PUBLIC),
        ("/api/me", Protection.API),
        ("/api/datos", Protection.API),
        ("/API/ME", Protection.API),
        ("/api/unknown", Protection.API),
        ("/api/login", Protection.PUBLIC),
        ("/api/login/", Protection.PUBLIC),
        ("/api/Login", Protection.PUBLIC),
        ("/api/loginx", Protection.API),
        ("/api/logout", Protection.PUBLIC),
        ("/api/salud", Protection.PUBLIC),
        ("/api", Protection.PUBLIC),
        ("/login", Protection.PUBLIC),
        ("/logout", Protection.PUBLIC),
        ("/salud", Protection.PUBLIC),
        ("/styles.css", Protection.PUBLIC),
        ("/", Protection.PUBLIC),
    ],
)
def test_default_policy_classification(path: str, expected: Protection) -> None:
    assert AccessPolicy().classify(path) is expected


def test_custom_policy_prefixes() -> None:
    policy = AccessPolicy(
        interior_prefixes=("/inicio", "/panel"),
        public_api=frozenset({"/api/login"}),
    )

    assert policy.classify("/panel/x") is Protection.PAGE
    assert policy.classify("/api/salud") is Protection.API
