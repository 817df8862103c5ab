from __future__ import annotations

import pytest
from pydantic import BaseModel

from snippetbox.app import create_app
from snippetbox.domain.exceptions import NoRecordError
from snippetbox.infrastructure.db.models import User
from snippetbox.infrastructure.unit_of_work import unit_of_work_scope
from snippetbox.interfaces.http.dto.forms import SnippetCreateForm
from snippetbox.shared.errors import (
    BadRequestError,
    InfrastructureError,
    InvalidDecoderError,
    decode_post_form,
)
from snippetbox.shared.middleware.chain import Chain
from snippetbox.shared.middleware.request_logger import _get_client_ip


def test_security_headers_on_every_response(client) -> None:
    for path in ("/ping", "/", "/does-not-exist"):
        response = client.get(path)

        assert response.headers["Content-Security-Policy"] == (
            "default-src 'self'; style-src 'self' fonts.googleapis.com; font-src fonts.gstatic.com"
        )
        assert response.headers["Referrer-Policy"] == "origin-when-cross-origin"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "deny"
        assert response.headers["X-XSS-Protection"] == "0"
        assert "Strict-Transport-Security" not in response.headers


def test_hsts_when_enabled(config) -> None:
    config.security.enable_hsts = True
    response = create_app(config).test_client().get("/ping")

    assert response.headers["Strict-Transport-Security"].startswith("max-age=")


def test_recovery_turns_exceptions_into_plain_500(app) -> None:
    def boom():
        raise RuntimeError("kaboom")

    app.add_url_rule("/boom", view_func=boom)

    response = app.test_client().get("/boom")

    assert response.status_code == 500
    assert response.get_data(as_text=True) == "Internal Server Error\n"
    assert response.headers["Connection"] == "close"
    assert response.headers["X-Frame-Options"] == "deny"
    assert "kaboom" not in response.get_data(as_text=True)


def test_not_found_is_plain_text(client) -> None:
    response = client.get("/missing")

    assert response.status_code == 404
    assert response.mimetype == "text/plain"
    assert response.get_data(as_text=True) == "Not Found\n"


def test_method_not_allowed_keeps_default(client) -> None:
    response = client.post("/ping")

    assert response.status_code == 405
    assert "GET" in response.headers["Allow"]


def test_ping_and_static_leave_session_untouched(client) -> None:
    ping = client.get("/ping")
    css = client.get("/static/css/main.css")

    assert ping.status_code == 200
    assert ping.get_data(as_text=True) == "OK"
    assert css.status_code == 200
    assert "Set-Cookie" not in ping.headers
    assert "Set-Cookie" not in css.headers


@pytest.mark.parametrize(
    "path",
    ["/user/login", "/user/signup", "/user/logout", "/snippet/create", "/account/password/update"],
)
def test_state_changing_routes_reject_missing_csrf(client, path: str) -> None:
    client.get("/user/login")

    response = client.post(
        path,
        data={"email": "alice@example.com", "password": "pa$$word", "name": "Alice"},
    )

    assert response.status_code == 400


def test_forged_csrf_token_is_rejected(client, csrf_token) -> None:
    csrf_token(client)

    response = client.post(
        "/user/login",
        data={"email": "alice@example.com", "password": "pa$$word", "csrf_token": "forged"},
    )

    assert response.status_code == 400


def test_csrf_token_accepted_from_header(client, csrf_token) -> None:
    token = csrf_token(client)

    response = client.post(
        "/user/login",
        data={"email": "alice@example.com", "password": "pa$$word"},
        headers={"X-CSRF-Token": token},
    )

    assert response.status_code == 303


def test_token_from_another_session_is_rejected(app, csrf_token) -> None:
    foreign = csrf_token(app.test_client())
    client = app.test_client()
    csrf_token(client)

    response = client.post(
        "/user/login",
        data={"email": "alice@example.com", "password": "pa$$word", "csrf_token": foreign},
    )

    assert response.status_code == 400


def test_require_authentication_redirects_and_remembers_path(client, login) -> None:
    response = client.get("/account/view")

    assert response.status_code == 303
    assert response.headers["Location"] == "/user/login"

    after_login = login(client)

    assert after_login.status_code == 303
    assert after_login.headers["Location"] == "/account/view"


def test_protected_pages_are_not_cached(logged_in_client) -> None:
    response = logged_in_client.get("/snippet/create")

    assert response.status_code == 200
    assert response.headers["Cache-Control"] == "no-store"


def test_session_for_deleted_user_is_anonymous(logged_in_client, container) -> None:
    with unit_of_work_scope(container.session_factory) as session:
        session.query(User).filter(User.email == "alice@example.com").delete()

    response = logged_in_client.get("/snippet/create")

    assert response.status_code == 303


def test_chain_applies_first_middleware_outermost() -> None:
    calls: list[str] = []

    def tag(name: str):
        def middleware(view):
            def wrapped(*a, **kw):
                calls.append(name)
                return view(*a, **kw)

            return wrapped

        return middleware

    base = Chain(tag("a"), tag("b"))
    extended = base.append(tag("c"))
    view = extended.then(lambda: calls.append("view"))

    view()

    assert calls == ["a", "b", "c", "view"]
    assert len(base) == 2
    assert len(extended) == 3


def test_decode_post_form_rejects_non_form_destination() -> None:
    with pytest.raises(InvalidDecoderError):
        decode_post_form(dict, {"title": "x"})  # type: ignore[type-var]


def test_decode_post_form_type_errors_are_bad_requests() -> None:
    with pytest.raises(BadRequestError) as exc_info:
        decode_post_form(SnippetCreateForm, {"title": "x", "content": "y", "expires": "abc"})

    assert exc_info.value.status == 400
    assert "expires" in exc_info.value.context["fields"]


def test_decode_post_form_blank_number_is_zero() -> None:
    form = decode_post_form(SnippetCreateForm, {"title": "x", "content": "y", "expires": ""})

    assert form.expires == 0
    assert isinstance(form, BaseModel)


def test_escaping_app_errors_map_to_their_status(app) -> None:
    def missing():
        raise NoRecordError()

    def broken():
        raise InfrastructureError("db_down")

    app.add_url_rule("/missing-record", view_func=missing)
    app.add_url_rule("/broken-store", view_func=broken)
    client = app.test_client()

    assert client.get("/missing-record").get_data(as_text=True) == "Not Found\n"
    assert client.get("/missing-record").status_code == 404
    broken_response = client.get("/broken-store")
    assert broken_response.status_code == 500
    assert broken_response.headers["Connection"] == "close"


def test_session_load_failure_goes_through_recovery(app, monkeypatch: pytest.MonkeyPatch) -> None:
    def unavailable(_app, _request):
        raise RuntimeError("session store down")

    monkeypatch.setattr(app.session_interface, "open_session", unavailable)

    response = app.test_client().get("/")

    assert response.status_code == 500
    assert response.get_data(as_text=True) == "Internal Server Error\n"
    assert response.headers["Connection"] == "close"
    assert response.headers["X-Frame-Options"] == "deny"
    assert "Set-Cookie" not in response.headers


def test_session_save_failure_goes_through_recovery(app, monkeypatch: pytest.MonkeyPatch) -> None:
    def unavailable(_app, _session, _response):
        raise RuntimeError("session store down")

    monkeypatch.setattr(app.session_interface, "save_session", unavailable)

    response = app.test_client().get("/user/login")

    assert response.status_code == 500
    assert response.get_data(as_text=True) == "Internal Server Error\n"
    assert response.headers["Connection"] == "close"


def test_client_address_ignores_forwarded_header(app) -> None:
    with app.test_request_context(
        "/",
        headers={"X-Forwarded-For": "203.0.113.9"},
        environ_base={"REMOTE_ADDR": "192.0.2.7"},
    ):
        assert _get_client_ip() == "192.0.2.7"
