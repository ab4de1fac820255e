from datetime import datetime, timedelta, timezone

import jwt
import pytest

from src.auth import security
from src.auth.claims import TokenClaims
from src.auth.enums import UserRole
from src.auth.exceptions import (
    ForbiddenRoleException,
    InvalidOrExpiredTokenException,
    TokenInvalidException,
    TokenSigningException,
)
from src.auth.security import JWTManager
from src.core.utils.datetime_utils import to_timestamp
from tests.factories.token_factory import build_claims_payload, encode_payload

SECRET = "unit-test-secret"


def _freeze_issue_time(monkeypatch: pytest.MonkeyPatch, moment: datetime) -> None:
    monkeypatch.setattr(security, "get_utc_now", lambda: moment)


def test_issue_then_verify_returns_same_claims(jwt_manager: JWTManager) -> None:
    token = jwt_manager.issue("u1", "Alice", UserRole.STUDENT, lifetime_seconds=3600)

    claims = jwt_manager.verify(token)

    assert claims.user_id == "u1"
    assert claims.user_name == "Alice"
    assert claims.role is UserRole.STUDENT
    assert claims.iap is None
    assert claims.exp == claims.iat + 3600


def test_issue_produces_three_segment_hs256_token(jwt_manager: JWTManager) -> None:
    token = jwt_manager.issue("u1", "Alice", UserRole.ADMIN, lifetime_seconds=60)

    assert token.count(".") == 2
    assert jwt.get_unverified_header(token)["alg"] == "HS256"


def test_issue_uses_current_clock(
    jwt_manager: JWTManager, monkeypatch: pytest.MonkeyPatch
) -> None:
    moment = datetime.now(timezone.utc).replace(microsecond=750_000)
    _freeze_issue_time(monkeypatch, moment)

    token = jwt_manager.issue("u1", "Alice", UserRole.TEACHER, 7, lifetime_seconds=120)
    payload = jwt.decode(token, SECRET, algorithms=["HS256"])

    assert payload["iat"] == int(moment.timestamp())
    assert payload["exp"] == payload["iat"] + 120


def test_payload_uses_wire_keys_and_uppercase_role(jwt_manager: JWTManager) -> None:
    token = jwt_manager.issue("u1", "Alice", UserRole.MANAGER, lifetime_seconds=60)

    payload = jwt.decode(token, SECRET, algorithms=["HS256"])

    assert set(payload) == {"userId", "userName", "iap", "iat", "exp", "role"}
    assert payload["role"] == "MANAGER"
    assert payload["iap"] is None


def test_iap_round_trips(jwt_manager: JWTManager) -> None:
    token = jwt_manager.issue("u2", "Bob", UserRole.TEACHER, 42, lifetime_seconds=60)

    assert jwt_manager.verify(token).iap == 42


@pytest.mark.parametrize("role", list(UserRole))
def test_every_role_round_trips(jwt_manager: JWTManager, role: UserRole) -> None:
    token = jwt_manager.issue("u1", "Alice", role, lifetime_seconds=60)

    assert jwt_manager.verify(token).role is role


def test_verify_rejects_expired_token(
    jwt_manager: JWTManager, monkeypatch: pytest.MonkeyPatch
) -> None:
    _freeze_issue_time(monkeypatch, datetime.now(timezone.utc) - timedelta(hours=2))
    token = jwt_manager.issue("u1", "Alice", UserRole.STUDENT, lifetime_seconds=3600)

    with pytest.raises(InvalidOrExpiredTokenException) as exc_info:
        jwt_manager.verify(token)

    assert isinstance(exc_info.value.__cause__, jwt.ExpiredSignatureError)
    assert exc_info.value.message == "Invalid or expired token"


def test_verify_accepts_token_issued_by_clock_running_ahead(
    jwt_manager: JWTManager, monkeypatch: pytest.MonkeyPatch
) -> None:
    _freeze_issue_time(monkeypatch, datetime.now(timezone.utc) + timedelta(seconds=30))
    token = jwt_manager.issue("u1", "Alice", UserRole.STUDENT, lifetime_seconds=3600)

    claims = jwt_manager.verify(token)

    assert claims.iat > to_timestamp(datetime.now(timezone.utc))
    assert claims.user_id == "u1"


def test_zero_lifetime_is_expired_immediately(jwt_manager: JWTManager) -> None:
    token = jwt_manager.issue("u1", "Alice", UserRole.STUDENT, lifetime_seconds=0)

    with pytest.raises(InvalidOrExpiredTokenException):
        jwt_manager.verify(token)


def test_negative_lifetime_is_not_rejected_on_issue(jwt_manager: JWTManager) -> None:
    token = jwt_manager.issue("u1", "Alice", UserRole.STUDENT, lifetime_seconds=-10)
    payload = jwt.decode(
        token, SECRET, algorithms=["HS256"], options={"verify_exp": False}
    )

    assert payload["exp"] == payload["iat"] - 10
    with pytest.raises(InvalidOrExpiredTokenException):
        jwt_manager.verify(token)


def test_verify_rejects_token_signed_with_other_secret(
    jwt_manager: JWTManager,
) -> None:
    token = JWTManager("other-secret").issue(
        "u1", "Alice", UserRole.ADMIN, lifetime_seconds=60
    )

    with pytest.raises(InvalidOrExpiredTokenException) as exc_info:
        jwt_manager.verify(token)

    assert isinstance(exc_info.value.__cause__, jwt.InvalidSignatureError)


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c", "a.b"])
def test_verify_rejects_malformed_token(jwt_manager: JWTManager, token: str) -> None:
    with pytest.raises(InvalidOrExpiredTokenException):
        jwt_manager.verify(token)


def test_verify_rejects_unknown_role(jwt_manager: JWTManager) -> None:
    token = encode_payload(build_claims_payload(role="GUEST"), SECRET)

    with pytest.raises(InvalidOrExpiredTokenException):
        jwt_manager.verify(token)


def test_verify_rejects_lowercase_role(jwt_manager: JWTManager) -> None:
    token = encode_payload(build_claims_payload(role="student"), SECRET)

    with pytest.raises(InvalidOrExpiredTokenException):
        jwt_manager.verify(token)


def test_verify_rejects_payload_without_user_id(jwt_manager: JWTManager) -> None:
    payload = build_claims_payload()
    payload.pop("userId")
    token = encode_payload(payload, SECRET)

    with pytest.raises(InvalidOrExpiredTokenException):
        jwt_manager.verify(token)


def test_verify_rejects_payload_without_exp(jwt_manager: JWTManager) -> None:
    payload = build_claims_payload()
    payload.pop("exp")
    token = encode_payload(payload, SECRET)

    with pytest.raises(InvalidOrExpiredTokenException):
        jwt_manager.verify(token)


def test_verify_rejects_attribute_named_keys(jwt_manager: JWTManager) -> None:
    payload = build_claims_payload(role=UserRole.ADMIN)
    payload["user_id"] = payload.pop("userId")
    payload["user_name"] = payload.pop("userName")
    token = encode_payload(payload, SECRET)

    with pytest.raises(InvalidOrExpiredTokenException):
        jwt_manager.verify(token)


@pytest.mark.parametrize(
    "field,value", [("iat", "1700000000"), ("exp", "4102444800"), ("iap", 5.0)]
)
def test_verify_rejects_non_integer_numeric_claims(
    jwt_manager: JWTManager, field: str, value: object
) -> None:
    payload = build_claims_payload()
    payload[field] = value
    token = encode_payload(payload, SECRET)

    with pytest.raises(InvalidOrExpiredTokenException):
        jwt_manager.verify(token)


def test_verify_rejects_other_algorithm(jwt_manager: JWTManager) -> None:
    token = jwt.encode(build_claims_payload(), SECRET, algorithm="HS512")

    with pytest.raises(InvalidOrExpiredTokenException):
        jwt_manager.verify(token)


def test_issue_wraps_claims_errors_as_signing_failure(
    jwt_manager: JWTManager,
) -> None:
    with pytest.raises(TokenSigningException) as exc_info:
        jwt_manager.issue("u1", "Alice", UserRole.STUDENT, -1, lifetime_seconds=60)

    assert exc_info.value.additional_info == {"user_id": "u1"}


def test_issue_wraps_encoder_errors_as_signing_failure(
    jwt_manager: JWTManager, monkeypatch: pytest.MonkeyPatch
) -> None:
    def broken_encode(*args: object, **kwargs: object) -> str:
        raise TypeError("Object of type X is not JSON serializable")

    monkeypatch.setattr(security.jwt, "encode", broken_encode)

    with pytest.raises(TokenSigningException):
        jwt_manager.issue("u1", "Alice", UserRole.STUDENT, lifetime_seconds=60)


def test_has_role_true_for_allowed_role(jwt_manager: JWTManager) -> None:
    token = jwt_manager.issue("u1", "Alice", UserRole.TEACHER, lifetime_seconds=60)

    assert jwt_manager.has_role(token, {UserRole.TEACHER, UserRole.ADMIN}) is True


def test_has_role_false_for_disallowed_role(jwt_manager: JWTManager) -> None:
    token = jwt_manager.issue("u1", "Alice", UserRole.STUDENT, lifetime_seconds=60)

    assert jwt_manager.has_role(token, {UserRole.TEACHER, UserRole.ADMIN}) is False


def test_has_role_false_for_invalid_token(jwt_manager: JWTManager) -> None:
    token = JWTManager("other-secret").issue(
        "u1", "Alice", UserRole.ADMIN, lifetime_seconds=60
    )

    assert jwt_manager.has_role(token, set(UserRole)) is False


def test_has_role_false_for_empty_allowed_set(jwt_manager: JWTManager) -> None:
    token = jwt_manager.issue("u1", "Alice", UserRole.ADMIN, lifetime_seconds=60)

    assert jwt_manager.has_role(token, set()) is False


def test_authorize_returns_claims_for_allowed_role(jwt_manager: JWTManager) -> None:
    token = jwt_manager.issue("u1", "Alice", UserRole.ADMIN, 3, lifetime_seconds=60)

    claims = jwt_manager.authorize(token, [UserRole.ADMIN])

    assert isinstance(claims, TokenClaims)
    assert (claims.user_id, claims.user_name, claims.iap) == ("u1", "Alice", 3)


def test_authorize_forbidden_for_disallowed_role(jwt_manager: JWTManager) -> None:
    token = jwt_manager.issue("u1", "Alice", UserRole.STUDENT, lifetime_seconds=60)

    with pytest.raises(ForbiddenRoleException) as exc_info:
        jwt_manager.authorize(token, [UserRole.ADMIN, UserRole.MANAGER])

    assert exc_info.value.message == "Insufficient permissions"


@pytest.mark.parametrize("allowed", [[UserRole.ADMIN], list(UserRole), []])
def test_authorize_token_invalid_regardless_of_role(
    jwt_manager: JWTManager,
    monkeypatch: pytest.MonkeyPatch,
    allowed: list[UserRole],
) -> None:
    _freeze_issue_time(monkeypatch, datetime.now(timezone.utc) - timedelta(days=1))
    token = jwt_manager.issue("u1", "Alice", UserRole.ADMIN, lifetime_seconds=60)

    with pytest.raises(TokenInvalidException) as exc_info:
        jwt_manager.authorize(token, allowed)

    assert isinstance(exc_info.value.cause, InvalidOrExpiredTokenException)
    assert exc_info.value.__cause__ is exc_info.value.cause


def test_secret_is_read_only(jwt_manager: JWTManager) -> None:
    with pytest.raises(AttributeError):
        jwt_manager.secret_key = "changed"  # type: ignore[misc]

    assert jwt_manager.secret_key == SECRET
    assert SECRET not in repr(jwt_manager)
