from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from course_archive.application.services.tokens import JwtTokenService
from course_archive.application.use_cases.auth.change_password import ChangePasswordUseCase
from course_archive.application.use_cases.auth.login import LoginUseCase
from course_archive.application.use_cases.auth.verify_token import VerifyTokenUseCase
from course_archive.domain.credentials.entities import Credential
from course_archive.domain.credentials.exceptions import (
    CredentialNotFoundError,
    ForbiddenError,
    InvalidCredentialError,
    UnprovisionedError,
)
from course_archive.domain.credentials.repositories import CredentialRepository, PasswordHasher
from course_archive.shared.errors.base import ServerMisconfiguredError, UnauthorizedError


class InMemoryCredentialRepository(CredentialRepository):
    def __init__(self, *credentials: Credential) -> None:
        self._rows: dict[int, Credential] = {c.id: c for c in credentials}
        self.replace_calls = 0

    def get_single(self) -> Credential | None:
        if not self._rows:
            return None
        return self._rows[min(self._rows)]

    def find_by_id(self, credential_id: int) -> Credential | None:
        return self._rows.get(credential_id)

    def replace_hash(self, credential_id: int, *, expected_hash: str, new_hash: str) -> bool:
        self.replace_calls += 1
        current = self._rows.get(credential_id)
        if current is None or current.secret_hash != expected_hash:
            return False
        self._rows[credential_id] = Credential(id=credential_id, secret_hash=new_hash)
        return True


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class FixedClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 3, 1, 12, 0, tzinfo=UTC))


@pytest.fixture()
def tokens(clock: FixedClock) -> JwtTokenService:
    return JwtTokenService(secret="unit-test-secret-0123456789abcdef", ttl=timedelta(days=1), clock=clock)


@pytest.fixture()
def credentials() -> InMemoryCredentialRepository:
    return InMemoryCredentialRepository(Credential(id=1, secret_hash="hashed:s3cret"))


def _change_password(credentials: InMemoryCredentialRepository, rotation_key: str | None = "ROT-KEY"):
    return ChangePasswordUseCase(
        credentials=credentials,
        password_hasher=DeterministicHasher(),
        rotation_key=rotation_key,
    )


def test_login_issues_token_for_stored_credential(credentials, tokens, clock) -> None:
    use_case = LoginUseCase(credentials=credentials, tokens=tokens, password_hasher=DeterministicHasher())

    issued = use_case.execute("s3cret")

    assert issued.subject == 1
    assert issued.expires_at - issued.issued_at == timedelta(days=1)
    assert VerifyTokenUseCase(tokens=tokens).execute(issued.token) == 1


def test_login_without_credential_is_unprovisioned(tokens) -> None:
    use_case = LoginUseCase(
        credentials=InMemoryCredentialRepository(),
        tokens=tokens,
        password_hasher=DeterministicHasher(),
    )

    with pytest.raises(UnprovisionedError) as exc_info:
        use_case.execute("anything")

    assert exc_info.value.status == 401
    assert exc_info.value.message == "User not found. Please run database seed."


def test_login_with_wrong_password_is_rejected(credentials, tokens) -> None:
    use_case = LoginUseCase(credentials=credentials, tokens=tokens, password_hasher=DeterministicHasher())

    with pytest.raises(InvalidCredentialError) as exc_info:
        use_case.execute("wrong")

    assert exc_info.value.message == "Invalid password"


def test_login_uses_first_credential_when_several_exist(tokens) -> None:
    credentials = InMemoryCredentialRepository(
        Credential(id=7, secret_hash="hashed:second"),
        Credential(id=3, secret_hash="hashed:first"),
    )
    use_case = LoginUseCase(credentials=credentials, tokens=tokens, password_hasher=DeterministicHasher())

    assert use_case.execute("first").subject == 3
    with pytest.raises(InvalidCredentialError):
        use_case.execute("second")


def test_verify_rejects_missing_token(tokens) -> None:
    with pytest.raises(UnauthorizedError):
        VerifyTokenUseCase(tokens=tokens).execute(None)


def test_change_password_rotates_hash(credentials) -> None:
    _change_password(credentials).execute(
        subject=1, old_password="s3cret", new_password="n3wpass", rotation_key="ROT-KEY"
    )

    assert credentials.find_by_id(1).secret_hash == "hashed:n3wpass"


def test_change_password_checks_rotation_key_first(credentials) -> None:
    # Wrong key wins over every other failure, including an unknown subject.
    with pytest.raises(ForbiddenError):
        _change_password(credentials).execute(
            subject=99, old_password="wrong", new_password="n3wpass", rotation_key="nope"
        )

    assert credentials.replace_calls == 0


def test_change_password_without_configured_key_is_forbidden(credentials) -> None:
    with pytest.raises(ForbiddenError):
        _change_password(credentials, rotation_key=None).execute(
            subject=1, old_password="s3cret", new_password="n3wpass", rotation_key="ROT-KEY"
        )


def test_change_password_for_unknown_subject(credentials) -> None:
    with pytest.raises(CredentialNotFoundError) as exc_info:
        _change_password(credentials).execute(
            subject=99, old_password="s3cret", new_password="n3wpass", rotation_key="ROT-KEY"
        )

    assert exc_info.value.status == 404


def test_change_password_with_wrong_old_password(credentials) -> None:
    with pytest.raises(InvalidCredentialError) as exc_info:
        _change_password(credentials).execute(
            subject=1, old_password="wrong", new_password="n3wpass", rotation_key="ROT-KEY"
        )

    assert exc_info.value.message == "Old password is incorrect"
    assert credentials.find_by_id(1).secret_hash == "hashed:s3cret"


def test_change_password_loses_race_when_hash_moved(credentials) -> None:
    class RacingRepository(InMemoryCredentialRepository):
        def replace_hash(self, credential_id, *, expected_hash, new_hash):
            self._rows[credential_id] = Credential(id=credential_id, secret_hash="hashed:other")
            return super().replace_hash(
                credential_id, expected_hash=expected_hash, new_hash=new_hash
            )

    racing = RacingRepository(Credential(id=1, secret_hash="hashed:s3cret"))

    with pytest.raises(InvalidCredentialError):
        _change_password(racing).execute(
            subject=1, old_password="s3cret", new_password="n3wpass", rotation_key="ROT-KEY"
        )

    assert racing.find_by_id(1).secret_hash == "hashed:other"


def test_login_checks_password_before_signing_secret(credentials, clock) -> None:
    unsigned = JwtTokenService(secret=None, ttl=timedelta(days=1), clock=clock)
    use_case = LoginUseCase(credentials=credentials, tokens=unsigned, password_hasher=DeterministicHasher())

    with pytest.raises(InvalidCredentialError):
        use_case.execute("wrong")

    with pytest.raises(ServerMisconfiguredError):
        use_case.execute("s3cret")
