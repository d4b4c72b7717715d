# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import update

from course_archive.domain.credentials.entities import Credential as DomainCredential
from course_archive.domain.credentials.repositories import CredentialRepository
from course_archive.infrastructure.db.models import Credential
from course_archive.infrastructure.db.session import session_scope


def _to_domain(row: Credential) -> DomainCredential:
    return DomainCredential(id=row.id, secret_hash=row.secret_hash)


class SqlAlchemyCredentialRepository(CredentialRepository):
    def get_single(self) -> DomainCredential | None:
        with session_scope() as session:
            row = session.query(Credential).order_by(Credential.id).first()
            return _to_domain(row) if row else None

    def find_by_id(self, credential_id: int) -> DomainCredential | None:
        with session_scope() as session:
            row = session.get(Credential, credential_id)
            return _to_domain(row) if row else None

    def count(self) -> int:
        with session_scope() as session:
            return session.query(Credential).count()

    def add(self, secret_hash: str) -> DomainCredential:
        with session_scope() as session:
            row = Credential(secret_hash=secret_hash)
            session.add(row)
            session.flush()
            return _to_domain(row)

    def replace_hash(self, credential_id: int, *, expected_hash: str, new_hash: str) -> bool:
        # Compare-and-swap: a concurrent rotation makes the WHERE clause miss.
        with session_scope() as session:
            result = session.execute(
                update(Credential)
                .where(Credential.id == credential_id, Credential.secret_hash == expected_hash)
                .values(secret_hash=new_hash)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount == 1
