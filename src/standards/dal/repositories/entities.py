from __future__ import annotations

"""
Per-Table Repositories.

Each class binds the generic Repository to one model and adds the lookups
callers need for that table.
"""

from typing import List, Optional

from standards.dal.models import (
    Address,
    Blob,
    BlobReferencedBy,
    Credential,
    Disclosure,
    Entity,
    EntityType,
    Jurisdiction,
    Mailbox,
    Person,
    PersonEntityRole,
    PersonEntityRoleType,
    Project,
    Question,
    QuestionType,
    RelationshipLog,
    ShareClass,
    User,
)
from standards.dal.repositories.base import Repository


class PersonRepository(Repository[Person]):
    model = Person

    def find_by_email(self, email: str) -> Optional[Person]:
        return self._first(email=email)


class UserRepository(Repository[User]):
    model = User

    def find_by_sub(self, sub: str) -> Optional[User]:
        """Look up a user by identity-provider subject."""
        return self._first(sub=sub)


class JurisdictionRepository(Repository[Jurisdiction]):
    model = Jurisdiction

    def find_by_code(self, code: str) -> Optional[Jurisdiction]:
        return self._first(code=code)


class EntityTypeRepository(Repository[EntityType]):
    model = EntityType

    def find_by_jurisdiction(self, jurisdiction_id: int) -> List[EntityType]:
        return self._filter(jurisdiction_id=jurisdiction_id)


class EntityRepository(Repository[Entity]):
    model = Entity

    def find_by_type(self, legal_entity_type_id: int) -> List[Entity]:
        return self._filter(legal_entity_type_id=legal_entity_type_id)


class ShareClassRepository(Repository[ShareClass]):
    model = ShareClass

    def find_by_entity(self, entity_id: int) -> List[ShareClass]:
        return self._filter(entity_id=entity_id)


class BlobRepository(Repository[Blob]):
    model = Blob

    def find_by_reference(self, referenced_by: BlobReferencedBy, referenced_by_id: int) -> List[Blob]:
        return self._filter(referenced_by=referenced_by, referenced_by_id=referenced_by_id)


class ProjectRepository(Repository[Project]):
    model = Project

    def find_by_codename(self, codename: str) -> Optional[Project]:
        return self._first(codename=codename)


class CredentialRepository(Repository[Credential]):
    model = Credential

    def find_by_person(self, person_id: int) -> List[Credential]:
        return self._filter(person_id=person_id)

    def find_by_jurisdiction(self, jurisdiction_id: int) -> List[Credential]:
        return self._filter(jurisdiction_id=jurisdiction_id)


class RelationshipLogRepository(Repository[RelationshipLog]):
    model = RelationshipLog

    def find_by_project(self, project_id: int) -> List[RelationshipLog]:
        return self._filter(project_id=project_id)

    def find_by_credential(self, credential_id: int) -> List[RelationshipLog]:
        return self._filter(credential_id=credential_id)


class DisclosureRepository(Repository[Disclosure]):
    model = Disclosure

    def find_active(self) -> List[Disclosure]:
        return self._filter(active=True)

    def find_by_project(self, project_id: int) -> List[Disclosure]:
        return self._filter(project_id=project_id)

    def find_by_credential(self, credential_id: int) -> List[Disclosure]:
        return self._filter(credential_id=credential_id)


class QuestionRepository(Repository[Question]):
    model = Question

    def find_by_code(self, code: str) -> Optional[Question]:
        return self._first(code=code)

    def find_by_type(self, question_type: QuestionType) -> List[Question]:
        return self._filter(question_type=question_type)


class AddressRepository(Repository[Address]):
    model = Address

    def find_by_person(self, person_id: int) -> List[Address]:
        return self._filter(person_id=person_id)

    def find_by_entity(self, entity_id: int) -> List[Address]:
        return self._filter(entity_id=entity_id)

    def find_verified(self) -> List[Address]:
        return self._filter(is_verified=True)


class MailboxRepository(Repository[Mailbox]):
    model = Mailbox

    def find_by_address(self, address_id: int) -> List[Mailbox]:
        return self._filter(address_id=address_id)

    def find_active(self) -> List[Mailbox]:
        return self._filter(is_active=True)


class PersonEntityRoleRepository(Repository[PersonEntityRole]):
    model = PersonEntityRole

    def find_by_person(self, person_id: int) -> List[PersonEntityRole]:
        return self._filter(person_id=person_id)

    def find_by_entity(self, entity_id: int) -> List[PersonEntityRole]:
        return self._filter(entity_id=entity_id)

    def find_by_role(self, role: PersonEntityRoleType) -> List[PersonEntityRole]:
        return self._filter(role=role)
