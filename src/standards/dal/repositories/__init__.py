from __future__ import annotations

from .base import Repository
from .entities import (
    AddressRepository,
    BlobRepository,
    CredentialRepository,
    DisclosureRepository,
    EntityRepository,
    EntityTypeRepository,
    JurisdictionRepository,
    MailboxRepository,
    PersonEntityRoleRepository,
    PersonRepository,
    ProjectRepository,
    QuestionRepository,
    RelationshipLogRepository,
    ShareClassRepository,
    UserRepository,
)

__all__ = [
    "Repository",
    "AddressRepository",
    "BlobRepository",
    "CredentialRepository",
    "DisclosureRepository",
    "EntityRepository",
    "EntityTypeRepository",
    "JurisdictionRepository",
    "MailboxRepository",
    "PersonEntityRoleRepository",
    "PersonRepository",
    "ProjectRepository",
    "QuestionRepository",
    "RelationshipLogRepository",
    "ShareClassRepository",
    "UserRepository",
]
