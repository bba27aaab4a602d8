from __future__ import annotations

"""
Data-Access Models.

Plain dataclasses, one per table. Every record carries an auto-assigned
integer id plus inserted_at/updated_at timestamps managed by the repository
layer. Conversion to and from database rows is driven by the field type
hints:

- datetime  <-> ISO-8601 text
- Enum      <-> its string value
- Dict/List <-> JSON text
- bool      <-> native boolean (0/1 on SQLite)
"""

import dataclasses
import json
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Tuple, Type, TypeVar, Union, get_args, get_origin, get_type_hints

ModelT = TypeVar("ModelT", bound="Model")

# Columns owned by the repository layer, never written from user data
MANAGED_COLUMNS: Tuple[str, ...] = ("id", "inserted_at", "updated_at")


# ==============================================================================
# ENUMERATIONS
# ==============================================================================

class UserRole(str, Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"
    STAFF = "staff"


class JurisdictionType(str, Enum):
    STATE = "state"
    COUNTRY = "country"
    CITY = "city"
    COUNTY = "county"


class PersonEntityRoleType(str, Enum):
    ADMIN = "admin"
    OWNER = "owner"
    MEMBER = "member"


class BlobReferencedBy(str, Enum):
    """Table a stored object is attached to."""
    ANSWERS = "answers"
    ENTITIES = "entities"
    PEOPLE = "people"
    PROJECTS = "projects"
    QUESTIONS = "questions"


class QuestionType(str, Enum):
    """Input control used to collect an answer."""
    STRING = "string"
    TEXT = "text"
    DATE = "date"
    DATETIME = "datetime"
    NUMBER = "number"
    YES_NO = "yes_no"
    RADIO = "radio"
    SELECT = "select"
    MULTI_SELECT = "multi_select"
    SECRET = "secret"
    PHONE = "phone"
    EMAIL = "email"
    SSN = "ssn"
    EIN = "ein"
    FILE = "file"
    PERSON = "person"
    ADDRESS = "address"
    ORG = "org"


# ==============================================================================
# BASE MODEL
# ==============================================================================

class Model:
    """
    Mixin shared by every table dataclass.

    Subclasses set __table__ and declare id, inserted_at and updated_at as
    their last three fields.
    """
    __table__: ClassVar[str] = ""

    id: Optional[int]
    inserted_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def columns(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in dataclasses.fields(cls))

    @classmethod
    def data_columns(cls) -> Tuple[str, ...]:
        """Columns supplied by the caller on insert."""
        return tuple(c for c in cls.columns() if c not in MANAGED_COLUMNS)

    def to_row(self) -> Dict[str, Any]:
        """Serialize every field to a database-ready value."""
        hints = get_type_hints(type(self))
        return {name: to_db_value(getattr(self, name), hints[name]) for name in self.columns()}

    @classmethod
    def from_row(cls: Type[ModelT], row: Dict[str, Any]) -> ModelT:
        """Build a model from a column -> value mapping."""
        hints = get_type_hints(cls)
        values = {name: from_db_value(row.get(name), hints[name]) for name in cls.columns()}
        return cls(**values)


def _unwrap_optional(hint: Any) -> Any:
    if get_origin(hint) is Union:
        args = [a for a in get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def _is_json(hint: Any) -> bool:
    return get_origin(hint) in (dict, list)


def to_db_value(value: Any, hint: Any) -> Any:
    if value is None:
        return None
    hint = _unwrap_optional(hint)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if _is_json(hint):
        return json.dumps(value, sort_keys=True)
    return value


def from_db_value(value: Any, hint: Any) -> Any:
    if value is None:
        return None
    hint = _unwrap_optional(hint)
    if isinstance(hint, type) and issubclass(hint, Enum):
        return hint(value)
    if hint is datetime:
        return value if isinstance(value, datetime) else datetime.fromisoformat(value)
    if hint is bool:
        return bool(value)
    if _is_json(hint):
        return json.loads(value) if isinstance(value, str) else value
    return value


# ==============================================================================
# TABLES
# ==============================================================================

@dataclass
class Person(Model):
    __table__: ClassVar[str] = "people"

    name: str
    email: str
    id: Optional[int] = None
    inserted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class User(Model):
    __table__: ClassVar[str] = "users"

    person_id: int
    sub: str
    role: UserRole = UserRole.CUSTOMER
    id: Optional[int] = None
    inserted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Jurisdiction(Model):
    __table__: ClassVar[str] = "jurisdictions"

    name: str
    code: str
    jurisdiction_type: JurisdictionType = JurisdictionType.STATE
    id: Optional[int] = None
    inserted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class EntityType(Model):
    """A legal form (LLC, corporation...) recognized by a jurisdiction."""
    __table__: ClassVar[str] = "entity_types"

    jurisdiction_id: int
    name: str
    id: Optional[int] = None
    inserted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Entity(Model):
    __table__: ClassVar[str] = "entities"

    name: str
    legal_entity_type_id: int
    id: Optional[int] = None
    inserted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class ShareClass(Model):
    __table__: ClassVar[str] = "share_classes"

    entity_id: int
    name: str
    priority: int
    description: Optional[str] = None
    id: Optional[int] = None
    inserted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Blob(Model):
    """Reference to a binary object held in external storage."""
    __table__: ClassVar[str] = "blobs"

    object_storage_url: str
    referenced_by: BlobReferencedBy
    referenced_by_id: int
    id: Optional[int] = None
    inserted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Project(Model):
    __table__: ClassVar[str] = "projects"

    codename: str
    id: Optional[int] = None
    inserted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Credential(Model):
    """A professional license held by a person in a jurisdiction."""
    __table__: ClassVar[str] = "credentials"

    person_id: int
    jurisdiction_id: int
    license_number: str
    id: Optional[int] = None
    inserted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class RelationshipLog(Model):
    __table__: ClassVar[str] = "relationship_logs"

    project_id: int
    credential_id: int
    body: str
    relationships: Optional[Dict[str, Any]] = None
    id: Optional[int] = None
    inserted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Disclosure(Model):
    """A credential disclosed to a project over a period of time."""
    __table__: ClassVar[str] = "disclosures"

    credential_id: int
    project_id: int
    disclosed_at: datetime
    end_disclosed_at: Optional[datetime] = None
    active: bool = True
    id: Optional[int] = None
    inserted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Question(Model):
    __table__: ClassVar[str] = "questions"

    prompt: str
    question_type: QuestionType
    code: str
    help_text: Optional[str] = None
    choices: Optional[Dict[str, str]] = None
    id: Optional[int] = None
    inserted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Address(Model):
    """Postal address owned by a person, an entity, or neither."""
    __table__: ClassVar[str] = "addresses"

    street: str
    city: str
    state: str
    zip: str
    country: str
    person_id: Optional[int] = None
    entity_id: Optional[int] = None
    is_verified: bool = False
    id: Optional[int] = None
    inserted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Mailbox(Model):
    __table__: ClassVar[str] = "mailboxes"

    address_id: int
    mailbox_number: int
    is_active: bool = True
    id: Optional[int] = None
    inserted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class PersonEntityRole(Model):
    __table__: ClassVar[str] = "person_entity_roles"

    person_id: int
    entity_id: int
    role: PersonEntityRoleType
    id: Optional[int] = None
    inserted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

