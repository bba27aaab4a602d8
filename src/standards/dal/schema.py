from __future__ import annotations

"""
Schema Migrations.

DDL for every table, written once with two backend placeholders:
{pk} for the auto-increment primary key and {bool} for boolean columns.
Timestamps and JSON documents are stored as text on both backends.
"""

from typing import Dict, List, Tuple

_TIMESTAMPS = "inserted_at TEXT, updated_at TEXT"

# (table, column definitions) in creation order
MIGRATIONS: List[Tuple[str, str]] = [
    ("people", f"""
        id {{pk}},
        name TEXT NOT NULL,
        email TEXT NOT NULL UNIQUE,
        {_TIMESTAMPS}
    """),
    ("users", f"""
        id {{pk}},
        person_id INTEGER NOT NULL REFERENCES people(id),
        sub TEXT NOT NULL UNIQUE,
        role TEXT NOT NULL,
        {_TIMESTAMPS}
    """),
    ("jurisdictions", f"""
        id {{pk}},
        name TEXT NOT NULL,
        code TEXT NOT NULL UNIQUE,
        jurisdiction_type TEXT NOT NULL,
        {_TIMESTAMPS}
    """),
    ("entity_types", f"""
        id {{pk}},
        jurisdiction_id INTEGER NOT NULL REFERENCES jurisdictions(id),
        name TEXT NOT NULL,
        {_TIMESTAMPS}
    """),
    ("entities", f"""
        id {{pk}},
        name TEXT NOT NULL,
        legal_entity_type_id INTEGER NOT NULL REFERENCES entity_types(id),
        {_TIMESTAMPS}
    """),
    ("share_classes", f"""
        id {{pk}},
        entity_id INTEGER NOT NULL REFERENCES entities(id),
        name TEXT NOT NULL,
        priority INTEGER NOT NULL,
        description TEXT,
        {_TIMESTAMPS}
    """),
    ("blobs", f"""
        id {{pk}},
        object_storage_url TEXT NOT NULL,
        referenced_by TEXT NOT NULL,
        referenced_by_id INTEGER NOT NULL,
        {_TIMESTAMPS}
    """),
    ("projects", f"""
        id {{pk}},
        codename TEXT NOT NULL UNIQUE,
        {_TIMESTAMPS}
    """),
    ("credentials", f"""
        id {{pk}},
        person_id INTEGER NOT NULL REFERENCES people(id),
        jurisdiction_id INTEGER NOT NULL REFERENCES jurisdictions(id),
        license_number TEXT NOT NULL,
        {_TIMESTAMPS}
    """),
    ("relationship_logs", f"""
        id {{pk}},
        project_id INTEGER NOT NULL REFERENCES projects(id),
        credential_id INTEGER NOT NULL REFERENCES credentials(id),
        body TEXT NOT NULL,
        relationships TEXT,
        {_TIMESTAMPS}
    """),
    ("disclosures", f"""
        id {{pk}},
        credential_id INTEGER NOT NULL REFERENCES credentials(id),
        project_id INTEGER NOT NULL REFERENCES projects(id),
        disclosed_at TEXT NOT NULL,
        end_disclosed_at TEXT,
        active {{bool}} NOT NULL,
        {_TIMESTAMPS}
    """),
    ("questions", f"""
        id {{pk}},
        prompt TEXT NOT NULL,
        question_type TEXT NOT NULL,
        code TEXT NOT NULL UNIQUE,
        help_text TEXT,
        choices TEXT,
        {_TIMESTAMPS}
    """),
    ("addresses", f"""
        id {{pk}},
        street TEXT NOT NULL,
        city TEXT NOT NULL,
        state TEXT NOT NULL,
        zip TEXT NOT NULL,
        country TEXT NOT NULL,
        person_id INTEGER REFERENCES people(id),
        entity_id INTEGER REFERENCES entities(id),
        is_verified {{bool}} NOT NULL,
        {_TIMESTAMPS}
    """),
    ("mailboxes", f"""
        id {{pk}},
        address_id INTEGER NOT NULL REFERENCES addresses(id),
        mailbox_number INTEGER NOT NULL,
        is_active {{bool}} NOT NULL,
        {_TIMESTAMPS},
        UNIQUE (address_id, mailbox_number)
    """),
    ("person_entity_roles", f"""
        id {{pk}},
        person_id INTEGER NOT NULL REFERENCES people(id),
        entity_id INTEGER NOT NULL REFERENCES entities(id),
        role TEXT NOT NULL,
        {_TIMESTAMPS}
    """),
]

TYPE_MAP: Dict[str, Dict[str, str]] = {
    "sqlite": {"pk": "INTEGER PRIMARY KEY AUTOINCREMENT", "bool": "INTEGER"},
    "postgres": {"pk": "SERIAL PRIMARY KEY", "bool": "BOOLEAN"},
}


def create_statements(backend: str) -> List[str]:
    """CREATE TABLE statements in dependency order."""
    types = TYPE_MAP[backend]
    return [
        f"CREATE TABLE IF NOT EXISTS {table} ({' '.join(body.format(**types).split())})"
        for table, body in MIGRATIONS
    ]


def drop_statements() -> List[str]:
    """DROP TABLE statements in reverse dependency order."""
    return [f"DROP TABLE IF EXISTS {table}" for table, _ in reversed(MIGRATIONS)]


def table_names() -> List[str]:
    return [table for table, _ in MIGRATIONS]
