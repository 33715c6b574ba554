#!/usr/bin/env python
"""Example 01: Field and Key Masking.

A `Mutator` walks any value graph and replaces the values of registered
fields and mapping keys in place. This example demonstrates:

1. Masking a record field and a mapping entry by bare name
2. Cycle-safe traversal of a self-referencing record
3. Targeting one record type with type-qualified keys
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from mutator import (
    PasswordDefaultMutator,
    new_field_match_mutator,
    new_type_and_field_match_mutator,
    type_field_key,
)

# =============================================================================
# Part 1: Field Name Matching
# =============================================================================

print("=" * 60)
print("Part 1: Field Name Matching")
print("=" * 60)


@dataclass
class Credentials:
    username: str
    password: str
    head: Optional[Credentials] = None


cred_struct = Credentials(username="admin", password="Master#123")
cred_struct.head = cred_struct

cred_map = {
    "username": "admin",
    "password": "admin",
}

m = new_field_match_mutator()
m.hook.add("password", PasswordDefaultMutator())

m.execute(cred_struct)
m.execute(cred_map)

print(f"record : {cred_struct.username} / {cred_struct.password}")
print(f"mapping: {cred_map}")

# =============================================================================
# Part 2: Type-Qualified Matching
# =============================================================================

print()
print("=" * 60)
print("Part 2: Type-Qualified Matching")
print("=" * 60)


@dataclass
class Smtp:
    username: str
    password: str


@dataclass
class Database:
    password: str


@dataclass
class Settings:
    smtp: Smtp
    database: Database


settings = Settings(Smtp("mailer", "smtp-secret"), Database("db-secret"))

tm = new_type_and_field_match_mutator()
tm.hook.add(type_field_key(Smtp, "password"), PasswordDefaultMutator())
tm.execute(settings)

print(f"smtp.password    : {settings.smtp.password}")
print(f"database.password: {settings.database.password}")
