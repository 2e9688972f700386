"""Supabase-backed profile and role lookups."""

from __future__ import annotations

from supabase import Client

from storefront.domain.model.identity import AppRole
from storefront.domain.repository.identity_repository import (
    ProfileRepository,
    UserRoleRepository,
)
from storefront.infrastructure.persistence.supabase_rows import execute, first_row


class SupabaseProfileRepository(ProfileRepository):

    def __init__(self, client: Client) -> None:
        self._client = client

    def is_active(self, user_id: str) -> bool | None:
        res = execute(
            self._client.table("profiles").select("is_active").eq("user_id", user_id).limit(1),
            "load profile",
        )
        row = first_row(res)
        return None if row is None else bool(row.get("is_active"))


class SupabaseUserRoleRepository(UserRoleRepository):

    def __init__(self, client: Client) -> None:
        self._client = client

    def get_role(self, user_id: str) -> AppRole | None:
        res = execute(
            self._client.table("user_roles").select("role").eq("user_id", user_id).limit(1),
            "load role",
        )
        row = first_row(res)
        return AppRole(row["role"]) if row else None

    def is_admin(self, user_id: str) -> bool:
        res = execute(self._client.rpc("is_admin", {"_user_id": user_id}), "check admin role")
        return res.data is True
