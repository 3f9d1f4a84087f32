"""Supabase-backed slot repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from kitchen_wiz.services.storage import SlotRepository


@dataclass
class SupabaseSlotRepository(SlotRepository):
    """Supabase implementation storing one row per slot."""

    client: Client
    table_name: str = "kitchen_slots"

    def read(self, slot: str) -> str | None:
        """Return the stored payload for a slot."""
        response = (
            self.client.table(self.table_name)
            .select("payload")
            .eq("slot", slot)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("payload")

    def write(self, slot: str, payload: str) -> None:
        """Upsert the payload for a slot."""
        self.client.table(self.table_name).upsert(
            {
                "slot": slot,
                "payload": payload,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="slot",
        ).execute()
