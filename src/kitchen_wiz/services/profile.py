"""User profile service."""

from dataclasses import dataclass, field

from pydantic import TypeAdapter

from kitchen_wiz.domain.profile import UserProfile
from kitchen_wiz.services.storage import CollectionStore, Slot

PROFILE_ADAPTER = TypeAdapter(UserProfile)
TAG_FIELDS = ("dietary_restrictions", "allergies", "cuisine_preferences")


@dataclass
class ProfileService:
    """Holds the singleton taste profile."""

    store: CollectionStore
    profile: UserProfile = field(init=False)

    def __post_init__(self) -> None:
        self.profile = self.store.load(Slot.PROFILE, PROFILE_ADAPTER, UserProfile)

    def get(self) -> UserProfile:
        return self.profile

    def update(self, **changes: object) -> UserProfile:
        """Apply field changes; tag lists may be given as comma-separated text."""
        normalized = {
            name: split_tags(value)
            if name in TAG_FIELDS and isinstance(value, str)
            else value
            for name, value in changes.items()
        }
        updated = UserProfile.model_validate(
            {**self.profile.model_dump(), **normalized}
        )
        self.profile = updated
        self.store.save(Slot.PROFILE, PROFILE_ADAPTER, updated)
        return updated


def split_tags(text: str) -> list[str]:
    """Split comma-separated input into trimmed, non-empty tags."""
    return [tag.strip() for tag in text.split(",") if tag.strip()]
