from __future__ import annotations

from silentnote.domain.entities.profile import Profile
from silentnote.infrastructure.db.models.profile import ProfileModel


def model_to_entity(model: ProfileModel) -> Profile:
    return Profile(
        id=model.id,
        user_id=model.user_id,
        username=model.username,
        display_name=model.display_name,
        avatar_url=model.avatar_url,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def entity_to_model(entity: Profile) -> ProfileModel:
    return ProfileModel(
        id=entity.id,
        user_id=entity.user_id,
        username=entity.username,
        display_name=entity.display_name,
        avatar_url=entity.avatar_url,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )
