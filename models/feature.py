# models/feature.py

from pydantic import BaseModel

from core import features


class FeatureRead(BaseModel):
    view_id: str
    title: str
    icon: str
    description: str
    is_coming_soon: bool

    @classmethod
    def for_view(cls, view_id: str) -> "FeatureRead":
        return cls(
            view_id=view_id,
            title=features.resolve_title(view_id),
            icon=features.get_feature_icon(view_id),
            description=features.get_feature_description(view_id),
            is_coming_soon=features.is_coming_soon(view_id),
        )


class RoleRead(BaseModel):
    role: str
    display_name: str
    level: int
