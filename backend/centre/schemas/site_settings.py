# backend/centre/schemas/site_settings.py
"""
Site-wide settings.

The set of keys is closed: every setting is a field of SiteSettings with a
type and a default. Unknown keys and ill-typed values are rejected.
"""

from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, create_model


class SiteSettings(BaseModel):
    site_title: str = "West Acton Community Centre"
    site_description: str = "A vibrant community centre serving West Acton and surrounding areas"
    contact_phone: str = "+44 20 1234 5678"
    contact_email: str = "info@westactoncc.org.uk"
    address: str = "West Acton Community Centre, High Street, London W3"
    social_facebook: str = ""
    social_twitter: str = ""
    social_instagram: str = ""
    booking_enabled: bool = True
    maintenance_mode: bool = False
    residents_served: str = "2,000+"
    weekly_programs: str = "15+"
    main_hall_capacity: int = 120
    opening_hours_text: str = "7 days"
    opening_hours_details: str = "Open Monday to Sunday, 9am-10pm"
    hero_subtitle: str = (
        "Your local hub for education, leisure, and recreational programs. "
        "We serve over 2,000 residents in West Acton with 15+ regular programs every week."
    )
    hero_description: str = (
        "From Stay & Play sessions for young families to martial arts, fitness classes, "
        "and cultural groups, we're here to bring our community together and support "
        "wellbeing for all ages."
    )

    model_config = ConfigDict(extra="forbid")


# Same keys, all optional: partial update payload.
SiteSettingsUpdate = create_model(
    "SiteSettingsUpdate",
    __config__=ConfigDict(extra="forbid"),
    **{
        name: (Optional[field.annotation], None)
        for name, field in SiteSettings.model_fields.items()
    },
)


SettingValue = Union[bool, int, float, str]


class SettingRead(BaseModel):
    key: str
    value: SettingValue
    type: str
    description: Optional[str] = None
    is_default: bool


class SettingValueUpdate(BaseModel):
    value: SettingValue
    description: Optional[str] = None
