# backend/centre/routers/site_settings.py
# Public read of the whole set; admin writes. DELETE resets a key to its default.

from fastapi import APIRouter, Depends

from ..auth import require_admin
from ..schemas.common import Message
from ..schemas.site_settings import (
    SettingRead,
    SettingValueUpdate,
    SiteSettings,
    SiteSettingsUpdate,
)
from ..services.site_settings import SettingsService, get_settings_service

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=SiteSettings)
def get_site_settings(service: SettingsService = Depends(get_settings_service)):
    return service.get_all()


@router.put(
    "",
    response_model=SiteSettings,
    dependencies=[Depends(require_admin)],
)
def update_site_settings(
    data: SiteSettingsUpdate,
    service: SettingsService = Depends(get_settings_service),
):
    return service.update(data.model_dump(exclude_unset=True))


@router.get("/{key}", response_model=SettingRead)
def get_site_setting(
    key: str,
    service: SettingsService = Depends(get_settings_service),
):
    return service.get(key)


@router.put(
    "/{key}",
    response_model=SettingRead,
    dependencies=[Depends(require_admin)],
)
def set_site_setting(
    key: str,
    data: SettingValueUpdate,
    service: SettingsService = Depends(get_settings_service),
):
    return service.set_value(key, data.value, data.description)


@router.delete(
    "/{key}",
    response_model=Message,
    dependencies=[Depends(require_admin)],
)
def reset_site_setting(
    key: str,
    service: SettingsService = Depends(get_settings_service),
):
    service.reset(key)
    return {"message": "Setting reset to default"}
