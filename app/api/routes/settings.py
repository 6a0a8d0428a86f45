"""Association-wide key/value settings (app name, contribution amount, ...)."""

from fastapi import APIRouter

from app.api.deps import AdminUser, DbSession, OptionalUser
from app.models import Setting
from app.schemas.setting import SettingRead, SettingUpdate

router = APIRouter()


@router.get("", response_model=dict[str, str | None])
def read_settings(db: DbSession, _user: OptionalUser) -> dict[str, str | None]:
    """Every setting as a flat key/value map. Readable without a token."""
    return {s.key: s.value for s in db.query(Setting).order_by(Setting.key).all()}


@router.put("/{key}", response_model=SettingRead)
def upsert_setting(key: str, body: SettingUpdate, db: DbSession, _admin: AdminUser) -> Setting:
    setting = db.query(Setting).filter(Setting.key == key).first()
    if setting is None:
        setting = Setting(key=key, value=body.value)
        db.add(setting)
    else:
        setting.value = body.value
    db.commit()
    db.refresh(setting)
    return setting
