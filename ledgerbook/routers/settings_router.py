import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ledgerbook.utils.database import get_db
from ledgerbook.models.system_settings_model import SystemSetting
from ledgerbook.schemas.settings_schema import SettingPatch, SettingCreate, SettingOut
from ledgerbook.utils.system_settings import normalize_setting_value

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["Settings"])


def _checked_value(key: str, value: str) -> str:
    try:
        return normalize_setting_value(key, value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=list[SettingOut])
def list_settings(db: Session = Depends(get_db)):
    return db.query(SystemSetting).order_by(SystemSetting.key.asc()).all()


@router.get("/{key}", response_model=SettingOut)
def get_setting_row(key: str, db: Session = Depends(get_db)):
    obj = db.query(SystemSetting).filter(SystemSetting.key == key.strip().upper()).first()
    if not obj:
        raise HTTPException(404, "Setting not found")
    return obj


@router.post("", response_model=SettingOut, status_code=status.HTTP_201_CREATED)
def create_setting(payload: SettingCreate, db: Session = Depends(get_db)):
    if db.query(SystemSetting).filter(SystemSetting.key == payload.key).first():
        raise HTTPException(status_code=409, detail="Setting key already exists")

    obj = SystemSetting(
        key=payload.key,
        value=_checked_value(payload.key, payload.value),
        description=(payload.description or "").strip(),
    )
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.patch("", response_model=SettingOut)
def update_setting(payload: SettingPatch, db: Session = Depends(get_db)):
    obj = db.query(SystemSetting).filter(SystemSetting.key == payload.key).first()
    if not obj:
        raise HTTPException(404, "Setting not found")

    old = obj.value
    obj.value = _checked_value(obj.key, payload.value)
    if payload.description is not None:
        obj.description = payload.description.strip()
    db.commit()
    db.refresh(obj)

    # ledger toggles change how payments are gated
    logger.info("setting %s changed %r -> %r", obj.key, old, obj.value)
    return obj
