from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from habitlocal.dependencies import get_key_manager
from habitlocal.services.key_manager import KeyManager

router = APIRouter(prefix="/api/v1/settings", tags=["Settings"])


class ApiKeyUpdate(BaseModel):
    api_key: Optional[str] = None


def _status(km: KeyManager) -> dict:
    key = km.get_api_key()
    return {"is_set": km.is_api_key_set, "masked": KeyManager.mask(key)}


@router.get("/api-key")
async def get_api_key_status(km: KeyManager = Depends(get_key_manager)):
    return _status(km)


@router.put("/api-key")
async def set_api_key(body: ApiKeyUpdate, km: KeyManager = Depends(get_key_manager)):
    saved = km.set_api_key(body.api_key)
    return {**_status(km), "persisted": saved}


@router.delete("/api-key")
async def clear_api_key(km: KeyManager = Depends(get_key_manager)):
    cleared = km.clear_api_key()
    return {**_status(km), "persisted": cleared}
