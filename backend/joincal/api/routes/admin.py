"""Admin: server-side password check guarding the calendar admin dialog."""
import logging
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from joincal.services.admin_service import verify_admin_password

router = APIRouter()
logger = logging.getLogger(__name__)


class VerifyRequest(BaseModel):
    password: Any = None


@router.post("/verify")
def verify(body: VerifyRequest) -> dict[str, bool]:
    """200 {ok: true}; 400 no password, 401 wrong password, 503 admin not configured."""
    verify_admin_password(body.password)
    return {"ok": True}
