"""
REST API routes for the storage-demo Web UI.
"""

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from .screen_manager import DialogPendingError, NoPendingDialogError, WebScreenManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

# Single shared screen (single-user local tool)
screen_mgr = WebScreenManager()

STORAGE_ACTIONS = {
    ("prefs", "save"): "save_prefs",
    ("prefs", "load"): "load_prefs",
    ("internal", "save"): "save_internal",
    ("internal", "load"): "load_internal",
    ("external", "save"): "save_external",
    ("external", "load"): "load_external",
    ("db", "save"): "save_db",
    ("db", "load"): "load_db",
}


# --- Request models ---

class TextRequest(BaseModel):
    text: str


class DialogResponseRequest(BaseModel):
    accept: bool


# --- Routes ---

@router.get("/screen")
async def get_screen():
    """Return the text field, permission states and any pending dialog."""
    await screen_mgr.ensure_started()
    return screen_mgr.snapshot()


@router.put("/text")
async def set_text(req: TextRequest):
    controller = await screen_mgr.ensure_started()
    controller.set_text(req.text)
    return screen_mgr.snapshot()


@router.post("/text/clear")
async def clear_text():
    controller = await screen_mgr.ensure_started()
    controller.clear_text()
    return screen_mgr.snapshot()


@router.post("/dialog/respond")
async def respond_to_dialog(req: DialogResponseRequest):
    """Answer the pending permission dialog (accept = positive button)."""
    try:
        return await screen_mgr.answer_dialog(req.accept)
    except NoPendingDialogError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/permissions")
async def get_permissions():
    controller = await screen_mgr.ensure_started()
    return {
        "api_level": controller.ctx.platform.api_level,
        "permissions": controller.permission_states(),
    }


@router.post("/{store}/{action}")
async def run_storage_action(store: str, action: str):
    """Run one of the eight save/load controls."""
    method = STORAGE_ACTIONS.get((store, action))
    if method is None:
        raise HTTPException(status_code=404, detail=f"Unknown action: {store}/{action}")
    try:
        return await screen_mgr.run_action(method)
    except DialogPendingError as e:
        raise HTTPException(status_code=409, detail=str(e))
