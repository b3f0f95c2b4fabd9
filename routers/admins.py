"""
Admin registry, managed by the super admin. Signing admins in is out of scope.
"""
from fastapi import APIRouter, Depends, HTTPException
from typing import List

from models.schemas import (
    ActionResult,
    AdminCreate,
    AdminDeleteBody,
    AdminProfile,
    AdminTwoFactorBody,
    AdminUnlockBody,
    AdminUpdate,
)
from routers.dependencies import get_admin_store
from service.admins import AdminStore

# Create a router instance
router = APIRouter()


@router.get("/admins", response_model=List[AdminProfile])
async def list_admins(store: AdminStore = Depends(get_admin_store)):
    return [AdminProfile.model_validate(admin.model_dump()) for admin in store.list()]


@router.get("/admins/emails", response_model=List[str])
async def list_admin_emails(store: AdminStore = Depends(get_admin_store)):
    """Emails of every tenant, in registry order."""
    return store.emails()


@router.get("/admins/{admin_email}", response_model=AdminProfile)
async def get_admin(admin_email: str, store: AdminStore = Depends(get_admin_store)):
    admin = store.get(admin_email)
    if admin is None:
        raise HTTPException(status_code=404, detail="Admin not found.")
    return AdminProfile.model_validate(admin.model_dump())


@router.post("/admins", response_model=ActionResult)
async def create_admin(data: AdminCreate, store: AdminStore = Depends(get_admin_store)):
    return store.create(data)


@router.put("/admins", response_model=ActionResult)
async def update_admin(data: AdminUpdate, store: AdminStore = Depends(get_admin_store)):
    """Update the admin identified by the email in the body."""
    return store.update(data)


@router.delete("/admins/{admin_email}", response_model=ActionResult)
async def delete_admin(admin_email: str, body: AdminDeleteBody, store: AdminStore = Depends(get_admin_store)):
    """Delete an admin; the body carries that admin's password as confirmation."""
    return store.delete(admin_email, body.password)


@router.post("/admins/{admin_email}/unlock", response_model=ActionResult)
async def unlock_admin(admin_email: str, body: AdminUnlockBody, store: AdminStore = Depends(get_admin_store)):
    return store.unlock(admin_email, body.security_key)


@router.put("/admins/{admin_email}/two-factor", response_model=ActionResult)
async def set_admin_two_factor(admin_email: str, body: AdminTwoFactorBody,
                               store: AdminStore = Depends(get_admin_store)):
    return store.set_two_factor(admin_email, body.is_enabled, body.pin, body.current_password)
