"""
Global singletons: super admin account, developer roster and the logo.
"""
from fastapi import APIRouter, Depends, HTTPException
from typing import List

from models.schemas import (
    ActionResult,
    Developer,
    DeveloperPageContent,
    LogoBody,
    LogoResponse,
    SuperAdminCreate,
    SuperAdminProfile,
    SuperAdminUpdate,
)
from routers.dependencies import get_developer_store, get_logo_store, get_super_admin_store
from service.developers import DeveloperStore
from service.logo import LogoStore
from service.super_admin import SuperAdminStore

# Create a router instance
router = APIRouter()


# ===========================
# Super admin
# ===========================

@router.get("/super-admin", response_model=SuperAdminProfile)
async def get_super_admin(store: SuperAdminStore = Depends(get_super_admin_store)):
    admin = store.get()
    if admin is None:
        raise HTTPException(status_code=404, detail="Super admin account not found.")
    return SuperAdminProfile.model_validate(admin.model_dump())


@router.get("/super-admin/exists")
async def super_admin_exists(store: SuperAdminStore = Depends(get_super_admin_store)):
    return {"exists": store.exists()}


@router.post("/super-admin", response_model=ActionResult)
async def create_super_admin(data: SuperAdminCreate, store: SuperAdminStore = Depends(get_super_admin_store)):
    """Sign up the one and only super admin. Rejected once an account exists."""
    return store.create(data)


@router.put("/super-admin", response_model=ActionResult)
async def update_super_admin(data: SuperAdminUpdate, store: SuperAdminStore = Depends(get_super_admin_store)):
    return store.update(data)


# ===========================
# Developers
# ===========================

@router.get("/developers", response_model=List[Developer])
async def list_developers(store: DeveloperStore = Depends(get_developer_store)):
    return store.list()


@router.get("/developers/page-content", response_model=DeveloperPageContent)
async def get_developer_page_content(store: DeveloperStore = Depends(get_developer_store)):
    return store.get_page_content()


@router.put("/developers/page-content", response_model=ActionResult)
async def update_developer_page_content(content: DeveloperPageContent,
                                        store: DeveloperStore = Depends(get_developer_store)):
    return store.update_page_content(content)


@router.put("/developers/{developer_id}", response_model=ActionResult)
async def update_developer(developer_id: str, developer: Developer,
                           store: DeveloperStore = Depends(get_developer_store)):
    if developer.id != developer_id:
        raise HTTPException(status_code=400, detail="Developer id in path and body differ.")
    return store.update(developer)


# ===========================
# Logo
# ===========================

@router.get("/logo", response_model=LogoResponse)
async def get_logo(store: LogoStore = Depends(get_logo_store)):
    return LogoResponse(url=store.get())


@router.put("/logo", response_model=ActionResult)
async def update_logo(body: LogoBody, store: LogoStore = Depends(get_logo_store)):
    return store.update(body.logo)
