# routers/navigation.py

from typing import List
from fastapi import APIRouter, Depends, Query

from core.navigation import (
    BreadcrumbItem,
    NavigationEntry,
    NavigationGroup,
    NavigationStats,
    get_breadcrumbs,
    get_grouped_navigation,
    get_navigation_for_role,
    get_navigation_stats,
    search_navigation,
)
from core.roles import all_roles, get_role_display_name, get_role_level
from dependencies.auth import CurrentUser, get_current_user
from models.feature import FeatureRead, RoleRead


router = APIRouter(
    tags=["Navigation"],
)


# -----------------------------------------------------
# GET /navigation
# Sidebar for the calling user's role
# -----------------------------------------------------
@router.get("/navigation", response_model=List[NavigationEntry])
def get_my_navigation(current_user: CurrentUser = Depends(get_current_user)):
    return list(get_navigation_for_role(current_user.role))


# -----------------------------------------------------
# GET /navigation/groups
# Sidebar split into sections
# -----------------------------------------------------
@router.get("/navigation/groups", response_model=List[NavigationGroup])
def get_my_navigation_groups(current_user: CurrentUser = Depends(get_current_user)):
    return get_grouped_navigation(current_user.role)


# -----------------------------------------------------
# GET /navigation/breadcrumbs?path=/members
# -----------------------------------------------------
@router.get("/navigation/breadcrumbs", response_model=List[BreadcrumbItem])
def get_my_breadcrumbs(
    path: str = Query(..., min_length=1),
    current_user: CurrentUser = Depends(get_current_user),
):
    return get_breadcrumbs(current_user.role, path)


# -----------------------------------------------------
# GET /navigation/search?q=guest
# -----------------------------------------------------
@router.get("/navigation/search", response_model=List[NavigationEntry])
def search_my_navigation(
    q: str = Query(""),
    current_user: CurrentUser = Depends(get_current_user),
):
    return list(search_navigation(current_user.role, q))


# -----------------------------------------------------
# GET /navigation/stats
# -----------------------------------------------------
@router.get("/navigation/stats", response_model=NavigationStats)
def get_my_navigation_stats(current_user: CurrentUser = Depends(get_current_user)):
    return get_navigation_stats(current_user.role)


# -----------------------------------------------------
# GET /navigation/roles
# -----------------------------------------------------
@router.get("/navigation/roles", response_model=List[RoleRead])
def list_roles(current_user: CurrentUser = Depends(get_current_user)):
    return [
        RoleRead(role=role.value, display_name=get_role_display_name(role), level=get_role_level(role))
        for role in all_roles()
    ]


# -----------------------------------------------------
# GET /navigation/roles/{role}
# Unknown role → 400 (UnknownRoleError handler)
# -----------------------------------------------------
@router.get("/navigation/roles/{role}", response_model=List[NavigationEntry])
def get_role_navigation(role: str, current_user: CurrentUser = Depends(get_current_user)):
    return list(get_navigation_for_role(role))


# -----------------------------------------------------
# GET /features/{view_id}
# Unknown ids resolve to the fallback metadata
# -----------------------------------------------------
@router.get("/features/{view_id}", response_model=FeatureRead)
def get_feature(view_id: str):
    return FeatureRead.for_view(view_id)
