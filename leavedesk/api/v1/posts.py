"""
Post (job position) endpoints
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from leavedesk.core.context import ActingUser
from leavedesk.core.deps import get_db, require_roles, get_current_user
from leavedesk.models.user import Role
from leavedesk.schemas.post import PostCreate, PostUpdate, PostOut
from leavedesk.services import post_service

router = APIRouter()


@router.get("", response_model=List[PostOut])
async def list_posts_endpoint(
    department_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(get_current_user)
):
    """List active posts, optionally for one department"""
    return post_service.list_posts(db, department_id=department_id)


@router.post("", response_model=PostOut, status_code=201)
async def create_post_endpoint(
    post_data: PostCreate,
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(require_roles(Role.ADMIN, Role.HR))
):
    return post_service.create_post(db, post_data, current_user.id)


@router.get("/{post_id}", response_model=PostOut)
async def get_post_endpoint(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(get_current_user)
):
    return post_service.get_post(db, post_id)


@router.put("/{post_id}", response_model=PostOut)
async def update_post_endpoint(
    post_id: int,
    post_data: PostUpdate,
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(require_roles(Role.ADMIN, Role.HR))
):
    return post_service.update_post(db, post_id, post_data, current_user.id)


@router.delete("/{post_id}", status_code=204)
async def delete_post_endpoint(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: ActingUser = Depends(require_roles(Role.ADMIN))
):
    """Delete a post (Admin only); refused while employees hold it"""
    post_service.delete_post(db, post_id, current_user.id)
    return Response(status_code=204)
