"""
Post service - job positions within departments
"""
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from leavedesk.core.exceptions import Conflict, NotFound, ValidationError
from leavedesk.models.employee import Employee
from leavedesk.models.post import Post
from leavedesk.schemas.post import PostCreate, PostUpdate
from leavedesk.services.audit_service import log_audit
from leavedesk.services.department_service import get_department


def _ensure_unique_title(
    db: Session,
    department_id: int,
    title: str,
    exclude_id: Optional[int] = None,
) -> None:
    """Title is case-insensitive unique within a department"""
    query = db.query(Post).filter(
        Post.department_id == department_id,
        func.lower(Post.title) == func.lower(title),
    )
    if exclude_id is not None:
        query = query.filter(Post.id != exclude_id)
    if query.first():
        raise Conflict(f"Post '{title}' already exists in this department")


def list_posts(
    db: Session,
    department_id: Optional[int] = None,
    active_only: Optional[bool] = True,
) -> List[Post]:
    query = db.query(Post)
    if department_id is not None:
        query = query.filter(Post.department_id == department_id)
    if active_only is not None:
        query = query.filter(Post.is_active == active_only)
    return query.order_by(Post.title.asc()).all()


def get_post(db: Session, post_id: int) -> Post:
    post = db.query(Post).filter(Post.id == post_id).first()
    if not post:
        raise NotFound("Post", post_id)
    return post


def create_post(db: Session, data: PostCreate, actor_id: int) -> Post:
    get_department(db, data.department_id)
    _ensure_unique_title(db, data.department_id, data.title)

    post = Post(
        title=data.title,
        department_id=data.department_id,
        description=data.description,
        requirements=data.requirements,
        responsibilities=data.responsibilities,
        salary_range=data.salary_range,
        employment_type=data.employment_type.value,
        is_active=data.is_active,
    )
    db.add(post)
    db.flush()

    log_audit(
        db=db,
        actor_id=actor_id,
        action="CREATE",
        entity_type="post",
        entity_id=post.id,
        meta={"title": post.title, "department_id": post.department_id},
    )
    db.commit()
    db.refresh(post)
    return post


def update_post(db: Session, post_id: int, data: PostUpdate, actor_id: int) -> Post:
    post = get_post(db, post_id)
    update_dict = data.model_dump(exclude_unset=True)

    department_id = update_dict.get("department_id") or post.department_id
    if update_dict.get("department_id") is not None:
        get_department(db, department_id)
    if update_dict.get("title") is not None or update_dict.get("department_id") is not None:
        _ensure_unique_title(db, department_id, update_dict.get("title") or post.title, exclude_id=post_id)

    for field, value in update_dict.items():
        if value is None and field in ("title", "department_id", "employment_type", "is_active"):
            continue
        if field == "employment_type":
            value = value.value
        setattr(post, field, value)

    log_audit(
        db=db,
        actor_id=actor_id,
        action="UPDATE",
        entity_type="post",
        entity_id=post.id,
        meta=update_dict,
    )
    db.commit()
    db.refresh(post)
    return post


def delete_post(db: Session, post_id: int, actor_id: int) -> None:
    """Delete a post; refused while employees still hold it."""
    post = get_post(db, post_id)
    assigned = db.query(Employee).filter(Employee.post_id == post_id).count()
    if assigned:
        raise ValidationError(
            f"Cannot delete post. {assigned} employee(s) are assigned to this post.",
            details={"assigned_employees": assigned},
        )

    log_audit(
        db=db,
        actor_id=actor_id,
        action="DELETE",
        entity_type="post",
        entity_id=post.id,
        meta={"title": post.title, "department_id": post.department_id},
    )
    db.delete(post)
    db.commit()
