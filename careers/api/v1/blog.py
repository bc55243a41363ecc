"""
博客文章 API 路由
"""
from typing import Optional
from fastapi import APIRouter, Query

from careers.api.deps import CurrentAdmin, DbSessionDep, OptionalAdmin
from careers.core.exceptions import BadRequestException, ConflictException, NotFoundException
from careers.core.response import (
    success_response,
    paged_response,
    ResponseModel,
    PagedResponseModel,
    DictResponse,
)
from careers.crud import blog_crud
from careers.models.base import utcnow
from careers.models.blog import (
    BlogCategory,
    BlogPost,
    BlogPostCreate,
    BlogPostUpdate,
    BlogPostListResponse,
    BlogPostResponse,
    ContentStatus,
)

router = APIRouter()


def _detail(post: BlogPost) -> dict:
    return BlogPostResponse.model_validate(post).model_dump(mode="json")


@router.get("", summary="获取文章列表", response_model=PagedResponseModel[BlogPostListResponse])
async def get_posts(
    db: DbSessionDep,
    admin: OptionalAdmin,
    page: int = Query(1, ge=1, description="页码"),
    page_size: int = Query(10, ge=1, le=50, description="每页数量"),
    category: Optional[str] = Query(None, pattern=r"^(all|[A-Z_]+)$", description="分类，all 表示全部"),
    status: Optional[str] = Query(None, pattern=r"^(all|DRAFT|PUBLISHED|ARCHIVED)$", description="状态，all 表示全部"),
    search: Optional[str] = Query(None, max_length=200, description="按标题/摘要/正文搜索"),
):
    """
    文章列表

    未登录访客只能看到已发布文章，status 参数仅对管理员生效
    """
    if category and category != "all" and category not in {c.value for c in BlogCategory}:
        raise BadRequestException(f"Invalid category: {category}")
    if admin is None:
        status = ContentStatus.PUBLISHED.value

    posts, total = await blog_crud.get_page(
        db, page=page, page_size=page_size, category=category, status=status, search=search
    )
    items = [BlogPostListResponse.model_validate(p).model_dump(mode="json") for p in posts]
    return paged_response(items, total, page, page_size)


@router.get("/slug/{slug}", summary="按 slug 获取已发布文章", response_model=ResponseModel[BlogPostResponse])
async def get_post_by_slug(slug: str, db: DbSessionDep):
    """公开文章页，每次访问浏览量 +1"""
    post = await blog_crud.get_by_slug(db, slug, published_only=True)
    if not post:
        raise NotFoundException(f"Blog post not found: {slug}")
    await blog_crud.increment_views(db, post)
    return success_response(data=_detail(post))


@router.get("/{post_id}", summary="获取文章详情", response_model=ResponseModel[BlogPostResponse])
async def get_post(post_id: str, db: DbSessionDep, admin: OptionalAdmin):
    post = await blog_crud.get(db, post_id)
    if not post or (admin is None and post.status != ContentStatus.PUBLISHED.value):
        raise NotFoundException(f"Blog post not found: {post_id}")
    return success_response(data=_detail(post))


@router.post("", summary="创建文章", status_code=201, response_model=ResponseModel[BlogPostResponse])
async def create_post(data: BlogPostCreate, db: DbSessionDep, admin: CurrentAdmin):
    """slug 必须唯一；发布状态创建时自动记录发布时间"""
    if await blog_crud.slug_taken(db, data.slug):
        raise ConflictException(f"A blog post with slug '{data.slug}' already exists")

    fields = data.model_dump(exclude={"media", "author", "published_at"})
    post = BlogPost(
        **fields,
        author=data.author or admin.name,
        author_id=admin.id,
        published_at=(data.published_at or utcnow()) if data.status == ContentStatus.PUBLISHED.value else None,
    )
    post.media = blog_crud.build_media(data.media)
    db.add(post)
    await db.flush()
    return success_response(data=_detail(post), message="Blog post created successfully", code=201)


@router.patch("/{post_id}", summary="更新文章", response_model=ResponseModel[BlogPostResponse])
async def update_post(post_id: str, data: BlogPostUpdate, db: DbSessionDep, admin: CurrentAdmin):
    """
    部分更新

    改为 PUBLISHED 时刷新发布时间；传入 media 时整体替换原媒体列表
    """
    post = await blog_crud.get(db, post_id)
    if not post:
        raise NotFoundException(f"Blog post not found: {post_id}")

    if data.slug and data.slug != post.slug and await blog_crud.slug_taken(db, data.slug, exclude_id=post.id):
        raise ConflictException(f"A blog post with slug '{data.slug}' already exists")

    updates = data.model_dump(exclude_unset=True, exclude={"media"})
    for field, value in updates.items():
        if value is not None:
            setattr(post, field, value)

    if data.status == ContentStatus.PUBLISHED.value:
        post.published_at = data.published_at or utcnow()

    if data.media is not None:
        post.media = blog_crud.build_media(data.media)

    post.updated_at = utcnow()
    await db.flush()
    return success_response(data=_detail(post), message="Blog post updated successfully")


@router.delete("/{post_id}", summary="删除文章", response_model=DictResponse)
async def delete_post(post_id: str, db: DbSessionDep, admin: CurrentAdmin):
    if not await blog_crud.delete(db, id=post_id):
        raise NotFoundException(f"Blog post not found: {post_id}")
    return success_response(data={"id": post_id}, message="Blog post deleted successfully")
