"""
文件上传 API 路由

图片/视频（后台）、申请材料（公开）、评价媒体（后台）
"""
from fastapi import APIRouter, File, UploadFile

from careers.api.deps import CurrentAdmin
from careers.core.response import success_response, DictResponse
from careers.core.storage import (
    DOCUMENT_RULES,
    DOCUMENTS_DIR,
    MEDIA_RULES,
    TESTIMONIAL_RULES,
    TESTIMONIALS_DIR,
    save_upload,
)
from careers.models.testimonial import TestimonialMediaType

router = APIRouter()


@router.post("", summary="上传图片或视频", response_model=DictResponse)
async def upload_media(admin: CurrentAdmin, file: UploadFile = File(...)):
    """图片 ≤5MB，视频 ≤50MB"""
    stored = await save_upload(file, MEDIA_RULES)
    return success_response(data={"url": stored.url}, message="File uploaded successfully")


@router.post("/documents", summary="上传申请材料", response_model=DictResponse)
async def upload_document(file: UploadFile = File(...)):
    """公开接口，PDF/DOC/DOCX ≤10MB"""
    stored = await save_upload(file, DOCUMENT_RULES, subdir=DOCUMENTS_DIR)
    return success_response(data={"url": stored.url}, message="Document uploaded successfully")


@router.post("/testimonials", summary="上传评价媒体", response_model=DictResponse)
async def upload_testimonial_media(admin: CurrentAdmin, file: UploadFile = File(...)):
    """图片 ≤5MB，视频 ≤20MB"""
    stored = await save_upload(file, TESTIMONIAL_RULES, subdir=TESTIMONIALS_DIR)
    media_type = TestimonialMediaType.VIDEO if stored.kind == "video" else TestimonialMediaType.PHOTO
    return success_response(
        data={"url": stored.url, "media_type": media_type.value, "thumbnail_url": None},
        message="File uploaded successfully",
    )
