"""
本地文件存储模块

负责上传文件的类型/大小校验、保存，以及删除记录时清理其引用的文件。
所有文件都保存在 settings.upload_dir 下，并以 settings.upload_url_prefix 对外提供访问。
"""
import re
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple
from urllib.parse import urlparse

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool
from loguru import logger

from .config import settings
from .exceptions import BadRequestException

MB = 1024 * 1024

IMAGE_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif")
VIDEO_TYPES = ("video/mp4", "video/webm", "video/ogg", "video/quicktime")
DOCUMENT_TYPES = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
)


@dataclass(frozen=True)
class UploadRule:
    """一类文件的允许类型与大小上限"""
    kind: str
    content_types: Tuple[str, ...]
    max_size: int


# 各上传入口的规则
MEDIA_RULES = (
    UploadRule("image", IMAGE_TYPES, 5 * MB),
    UploadRule("video", VIDEO_TYPES, 50 * MB),
)
DOCUMENT_RULES = (
    UploadRule("document", DOCUMENT_TYPES, 10 * MB),
)
TESTIMONIAL_RULES = (
    UploadRule("image", IMAGE_TYPES, 5 * MB),
    UploadRule("video", ("video/mp4", "video/webm", "video/quicktime"), 20 * MB),
)

# 各类上传的子目录
DOCUMENTS_DIR = "documents"
TESTIMONIALS_DIR = "testimonials"

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


@dataclass
class StoredFile:
    """已保存的文件"""
    url: str
    path: Path
    kind: str
    size: int


def sanitize_filename(filename: Optional[str]) -> str:
    """只保留字母、数字、点和连字符"""
    name = _UNSAFE_CHARS.sub("_", filename or "file")
    return name[-100:] or "file"


def match_rule(content_type: Optional[str], rules: Iterable[UploadRule]) -> UploadRule:
    """按 Content-Type 找到对应规则，不支持的类型抛 400"""
    for rule in rules:
        if content_type in rule.content_types:
            return rule
    allowed = ", ".join(t for rule in rules for t in rule.content_types)
    raise BadRequestException(f"Invalid file type. Allowed types: {allowed}")


async def save_upload(
    file: UploadFile,
    rules: Iterable[UploadRule],
    subdir: str = "",
) -> StoredFile:
    """
    校验并保存上传文件

    文件名格式: <毫秒时间戳>-<随机8位>-<清洗后的原名>
    """
    rules = tuple(rules)
    rule = match_rule(file.content_type, rules)

    content = await file.read()
    if not content:
        raise BadRequestException("Uploaded file is empty")
    if len(content) > rule.max_size:
        raise BadRequestException(
            f"File too large. Maximum size is {rule.max_size // MB}MB."
        )

    target_dir = Path(settings.upload_dir) / subdir if subdir else Path(settings.upload_dir)
    target_dir.mkdir(parents=True, exist_ok=True)

    filename = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{sanitize_filename(file.filename)}"
    path = target_dir / filename
    await run_in_threadpool(path.write_bytes, content)

    url = f"{upload_url_prefix(subdir)}{filename}"
    logger.info(f"文件已保存: {path} ({len(content)} bytes)")
    return StoredFile(url=url, path=path, kind=rule.kind, size=len(content))


def upload_url_prefix(subdir: str = "") -> str:
    """某个上传子目录对外的 URL 前缀（以 / 结尾）"""
    prefix = settings.upload_url_prefix.rstrip("/") + "/"
    return f"{prefix}{subdir.strip('/')}/" if subdir else prefix


def is_upload_url(value: Optional[str], subdir: str = "") -> bool:
    """
    判断值是否为本站上传接口返回的路径

    只接受相对路径，且不能含有 .. 等跳出目录的片段
    """
    if not value:
        return False
    parsed = urlparse(value)
    if parsed.scheme or parsed.netloc or parsed.query or "\\" in value:
        return False
    prefix = upload_url_prefix(subdir)
    if not parsed.path.startswith(prefix):
        return False
    rest = parsed.path[len(prefix):]
    return bool(rest) and all(part not in ("", ".", "..") for part in rest.split("/"))


def resolve_upload_path(url_or_path: Optional[str], subdir: str = "") -> Optional[Path]:
    """
    把存储的 URL 转为上传目录内的本地路径

    外部地址、不在 subdir 下或越出上传目录的路径返回 None
    """
    if not is_upload_url(url_or_path, subdir):
        return None

    path = urlparse(url_or_path).path
    root = (Path(settings.upload_dir) / subdir).resolve() if subdir else Path(settings.upload_dir).resolve()
    candidate = (root / path[len(upload_url_prefix(subdir)):]).resolve()
    if root not in candidate.parents:
        return None
    return candidate


def delete_files(urls: Iterable[Optional[str]], subdir: str = "") -> Tuple[int, int]:
    """
    删除一组已上传文件

    返回 (成功数, 失败数)；空值直接跳过。传入 subdir 时只删除该子目录下的文件
    """
    succeeded = failed = 0
    for url in urls:
        if not url:
            continue
        path = resolve_upload_path(url, subdir)
        if path is None or not path.is_file():
            logger.warning(f"跳过无法删除的文件: {url}")
            failed += 1
            continue
        try:
            path.unlink()
            succeeded += 1
        except OSError as e:
            logger.error(f"删除文件失败 {path}: {e}")
            failed += 1

    if succeeded or failed:
        logger.info(f"文件清理完成: {succeeded} succeeded, {failed} failed")
    return succeeded, failed
