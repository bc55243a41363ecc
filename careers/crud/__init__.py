"""
CRUD 操作模块
"""
from .admin import admin_crud, audit_crud
from .job import job_crud
from .application import application_crud
from .blog import blog_crud
from .testimonial import testimonial_crud

__all__ = [
    "admin_crud",
    "audit_crud",
    "job_crud",
    "application_crud",
    "blog_crud",
    "testimonial_crud",
]
