from pipeline.service import BlogService

__all__ = ["BlogService"]
