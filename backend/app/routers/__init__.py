from .cv import router as cv_router

__all__ = ["cv_router"]
