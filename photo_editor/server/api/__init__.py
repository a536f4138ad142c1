from .edit import router as edit_router
from .suggestions import router as suggestions_router

__all__ = ["edit_router", "suggestions_router"]
