"""Share domain module.

Renders itineraries into PNG images sized for social media.

    from app.domains.share.service import ShareService
    from app.domains.share.renderer import ImageRenderer, render_html
"""

__all__ = [
    "ImageRenderer",
    "ShareImage",
    "ShareRequest",
    "ShareService",
    "render_html",
]
