"""Page/offset arithmetic shared by the list operations."""

from typing import Tuple

from ..core.exceptions import ValidationFailureError
from ..schemas.common import DEFAULT_PAGE, DEFAULT_PAGE_SIZE


MAX_PAGE_SIZE = 100


def resolve_page(page: int = 0, page_size: int = 0) -> Tuple[int, int, int]:
    """Apply defaults and return ``(page, page_size, offset)``.

    Zero means "use the default" for both values.
    """
    if page < 0 or page_size < 0:
        raise ValidationFailureError("page and page_size must not be negative")
    if page_size > MAX_PAGE_SIZE:
        raise ValidationFailureError(f"page_size must not exceed {MAX_PAGE_SIZE}")
    page = page or DEFAULT_PAGE
    page_size = page_size or DEFAULT_PAGE_SIZE
    return page, page_size, (page - 1) * page_size
