import math
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.orm import Query

from config import settings


@dataclass
class Page:
     items: list = field(default_factory=list)
     total: int = 0
     page: int = 1
     per_page: int = settings.page_size

     @property
     def last_page(self) -> int:
          return max(1, math.ceil(self.total / self.per_page))


def paginate(query: Query, page: int = 1, per_page: Optional[int] = None) -> Page:
     """Apply offset/limit for ``page`` (1-based) and count the full result."""
     per_page = per_page or settings.page_size
     page = max(int(page or 1), 1)

     total = query.count()
     offset = (page - 1) * per_page
     items = query.offset(offset).limit(per_page).all()
     return Page(items=items, total=total, page=page, per_page=per_page)


LIKE_ESCAPE = "\\"


def contains_pattern(search: str) -> str:
     """LIKE pattern matching ``search`` as a literal substring (use with ``escape=LIKE_ESCAPE``)."""
     escaped = (
          search.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
          .replace("%", LIKE_ESCAPE + "%")
          .replace("_", LIKE_ESCAPE + "_")
     )
     return f"%{escaped}%"
