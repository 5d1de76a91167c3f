"""
Pagination envelope and list query helpers
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

PAGE_SIZE_OPTIONS = (10, 20, 50, 100)
DEFAULT_PAGE_SIZE = 10


def _as_int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass
class PaginationMeta:
    current_page: int = 1
    last_page: int = 1
    per_page: int = DEFAULT_PAGE_SIZE
    total: int = 0

    @classmethod
    def from_dict(cls, meta, item_count=0):
        if not meta:
            # Unpaginated list: treat it as a single page
            return cls(current_page=1, last_page=1, per_page=max(item_count, 1), total=item_count)
        return cls(
            current_page=_as_int(meta.get('current_page'), 1),
            last_page=max(_as_int(meta.get('last_page'), 1), 1),
            per_page=_as_int(meta.get('per_page'), DEFAULT_PAGE_SIZE),
            total=_as_int(meta.get('total'), item_count),
        )

    def to_dict(self):
        return {
            'current_page': self.current_page,
            'last_page': self.last_page,
            'per_page': self.per_page,
            'total': self.total,
        }


@dataclass
class Page:
    """One page of a server-owned list"""

    data: List[Dict[str, Any]] = field(default_factory=list)
    meta: PaginationMeta = field(default_factory=PaginationMeta)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_envelope(cls, body):
        if isinstance(body, list):
            return cls(data=body, meta=PaginationMeta.from_dict(None, len(body)))
        body = body or {}
        data = body.get('data') or []
        if isinstance(data, dict):
            # Some endpoints nest the list one level deeper
            data = data.get('data') or []
        extra = {k: v for k, v in body.items() if k not in ('data', 'meta', 'links')}
        return cls(data=list(data), meta=PaginationMeta.from_dict(body.get('meta'), len(data)), extra=extra)

    @property
    def has_next(self):
        return self.meta.last_page > self.meta.current_page

    @property
    def has_prev(self):
        return self.meta.current_page > 1

    @property
    def next_page(self) -> Optional[int]:
        return self.meta.current_page + 1 if self.has_next else None

    @property
    def prev_page(self) -> Optional[int]:
        return self.meta.current_page - 1 if self.has_prev else None

    def page_numbers(self, window=2):
        """Page links shown around the current page"""
        start = max(1, self.meta.current_page - window)
        end = min(self.meta.last_page, self.meta.current_page + window)
        return list(range(start, end + 1))

    def find(self, item_id):
        for item in self.data:
            if str(item.get('id')) == str(item_id):
                return item
        return None

    def to_dict(self):
        result = dict(self.extra)
        result.update({
            'data': self.data,
            'meta': self.meta.to_dict(),
            'pagination': {
                'has_next': self.has_next,
                'has_prev': self.has_prev,
                'next_page': self.next_page,
                'prev_page': self.prev_page,
                'pages': self.page_numbers(),
            },
        })
        return result


@dataclass(frozen=True)
class ListQuery:
    """page/search/status kept by a list view; refetch happens whenever it changes"""

    page: int = 1
    per_page: int = DEFAULT_PAGE_SIZE
    search: str = ''
    status: str = ''
    filters: tuple = ()

    @classmethod
    def from_args(cls, args, filter_names=(), default_per_page=DEFAULT_PAGE_SIZE):
        per_page = _as_int(args.get('per_page'), default_per_page)
        if per_page not in PAGE_SIZE_OPTIONS:
            per_page = default_per_page
        filters = tuple(
            (name, args.get(name).strip())
            for name in filter_names
            if args.get(name) and args.get(name).strip()
        )
        return cls(
            page=max(_as_int(args.get('page'), 1), 1),
            per_page=per_page,
            search=(args.get('search') or '').strip(),
            status=(args.get('status') or '').strip(),
            filters=filters,
        )

    def with_page(self, page):
        return replace(self, page=max(int(page), 1))

    def with_search(self, search):
        return replace(self, search=(search or '').strip(), page=1)

    def with_status(self, status):
        return replace(self, status=(status or '').strip(), page=1)

    def to_params(self):
        params = {'page': self.page, 'per_page': self.per_page}
        if self.search:
            params['search'] = self.search
        if self.status and self.status != 'all':
            params['status'] = self.status
        params.update(dict(self.filters))
        return params
