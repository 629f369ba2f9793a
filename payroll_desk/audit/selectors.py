import math

from payroll_desk.audit.models import AuditLog

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def _as_int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def get_logs_page(page=1, page_size=DEFAULT_PAGE_SIZE):
    page = _as_int(page, 1)
    page_size = _as_int(page_size, DEFAULT_PAGE_SIZE)
    if page < 1:
        page = 1
    if page_size < 1:
        page_size = DEFAULT_PAGE_SIZE
    if page_size > MAX_PAGE_SIZE:
        page_size = MAX_PAGE_SIZE

    qs = AuditLog.objects.order_by("-timestamp")
    total = qs.count()
    offset = (page - 1) * page_size

    return {
        "logs": list(qs[offset:offset + page_size]),
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": math.ceil(total / page_size),
    }


def get_logs_for_entity(entity_id):
    return AuditLog.objects.filter(entity_id=str(entity_id)).order_by("-timestamp")
