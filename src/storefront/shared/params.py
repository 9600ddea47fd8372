"""Query-string parameters shared by list endpoints.

Both snake_case and the camelCase spellings older clients send
(``sortBy``, ``sortOrder``) are accepted; snake_case wins when both appear.
The camelCase sort field values those clients send are mapped to the
snake_case fields they name.
"""

from fastapi import Query

from storefront.shared.pagination import PageRequest

SORT_FIELD_ALIASES = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "ownerEmail": "owner_email",
    "userEmail": "owner_email",
}


def page_params(
    page: int = Query(1),
    limit: int = Query(10),
    sort_by: str | None = Query(None),
    sort_order: str | None = Query(None),
    sortBy: str | None = Query(None, include_in_schema=False),  # noqa: N803
    sortOrder: str | None = Query(None, include_in_schema=False),  # noqa: N803
) -> PageRequest:
    field = sort_by or sortBy or "created_at"
    return PageRequest(
        page=page,
        limit=limit,
        sort_by=SORT_FIELD_ALIASES.get(field, field),
        sort_order=(sort_order or sortOrder or "desc").lower(),
    )
