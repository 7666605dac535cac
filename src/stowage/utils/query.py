"""Query helpers over Protean DAOs."""


def fetch_all(query) -> list:
    """Every record matching the queryset.

    Protean pages results (100 records by default), so walk the pages until
    the reported total is reached.
    """
    records = []
    while True:
        page = query.offset(len(records)).all()
        records.extend(page.items)
        if not page.items or len(records) >= page.total:
            return records
