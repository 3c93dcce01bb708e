from library_ledger.unit_of_work import UnitOfWork


class BorrowSummaryService:
    def __init__(self, uow_factory=UnitOfWork):
        self._uow_factory = uow_factory

    def summarize(self) -> list[dict]:
        """
        Total borrowed quantity per book, joined to the book's title and isbn.
        Borrows whose book no longer exists are left out. Row order is
        whatever the database returns.
        """
        with self._uow_factory() as uow:
            rows = uow.borrows.total_quantity_by_book()

        return [
            {"book": {"title": title, "isbn": isbn}, "totalQuantity": int(total)}
            for title, isbn, total in rows
        ]
