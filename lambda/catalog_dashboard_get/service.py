"""
Dashboard service.

Assembles the catalog landing page: the five newest books, the number of
books per author name, and every author with its book count.
"""

from typing import Optional

from catalog_shared.auth import UserIdentity
from catalog_shared.types import Dashboard


class DashboardService:
    """Read-only view over books and authors."""

    def __init__(self, catalog):
        self.books = catalog.books
        self.authors = catalog.authors

    def get_dashboard(self, identity: Optional[UserIdentity] = None) -> Dashboard:
        dashboard: Dashboard = {
            'lastFiveBooks': self.books.find_last_five(),
            'authorStats': self.books.get_author_stats(),
            'authors': self.authors.get_author_with_book_count(),
            'user': None,
        }
        if identity is not None:
            dashboard['user'] = {'email': identity.email, 'roles': identity.roles}
        return dashboard
