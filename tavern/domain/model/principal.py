"""Authenticated caller."""

from tavern.domain.model.common import DomainModel
from tavern.domain.value import Author


class Principal(DomainModel):
    """Identity resolved for a request.

    Issued by the host chat server; absent for anonymous requests.
    """

    handle: str
    name: str
    admin: bool = False

    def as_author(self) -> Author:
        """Author reference to store on records created by this principal."""
        return Author(handle=self.handle, name=self.name)

    def can_modify(self, owner_handle: str) -> bool:
        """Owners and administrators may modify or delete a record."""
        return self.admin or self.handle == owner_handle
