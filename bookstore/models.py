"""Data models for books."""
from dataclasses import dataclass

from bookstore.errors import NegativeCopiesError


@dataclass
class Book:
    """A single catalog entry, keyed by ``id``."""
    id: str
    title: str = ""
    author: str = ""
    copies: int = 0
    
    def __str__(self) -> str:
        return f"{self.title} by {self.author} (copies: {self.copies})"
    
    def render(self) -> str:
        """Format the book as ``<title> by <author> (copies: <n>)``."""
        return str(self)
    
    def set_copies(self, copies: int):
        """
        Set the number of copies held.
        
        Args:
            copies: New copy count
            
        Raises:
            NegativeCopiesError: If copies is below zero
        """
        if copies < 0:
            raise NegativeCopiesError(copies)
        self.copies = copies
