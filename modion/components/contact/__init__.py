"""Contact component - contact form messages."""

from .component import run
from .models import ContactInput, ContactOutput
from .ports import ContactRepoPort

__all__ = ["run", "ContactInput", "ContactOutput", "ContactRepoPort"]
