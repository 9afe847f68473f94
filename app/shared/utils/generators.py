"""Primary key generation for catalog rows (CUID2, the id format the catalog uses)."""

from cuid2 import cuid_wrapper

_next_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new CUID2 string. Default for CuidMixin.id when rows are inserted locally."""
    return str(_next_cuid())
