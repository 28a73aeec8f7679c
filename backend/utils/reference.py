# backend/utils/reference.py
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

PRODUCT_PREFIX = "REF"
COMPOSED_PREFIX = "COMP"
LAPTOP_PREFIX = "LAP"


def format_reference(prefix: str, seq: int, year: Optional[int] = None) -> str:
    """REF-25-007 style: prefix, two-digit year, sequence padded to 3."""
    yy = str(year or datetime.now().year)[-2:]
    return f"{prefix}-{yy}-{seq:03d}"


def next_reference(db: Session, model, prefix: str, *criteria) -> str:
    """
    Next free reference for `model`.

    The sequence starts at (number of rows matching `criteria`) + 1 and is
    bumped until it does not collide with an existing reference.
    """
    seq = db.query(model).filter(*criteria).count() + 1
    while True:
        ref = format_reference(prefix, seq)
        if not db.query(model.id).filter(model.reference == ref).first():
            return ref
        seq += 1
