from sqlalchemy import func
from handbook.extensions import db

def next_order_index(column, *criteria):
    """
    One past the highest order value in scope, or 0 when the scope is empty.
    """
    highest = db.session.query(func.max(column)).filter(*criteria).scalar()
    return 0 if highest is None else highest + 1

def compact_order(items, order_field="order_index"):
    """
    Re-assigns sequential order values (0..N-1) to already-sorted rows.
    """
    for index, item in enumerate(items):
        setattr(item, order_field, index)

    db.session.flush()

def swap_order(first, second, order_field="order_index"):
    """Exchange the order values of two rows."""
    a = getattr(first, order_field)
    setattr(first, order_field, getattr(second, order_field))
    setattr(second, order_field, a)

    db.session.flush()
