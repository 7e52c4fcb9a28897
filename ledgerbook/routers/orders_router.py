# ledgerbook/routers/orders_router.py

from typing import Optional
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session

from ledgerbook.utils.database import get_db
from ledgerbook.models.order_model import Order
from ledgerbook.schemas.order_schemas import OrderCreate, OrderOut, OrderUpdate

router = APIRouter(prefix="/orders", tags=["Orders"])


def get_order_or_404(db: Session, order_id: int) -> Order:
    order = db.query(Order).filter(Order.order_id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


def ensure_number_free(db: Session, order_number: str, order_id: Optional[int] = None):
    q = db.query(Order).filter(Order.order_number == order_number)
    if order_id is not None:
        q = q.filter(Order.order_id != order_id)
    if q.first():
        raise HTTPException(409, "Order number already exists")


@router.post("", response_model=OrderOut, status_code=201)
def create_order(payload: OrderCreate, db: Session = Depends(get_db)):
    ensure_number_free(db, payload.order_number)

    order = Order(**payload.model_dump())
    db.add(order)
    db.commit()
    db.refresh(order)
    return order


@router.get("", response_model=list[OrderOut])
def list_orders(
        status: Optional[str] = Query(None, pattern="^(pending|processing|completed|delivered)$"),
        search: Optional[str] = Query(None, description="Order number or title"),
        from_date: Optional[date] = Query(default=None),
        to_date: Optional[date] = Query(default=None),
        db: Session = Depends(get_db),
):
    q = db.query(Order)

    if status:
        q = q.filter(Order.status == status)

    if search and search.strip():
        like = f"%{search.strip()}%"
        q = q.filter(or_(Order.order_number.ilike(like), Order.title.ilike(like)))

    if from_date is not None:
        q = q.filter(Order.order_date >= from_date)

    if to_date is not None:
        q = q.filter(Order.order_date <= to_date)

    # newest first
    return q.order_by(Order.created_on.desc(), Order.order_id.desc()).all()


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: int, db: Session = Depends(get_db)):
    return get_order_or_404(db, order_id)


@router.put("/{order_id}", response_model=OrderOut)
def update_order(order_id: int, payload: OrderUpdate, db: Session = Depends(get_db)):
    order = get_order_or_404(db, order_id)
    data = payload.model_dump(exclude_unset=True)

    if data.get("order_number") is not None:
        ensure_number_free(db, data["order_number"], order_id)

    for k, v in data.items():
        # required columns cannot be cleared
        if v is None and k in ("order_number", "title", "order_date", "status"):
            continue
        setattr(order, k, v)

    db.commit()
    db.refresh(order)
    return order


@router.delete("/{order_id}")
def delete_order(order_id: int, db: Session = Depends(get_db)):
    order = get_order_or_404(db, order_id)
    db.delete(order)
    db.commit()
    return {"message": "Order deleted successfully"}
