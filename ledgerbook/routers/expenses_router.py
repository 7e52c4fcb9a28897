# ledgerbook/routers/expenses_router.py

from typing import Optional
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ledgerbook.utils.database import get_db
from ledgerbook.models.expense_model import Expense, ExpenseCategory
from ledgerbook.schemas.expense_schemas import (
    ExpenseCategoryCreate,
    ExpenseCategoryOut,
    ExpenseCategoryUpdate,
    ExpenseCreate,
    ExpenseOut,
    ExpenseUpdate,
)
from ledgerbook.utils.interest_calculations import money

router = APIRouter(prefix="/expenses", tags=["Expenses"])


def validate_category(db: Session, category_id: int):
    cat = db.query(ExpenseCategory).filter(ExpenseCategory.category_id == category_id).first()
    if not cat:
        raise HTTPException(status_code=400, detail="Invalid category_id")


# ==========================================================
# CATEGORY CRUD
# ==========================================================

@router.post("/categories", response_model=ExpenseCategoryOut, status_code=201)
def create_category(payload: ExpenseCategoryCreate, db: Session = Depends(get_db)):
    name = payload.category_name.strip()
    exists = (
        db.query(ExpenseCategory)
        .filter(ExpenseCategory.category_name == name)
        .first()
    )
    if exists:
        raise HTTPException(409, "Category name already exists")

    cat = ExpenseCategory(category_name=name, is_active=payload.is_active)
    db.add(cat)
    db.commit()
    db.refresh(cat)
    return cat


@router.get("/categories", response_model=list[ExpenseCategoryOut])
def list_categories(
        is_active: Optional[bool] = Query(default=None, description="Filter by active status"),
        db: Session = Depends(get_db),
):
    q = db.query(ExpenseCategory)
    if is_active is not None:
        q = q.filter(ExpenseCategory.is_active == is_active)
    return q.order_by(ExpenseCategory.category_name.asc()).all()


@router.put("/categories/{category_id}", response_model=ExpenseCategoryOut)
def update_category(category_id: int, payload: ExpenseCategoryUpdate, db: Session = Depends(get_db)):
    cat = db.query(ExpenseCategory).filter(ExpenseCategory.category_id == category_id).first()
    if not cat:
        raise HTTPException(404, "Category not found")

    if payload.category_name is not None:
        name = payload.category_name.strip()
        dup = (
            db.query(ExpenseCategory)
            .filter(
                ExpenseCategory.category_name == name,
                ExpenseCategory.category_id != category_id,
            )
            .first()
        )
        if dup:
            raise HTTPException(409, "Category name already in use")
        cat.category_name = name

    if payload.is_active is not None:
        cat.is_active = payload.is_active

    db.commit()
    db.refresh(cat)
    return cat


@router.delete("/categories/{category_id}")
def delete_category(category_id: int, db: Session = Depends(get_db)):
    cat = db.query(ExpenseCategory).filter(ExpenseCategory.category_id == category_id).first()
    if not cat:
        raise HTTPException(404, "Category not found")

    used = db.query(Expense).filter(Expense.category_id == category_id).first()
    if used:
        raise HTTPException(409, "Cannot delete category: expenses exist")

    db.delete(cat)
    db.commit()
    return {"message": "Category deleted successfully"}


# ==========================================================
# EXPENSE CRUD
# ==========================================================

@router.post("", response_model=ExpenseOut, status_code=201)
def create_expense(payload: ExpenseCreate, db: Session = Depends(get_db)):
    validate_category(db, payload.category_id)

    data = payload.model_dump()
    data["amount"] = money(data["amount"])
    exp = Expense(**data)
    db.add(exp)
    db.commit()
    db.refresh(exp)
    return exp


@router.get("", response_model=list[ExpenseOut])
def list_expenses(
        category_id: Optional[int] = Query(default=None),
        from_date: Optional[date] = Query(default=None),
        to_date: Optional[date] = Query(default=None),
        db: Session = Depends(get_db),
):
    q = db.query(Expense)

    if category_id is not None:
        q = q.filter(Expense.category_id == category_id)

    if from_date is not None:
        q = q.filter(Expense.expense_date >= from_date)

    if to_date is not None:
        q = q.filter(Expense.expense_date <= to_date)

    return q.order_by(
        Expense.expense_date.desc(),
        Expense.expense_id.desc(),
    ).all()


@router.get("/{expense_id}", response_model=ExpenseOut)
def get_expense(expense_id: int, db: Session = Depends(get_db)):
    exp = db.query(Expense).filter(Expense.expense_id == expense_id).first()
    if not exp:
        raise HTTPException(status_code=404, detail="Expense not found")
    return exp


@router.put("/{expense_id}", response_model=ExpenseOut)
def update_expense(expense_id: int, payload: ExpenseUpdate, db: Session = Depends(get_db)):
    exp = db.query(Expense).filter(Expense.expense_id == expense_id).first()
    if not exp:
        raise HTTPException(status_code=404, detail="Expense not found")

    data = payload.model_dump(exclude_unset=True)

    if data.get("category_id") is not None:
        validate_category(db, data["category_id"])

    if data.get("amount") is not None:
        data["amount"] = money(data["amount"])

    for k, v in data.items():
        if v is None and k in ("category_id", "expense_date", "amount"):
            continue
        setattr(exp, k, v)

    db.commit()
    db.refresh(exp)
    return exp


@router.delete("/{expense_id}")
def delete_expense(expense_id: int, db: Session = Depends(get_db)):
    exp = db.query(Expense).filter(Expense.expense_id == expense_id).first()
    if not exp:
        raise HTTPException(status_code=404, detail="Expense not found")

    db.delete(exp)
    db.commit()
    return {"message": "Expense deleted successfully"}
