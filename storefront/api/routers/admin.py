# storefront/api/routers/admin.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.data.database import get_db
from storefront.domain.schemas import OrderOut, OrderStatusIn, RoleIn, UserOut
from storefront.services.order_service import OrderService
from storefront.services.user_service import UserService

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/orders", response_model=List[OrderOut])
def list_all_orders(db: Session = Depends(get_db)):
    return OrderService(db).list_orders()


@router.patch("/orders/{order_id}", response_model=OrderOut)
def update_order_status(order_id: int, payload: OrderStatusIn, db: Session = Depends(get_db)):
    return OrderService(db).update_status(order_id, payload.status)


@router.get("/users", response_model=List[UserOut])
def list_users(db: Session = Depends(get_db)):
    return UserService(db).list_users()


@router.patch("/users/{user_id}", response_model=UserOut)
def set_user_role(user_id: int, payload: RoleIn, db: Session = Depends(get_db)):
    return UserService(db).set_role(user_id, payload.role)
