# storefront/api/routers/cart.py
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user
from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.domain.schemas import CartItemIn, CartLineOut, QuantityIn
from storefront.services.line_item_service import LineItemKind, LineItemService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return LineItemService(db, LineItemKind.CART)


@router.get("", response_model=List[CartLineOut])
def get_cart(user: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_service(db).list_for_user(user.id)


@router.post("", response_model=CartLineOut, responses={201: {"model": CartLineOut}})
def add_item(
    payload: CartItemIn,
    response: Response,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    line, created = get_service(db).add(user.id, payload.product_id, payload.quantity)
    response.status_code = 201 if created else 200
    return line


@router.patch("/{line_id}", response_model=CartLineOut)
def update_item(
    line_id: int,
    payload: QuantityIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return get_service(db).set_quantity(user.id, line_id, payload.quantity)


@router.delete("/{line_id}", response_model=CartLineOut)
def remove_item(line_id: int, user: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_service(db).remove(user.id, line_id)


@router.delete("")
def clear_cart(user: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"removed": get_service(db).clear(user.id)}
