# storefront/api/routers/wishlist.py
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user
from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.domain.schemas import RemovedOut, WishlistItemIn, WishlistLineOut
from storefront.services.line_item_service import LineItemKind, LineItemService

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


def get_service(db: Session):
    return LineItemService(db, LineItemKind.WISHLIST)


@router.get("", response_model=List[WishlistLineOut])
def get_wishlist(user: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_service(db).list_for_user(user.id)


@router.post("", response_model=WishlistLineOut, responses={201: {"model": WishlistLineOut}})
def add_item(
    payload: WishlistItemIn,
    response: Response,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    line, created = get_service(db).add(user.id, payload.product_id)
    response.status_code = 201 if created else 200
    return line


@router.put("/products/{product_id}", response_model=WishlistLineOut, responses={201: {"model": WishlistLineOut}})
def ensure_present(
    product_id: int,
    response: Response,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    line, created = get_service(db).ensure_present(user.id, product_id)
    response.status_code = 201 if created else 200
    return line


@router.delete("/products/{product_id}", response_model=RemovedOut)
def ensure_absent(product_id: int, user: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"removed": get_service(db).ensure_absent(user.id, product_id)}


@router.delete("/{line_id}", response_model=WishlistLineOut)
def remove_item(line_id: int, user: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_service(db).remove(user.id, line_id)
