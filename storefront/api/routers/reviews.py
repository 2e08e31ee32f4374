# storefront/api/routers/reviews.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user, require_admin
from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.domain.schemas import RemovedOut, ReviewIn, ReviewOut
from storefront.services.review_service import ReviewService

router = APIRouter(prefix="/reviews", tags=["reviews"])


def get_service(db: Session):
    return ReviewService(db)


@router.get("", response_model=List[ReviewOut])
def list_reviews(
    product_id: Optional[int] = Query(None, alias="productId"),
    featured: bool = Query(False),
    db: Session = Depends(get_db),
):
    return get_service(db).list_reviews(product_id=product_id, featured=featured)


@router.get("/product/{product_id}", response_model=List[ReviewOut])
def product_reviews(product_id: int, db: Session = Depends(get_db)):
    return get_service(db).list_reviews(product_id=product_id)


@router.post("", response_model=ReviewOut, status_code=201)
def create_review(payload: ReviewIn, user: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_service(db).create_review(user.id, payload)


@router.delete("/{review_id}", response_model=RemovedOut, dependencies=[Depends(require_admin)])
def delete_review(review_id: int, db: Session = Depends(get_db)):
    get_service(db).delete_review(review_id)
    return {"removed": True}
