# storefront/api/__init__.py
from fastapi import FastAPI
from storefront.api.routers import admin, auth, cart, health, orders, products, reviews, wishlist


def include_routers(app: FastAPI) -> FastAPI:
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(products.router)
    app.include_router(cart.router)
    app.include_router(wishlist.router)
    app.include_router(orders.router)
    app.include_router(reviews.router)
    app.include_router(admin.router)
    return app
