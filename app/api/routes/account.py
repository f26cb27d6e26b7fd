"""The caller's own profile and order history. The user id always comes from the token."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import Identity, get_identity, get_store
from app.repositories import Store
from app.schemas.account import UpdateProfileRequest, UserPublic
from app.schemas.orders import OrderListResponse, OrderOut

router = APIRouter()


@router.get("/me", response_model=UserPublic)
def get_me(
    identity: Annotated[Identity, Depends(get_identity)],
    store: Annotated[Store, Depends(get_store)],
) -> UserPublic:
    user = store.accounts.get(identity.user_id)
    return UserPublic.model_validate(user)


@router.patch("/me", response_model=UserPublic)
def update_me(
    body: UpdateProfileRequest,
    identity: Annotated[Identity, Depends(get_identity)],
    store: Annotated[Store, Depends(get_store)],
) -> UserPublic:
    """
    Update name and/or email. Omitted fields are left as they are; an empty body
    returns the current profile. A taken email yields 409 and nothing is written.
    """
    user = store.accounts.update_profile(identity.user_id, body.to_changes())
    return UserPublic.model_validate(user)


@router.get("/orders", response_model=OrderListResponse)
def list_my_orders(
    identity: Annotated[Identity, Depends(get_identity)],
    store: Annotated[Store, Depends(get_store)],
) -> OrderListResponse:
    orders = store.accounts.list_orders(identity.user_id)
    return OrderListResponse(items=[OrderOut.model_validate(o) for o in orders])
