from fastapi import APIRouter
from ..database import SessionDep
from ..schemas import UserPublic, UserUpdate
from ..auth import CurrentUser, get_password_hash

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me/", response_model=UserPublic)
async def read_current_user(current_user: CurrentUser):
    return current_user


@router.patch("/me/", response_model=UserPublic)
def update_current_user(user_update: UserUpdate, session: SessionDep, current_user: CurrentUser):
    user_data = user_update.model_dump(exclude_unset=True, exclude={"password"})

    if user_update.password is not None:
        user_data["hashed_password"] = get_password_hash(user_update.password)

    current_user.sqlmodel_update(user_data)
    session.add(current_user)
    session.commit()
    session.refresh(current_user)
    return current_user
