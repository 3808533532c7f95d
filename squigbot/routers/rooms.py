from fastapi import APIRouter, HTTPException
from sqlmodel import select

from ..auth import CurrentUser
from ..database import SessionDep
from ..models import Room
from ..schemas import RoomCreate

router = APIRouter()


@router.post("/create-room")
async def create_room(room: RoomCreate, session: SessionDep, current_user: CurrentUser):
    db_room = Room(
        room_name=room.room_name,
        max_players=room.max_players,
        created_by=current_user.id,
    )
    session.add(db_room)
    session.commit()
    session.refresh(db_room)
    return db_room


@router.get("/rooms")
async def get_rooms(session: SessionDep):
    return session.exec(select(Room).where(Room.disabled == False)).all()  # noqa: E712


@router.get("/room/{room_id}")
async def get_room(room_id: int, session: SessionDep):
    room = session.get(Room, room_id)
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    return room
