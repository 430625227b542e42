from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from zootel.core.database import get_db
from zootel.core.errors import handle_db_errors
from zootel.core.security import require_pet_owner
from zootel.schemas.schemas import PetCreate, Principal
from zootel.services.booking_service import PetOwnerService

router = APIRouter()


@router.get("")
def get_pets(
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_pet_owner)
):
    with handle_db_errors(db, "Failed to get pets"):
        pets = PetOwnerService(db, principal).list_pets()
    return {"success": True, "data": pets}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_pet(
    pet_data: PetCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_pet_owner)
):
    with handle_db_errors(db, "Failed to add pet"):
        pet = PetOwnerService(db, principal).add_pet(pet_data)
    return {"success": True, "message": "Pet added successfully", "data": pet}
