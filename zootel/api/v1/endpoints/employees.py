from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from zootel.core.database import get_db
from zootel.core.errors import handle_db_errors
from zootel.core.security import require_company
from zootel.schemas.schemas import EmployeeCreate, EmployeeUpdate, Principal
from zootel.services.employee_service import (
    DEFAULT_SLOT_MINUTES, POSITIONS, SKILLS, EmployeeService, to_employee_response,
)
from zootel.utils.availability import parse_date, parse_time
from zootel.utils.pagination import coerce_int, pagination_meta, parse_pagination

router = APIRouter()


@router.get("")
def get_employees(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    """List the company's employees, optionally filtered by ``status`` (active/inactive)"""
    page, limit, offset = parse_pagination(page, limit, default_limit=20)
    with handle_db_errors(db, "Failed to get employees"):
        employees, total = EmployeeService(db, principal.uid).list(status_filter, offset, limit)
    return {
        "success": True,
        "data": employees,
        "pagination": pagination_meta(page, limit, total, "totalEmployees"),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_employee(
    employee_data: EmployeeCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    with handle_db_errors(db, "Failed to create employee"):
        employee = EmployeeService(db, principal.uid).create(employee_data)
    return {"success": True, "message": "Employee created successfully", "data": employee}


@router.get("/available")
def get_available_employees(
    date: Optional[str] = None,
    time: Optional[str] = None,
    duration: Optional[str] = None,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    """
    Active employees, narrowed to those free for the requested slot when both
    ``date`` (YYYY-MM-DD) and ``time`` (HH:MM) are given.
    """
    booking_date = start_time = None
    if date and time:
        try:
            booking_date = parse_date(date)
            start_time = parse_time(time)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid date or time format"
            )
    slot_minutes = coerce_int(duration, DEFAULT_SLOT_MINUTES)

    with handle_db_errors(db, "Failed to get available employees"):
        employees = EmployeeService(db, principal.uid).list_available(booking_date, start_time, slot_minutes)
    return {"success": True, "data": employees}


@router.get("/positions/list")
def get_positions(principal: Principal = Depends(require_company)):
    return {"success": True, "data": POSITIONS}


@router.get("/skills/list")
def get_skills(principal: Principal = Depends(require_company)):
    return {"success": True, "data": SKILLS}


@router.get("/stats")
def get_employee_stats(
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    with handle_db_errors(db, "Failed to get employee stats"):
        stats = EmployeeService(db, principal.uid).stats()
    return {"success": True, "data": stats}


@router.get("/{employee_id}")
def get_employee(
    employee_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    with handle_db_errors(db, "Failed to get employee"):
        employee = EmployeeService(db, principal.uid).get_or_404(employee_id)
        data = to_employee_response(employee)
    return {"success": True, "data": data}


@router.put("/{employee_id}")
def update_employee(
    employee_id: str,
    employee_data: EmployeeUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    with handle_db_errors(db, "Failed to update employee"):
        employee = EmployeeService(db, principal.uid).update(employee_id, employee_data)
    return {"success": True, "message": "Employee updated successfully", "data": employee}


@router.delete("/{employee_id}")
def delete_employee(
    employee_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    """Soft delete; refused while the employee has pending or confirmed bookings"""
    with handle_db_errors(db, "Failed to delete employee"):
        EmployeeService(db, principal.uid).deactivate(employee_id)
    return {"success": True, "message": "Employee deactivated successfully"}
