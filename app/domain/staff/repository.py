"""Staff repository - Database operations for employees"""

from typing import Optional

from sqlalchemy.orm import Query, Session, joinedload

from ...models import Appointment, Sale, Staff, Task, User


class StaffRepository:
    """Repository for staff database operations"""

    @staticmethod
    def query_staff(
        db: Session,
        name: Optional[str] = None,
        position: Optional[str] = None,
        specialty: Optional[str] = None,
    ) -> Query:
        query = db.query(Staff).join(User, Staff.user_id == User.id).options(joinedload(Staff.user))
        if name:
            query = query.filter(User.name.ilike(f"%{name}%"))
        if position:
            query = query.filter(Staff.position.ilike(f"%{position}%"))
        if specialty:
            query = query.filter(Staff.specialty.ilike(f"%{specialty}%"))
        return query.order_by(User.name.asc())

    @staticmethod
    def get_staff_by_id(db: Session, staff_id: int) -> Optional[Staff]:
        return db.query(Staff).filter(Staff.id == staff_id).first()

    @staticmethod
    def get_staff_by_user_id(db: Session, user_id: int) -> Optional[Staff]:
        return db.query(Staff).filter(Staff.user_id == user_id).first()

    @staticmethod
    def get_user(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def count_dependents(db: Session, staff_id: int) -> dict:
        """How many appointments, sales and tasks still point at this staff member"""
        return {
            "appointments": db.query(Appointment).filter(Appointment.staff_id == staff_id).count(),
            "sales": db.query(Sale).filter(Sale.staff_id == staff_id).count(),
            "tasks": db.query(Task).filter(Task.staff_id == staff_id).count(),
        }

    @staticmethod
    def create_staff(db: Session, **staff_data) -> Staff:
        staff = Staff(**staff_data)
        db.add(staff)
        db.commit()
        db.refresh(staff)
        return staff

    @staticmethod
    def update_staff(db: Session, staff: Staff, **updates) -> Staff:
        for key, value in updates.items():
            if hasattr(staff, key):
                setattr(staff, key, value)
        db.commit()
        db.refresh(staff)
        return staff

    @staticmethod
    def delete_staff(db: Session, staff: Staff) -> None:
        db.delete(staff)
        db.commit()
