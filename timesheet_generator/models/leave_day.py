from sqlalchemy import Column, String, Date, DateTime, UniqueConstraint
from datetime import datetime
import uuid
from timesheet_generator.db.session import Base


class LeaveDay(Base):
    """A single day an employee is marked absent."""
    __tablename__ = "leave_days"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    employee_id = Column(String(64), nullable=False, index=True)
    leave_date = Column(Date, nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Toggled, never duplicated
    __table_args__ = (
        UniqueConstraint('employee_id', 'leave_date', name='uq_employee_leave_date'),
    )

    def __repr__(self):
        return f"<LeaveDay(employee={self.employee_id}, date={self.leave_date})>"
