from sqlalchemy import Column, String, Date, Float, DateTime, Integer, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
from timesheet_generator.db.session import Base
from timesheet_generator.core.generator import TimesheetEntry


class GenerationRun(Base):
    """The most recent generation request; replaced wholesale on every run."""
    __tablename__ = "generation_runs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    from_date = Column(Date, nullable=False)
    to_date = Column(Date, nullable=False)
    entry_count = Column(Integer, nullable=False, default=0)
    total_hours = Column(Float, nullable=False, default=0.0)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    entries = relationship("TimesheetEntryRecord", back_populates="run", cascade="all, delete-orphan")


class TimesheetEntryRecord(Base):
    __tablename__ = "timesheet_entries"

    # employeeId-date-projectCode, unique within a run
    id = Column(String(255), primary_key=True)
    run_id = Column(String(36), ForeignKey("generation_runs.id", ondelete="CASCADE"), nullable=False)
    employee_id = Column(String(64), nullable=False, index=True)
    employee_name = Column(String(255), nullable=False)
    work_date = Column(Date, nullable=False, index=True)
    project_code = Column(String(64), nullable=False, index=True)
    project_name = Column(String(255), nullable=False)
    task_description = Column(String(500), nullable=False)
    hours = Column(Float, nullable=False)

    # Relationships
    run = relationship("GenerationRun", back_populates="entries")

    @classmethod
    def from_entry(cls, entry: TimesheetEntry) -> "TimesheetEntryRecord":
        return cls(
            id=entry.id,
            employee_id=entry.employee_id,
            employee_name=entry.employee_name,
            work_date=entry.date,
            project_code=entry.project_code,
            project_name=entry.project_name,
            task_description=entry.task_description,
            hours=entry.hours,
        )

    def to_entry(self) -> TimesheetEntry:
        return TimesheetEntry(
            id=self.id,
            employee_id=self.employee_id,
            employee_name=self.employee_name,
            date=self.work_date,
            project_code=self.project_code,
            project_name=self.project_name,
            task_description=self.task_description,
            hours=float(self.hours),
        )
