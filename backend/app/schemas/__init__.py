"""Pydantic Schemas — request/response contracts for API endpoints.

Invariants:
    - Schemas validate shape at the system boundary; domain rules
      (status enum, date format, id format) are enforced in core/
    - JSON keys are camelCase (dueDate, taskRefs, createdAt)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - Responses built explicitly from records (from_record) over from_attributes:
      ORM column names (owner_id, folder_id) differ from the public shape
"""
